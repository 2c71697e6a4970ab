"""
CONCORD: Value Unification Engine

Collapses free-text values that name the same entity ("Coca-Cola",
"coca cola", "COCA COLA CO.") onto one canonical original form.

Components:
- normalizer: comparison key normalization
- similarity: string distance metrics and the distance matrix
- clustering: threshold-stopped agglomerative clustering
- representative: canonical key selection
- unifier: the end-to-end pipeline
- preprocessors: named value transforms
"""

__version__ = "1.0.0"

from .config import (
    ClusterLinkage,
    DistanceMetric,
    RepresentativeStrategy,
    UnifyConfig,
    UnifyConfigError,
)
from .models import UnificationResult, ValueCluster
from .normalizer import ValueNormalizer, normalize_value
from .similarity import DistanceMatrix, SimilarityMetrics, build_distance_matrix
from .clustering import AgglomerativeClusterer, agglomerate
from .representative import select_representative
from .preprocessors import chain_preprocessors, get_preprocessor
from .unifier import unify_values, unify_with_details

__all__ = [
    "AgglomerativeClusterer",
    "ClusterLinkage",
    "DistanceMatrix",
    "DistanceMetric",
    "RepresentativeStrategy",
    "SimilarityMetrics",
    "UnificationResult",
    "UnifyConfig",
    "UnifyConfigError",
    "ValueCluster",
    "ValueNormalizer",
    "agglomerate",
    "build_distance_matrix",
    "chain_preprocessors",
    "get_preprocessor",
    "normalize_value",
    "select_representative",
    "unify_values",
    "unify_with_details",
]
