"""Pydantic models for the unify endpoints."""
from typing import List, Optional

from pydantic import BaseModel, Field

from concord.config import DEFAULT_REMOVE_INTERNAL_CHARS, DEFAULT_STRIP_CHARS


class UnifyOptions(BaseModel):
    """Unification options. Names are validated by the engine."""

    distance_threshold: float = Field(
        0.35, description="Largest linkage distance (0-1) at which clusters still merge"
    )
    distance_metric: str = Field(
        "token_set_ratio", description="levenshtein, jaro_winkler or token_set_ratio"
    )
    cluster_linkage: str = Field("average", description="average, single or complete")
    representative_strategy: str = Field(
        "medoid", description="medoid, shortest, longest or first_alphabetical"
    )
    lowercase: bool = Field(True, description="Compare values case-insensitively")
    strip_chars: str = Field(
        DEFAULT_STRIP_CHARS, description="Characters trimmed from both ends of each value"
    )
    remove_internal_chars: str = Field(
        DEFAULT_REMOVE_INTERNAL_CHARS, description="Characters removed anywhere in each value"
    )
    min_cluster_size: int = Field(
        1, description="Clusters smaller than this are left unchanged"
    )
    preprocessors: List[str] = Field(
        default_factory=list,
        description="Registered transforms applied before normalization, in order",
    )


class UnifyRequest(BaseModel):
    """Values to unify plus options."""

    values: List[str] = Field(..., description="Raw values; may repeat or be empty")
    options: UnifyOptions = Field(default_factory=UnifyOptions)
    include_clusters: bool = Field(True, description="Return the clusters that were formed")


class ClusterResponse(BaseModel):
    """One cluster of original values."""

    representative: Optional[str] = Field(
        None, description="Canonical value, null when the cluster was left unchanged"
    )
    members: List[str]
    size: int = Field(..., description="Distinct normalized keys in the cluster")


class UnifyResponse(BaseModel):
    """Unified values in input order."""

    values: List[str]
    clusters: List[ClusterResponse] = Field(default_factory=list)
    distinct_keys: int
    empty_count: int


class UnifyOptionsResponse(BaseModel):
    """Accepted option values and defaults."""

    distance_metrics: List[str]
    cluster_linkages: List[str]
    representative_strategies: List[str]
    preprocessors: List[str]
    defaults: UnifyOptions
    max_values: int
