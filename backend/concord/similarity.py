"""
CONCORD Similarity: String Distance Metrics

Provides pairwise similarity and distance calculations using RapidFuzz:
- Levenshtein: fuzzy ratio, 2*matches / (len1 + len2)
- Jaro-Winkler: Jaro similarity with a prefix boost (up to 4 characters)
- Token set: word-set comparison, robust to reordering and extra words

Ratio-style metrics are reported as integer percentages, the way the
classic fuzzy-ratio routines report them, before scaling to 0-1.
"""

import math
from dataclasses import dataclass

import structlog
from rapidfuzz import fuzz, utils
from rapidfuzz.distance import JaroWinkler

from .config import DistanceMetric, coerce_choice

logger = structlog.get_logger("concord.similarity")


def _whole_percent(score: float) -> float:
    """Round a 0-100 score half-up to an integer percentage, scaled to 0-1."""
    return math.floor(score + 0.5) / 100


class SimilarityMetrics:
    """
    String similarity calculator for normalized keys.

    Example:
        >>> metrics = SimilarityMetrics()
        >>> metrics.token_set("farmacia del norte", "del norte farmacia")
        1.0
        >>> metrics.levenshtein_ratio("coca cola", "cocacola")
        0.94
    """

    # Winkler's standard prefix scale; the boost covers at most 4 characters
    PREFIX_WEIGHT = 0.1

    def levenshtein_ratio(self, s1: str, s2: str) -> float:
        """
        Fuzzy ratio (0-1).

        Normalized InDel similarity over fully processed strings
        (lowercased, punctuation replaced by spaces). A string with
        nothing left after processing scores 0.
        """
        p1 = utils.default_process(s1)
        p2 = utils.default_process(s2)
        if not p1 or not p2:
            return 0.0

        return _whole_percent(fuzz.ratio(p1, p2))

    def jaro_winkler(self, s1: str, s2: str) -> float:
        """
        Jaro-Winkler similarity (0-1), case-sensitive.

        Case folding is left to the normalizer's ``lowercase`` option.

        Best for:
        - Short strings
        - Typos towards the end of a value
        """
        if not s1 or not s2:
            return 0.0

        return JaroWinkler.similarity(s1, s2, prefix_weight=self.PREFIX_WEIGHT)

    def token_set(self, s1: str, s2: str) -> float:
        """
        Token Set Ratio (0-1).

        Compares the shared sorted tokens and the leftover tokens of each
        side, keeping the best of the three pairwise ratios.

        Best for:
        - "coca cola" vs "coca cola co"
        - Word reordering
        """
        p1 = utils.default_process(s1)
        p2 = utils.default_process(s2)
        if not p1 or not p2:
            return 0.0

        return _whole_percent(fuzz.token_set_ratio(p1, p2))

    def similarity(self, s1: str, s2: str, metric: DistanceMetric) -> float:
        """Similarity under the selected metric."""
        if metric == DistanceMetric.LEVENSHTEIN:
            return self.levenshtein_ratio(s1, s2)
        if metric == DistanceMetric.JARO_WINKLER:
            return self.jaro_winkler(s1, s2)
        return self.token_set(s1, s2)

    def distance(self, s1: str, s2: str, metric: DistanceMetric) -> float:
        """
        Distance (0-1) between two keys.

        Two empty keys are identical (0); one empty key is maximally
        distant (1).
        """
        if not s1 and not s2:
            return 0.0
        if not s1 or not s2:
            return 1.0
        return 1 - self.similarity(s1, s2, metric)


@dataclass
class DistanceMatrix:
    """Symmetric, zero-diagonal distances between keys, indexed by key position."""
    keys: list[str]
    rows: list[list[float]]

    def __len__(self) -> int:
        return len(self.keys)

    def __getitem__(self, pair: tuple[int, int]) -> float:
        i, j = pair
        return self.rows[i][j]

    def total_distance(self, index: int, members: list[int]) -> float:
        """Sum of distances from one key to a set of keys."""
        row = self.rows[index]
        total = 0.0
        for member in members:
            total += row[member]
        return total


def build_distance_matrix(
    keys: list[str],
    metric: DistanceMetric | str = DistanceMetric.TOKEN_SET_RATIO,
) -> DistanceMatrix:
    """
    Compute all pairwise distances between distinct keys.

    Args:
        keys: Distinct normalized keys (the caller deduplicates)
        metric: Distance metric

    Returns:
        DistanceMatrix over the keys in the given order
    """
    metric = coerce_choice(DistanceMetric, metric, "distance_metric")
    metrics = SimilarityMetrics()
    n = len(keys)
    rows = [[0.0] * n for _ in range(n)]

    for i in range(n):
        for j in range(i + 1, n):
            d = metrics.distance(keys[i], keys[j], metric)
            rows[i][j] = d
            rows[j][i] = d

    logger.debug("distance_matrix_built", keys=n, metric=metric.value)
    return DistanceMatrix(keys=list(keys), rows=rows)
