"""
CONCORD Clustering: Threshold-Stopped Agglomerative Clustering

Every key starts in its own cluster. Each round scans all pairs of current
clusters, picks the pair with the smallest linkage distance and merges it
if that distance is within the threshold. Clustering stops at the first
round whose best pair is too far apart.

Linkage rules:
- single: closest pair of members
- complete: farthest pair of members
- average: mean over all member pairs

Ties go to the first pair in scan order (ascending cluster positions), so
identical input always yields identical clusters. Each round rescans every
pair, O(n^3) overall in the number of distinct keys.
"""

import math
from typing import Callable

import structlog

from .config import ClusterLinkage, coerce_choice
from .similarity import DistanceMatrix

logger = structlog.get_logger("concord.clustering")

Cluster = list[int]


def single_linkage(matrix: DistanceMatrix, a: Cluster, b: Cluster) -> float:
    best = math.inf
    for i in a:
        for j in b:
            best = min(best, matrix[i, j])
    return best


def complete_linkage(matrix: DistanceMatrix, a: Cluster, b: Cluster) -> float:
    worst = -math.inf
    for i in a:
        for j in b:
            worst = max(worst, matrix[i, j])
    return worst


def average_linkage(matrix: DistanceMatrix, a: Cluster, b: Cluster) -> float:
    total = 0.0
    count = 0
    for i in a:
        for j in b:
            total += matrix[i, j]
            count += 1
    return total / count


LINKAGES: dict[ClusterLinkage, Callable[[DistanceMatrix, Cluster, Cluster], float]] = {
    ClusterLinkage.SINGLE: single_linkage,
    ClusterLinkage.COMPLETE: complete_linkage,
    ClusterLinkage.AVERAGE: average_linkage,
}


class AgglomerativeClusterer:
    """
    Agglomerative clustering over a precomputed distance matrix.

    Example:
        >>> clusterer = AgglomerativeClusterer(ClusterLinkage.AVERAGE, threshold=0.35)
        >>> clusters = clusterer.fit(matrix)
        >>> clusters
        [[2], [0, 1]]
    """

    def __init__(self, linkage: ClusterLinkage | str = ClusterLinkage.AVERAGE, threshold: float = 0.35):
        """
        Args:
            linkage: Cluster-to-cluster distance rule
            threshold: Largest linkage distance that still merges
        """
        self.linkage = coerce_choice(ClusterLinkage, linkage, "cluster_linkage")
        self.threshold = threshold
        self._linkage_fn = LINKAGES[self.linkage]

    def closest_pair(
        self,
        matrix: DistanceMatrix,
        clusters: list[Cluster],
    ) -> tuple[float, tuple[int, int] | None]:
        """
        Find the pair of clusters with the smallest linkage distance.

        Returns:
            (distance, (i, j)) with i < j, or (inf, None) for fewer than two clusters
        """
        min_dist = math.inf
        pair = None

        for i in range(len(clusters)):
            for j in range(i + 1, len(clusters)):
                d = self._linkage_fn(matrix, clusters[i], clusters[j])
                # Strict comparison keeps the first pair on ties
                if d < min_dist:
                    min_dist = d
                    pair = (i, j)

        return min_dist, pair

    def fit(self, matrix: DistanceMatrix) -> list[Cluster]:
        """
        Cluster all keys of the matrix.

        Merged clusters are appended after the untouched ones, members of
        the earlier cluster first.

        Returns:
            Partition of key indices
        """
        clusters: list[Cluster] = [[idx] for idx in range(len(matrix))]
        merges = 0

        while True:
            min_dist, pair = self.closest_pair(matrix, clusters)
            if pair is None or not min_dist <= self.threshold:
                break

            i, j = pair
            merged = clusters[i] + clusters[j]
            clusters = [c for idx, c in enumerate(clusters) if idx != i and idx != j]
            clusters.append(merged)
            merges += 1

            logger.debug("clusters_merged", distance=min_dist, size=len(merged), remaining=len(clusters))

        logger.debug(
            "clustering_finished",
            linkage=self.linkage.value,
            threshold=self.threshold,
            merges=merges,
            clusters=len(clusters),
        )
        return clusters


def agglomerate(
    matrix: DistanceMatrix,
    linkage: ClusterLinkage | str = ClusterLinkage.AVERAGE,
    threshold: float = 0.35,
) -> list[Cluster]:
    """Convenience function: cluster a matrix in one call."""
    return AgglomerativeClusterer(linkage, threshold).fit(matrix)
