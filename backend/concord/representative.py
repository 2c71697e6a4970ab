"""
Representative selection: choose the canonical key of a cluster.
"""

import math

from .config import RepresentativeStrategy, coerce_choice
from .similarity import DistanceMatrix


def medoid(keys: list[str], indices: list[int], matrix: DistanceMatrix) -> str:
    """Key with the smallest total distance to its cluster; first one wins ties."""
    if len(keys) == 1:
        return keys[0]

    best_sum = math.inf
    best = keys[0]
    for key, idx in zip(keys, indices):
        total = matrix.total_distance(idx, indices)
        if total < best_sum:
            best_sum = total
            best = key
    return best


def shortest(keys: list[str]) -> str:
    return min(keys, key=lambda k: (len(k), k))


def longest(keys: list[str]) -> str:
    return min(keys, key=lambda k: (-len(k), k))


def first_alphabetical(keys: list[str]) -> str:
    return min(keys)


def select_representative(
    keys: list[str],
    indices: list[int],
    strategy: RepresentativeStrategy | str,
    matrix: DistanceMatrix,
) -> str:
    """
    Pick the representative key of one cluster.

    Args:
        keys: Cluster member keys, in cluster order
        indices: Matrix positions of the same members
        strategy: Selection strategy
        matrix: Distances used by the medoid strategy

    Returns:
        One of the member keys ("" for an empty cluster)
    """
    if not keys:
        return ""

    strategy = coerce_choice(RepresentativeStrategy, strategy, "representative_strategy")
    if strategy == RepresentativeStrategy.MEDOID:
        return medoid(keys, indices, matrix)
    if strategy == RepresentativeStrategy.SHORTEST:
        return shortest(keys)
    if strategy == RepresentativeStrategy.LONGEST:
        return longest(keys)
    return first_alphabetical(keys)


def build_representative_map(
    clusters: list[list[int]],
    matrix: DistanceMatrix,
    strategy: RepresentativeStrategy | str,
    min_cluster_size: int = 1,
) -> dict[str, str]:
    """
    Map every key to its cluster's representative key.

    Clusters with fewer than ``min_cluster_size`` members map each key to
    itself.
    """
    replacement: dict[str, str] = {}
    for indices in clusters:
        keys = [matrix.keys[i] for i in indices]
        if len(keys) < min_cluster_size:
            for key in keys:
                replacement[key] = key
            continue

        representative = select_representative(keys, indices, strategy, matrix)
        for key in keys:
            replacement[key] = representative
    return replacement
