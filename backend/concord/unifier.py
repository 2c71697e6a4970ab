"""
CONCORD Unifier: Value Unification Pipeline

Replaces every value in a list with the canonical form of its group:
1. Normalize values to comparison keys (deduplicated)
2. Build the distance matrix over distinct non-empty keys
3. Agglomerative clustering up to the distance threshold
4. Pick a representative key per cluster
5. Map each input back to the first-seen original of its representative

Output has the input's length and order, and every entry is a literal
input value. Nothing is kept between calls.
"""

from collections.abc import Mapping
from typing import Optional, Sequence

import structlog

from .clustering import agglomerate
from .config import UnifyConfig, UnifyConfigError
from .models import KeyGroup, UnificationResult, ValueCluster
from .normalizer import EMPTY_KEY, ValueNormalizer
from .representative import build_representative_map
from .similarity import build_distance_matrix

logger = structlog.get_logger("concord.unifier")


def resolve_config(
    config: UnifyConfig | Mapping | None = None,
    options: Optional[dict] = None,
) -> UnifyConfig:
    """
    Combine a config object (or option mapping) with keyword overrides.

    Raises:
        UnifyConfigError: on unknown options or invalid values
    """
    options = options or {}
    if config is None:
        return UnifyConfig.from_options(**options)
    if isinstance(config, Mapping):
        return UnifyConfig.from_options(**{**config, **options})
    if not isinstance(config, UnifyConfig):
        raise UnifyConfigError(
            f"config must be a UnifyConfig or a mapping, got {type(config).__name__}"
        )
    return config.with_options(**options) if options else config


def _group_values(
    values: Sequence[str],
    normalizer: ValueNormalizer,
) -> tuple[list[str], dict[str, KeyGroup]]:
    processed_keys = []
    groups: dict[str, KeyGroup] = {}

    for original in values:
        key = normalizer.normalize(original)
        processed_keys.append(key)

        group = groups.get(key)
        if group is None:
            group = groups[key] = KeyGroup(key=key)
        group.add(original)

    return processed_keys, groups


def unify_with_details(
    values: Sequence[str],
    config: UnifyConfig | Mapping | None = None,
    **options,
) -> UnificationResult:
    """
    Unify values and report the clusters that were formed.

    Args:
        values: Raw values; may repeat or be empty
        config: UnifyConfig or mapping of options (defaults if omitted)
        **options: Option overrides (snake_case or form camelCase names)

    Returns:
        UnificationResult with the unified values and final clusters

    Raises:
        UnifyConfigError: invalid options or a failing preprocessor
    """
    config = resolve_config(config, options)

    if not values:
        return UnificationResult(values=[])

    normalizer = ValueNormalizer(config)
    processed_keys, groups = _group_values(values, normalizer)
    empty_count = processed_keys.count(EMPTY_KEY)
    empty_group = groups.get(EMPTY_KEY)

    keys = sorted(k for k in groups if k != EMPTY_KEY)
    logger.debug(
        "values_normalized",
        values=len(values),
        distinct_keys=len(keys),
        empty=empty_count,
    )

    if not keys:
        representative = empty_group.first_original
        return UnificationResult(
            values=[representative] * len(values),
            empty_count=empty_count,
        )

    matrix = build_distance_matrix(keys, config.distance_metric)
    clusters = agglomerate(matrix, config.cluster_linkage, config.distance_threshold)
    replacement = build_representative_map(
        clusters,
        matrix,
        config.representative_strategy,
        config.min_cluster_size,
    )

    unified = []
    for key in processed_keys:
        if key == EMPTY_KEY:
            unified.append(empty_group.first_original)
        else:
            unified.append(groups[replacement[key]].first_original)

    value_clusters = []
    for indices in clusters:
        cluster_keys = [keys[i] for i in indices]
        changed = len(cluster_keys) >= config.min_cluster_size
        value_clusters.append(ValueCluster(
            representative=groups[replacement[cluster_keys[0]]].first_original if changed else None,
            members=[original for k in cluster_keys for original in groups[k].originals],
            keys=cluster_keys,
        ))

    logger.debug(
        "unification_completed",
        values=len(values),
        distinct_keys=len(keys),
        clusters=len(clusters),
        metric=config.distance_metric.value,
        linkage=config.cluster_linkage.value,
    )

    return UnificationResult(
        values=unified,
        clusters=value_clusters,
        distinct_keys=len(keys),
        empty_count=empty_count,
    )


def unify_values(
    values: Sequence[str],
    config: UnifyConfig | Mapping | None = None,
    **options,
) -> list[str]:
    """
    Replace each value with the canonical original form of its cluster.

    Example:
        >>> unify_values(["Coca-Cola", "coca cola", "COCA COLA"])
        ['coca cola', 'coca cola', 'coca cola']
        >>> unify_values(["", "", "Acme"])
        ['', '', 'Acme']
    """
    return unify_with_details(values, config, **options).values
