"""API router for value unification."""
import structlog
from fastapi import APIRouter

from concord import (
    ClusterLinkage,
    DistanceMetric,
    RepresentativeStrategy,
    UnifyConfig,
    chain_preprocessors,
    unify_with_details,
)
from concord.preprocessors import PREPROCESSORS

from ..config.constants import MAX_VALUES_PER_REQUEST
from ..middleware.error_handler import PayloadTooLargeError
from ..models.unify import (
    ClusterResponse,
    UnifyOptions,
    UnifyOptionsResponse,
    UnifyRequest,
    UnifyResponse,
)

router = APIRouter(prefix="/unify", tags=["unify"])

logger = structlog.get_logger("concord.api.unify")


def _build_config(options: UnifyOptions) -> UnifyConfig:
    """Translate request options into an engine config (raises UnifyConfigError)."""
    return UnifyConfig(
        distance_threshold=options.distance_threshold,
        distance_metric=options.distance_metric,
        cluster_linkage=options.cluster_linkage,
        representative_strategy=options.representative_strategy,
        lowercase=options.lowercase,
        strip_chars=options.strip_chars,
        remove_internal_chars=options.remove_internal_chars,
        min_cluster_size=options.min_cluster_size,
        preprocessor=chain_preprocessors(*options.preprocessors),
    )


@router.post("", response_model=UnifyResponse)
def unify(request: UnifyRequest):
    """
    Unify a list of values.

    Every value is replaced by the canonical original form of its cluster.
    The response has the same length and order as the input.
    """
    if len(request.values) > MAX_VALUES_PER_REQUEST:
        raise PayloadTooLargeError(
            f"At most {MAX_VALUES_PER_REQUEST} values per request",
            details={"received": len(request.values), "limit": MAX_VALUES_PER_REQUEST},
        )

    config = _build_config(request.options)
    result = unify_with_details(request.values, config)

    logger.info(
        "values_unified",
        values=len(result.values),
        distinct_keys=result.distinct_keys,
        clusters=len(result.clusters),
    )

    clusters = []
    if request.include_clusters:
        clusters = [
            ClusterResponse(
                representative=c.representative,
                members=c.members,
                size=c.size,
            )
            for c in result.clusters
        ]

    return UnifyResponse(
        values=result.values,
        clusters=clusters,
        distinct_keys=result.distinct_keys,
        empty_count=result.empty_count,
    )


@router.get("/options", response_model=UnifyOptionsResponse)
def list_options():
    """List accepted metric, linkage, strategy and preprocessor names with defaults."""
    return UnifyOptionsResponse(
        distance_metrics=[m.value for m in DistanceMetric],
        cluster_linkages=[l.value for l in ClusterLinkage],
        representative_strategies=[s.value for s in RepresentativeStrategy],
        preprocessors=sorted(PREPROCESSORS),
        defaults=UnifyOptions(),
        max_values=MAX_VALUES_PER_REQUEST,
    )
