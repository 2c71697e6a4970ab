# Pydantic models for API request/response
from .unify import (
    ClusterResponse,
    UnifyOptions,
    UnifyOptionsResponse,
    UnifyRequest,
    UnifyResponse,
)

__all__ = [
    "ClusterResponse",
    "UnifyOptions",
    "UnifyOptionsResponse",
    "UnifyRequest",
    "UnifyResponse",
]
