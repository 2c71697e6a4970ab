# API routers
from .unify import router as unify_router

__all__ = [
    "unify_router",
]
