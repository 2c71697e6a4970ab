"""
CONCORD — Value Unification API

REST API around the CONCORD engine: send a list of free-text values, get
back the same list with spelling variants collapsed onto one canonical
form per group.

Run with: uvicorn api.main:app --port 8001 --reload
"""
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.gzip import GZipMiddleware

# Configure structured logging FIRST (before any logger calls)
from concord.logging_config import configure as configure_logging
from .config.constants import CORS_ORIGINS, LOG_FORMAT, LOG_LEVEL

configure_logging(LOG_LEVEL, log_format=LOG_FORMAT)

import structlog

import concord
from .middleware import RequestLoggingMiddleware, register_error_handlers
from .routers import unify_router

logger = structlog.get_logger("concord.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("startup", version=API_VERSION, engine_version=concord.__version__)
    yield
    logger.info("Shutting down.")


# API metadata
API_TITLE = "CONCORD — Value Unification API"
API_DESCRIPTION = """
Collapses spelling, casing and punctuation variants of the same entity
("Coca-Cola", "coca cola", "COCA COLA CO.") onto one canonical original form.

### Core Endpoints

- **POST /api/v1/unify** - Unify a list of values
- **GET /api/v1/unify/options** - Accepted option values and defaults
"""
API_VERSION = "1.0.0"

_docs_enabled = os.environ.get("ENABLE_DOCS", "true").lower() == "true"
app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
    docs_url="/docs" if _docs_enabled else None,
    redoc_url="/redoc" if _docs_enabled else None,
    lifespan=lifespan,
)

# Register global error handlers
register_error_handlers(app)

cors_origins = CORS_ORIGINS
if "*" in cors_origins:
    logger.warning("Wildcard CORS origin rejected for security; falling back to localhost defaults")
    cors_origins = ["http://localhost:3009", "http://127.0.0.1:3009"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Authorization", "Accept", "Accept-Language"],
)


# Security headers middleware
@app.middleware("http")
async def security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response

# GZip compression for responses > 1KB
app.add_middleware(GZipMiddleware, minimum_size=1000)

# Outermost (added last): sees the final, compressed response
app.add_middleware(RequestLoggingMiddleware)

app.include_router(unify_router, prefix="/api/v1")


@app.get("/", tags=["root"])
async def root():
    """API root - returns basic info and links."""
    return {
        "name": API_TITLE,
        "version": API_VERSION,
        "docs": "/docs",
        "endpoints": {
            "unify": "/api/v1/unify",
            "unify_options": "/api/v1/unify/options",
            "health": "/health",
        },
    }


@app.get("/health", tags=["root"])
async def health():
    """Liveness check."""
    return {"status": "healthy", "version": API_VERSION}
