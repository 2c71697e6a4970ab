"""
Centralized settings for the CONCORD API.

Values come from environment variables with safe defaults.
"""
import os

# Maximum number of values accepted in one unify request.
# Clustering is O(n^3) in distinct values, so keep this bounded.
MAX_VALUES_PER_REQUEST = int(os.environ.get("CONCORD_MAX_VALUES", "10000"))

# Log level for structlog / stdlib logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

# auto, json or console
LOG_FORMAT = os.environ.get("LOG_FORMAT", "auto")

# Comma-separated CORS origins for browser clients
CORS_ORIGINS = os.environ.get(
    "CORS_ORIGINS", "http://localhost:3009,http://127.0.0.1:3009"
).split(",")
