# CONCORD Value Unification API
"""
REST API exposing the CONCORD unification engine.

Endpoints:
- POST /api/v1/unify - Unify a list of values
- GET /api/v1/unify/options - Accepted option values and defaults
- GET /health - Liveness check
"""
