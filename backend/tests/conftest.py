"""
Pytest fixtures for CONCORD engine and API tests.
"""
import pytest
from fastapi.testclient import TestClient

from api.main import app
from concord.similarity import DistanceMatrix


@pytest.fixture(scope="module")
def client():
    """Create a test client for the FastAPI app."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(scope="module")
def base_url():
    """Base URL for API v1 endpoints."""
    return "/api/v1"


@pytest.fixture
def make_matrix():
    """Build a DistanceMatrix from {(i, j): distance} with unlisted pairs at 1.0."""

    def _make(keys, pairs):
        n = len(keys)
        rows = [[0.0 if i == j else 1.0 for j in range(n)] for i in range(n)]
        for (i, j), d in pairs.items():
            rows[i][j] = d
            rows[j][i] = d
        return DistanceMatrix(keys=list(keys), rows=rows)

    return _make
