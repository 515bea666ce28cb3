"""
Pytest fixtures: a throwaway JSON store per test, a fresh rate limiter,
and a TestClient wired to both through dependency overrides.
"""
import base64

import pytest
from fastapi.testclient import TestClient

from safarsorted.core.config import settings
from safarsorted.core.deps import get_rate_limiter, get_store
from safarsorted.db.store import InquiryStore
from safarsorted.main import app
from safarsorted.services.rate_limit import SlidingWindowRateLimiter

ADMIN_USER = "ops-admin"
ADMIN_PASS = "s3cret:with-colon"


def basic_auth(username: str, password: str) -> dict:
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {token}"}


@pytest.fixture
def store(tmp_path):
    return InquiryStore(tmp_path / "data" / "inquiries.json")


@pytest.fixture
def limiter():
    return SlidingWindowRateLimiter(max_requests=30, window_seconds=60)


@pytest.fixture
def admin_credentials(monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_USER", ADMIN_USER)
    monkeypatch.setattr(settings, "ADMIN_PASS", ADMIN_PASS)
    return ADMIN_USER, ADMIN_PASS


@pytest.fixture
def auth_headers(admin_credentials):
    return basic_auth(*admin_credentials)


@pytest.fixture
def client(store, limiter, admin_credentials):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_rate_limiter] = lambda: limiter
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_inquiry():
    """A valid public form payload."""
    return {
        "name": "Asha Verma",
        "phone": "+91 98765 43210",
        "travelers": 2,
        "destination": "Manali",
        "travelDate": "2026-12-20",
        "travelerType": "couple",
        "email": "asha@example.com",
        "message": "Looking for a snow trip",
    }
