"""Tests for user membership routes."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from nsregistry.core.membership import MembershipState
from nsregistry.entrypoints.api.deps import get_repository
from nsregistry.entrypoints.api.middleware.jwt_auth import optional_caller
from nsregistry.entrypoints.api.routes.users import router
from fixtures.registry import Registry, caller_for


@pytest.fixture
def app(registry: Registry) -> FastAPI:
    """Create test app with user routes over the seeded registry."""
    app = FastAPI()
    app.include_router(router, prefix="/api/v1")
    app.dependency_overrides[get_repository] = lambda: registry.repo
    app.dependency_overrides[optional_caller] = lambda: None
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create test client."""
    return TestClient(app)


class TestPendingMemberships:
    """Tests for the caller's pending memberships endpoint."""

    def test_lists_pending(self, app: FastAPI, client: TestClient, registry: Registry) -> None:
        """The caller sees namespaces they were invited to."""
        registry.repo.add_member(registry.bob, registry.acme, MembershipState.PENDING)
        bob = caller_for(registry.bob)
        app.dependency_overrides[optional_caller] = lambda: bob

        response = client.get("/api/v1/users/me/memberships/pending")

        assert response.status_code == 200
        assert response.json() == {"objects": ["acme"]}

    def test_anonymous(self, client: TestClient) -> None:
        """Anonymous callers are rejected."""
        response = client.get("/api/v1/users/me/memberships/pending")

        assert response.status_code == 403
        assert response.json() == {"detail": "You must be logged in to perform this action"}


class TestMemberships:
    """Tests for a user's memberships endpoint."""

    def test_lists_memberships(self, client: TestClient) -> None:
        """Memberships are public."""
        response = client.get("/api/v1/users/user/alice/memberships")

        assert response.status_code == 200
        assert response.json() == {"objects": ["acme"]}

    def test_unknown_user(self, client: TestClient) -> None:
        """Unknown users return 404."""
        response = client.get("/api/v1/users/user/mallory/memberships")

        assert response.status_code == 404
        assert response.json() == {"detail": "mallory not found."}
