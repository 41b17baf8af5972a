"""
AUTHGATE Web - Health, Root and Route Table Tests
"""

import pytest
from fastapi.testclient import TestClient

from authgate.main import app, route_names
from authgate.dashboard import dashboard_router
from authgate.config import settings


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    def test_health_returns_200(self, client):
        response = client.get("/health")
        assert response.status_code == 200

    def test_health_includes_service_info(self, client):
        data = client.get("/health").json()
        assert data["status"] == "healthy"
        assert data["service"] == settings.APP_NAME
        assert data["version"] == settings.APP_VERSION


class TestRootEndpoint:
    """The public entry point is reachable without a session."""

    def test_root_returns_200(self, client):
        response = client.get("/")
        assert response.status_code == 200

    def test_root_links_to_auth_pages(self, client):
        data = client.get("/").json()
        assert data["login"] == "/login"
        assert data["register"] == "/register"


class TestNamedRoutes:
    """Tests for GET /routes."""

    def test_lists_auth_routes(self, client):
        routes = client.get("/routes").json()
        assert routes["home"] == "/"
        assert routes["login"] == "/login"
        assert routes["login.store"] == "/login"
        assert routes["register.store"] == "/register"
        assert routes["password.request"] == "/forgot-password"
        assert routes["dashboard"] == "/dashboard"

    def test_every_route_resolves_to_its_app_path(self, client):
        routes = client.get("/routes").json()
        for name, path in routes.items():
            assert app.url_path_for(name) == path
        assert routes["admin.dashboard"] == "/admin"
        assert routes["logout"] == "/logout"


class TestRouteNames:

    def test_descends_into_nested_routes(self):
        class Group:
            def __init__(self, routes):
                self.routes = routes

        names = route_names([Group([Group(dashboard_router.routes)])])
        assert "dashboard" in names
        assert "admin.dashboard" in names
