"""
AUTHGATE Web - Authentication Middleware Tests

Every guard failure ends at the public entry point.
"""

from datetime import timedelta

import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient

from authgate.config import settings
from authgate.auth.dependencies import get_auth_service
from authgate.auth.exceptions import AuthenticationException, authentication_exception_handler
from authgate.auth.guards import GUARDS, get_guard
from authgate.auth.middleware import Authenticate
from authgate.auth.models import User
from tests.conftest import BASE_URL, auth_service, override_get_auth_service, user_repository


PROTECTED_ROUTES = [
    ("/dashboard", "web"),
    ("/admin", "admin"),
]


class TestUnauthenticatedRedirect:
    """Unauthenticated requests are redirected to the public entry point."""

    @pytest.mark.parametrize("path,guard", PROTECTED_ROUTES)
    def test_redirects_to_home(self, client, path, guard):
        response = client.get(path, follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == f"{BASE_URL}/"

    @pytest.mark.parametrize("path,guard", PROTECTED_ROUTES)
    def test_invalid_session_cookie(self, client, path, guard):
        client.cookies.set(settings.SESSION_COOKIE_NAME, "invalid_token_here")
        response = client.get(path, follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == f"{BASE_URL}/"

    def test_json_requests_get_401(self, client):
        response = client.get(
            "/dashboard",
            headers={"Accept": "application/json"},
            follow_redirects=False,
        )
        assert response.status_code == 401
        assert response.json() == {"message": "Unauthenticated."}

    def test_non_admin_is_sent_home_not_to_a_guard_page(self, logged_in_client):
        response = logged_in_client.get("/admin", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == f"{BASE_URL}/"

    def test_expired_session(self, client, registered_user):
        user = user_repository.get_by_email_sync(registered_user["email"])
        expired = auth_service.create_session_token(user.id, expires_delta=timedelta(seconds=-1))
        client.cookies.set(settings.SESSION_COOKIE_NAME, expired)

        response = client.get("/dashboard", follow_redirects=False)
        assert response.status_code == 302


class TestAuthenticatedAccess:
    """Authenticated requests proceed unmodified."""

    def test_dashboard(self, logged_in_client, registered_user):
        response = logged_in_client.get("/dashboard", follow_redirects=False)
        assert response.status_code == 200
        data = response.json()
        assert data["area"] == "dashboard"
        assert data["user"]["email"] == registered_user["email"]
        assert "password_hash" not in data["user"]

    def test_admin_area(self, client, admin_user):
        client.post("/login", data=admin_user, follow_redirects=False)
        response = client.get("/admin", follow_redirects=False)
        assert response.status_code == 200
        assert response.json()["area"] == "admin"

    def test_admin_passes_web_guard(self, client, admin_user):
        client.post("/login", data=admin_user, follow_redirects=False)
        assert client.get("/dashboard", follow_redirects=False).status_code == 200


@pytest.fixture
def guarded_app(server):
    """A small app whose routes accept several guards at once."""
    test_app = FastAPI()
    test_app.dependency_overrides[get_auth_service] = override_get_auth_service
    failures = []

    async def record_and_handle(request: Request, exc: AuthenticationException):
        failures.append(exc)
        return await authentication_exception_handler(request, exc)

    test_app.add_exception_handler(AuthenticationException, record_and_handle)

    @test_app.get("/", name="home")
    async def home():
        return {"ok": True}

    @test_app.get("/either")
    async def either(user: User = Depends(Authenticate("admin", "web"))):
        return {"email": user.email}

    @test_app.get("/whoami")
    async def whoami(request: Request, user: User = Depends(Authenticate())):
        return {"guard": request.state.guard, "email": request.state.user.email}

    @test_app.get("/misconfigured")
    async def misconfigured(user: User = Depends(Authenticate("nope"))):
        return {}

    test_app.state.failures = failures
    return test_app


class TestAuthenticateDependency:
    """Direct tests of the Authenticate dependency."""

    def test_failure_carries_all_guards_and_one_target(self, guarded_app):
        response = TestClient(guarded_app).get("/either", follow_redirects=False)

        assert response.status_code == 302
        failure = guarded_app.state.failures[-1]
        assert failure.guards == ["admin", "web"]
        assert failure.redirect_to == f"{BASE_URL}/"

    def test_any_guard_is_enough(self, guarded_app, client, registered_user):
        login = client.post(
            "/login",
            data={"email": registered_user["email"], "password": registered_user["password"]},
            follow_redirects=False,
        )
        token = login.cookies[settings.SESSION_COOKIE_NAME]

        test_client = TestClient(guarded_app)
        test_client.cookies.set(settings.SESSION_COOKIE_NAME, token)
        response = test_client.get("/either")
        assert response.status_code == 200
        assert response.json()["email"] == registered_user["email"]

    def test_default_guard_recorded_on_request(self, guarded_app, client, registered_user):
        login = client.post(
            "/login",
            data={"email": registered_user["email"], "password": registered_user["password"]},
            follow_redirects=False,
        )
        test_client = TestClient(guarded_app)
        test_client.cookies.set(settings.SESSION_COOKIE_NAME, login.cookies[settings.SESSION_COOKIE_NAME])

        data = test_client.get("/whoami").json()
        assert data["guard"] == settings.AUTH_DEFAULT_GUARD
        assert data["email"] == registered_user["email"]

    def test_undefined_guard_is_a_configuration_error(self, guarded_app):
        with pytest.raises(ValueError, match=r"Auth guard \[nope\] is not defined"):
            TestClient(guarded_app).get("/misconfigured")


class TestGuardRegistry:

    def test_known_guards(self):
        assert set(GUARDS) == {"web", "admin"}
        assert get_guard("admin").admin_only is True
        assert get_guard("web").admin_only is False

    def test_unknown_guard(self):
        with pytest.raises(ValueError):
            get_guard("api")
