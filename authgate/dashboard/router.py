from fastapi import APIRouter

from authgate.auth.middleware import AdminUser, CurrentUser
from authgate.auth.models import User
from authgate.auth.schemas import DashboardResponse, UserResponse


router = APIRouter(tags=["Dashboard"])


def _user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        is_admin=user.is_admin,
        created_at=user.created_at,
    )


@router.get(
    "/dashboard",
    name="dashboard",
    response_model=DashboardResponse,
    summary="Authenticated area",
)
async def dashboard(current_user: CurrentUser) -> DashboardResponse:
    """Landing page after login or registration. Requires the ``web`` guard."""
    return DashboardResponse(area="dashboard", user=_user_response(current_user))


@router.get(
    "/admin",
    name="admin.dashboard",
    response_model=DashboardResponse,
    summary="Administrator area",
)
async def admin_dashboard(current_user: AdminUser) -> DashboardResponse:
    """Requires the ``admin`` guard."""
    return DashboardResponse(area="admin", user=_user_response(current_user))
