"""Users API router: list, create and update."""

from typing import Any

from fastapi import APIRouter, Depends, Request, Response, status

from src.users_api.api.http.deps import get_app_config, get_user_service
from src.users_api.core.services import UserService
from src.users_api.entities.core.user import User, UserForm, UserPublic
from src.users_api.runtime.config.config_data import ConfigData

router = APIRouter(prefix="/api/users", tags=["users"])

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    409: {"description": "Email already exists"},
    422: {"description": "One entry per invalid field"},
    500: {"description": "Database error with the failing statement"},
}


def user_location(request: Request, user: User) -> str:
    """Absolute URL of a user resource, from the request's scheme and Host."""
    return str(request.url_for("update_user", user_id=str(user.id)))


@router.get("", response_model=None)
def list_users(
    service: UserService = Depends(get_user_service),
    config: ConfigData = Depends(get_app_config),
) -> list[dict[str, Any]]:
    """List all users."""
    users = service.list_users()
    if config.users.list_includes_password:
        return [user.model_dump() for user in users]
    return [UserPublic.from_user(user).model_dump() for user in users]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=UserPublic,
    responses=_ERROR_RESPONSES,
)
def create_user(
    form: UserForm,
    request: Request,
    response: Response,
    service: UserService = Depends(get_user_service),
) -> UserPublic:
    """Create a user and point the Location header at it."""
    user = service.create_user(form)
    response.headers["Location"] = user_location(request, user)
    return UserPublic.from_user(user)


@router.put(
    "/{user_id}",
    response_model=UserPublic,
    responses={**_ERROR_RESPONSES, 404: {"description": "User not found"}},
)
def update_user(
    user_id: int,
    form: UserForm,
    request: Request,
    response: Response,
    service: UserService = Depends(get_user_service),
) -> UserPublic:
    """Replace a user's email, password and name."""
    user = service.update_user(user_id, form)
    response.headers["Location"] = user_location(request, user)
    return UserPublic.from_user(user)
