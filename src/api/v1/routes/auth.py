"""Authentication routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_user_service
from api.v1.schemas.common import TokenResponse
from api.v1.schemas.user import UserLogin, UserResponse
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get(
    "",
    response_model=UserResponse,
    summary="Get the authenticated user",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def who_am_i(
    request: Request,
    user: CurrentUser,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Return the user behind the session token, without the password."""
    record = await service.get_by_id(user.id)
    return UserResponse.model_validate(record)


@router.post(
    "",
    response_model=TokenResponse,
    summary="Log in",
    responses={
        200: {"description": "Credentials accepted, session token returned"},
        400: {"description": "Invalid credentials"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def login(
    request: Request,
    body: UserLogin,
    service: UserService = Depends(get_user_service),
) -> TokenResponse:
    """Exchange email and password for a session token."""
    token = await service.authenticate(str(body.email), body.password)
    return TokenResponse(token=token)
