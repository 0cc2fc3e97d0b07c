"""User registration routes."""

from fastapi import APIRouter, Depends, Request

from api.v1.dependencies import get_user_service
from api.v1.schemas.common import TokenResponse
from api.v1.schemas.user import UserRegister
from core.rate_limit import WRITE_LIMIT, limiter
from domain.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=TokenResponse,
    summary="Register a user",
    responses={
        200: {"description": "User registered, session token returned"},
        400: {"description": "A user with this email already exists"},
        422: {"description": "Invalid name, email or password"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def register(
    request: Request,
    body: UserRegister,
    service: UserService = Depends(get_user_service),
) -> TokenResponse:
    """Create an account and log it in straight away."""
    token = await service.register(
        name=body.name,
        email=str(body.email),
        password=body.password,
    )
    return TokenResponse(token=token)
