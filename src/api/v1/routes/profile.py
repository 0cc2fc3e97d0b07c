"""Profile API routes."""

from typing import Any

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_profile_service
from api.v1.schemas.common import MessageResponse
from api.v1.schemas.profile import (
    EducationCreate,
    ExperienceCreate,
    ProfileResponse,
    ProfileUpsert,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get(
    "/me",
    response_model=ProfileResponse,
    summary="Get the caller's profile",
    responses={404: {"description": "The caller has no profile yet"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_own_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    result = await service.get_for_user(user.id)
    return ProfileResponse.from_entity(result)


@router.post(
    "",
    response_model=ProfileResponse,
    summary="Create or update the caller's profile",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def upsert_profile(
    request: Request,
    body: ProfileUpsert,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Only fields present in the body are written; the rest keep their value."""
    result = await service.upsert(user.id, body.to_patch())
    return ProfileResponse.from_entity(result)


@router.get(
    "",
    response_model=list[ProfileResponse],
    summary="List all profiles",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_profiles(
    request: Request,
    service: ProfileService = Depends(get_profile_service),
) -> list[ProfileResponse]:
    profiles = await service.get_all()
    return [ProfileResponse.from_entity(item) for item in profiles]


@router.get(
    "/user/{user_id}",
    response_model=ProfileResponse,
    summary="Get a profile by user id",
    responses={404: {"description": "No profile for this user"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_profile_by_user(
    request: Request,
    user_id: str,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    result = await service.get_by_user_id(user_id)
    return ProfileResponse.from_entity(result)


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Delete the caller's account",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_account(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> MessageResponse:
    """Remove the caller's profile and user record. Posts are kept."""
    await service.delete_account(user.id)
    return MessageResponse(message="User deleted")


@router.put(
    "/experience",
    response_model=ProfileResponse,
    summary="Add an experience entry",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_experience(
    request: Request,
    body: ExperienceCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    result = await service.add_experience(user.id, body.to_entity())
    return ProfileResponse.from_entity(result)


@router.delete(
    "/experience/{experience_id}",
    response_model=ProfileResponse,
    summary="Remove an experience entry",
    responses={404: {"description": "Experience entry not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_experience(
    request: Request,
    experience_id: str,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    result = await service.remove_experience(user.id, experience_id)
    return ProfileResponse.from_entity(result)


@router.put(
    "/education",
    response_model=ProfileResponse,
    summary="Add an education entry",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_education(
    request: Request,
    body: EducationCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    result = await service.add_education(user.id, body.to_entity())
    return ProfileResponse.from_entity(result)


@router.delete(
    "/education/{education_id}",
    response_model=ProfileResponse,
    summary="Remove an education entry",
    responses={404: {"description": "Education entry not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_education(
    request: Request,
    education_id: str,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    result = await service.remove_education(user.id, education_id)
    return ProfileResponse.from_entity(result)


@router.get(
    "/github/{username}",
    summary="List a user's GitHub repositories",
    responses={404: {"description": "GitHub has no such user"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_github_repos(
    request: Request,
    username: str,
    service: ProfileService = Depends(get_profile_service),
) -> list[dict[str, Any]]:
    """Proxy GitHub's repository listing (50 oldest repositories)."""
    return await service.get_github_repos(username)
