"""Profile service layer with business logic."""

from typing import Any, Callable, List
from uuid import UUID

import structlog

from core.exceptions import (
    EducationNotFoundError,
    ExperienceNotFoundError,
    ProfileAlreadyExistsError,
    ProfileNotFoundError,
)
from core.ids import parse_id
from domain.entities.profile import (
    Education,
    Experience,
    Profile,
    ProfilePatch,
    ProfileWithOwner,
)
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.github.client import GitHubClient

logger = structlog.get_logger()


class ProfileService:
    """Service layer for Profile business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        github_client: GitHubClient,
    ) -> None:
        self._uow_factory = uow_factory
        self._github = github_client

    async def get_for_user(self, user_id: UUID) -> ProfileWithOwner:
        """Get the caller's own profile."""
        async with self._uow_factory() as uow:
            return await self._require_with_owner(uow, user_id)

    async def get_by_user_id(self, raw_user_id: str) -> ProfileWithOwner:
        """Get any user's profile. Malformed ids read as missing profiles."""
        user_id = parse_id(raw_user_id)
        if user_id is None:
            raise ProfileNotFoundError(raw_user_id)
        async with self._uow_factory() as uow:
            return await self._require_with_owner(uow, user_id)

    async def get_all(self) -> List[ProfileWithOwner]:
        """Get every profile."""
        async with self._uow_factory() as uow:
            return await uow.profiles.get_all_with_owner()  # type: ignore[no-any-return]

    async def upsert(self, user_id: UUID, patch: ProfilePatch) -> ProfileWithOwner:
        """Update the caller's profile in place, or create it on first call."""
        try:
            return await self._upsert_once(user_id, patch)
        except ProfileAlreadyExistsError:
            # A concurrent request created it first; this attempt updates it
            logger.info("profile_upsert_conflict", user_id=str(user_id))
            return await self._upsert_once(user_id, patch)

    async def _upsert_once(self, user_id: UUID, patch: ProfilePatch) -> ProfileWithOwner:
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)
            if profile:
                await uow.profiles.update(patch.apply_to(profile))
            else:
                await uow.profiles.create(patch.create_for(user_id))

            result = await self._require_with_owner(uow, user_id)
            await uow.commit()
            return result

    async def delete_account(self, user_id: UUID) -> None:
        """Remove the caller's profile and user record in one transaction.

        Posts and comments written by the user are left in place.
        """
        async with self._uow_factory() as uow:
            await uow.profiles.delete_by_user(user_id)
            await uow.users.delete(user_id)
            await uow.commit()

        logger.info("account_deleted", user_id=str(user_id))

    async def add_experience(self, user_id: UUID, entry: Experience) -> ProfileWithOwner:
        """Prepend an experience entry to the caller's profile."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            profile.add_experience(entry)
            return await self._save(uow, profile)

    async def remove_experience(self, user_id: UUID, raw_experience_id: str) -> ProfileWithOwner:
        """Remove an experience entry from the caller's profile."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            experience_id = parse_id(raw_experience_id)
            if experience_id is None or not profile.remove_experience(experience_id):
                raise ExperienceNotFoundError(raw_experience_id)
            return await self._save(uow, profile)

    async def add_education(self, user_id: UUID, entry: Education) -> ProfileWithOwner:
        """Prepend an education entry to the caller's profile."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            profile.add_education(entry)
            return await self._save(uow, profile)

    async def remove_education(self, user_id: UUID, raw_education_id: str) -> ProfileWithOwner:
        """Remove an education entry from the caller's profile."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            education_id = parse_id(raw_education_id)
            if education_id is None or not profile.remove_education(education_id):
                raise EducationNotFoundError(raw_education_id)
            return await self._save(uow, profile)

    async def get_github_repos(self, username: str) -> List[dict[str, Any]]:
        """List a GitHub user's repositories, oldest first."""
        return await self._github.list_repos(username)

    async def _require_profile(self, uow: IUnitOfWork, user_id: UUID) -> Profile:
        profile = await uow.profiles.get_by_user(user_id)
        if not profile:
            raise ProfileNotFoundError(str(user_id))
        return profile

    async def _require_with_owner(self, uow: IUnitOfWork, user_id: UUID) -> ProfileWithOwner:
        result = await uow.profiles.get_by_user_with_owner(user_id)
        if not result:
            raise ProfileNotFoundError(str(user_id))
        return result

    async def _save(self, uow: IUnitOfWork, profile: Profile) -> ProfileWithOwner:
        await uow.profiles.update(profile)
        result = await self._require_with_owner(uow, profile.user_id)
        await uow.commit()
        return result
