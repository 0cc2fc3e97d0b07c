"""Unit tests for Profile service layer."""

from datetime import date
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from core.exceptions import (
    EducationNotFoundError,
    ExperienceNotFoundError,
    GitHubProfileNotFoundError,
    ProfileAlreadyExistsError,
    ProfileNotFoundError,
)
from domain.entities.profile import (
    Education,
    Experience,
    Profile,
    ProfilePatch,
    ProfileWithOwner,
)
from domain.services.profile_service import ProfileService

# FakeUnitOfWork is provided by the shared conftest at tests/unit/conftest.py.
# Import it here only for type-hint usage in fixtures/tests.
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def github_client() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def service(uow: FakeUnitOfWork, github_client: AsyncMock) -> ProfileService:
    return ProfileService(lambda: uow, github_client=github_client)


@pytest.fixture
def sample_profile(user_id: UUID) -> Profile:
    return Profile(user_id=user_id, status="Developer", skills=["python"])


@pytest.fixture(autouse=True)
def owner_lookup(uow: FakeUnitOfWork) -> None:
    """Joined reads reflect whatever profile was last written."""
    state: dict[UUID, Profile] = {}

    async def remember(profile: Profile) -> Profile:
        state[profile.user_id] = profile
        return profile

    async def with_owner(user_id: UUID) -> ProfileWithOwner | None:
        profile = state.get(user_id)
        if profile is None:
            return None
        return ProfileWithOwner(profile=profile, owner_name="Ada", owner_avatar="avatar-url")

    uow.profiles.create.side_effect = remember
    uow.profiles.update.side_effect = remember
    uow.profiles.get_by_user_with_owner.side_effect = with_owner


def _experience() -> Experience:
    return Experience(title="Engineer", company="Acme", from_date=date(2020, 1, 1))


def _education() -> Education:
    return Education(
        school="MIT",
        degree="BSc",
        field_of_study="CS",
        from_date=date(2015, 9, 1),
    )


class TestProfileServiceGet:
    @pytest.mark.asyncio
    async def test_get_for_user_raises_without_profile(
        self, service: ProfileService, user_id: UUID
    ) -> None:
        with pytest.raises(ProfileNotFoundError) as exc_info:
            await service.get_for_user(user_id)

        assert exc_info.value.message == "There is no profile for this user"

    @pytest.mark.asyncio
    async def test_get_by_user_id_with_malformed_id(
        self, service: ProfileService, uow: FakeUnitOfWork
    ) -> None:
        with pytest.raises(ProfileNotFoundError):
            await service.get_by_user_id("12345")

        uow.profiles.get_by_user_with_owner.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_by_user_id_returns_joined_profile(
        self, service: ProfileService, uow: FakeUnitOfWork, sample_profile: Profile
    ) -> None:
        await uow.profiles.update(sample_profile)

        result = await service.get_by_user_id(str(sample_profile.user_id))

        assert result.profile is sample_profile
        assert result.owner_name == "Ada"

    @pytest.mark.asyncio
    async def test_get_all_delegates(self, service: ProfileService, uow: FakeUnitOfWork) -> None:
        uow.profiles.get_all_with_owner.return_value = []

        assert await service.get_all() == []


class TestProfileServiceUpsert:
    @pytest.mark.asyncio
    async def test_creates_profile_on_first_call(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        uow.profiles.get_by_user.return_value = None
        patch = ProfilePatch(status="Developer", skills=["python", "sql"])

        result = await service.upsert(user_id, patch)

        uow.profiles.create.assert_called_once()
        uow.profiles.update.assert_not_called()
        assert result.profile.skills == ["python", "sql"]
        assert uow.committed

    @pytest.mark.asyncio
    async def test_updates_existing_profile_in_place(
        self,
        service: ProfileService,
        uow: FakeUnitOfWork,
        user_id: UUID,
        sample_profile: Profile,
    ) -> None:
        sample_profile.company = "Acme"
        uow.profiles.get_by_user.return_value = sample_profile
        patch = ProfilePatch(status="Senior Developer", skills=["go"])

        result = await service.upsert(user_id, patch)

        uow.profiles.create.assert_not_called()
        assert result.profile.id == sample_profile.id
        assert result.profile.status == "Senior Developer"
        assert result.profile.company == "Acme"

    @pytest.mark.asyncio
    async def test_concurrent_create_falls_back_to_update(
        self,
        service: ProfileService,
        uow: FakeUnitOfWork,
        user_id: UUID,
        sample_profile: Profile,
    ) -> None:
        # The first lookup misses, then another request's insert wins
        uow.profiles.get_by_user.side_effect = [None, sample_profile]
        uow.profiles.create.side_effect = ProfileAlreadyExistsError(str(user_id))
        patch = ProfilePatch(status="Senior Developer", skills=["go"])

        result = await service.upsert(user_id, patch)

        uow.profiles.create.assert_awaited_once()
        uow.profiles.update.assert_awaited_once()
        assert result.profile.id == sample_profile.id
        assert result.profile.status == "Senior Developer"
        assert uow.committed

    @pytest.mark.asyncio
    async def test_conflict_is_retried_only_once(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        uow.profiles.get_by_user.return_value = None
        uow.profiles.create.side_effect = ProfileAlreadyExistsError(str(user_id))

        with pytest.raises(ProfileAlreadyExistsError):
            await service.upsert(user_id, ProfilePatch(status="Developer", skills=["go"]))

        assert uow.profiles.create.await_count == 2
        assert not uow.committed


class TestProfileServiceDeleteAccount:
    @pytest.mark.asyncio
    async def test_removes_profile_and_user_in_one_commit(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        await service.delete_account(user_id)

        uow.profiles.delete_by_user.assert_called_once_with(user_id)
        uow.users.delete.assert_called_once_with(user_id)
        uow.posts.delete.assert_not_called()
        assert uow.committed


class TestProfileServiceExperience:
    @pytest.mark.asyncio
    async def test_add_prepends_entry(
        self,
        service: ProfileService,
        uow: FakeUnitOfWork,
        user_id: UUID,
        sample_profile: Profile,
    ) -> None:
        older = _experience()
        sample_profile.experience = [older]
        uow.profiles.get_by_user.return_value = sample_profile
        newer = _experience()

        result = await service.add_experience(user_id, newer)

        assert [e.id for e in result.profile.experience] == [newer.id, older.id]

    @pytest.mark.asyncio
    async def test_add_without_profile_raises(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        uow.profiles.get_by_user.return_value = None

        with pytest.raises(ProfileNotFoundError):
            await service.add_experience(user_id, _experience())

    @pytest.mark.asyncio
    async def test_remove_by_id(
        self,
        service: ProfileService,
        uow: FakeUnitOfWork,
        user_id: UUID,
        sample_profile: Profile,
    ) -> None:
        keep, drop = _experience(), _experience()
        sample_profile.experience = [keep, drop]
        uow.profiles.get_by_user.return_value = sample_profile

        result = await service.remove_experience(user_id, str(drop.id))

        assert result.profile.experience == [keep]

    @pytest.mark.asyncio
    async def test_remove_unknown_id_raises_and_keeps_entries(
        self,
        service: ProfileService,
        uow: FakeUnitOfWork,
        user_id: UUID,
        sample_profile: Profile,
    ) -> None:
        entry = _experience()
        sample_profile.experience = [entry]
        uow.profiles.get_by_user.return_value = sample_profile

        with pytest.raises(ExperienceNotFoundError):
            await service.remove_experience(user_id, str(uuid4()))

        assert sample_profile.experience == [entry]
        assert not uow.committed


class TestProfileServiceEducation:
    @pytest.mark.asyncio
    async def test_add_and_remove(
        self,
        service: ProfileService,
        uow: FakeUnitOfWork,
        user_id: UUID,
        sample_profile: Profile,
    ) -> None:
        uow.profiles.get_by_user.return_value = sample_profile
        entry = _education()

        added = await service.add_education(user_id, entry)
        assert added.profile.education == [entry]

        removed = await service.remove_education(user_id, str(entry.id))
        assert removed.profile.education == []

    @pytest.mark.asyncio
    async def test_remove_malformed_id_raises(
        self,
        service: ProfileService,
        uow: FakeUnitOfWork,
        user_id: UUID,
        sample_profile: Profile,
    ) -> None:
        uow.profiles.get_by_user.return_value = sample_profile

        with pytest.raises(EducationNotFoundError):
            await service.remove_education(user_id, "nope")


class TestProfileServiceGitHub:
    @pytest.mark.asyncio
    async def test_returns_repositories(
        self, service: ProfileService, github_client: AsyncMock
    ) -> None:
        github_client.list_repos.return_value = [{"name": "hello-world"}]

        result = await service.get_github_repos("octocat")

        assert result == [{"name": "hello-world"}]
        github_client.list_repos.assert_called_once_with("octocat")

    @pytest.mark.asyncio
    async def test_propagates_not_found(
        self, service: ProfileService, github_client: AsyncMock
    ) -> None:
        github_client.list_repos.side_effect = GitHubProfileNotFoundError("ghost", 404)

        with pytest.raises(GitHubProfileNotFoundError):
            await service.get_github_repos("ghost")
