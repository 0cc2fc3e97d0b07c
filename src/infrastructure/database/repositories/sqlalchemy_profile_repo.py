"""SQLAlchemy implementation of Profile repository."""

from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import ProfileAlreadyExistsError
from domain.entities.profile import Education, Experience, Profile, ProfileWithOwner
from infrastructure.database.models import ProfileModel, UserModel


def _date_or_none(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


def _iso_or_none(value: date | None) -> str | None:
    return value.isoformat() if value else None


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user."""
        model = await self._get_model(user_id)
        return self._to_entity(model) if model else None

    async def get_by_user_with_owner(self, user_id: UUID) -> ProfileWithOwner | None:
        """Get a user's profile joined with the owner's name and avatar."""
        stmt = (
            select(ProfileModel, UserModel.name, UserModel.avatar)
            .join(UserModel, ProfileModel.user_id == UserModel.id)
            .where(ProfileModel.user_id == user_id)
        )
        result = await self._session.execute(stmt)
        row = result.one_or_none()
        if row is None:
            return None
        model, name, avatar = row
        return ProfileWithOwner(profile=self._to_entity(model), owner_name=name, owner_avatar=avatar)

    async def get_all_with_owner(self) -> list[ProfileWithOwner]:
        """Get every profile joined with its owner's name and avatar."""
        stmt = (
            select(ProfileModel, UserModel.name, UserModel.avatar)
            .join(UserModel, ProfileModel.user_id == UserModel.id)
            .order_by(ProfileModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [
            ProfileWithOwner(profile=self._to_entity(model), owner_name=name, owner_avatar=avatar)
            for model, name, avatar in result
        ]

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile.

        Raises:
            ProfileAlreadyExistsError: the user already has a profile
        """
        model = ProfileModel(id=profile.id, user_id=profile.user_id, created_at=profile.created_at)
        self._apply(model, profile)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as e:
            raise ProfileAlreadyExistsError(str(profile.user_id)) from e
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, profile: Profile) -> Profile:
        """Persist the full state of an existing profile."""
        model = await self._get_model(profile.user_id)

        if not model:
            raise ValueError(f"Profile for user {profile.user_id} not found")

        self._apply(model, profile)
        await self._session.flush()
        return self._to_entity(model)

    async def delete_by_user(self, user_id: UUID) -> bool:
        """Delete the profile owned by a user."""
        stmt = delete(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        return bool(result.rowcount)

    async def _get_model(self, user_id: UUID) -> ProfileModel | None:
        stmt = select(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @classmethod
    def _apply(cls, model: ProfileModel, profile: Profile) -> None:
        """Copy entity state onto the row, replacing JSON columns wholesale."""
        model.company = profile.company
        model.website = profile.website
        model.location = profile.location
        model.bio = profile.bio
        model.status = profile.status
        model.github_username = profile.github_username
        model.skills = list(profile.skills)
        model.social = dict(profile.social)
        model.experience = [cls._experience_to_dict(e) for e in profile.experience]
        model.education = [cls._education_to_dict(e) for e in profile.education]

    @staticmethod
    def _experience_to_dict(entry: Experience) -> dict[str, Any]:
        return {
            "id": str(entry.id),
            "title": entry.title,
            "company": entry.company,
            "location": entry.location,
            "from_date": entry.from_date.isoformat(),
            "to_date": _iso_or_none(entry.to_date),
            "current": entry.current,
            "description": entry.description,
        }

    @staticmethod
    def _education_to_dict(entry: Education) -> dict[str, Any]:
        return {
            "id": str(entry.id),
            "school": entry.school,
            "degree": entry.degree,
            "field_of_study": entry.field_of_study,
            "from_date": entry.from_date.isoformat(),
            "to_date": _iso_or_none(entry.to_date),
            "current": entry.current,
            "description": entry.description,
        }

    @staticmethod
    def _to_entity(model: ProfileModel) -> Profile:
        return Profile(
            id=model.id,
            user_id=model.user_id,
            status=model.status,
            company=model.company,
            website=model.website,
            location=model.location,
            bio=model.bio,
            github_username=model.github_username,
            skills=list(model.skills or []),
            social=dict(model.social or {}),
            experience=[
                Experience(
                    id=UUID(item["id"]),
                    title=item["title"],
                    company=item["company"],
                    location=item.get("location"),
                    from_date=date.fromisoformat(item["from_date"]),
                    to_date=_date_or_none(item.get("to_date")),
                    current=bool(item.get("current")),
                    description=item.get("description"),
                )
                for item in model.experience or []
            ],
            education=[
                Education(
                    id=UUID(item["id"]),
                    school=item["school"],
                    degree=item["degree"],
                    field_of_study=item["field_of_study"],
                    from_date=date.fromisoformat(item["from_date"]),
                    to_date=_date_or_none(item.get("to_date")),
                    current=bool(item.get("current")),
                    description=item.get("description"),
                )
                for item in model.education or []
            ],
            created_at=model.created_at,
        )
