"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Profile, ProfileWithOwner


class IProfileRepository(Protocol):
    """Repository interface for Profile entities."""

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user."""
        ...

    async def get_by_user_with_owner(self, user_id: UUID) -> ProfileWithOwner | None:
        """Get a user's profile joined with the owner's name and avatar."""
        ...

    async def get_all_with_owner(self) -> list[ProfileWithOwner]:
        """Get every profile joined with its owner's name and avatar."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        ...

    async def update(self, profile: Profile) -> Profile:
        """Persist the full state of an existing profile."""
        ...

    async def delete_by_user(self, user_id: UUID) -> bool:
        """Delete the profile owned by a user."""
        ...
