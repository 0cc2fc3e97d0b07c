"""Authentication provider protocols."""

from dataclasses import dataclass
from typing import Optional, Protocol
from uuid import UUID


@dataclass
class TokenUser:
    """Represents the identity carried by a session token."""

    id: UUID


class IAuthProvider(Protocol):
    """Protocol for session token providers."""

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate a session token.

        Args:
            token: The raw token taken from the request header

        Returns:
            TokenUser if valid, None if invalid or expired
        """
        ...

    def create_token(self, user_id: UUID) -> str:
        """
        Create a session token for a user.

        Args:
            user_id: The user the token identifies

        Returns:
            The generated token string
        """
        ...


class IPasswordHasher(Protocol):
    """Protocol for one-way password hashing."""

    def hash(self, password: str) -> str:
        """Return a salted hash of the password."""
        ...

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a plaintext password against a stored hash."""
        ...
