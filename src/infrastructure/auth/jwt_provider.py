"""JWT session token provider.

Token payload structure:
    {
        "user": { "id": "user-uuid" },
        "iat": 1234567890,
        "exp": 1234603890
    }
"""

import logging
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = logging.getLogger(__name__)


class JWTAuthProvider:
    """Issues and validates HS256-signed session tokens."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_seconds: int = settings.jwt_expire_seconds,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_seconds = expire_seconds

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate a token and extract the user identity.

        Args:
            token: The JWT to validate

        Returns:
            TokenUser if valid, None if the signature, expiry or payload is bad
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError as e:
            logger.debug("Rejected token: %s", e)
            return None

        user = payload.get("user")
        if not isinstance(user, dict) or not user.get("id"):
            return None

        try:
            return TokenUser(id=UUID(str(user["id"])))
        except ValueError:
            return None

    def create_token(self, user_id: UUID) -> str:
        """
        Create a signed token for a user.

        Args:
            user_id: The user to create a token for

        Returns:
            The generated JWT string
        """
        now = datetime.utcnow()
        payload: dict = {
            "user": {"id": str(user_id)},
            "iat": now,
            "exp": now + timedelta(seconds=self._expire_seconds),
        }

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
