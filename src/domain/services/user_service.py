"""User service: registration, login and identity lookup."""

from typing import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    InvalidCredentialsError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.auth.provider import IAuthProvider, IPasswordHasher
from infrastructure.gravatar import gravatar_url

logger = structlog.get_logger()


class UserService:
    """Service layer for account and credential business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        auth_provider: IAuthProvider,
        password_hasher: IPasswordHasher,
    ) -> None:
        self._uow_factory = uow_factory
        self._auth_provider = auth_provider
        self._password_hasher = password_hasher

    async def register(self, name: str, email: str, password: str) -> str:
        """Create an account and return a session token for it."""
        async with self._uow_factory() as uow:
            if await uow.users.get_by_email(email):
                raise UserAlreadyExistsError(email)

            user = User(
                name=name.strip(),
                email=email,
                password_hash=self._password_hasher.hash(password),
                avatar=gravatar_url(email),
            )

            created = await uow.users.create(user)
            await uow.commit()

        logger.info("user_registered", user_id=str(created.id))
        return self._auth_provider.create_token(created.id)

    async def authenticate(self, email: str, password: str) -> str:
        """Check credentials and return a fresh session token.

        Unknown email and wrong password raise the same error so the
        response does not reveal which accounts exist.
        """
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_email(email)

        if not user or not self._password_hasher.verify(password, user.password_hash):
            raise InvalidCredentialsError()

        return self._auth_provider.create_token(user.id)

    async def get_by_id(self, user_id: UUID) -> User:
        """Get the user behind an authenticated request."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))
            return user
