"""Transaction boundary shared by the services."""

from types import TracebackType
from typing import Protocol

from domain.repositories.post_repository import IPostRepository
from domain.repositories.profile_repository import IProfileRepository
from domain.repositories.user_repository import IUserRepository


class IUnitOfWork(Protocol):
    """One session per ``async with`` block.

    Nothing is persisted unless ``commit`` is awaited before the block
    ends; leaving the block through an exception rolls everything back.
    """

    users: IUserRepository
    profiles: IProfileRepository
    posts: IPostRepository

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

    async def __aenter__(self) -> "IUnitOfWork": ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...
