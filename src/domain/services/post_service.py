"""Post service layer with business logic."""

from typing import Callable, List
from uuid import UUID

import structlog

from core.exceptions import (
    AuthorizationError,
    CommentNotFoundError,
    PostAlreadyLikedError,
    PostNotFoundError,
    PostNotLikedError,
    UserNotFoundError,
)
from core.ids import parse_id
from domain.entities.post import Comment, Like, Post
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class PostService:
    """Service layer for Post business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def create(self, user_id: UUID, text: str) -> Post:
        """Create a post carrying the author's current name and avatar."""
        async with self._uow_factory() as uow:
            author = await uow.users.get(user_id)
            if not author:
                raise UserNotFoundError(str(user_id))

            post = Post(
                user_id=user_id,
                text=text,
                name=author.name,
                avatar=author.avatar,
            )

            created = await uow.posts.create(post)
            await uow.commit()
            return created

    async def get_all(self) -> List[Post]:
        """Get all posts, newest first."""
        async with self._uow_factory() as uow:
            return await uow.posts.get_all()  # type: ignore[no-any-return]

    async def get_by_id(self, raw_post_id: str) -> Post:
        """Get a post. Malformed ids read as missing posts."""
        async with self._uow_factory() as uow:
            return await self._require_post(uow, raw_post_id)

    async def delete(self, raw_post_id: str, user_id: UUID) -> None:
        """Delete a post. Only its author may do so."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, raw_post_id)
            if post.user_id != user_id:
                raise AuthorizationError()

            await uow.posts.delete(post.id)
            await uow.commit()

        logger.info("post_deleted", post_id=str(post.id), user_id=str(user_id))

    async def like(self, raw_post_id: str, user_id: UUID) -> List[Like]:
        """Like a post once per user."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, raw_post_id)
            if post.is_liked_by(user_id):
                raise PostAlreadyLikedError(raw_post_id)

            post.add_like(user_id)
            updated = await uow.posts.update(post)
            await uow.commit()
            return updated.likes

    async def unlike(self, raw_post_id: str, user_id: UUID) -> List[Like]:
        """Withdraw the caller's like."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, raw_post_id)
            if not post.is_liked_by(user_id):
                raise PostNotLikedError(raw_post_id)

            post.remove_like(user_id)
            updated = await uow.posts.update(post)
            await uow.commit()
            return updated.likes

    async def add_comment(self, raw_post_id: str, user_id: UUID, text: str) -> List[Comment]:
        """Prepend a comment signed with the caller's current name and avatar."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, raw_post_id)
            author = await uow.users.get(user_id)
            if not author:
                raise UserNotFoundError(str(user_id))

            post.add_comment(
                Comment(
                    user_id=user_id,
                    text=text,
                    name=author.name,
                    avatar=author.avatar,
                )
            )
            updated = await uow.posts.update(post)
            await uow.commit()
            return updated.comments

    async def remove_comment(
        self, raw_post_id: str, raw_comment_id: str, user_id: UUID
    ) -> List[Comment]:
        """Delete a comment. Only its author may do so."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, raw_post_id)

            comment_id = parse_id(raw_comment_id)
            comment = post.find_comment(comment_id) if comment_id else None
            if not comment:
                raise CommentNotFoundError(raw_comment_id)
            if comment.user_id != user_id:
                raise AuthorizationError()

            post.remove_comment(comment.id)
            updated = await uow.posts.update(post)
            await uow.commit()
            return updated.comments

    async def _require_post(self, uow: IUnitOfWork, raw_post_id: str) -> Post:
        post_id = parse_id(raw_post_id)
        post = await uow.posts.get(post_id) if post_id else None
        if not post:
            raise PostNotFoundError(raw_post_id)
        return post
