"""Post domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class Like:
    """A single like left on a post."""

    user_id: UUID
    id: UUID = field(default_factory=uuid4)


@dataclass
class Comment:
    """A comment with its author's name and avatar captured at write time."""

    user_id: UUID
    text: str
    name: str
    avatar: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Post:
    """Domain entity for a Post.

    ``name`` and ``avatar`` are a snapshot of the author at creation time,
    they are not kept in sync with the user record.
    """

    user_id: UUID
    text: str
    name: str
    avatar: str
    id: UUID = field(default_factory=uuid4)
    likes: list[Like] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)

    def is_liked_by(self, user_id: UUID) -> bool:
        return any(like.user_id == user_id for like in self.likes)

    def add_like(self, user_id: UUID) -> Like:
        like = Like(user_id=user_id)
        self.likes.insert(0, like)
        return like

    def remove_like(self, user_id: UUID) -> None:
        for index, like in enumerate(self.likes):
            if like.user_id == user_id:
                del self.likes[index]
                return

    def add_comment(self, comment: Comment) -> None:
        self.comments.insert(0, comment)

    def find_comment(self, comment_id: UUID) -> Comment | None:
        return next((c for c in self.comments if c.id == comment_id), None)

    def remove_comment(self, comment_id: UUID) -> None:
        self.comments = [c for c in self.comments if c.id != comment_id]
