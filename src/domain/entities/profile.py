"""Profile domain entities."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional
from uuid import UUID, uuid4

SOCIAL_PLATFORMS = ("youtube", "twitter", "facebook", "linkedin", "instagram")


@dataclass
class Experience:
    """A job held by the profile owner."""

    title: str
    company: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    location: str | None = None
    to_date: date | None = None
    current: bool = False
    description: str | None = None


@dataclass
class Education:
    """A school attended by the profile owner."""

    school: str
    degree: str
    field_of_study: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    to_date: date | None = None
    current: bool = False
    description: str | None = None


@dataclass
class Profile:
    """Domain entity for a user's developer profile (one per user)."""

    user_id: UUID
    status: str
    skills: list[str] = field(default_factory=list)
    id: UUID = field(default_factory=uuid4)
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    github_username: str | None = None
    social: dict[str, str] = field(default_factory=dict)
    experience: list[Experience] = field(default_factory=list)
    education: list[Education] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)

    def add_experience(self, entry: Experience) -> None:
        """Newest entries go first."""
        self.experience.insert(0, entry)

    def remove_experience(self, experience_id: UUID) -> bool:
        """Remove the entry with this id. Returns False if there is none."""
        for index, entry in enumerate(self.experience):
            if entry.id == experience_id:
                del self.experience[index]
                return True
        return False

    def add_education(self, entry: Education) -> None:
        """Newest entries go first."""
        self.education.insert(0, entry)

    def remove_education(self, education_id: UUID) -> bool:
        """Remove the entry with this id. Returns False if there is none."""
        for index, entry in enumerate(self.education):
            if entry.id == education_id:
                del self.education[index]
                return True
        return False


def split_skills(raw: str) -> list[str]:
    """Turn ``"python, sql ,go"`` into ``["python", "sql", "go"]``."""
    return [skill.strip() for skill in raw.split(",") if skill.strip()]


@dataclass
class ProfilePatch:
    """Sparse update for a profile.

    ``None`` (or an empty string) means "leave as is". Social links are
    merged per platform, so sending only ``twitter`` keeps the others.
    """

    status: Optional[str] = None
    skills: Optional[list[str]] = None
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    github_username: Optional[str] = None
    social: dict[str, str] = field(default_factory=dict)

    _SCALAR_FIELDS = (
        "status",
        "company",
        "website",
        "location",
        "bio",
        "github_username",
    )

    def apply_to(self, profile: Profile) -> Profile:
        """Overwrite only the fields present in the patch."""
        for name in self._SCALAR_FIELDS:
            value = getattr(self, name)
            if value:
                setattr(profile, name, value)
        if self.skills:
            profile.skills = list(self.skills)
        links = {k: v for k, v in self.social.items() if k in SOCIAL_PLATFORMS and v}
        if links:
            profile.social = {**profile.social, **links}
        return profile

    def create_for(self, user_id: UUID) -> Profile:
        """Build a brand new profile from the patch."""
        return self.apply_to(Profile(user_id=user_id, status=self.status or ""))


@dataclass(frozen=True, slots=True)
class ProfileWithOwner:
    """Read-only value object: a Profile joined with its owner's public info."""

    profile: Profile
    owner_name: str
    owner_avatar: str
