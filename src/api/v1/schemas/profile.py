"""Pydantic schemas for Profile API."""

from datetime import date, datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from domain.entities.profile import (
    Education,
    Experience,
    ProfilePatch,
    ProfileWithOwner,
    split_skills,
)


class ProfileUpsert(BaseModel):
    """Schema for creating or updating the caller's profile.

    Omitted or empty fields leave the stored value untouched.
    """

    status: str = Field(..., min_length=1, max_length=255)
    skills: str = Field(..., min_length=1, description="Comma-separated list of skills")
    company: str | None = Field(None, max_length=255)
    website: str | None = Field(None, max_length=500)
    location: str | None = Field(None, max_length=255)
    bio: str | None = None
    github_username: str | None = Field(
        None,
        max_length=100,
        validation_alias=AliasChoices("github_username", "githubusername"),
    )
    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None

    @field_validator("status")
    @classmethod
    def status_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Status is required")
        return v.strip()

    @field_validator("skills")
    @classmethod
    def skills_not_blank(cls, v: str) -> str:
        if not split_skills(v):
            raise ValueError("Skills is required")
        return v

    def to_patch(self) -> ProfilePatch:
        return ProfilePatch(
            status=self.status,
            skills=split_skills(self.skills),
            company=self.company,
            website=self.website,
            location=self.location,
            bio=self.bio,
            github_username=self.github_username,
            social={
                "youtube": self.youtube or "",
                "twitter": self.twitter or "",
                "facebook": self.facebook or "",
                "linkedin": self.linkedin or "",
                "instagram": self.instagram or "",
            },
        )


class ExperienceCreate(BaseModel):
    """Schema for adding an experience entry."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1, max_length=255)
    company: str = Field(..., min_length=1, max_length=255)
    location: str | None = Field(None, max_length=255)
    from_date: date = Field(..., alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool = False
    description: str | None = None

    def to_entity(self) -> Experience:
        return Experience(
            title=self.title,
            company=self.company,
            location=self.location,
            from_date=self.from_date,
            to_date=self.to_date,
            current=self.current,
            description=self.description,
        )


class EducationCreate(BaseModel):
    """Schema for adding an education entry."""

    model_config = ConfigDict(populate_by_name=True)

    school: str = Field(..., min_length=1, max_length=255)
    degree: str = Field(..., min_length=1, max_length=255)
    field_of_study: str = Field(
        ...,
        min_length=1,
        max_length=255,
        validation_alias=AliasChoices("field_of_study", "fieldOfStudy"),
    )
    from_date: date = Field(..., alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool = False
    description: str | None = None

    def to_entity(self) -> Education:
        return Education(
            school=self.school,
            degree=self.degree,
            field_of_study=self.field_of_study,
            from_date=self.from_date,
            to_date=self.to_date,
            current=self.current,
            description=self.description,
        )


class ExperienceResponse(BaseModel):
    """Schema for an experience entry."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    title: str
    company: str
    location: str | None = None
    from_date: date = Field(..., alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool
    description: str | None = None


class EducationResponse(BaseModel):
    """Schema for an education entry."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    school: str
    degree: str
    field_of_study: str
    from_date: date = Field(..., alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool
    description: str | None = None


class ProfileOwner(BaseModel):
    """Public part of the user owning a profile."""

    id: UUID
    name: str
    avatar: str


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "456e4567-e89b-12d3-a456-426614174000",
                "user": {
                    "id": "123e4567-e89b-12d3-a456-426614174000",
                    "name": "Ada Lovelace",
                    "avatar": "https://www.gravatar.com/avatar/0bc83cb571cd1c50ba6f3e8a78ef1346?s=200&r=pg&d=mm",
                },
                "status": "Developer",
                "skills": ["python", "sql"],
                "social": {"twitter": "https://twitter.com/ada"},
                "experience": [],
                "education": [],
                "created_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    user: ProfileOwner
    status: str
    skills: list[str]
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    github_username: str | None = None
    social: dict[str, str]
    experience: list[ExperienceResponse]
    education: list[EducationResponse]
    created_at: datetime

    @classmethod
    def from_entity(cls, item: ProfileWithOwner) -> "ProfileResponse":
        profile = item.profile
        return cls(
            id=profile.id,
            user=ProfileOwner(id=profile.user_id, name=item.owner_name, avatar=item.owner_avatar),
            status=profile.status,
            skills=profile.skills,
            company=profile.company,
            website=profile.website,
            location=profile.location,
            bio=profile.bio,
            github_username=profile.github_username,
            social=profile.social,
            experience=[ExperienceResponse.model_validate(e) for e in profile.experience],
            education=[EducationResponse.model_validate(e) for e in profile.education],
            created_at=profile.created_at,
        )
