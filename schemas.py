"""
Request payloads for the content API.

Create models enforce the required fields; update models are partial and
only carry what the client sent (``model_dump(exclude_unset=True)``).
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import List, Literal, Optional

ProjectType = Literal["architectural", "interior", "production"]


def _not_blank(value):
    if value is None or not str(value).strip():
        raise ValueError("must not be empty")
    return value.strip()


# Auth
class LoginRequest(BaseModel):
    username: str
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: str


# Projects
class ProjectCreate(BaseModel):
    title: str
    description: str
    image_url: str
    tags: List[str] = []
    project_type: ProjectType = "architectural"
    gallery_urls: List[str] = []

    @field_validator("title", "description", "image_url")
    @classmethod
    def check_required(cls, value):
        return _not_blank(value)


class ProjectUpdate(BaseModel):
    id: str
    title: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    tags: Optional[List[str]] = None
    project_type: Optional[ProjectType] = None
    gallery_urls: Optional[List[str]] = None

    @field_validator("title", "description", "image_url")
    @classmethod
    def check_present(cls, value):
        return value if value is None else _not_blank(value)


# Testimonials
class TestimonialCreate(BaseModel):
    client_name: str
    client_title: str = ""
    content: str
    rating: int = Field(default=5, ge=1, le=5)
    project_context: str

    @field_validator("client_name", "content", "project_context")
    @classmethod
    def check_required(cls, value):
        return _not_blank(value)


class TestimonialUpdate(BaseModel):
    id: str
    client_name: Optional[str] = None
    client_title: Optional[str] = None
    content: Optional[str] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    project_context: Optional[str] = None

    @field_validator("client_name", "content", "project_context")
    @classmethod
    def check_present(cls, value):
        return value if value is None else _not_blank(value)


# Contact form
class ContactCreate(BaseModel):
    name: str = Field(min_length=2)
    email: EmailStr
    message: str = Field(min_length=10)


class ContactUpdate(BaseModel):
    id: str
    is_read: bool


# Settings
class Achievement(BaseModel):
    icon: str = "Star"
    title: str
    description: str = ""


class HeroSettingsIn(BaseModel):
    background_image_url: Optional[str] = None
    name: Optional[str] = None
    tagline: Optional[str] = None
    description: Optional[str] = None
    cv_url: Optional[str] = None


class AboutSettingsIn(BaseModel):
    profile_image_url: Optional[str] = None
    bio: Optional[str] = None
    achievements: Optional[List[Achievement]] = None


class AdminCredentialsIn(BaseModel):
    username: str
    password: str = Field(min_length=6)

    @field_validator("username")
    @classmethod
    def check_required(cls, value):
        return _not_blank(value)
