from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, JSON
from datetime import datetime, timezone
from uuid import uuid4

from database import Base

# Fixed id shared by every singleton settings row
SINGLETON_ID = "00000000-0000-0000-0000-000000000001"

PROJECT_TYPES = ("architectural", "interior", "production")


def utcnow():
    return datetime.now(timezone.utc)


def new_id():
    return str(uuid4())


def _iso(value):
    return value.isoformat() if value else None


# ✅ Portfolio projects
class Project(Base):
    __tablename__ = "projects"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    image_url = Column(String(1000), nullable=False)
    tags = Column(JSON, nullable=False, default=list)
    project_type = Column(String(20), nullable=False, default="architectural")
    gallery_urls = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "image_url": self.image_url,
            "tags": list(self.tags or []),
            "project_type": self.project_type,
            "gallery_urls": list(self.gallery_urls or []),
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


# ✅ Client testimonials
class Testimonial(Base):
    __tablename__ = "testimonials"

    id = Column(String(36), primary_key=True, default=new_id)
    client_name = Column(String(255), nullable=False)
    client_title = Column(String(255), nullable=False, default="")
    content = Column(Text, nullable=False)
    rating = Column(Integer, nullable=False, default=5)
    project_context = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "client_name": self.client_name,
            "client_title": self.client_title,
            "content": self.content,
            "rating": self.rating,
            "project_context": self.project_context,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


# ✅ Contact form messages
class ContactSubmission(Base):
    __tablename__ = "contact_submissions"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "message": self.message,
            "is_read": bool(self.is_read),
            "created_at": _iso(self.created_at),
        }


# ✅ Singleton: homepage hero copy
class HeroSettings(Base):
    __tablename__ = "hero_settings"

    id = Column(String(36), primary_key=True, default=SINGLETON_ID)
    background_image_url = Column(String(1000), default="")
    name = Column(String(255), default="")
    tagline = Column(String(255), default="")
    description = Column(Text, default="")
    cv_url = Column(String(1000), default="")
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "background_image_url": self.background_image_url,
            "name": self.name,
            "tagline": self.tagline,
            "description": self.description,
            "cv_url": self.cv_url,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


# ✅ Singleton: about section copy
class AboutSettings(Base):
    __tablename__ = "about_settings"

    id = Column(String(36), primary_key=True, default=SINGLETON_ID)
    profile_image_url = Column(String(1000), default="")
    bio = Column(Text, default="")
    # Older rows hold plain strings here instead of achievement objects
    achievements = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "profile_image_url": self.profile_image_url,
            "bio": self.bio,
            "achievements": list(self.achievements or []),
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


# ✅ Singleton: admin login
class AdminCredentials(Base):
    __tablename__ = "admin_credentials"

    id = Column(String(36), primary_key=True, default=SINGLETON_ID)
    username = Column(String(50), nullable=False)
    password = Column(String(255), nullable=False)  # pbkdf2_sha256 hash
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow)

    def to_dict(self):
        # The hash never leaves the server
        return {
            "id": self.id,
            "username": self.username,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }
