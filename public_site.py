"""
Data behind the public page.

Each section loads on its own and reports one of four states so templates
can tell "nothing stored" from "the database call failed". Hero and about
fall back to the built-in copy for both; projects and testimonials render
their own empty/error messages.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from fastapi.concurrency import run_in_threadpool

import store
from models import PROJECT_TYPES
from resend_utils import send_contact_notification
from store import StoreError
from utils import normalize_achievements

logger = logging.getLogger(__name__)


class SectionStatus(str, Enum):
    PENDING = "pending"
    LOADED = "loaded"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass
class Section:
    status: SectionStatus = SectionStatus.PENDING
    data: Any = None
    error: Optional[str] = None
    defaults: Any = field(default=None, repr=False)

    @property
    def content(self):
        """Stored data when loaded, otherwise the section defaults."""
        if self.status == SectionStatus.LOADED:
            return self.data
        return self.defaults


DEFAULT_HERO = {
    "background_image_url": "",
    "name": "Shaquib Khan",
    "tagline": "Architect | Interior Designer | Production Expert",
    "description": (
        "Creating innovative architectural solutions that blend functionality with aesthetic "
        "excellence. Specializing in residential, commercial, and production design projects."
    ),
    "cv_url": "/static/cv/shaquib-khan-cv.pdf",
}

DEFAULT_ABOUT = {
    "profile_image_url": "",
    "bio": (
        "With over a decade of experience in architectural design, I bring creativity, technical "
        "expertise, and a passion for sustainable design to every project."
    ),
    "achievements": [
        {"icon": "Award", "title": "Design Excellence Awards",
         "description": "Multiple awards for innovative architectural solutions"},
        {"icon": "Users", "title": "100+ Happy Clients",
         "description": "Successfully completed projects for diverse clientele"},
        {"icon": "Building", "title": "Commercial Projects",
         "description": "Specialized in large-scale commercial developments"},
        {"icon": "Palette", "title": "Interior Design",
         "description": "Expert in creating beautiful and functional spaces"},
    ],
}

SERVICES = [
    {"icon": "Building", "title": "Architectural Design",
     "description": "Complete architectural solutions from concept to construction, including residential "
                    "and commercial buildings."},
    {"icon": "Palette", "title": "Interior Design",
     "description": "Creating beautiful and functional interior spaces that reflect your personality and "
                    "lifestyle."},
    {"icon": "Wrench", "title": "Production Design",
     "description": "Specialized design services for manufacturing and industrial facilities, optimizing "
                    "workflow and efficiency."},
    {"icon": "ClipboardList", "title": "Project Management",
     "description": "Comprehensive project management services ensuring timely delivery and quality control "
                    "throughout the construction process."},
    {"icon": "Hammer", "title": "Renovation & Remodeling",
     "description": "Transforming existing spaces with thoughtful renovations that add value and "
                    "functionality."},
    {"icon": "MessageSquare", "title": "Design Consultation",
     "description": "Expert design consultation services to help you make informed decisions about your "
                    "project."},
]

PROJECT_FILTERS = [("all", "All Projects")] + [(value, value.title()) for value in PROJECT_TYPES]


def load_section(loader, defaults=None):
    section = Section(defaults=defaults)
    try:
        data = loader()
    except StoreError as exc:
        section.status = SectionStatus.FAILED
        section.error = exc.message
        return section
    if not data:
        section.status = SectionStatus.EMPTY
    else:
        section.status = SectionStatus.LOADED
        section.data = data
    return section


def _hero(db):
    row = store.hero_settings.get(db)
    return row.to_dict() if row else None


def _about(db):
    row = store.about_settings.get(db)
    if row is None:
        return None
    data = row.to_dict()
    data["achievements"] = normalize_achievements(data["achievements"])
    return data


def load_hero(db):
    return load_section(lambda: _hero(db), DEFAULT_HERO)


def load_about(db):
    return load_section(lambda: _about(db), DEFAULT_ABOUT)


def load_projects(db):
    return load_section(lambda: [p.to_dict() for p in store.projects.list(db)], [])


def load_testimonials(db):
    return load_section(lambda: [t.to_dict() for t in store.testimonials.list(db)], [])


def filter_projects(projects, project_type):
    if not project_type or project_type == "all":
        return list(projects)
    return [project for project in projects if project["project_type"] == project_type]


# ✅ CONTACT
async def submit_contact(db, name, email, message):
    """
    Store a contact message, then notify the owner by email.

    The database write decides success; a failed email only shows up as
    ``email_sent=False``.
    """
    row = store.contacts.create(db, {"name": name, "email": email, "message": message, "is_read": False})
    email_sent = await run_in_threadpool(send_contact_notification, name, email, message)
    if not email_sent:
        logger.warning("Contact %s saved but the notification email was not sent", row.id)
    return row, email_sent
