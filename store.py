"""
Thin data-store client over the SQLAlchemy models.

Every call is one independent unit of work: it commits on success and rolls
back on failure. There is no optimistic locking, so concurrent writers simply
overwrite each other.
"""
import logging

from sqlalchemy.exc import SQLAlchemyError

from models import (
    SINGLETON_ID,
    AboutSettings,
    AdminCredentials,
    ContactSubmission,
    HeroSettings,
    Project,
    Testimonial,
    utcnow,
)

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """A select/insert/update/delete against the database failed."""

    def __init__(self, message, cause=None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class ResourceStore:
    """CRUD for a many-row resource table."""

    def __init__(self, model, label, stamp_updates=True):
        self.model = model
        self.label = label
        self.stamp_updates = stamp_updates

    def _fail(self, db, action, exc):
        db.rollback()
        logger.error("Store error (%s %s): %s", action, self.label, exc)
        raise StoreError(f"Failed to {action} {self.label}", exc) from exc

    def list(self, db, newest_first=True):
        try:
            order = self.model.created_at.desc() if newest_first else self.model.created_at.asc()
            return db.query(self.model).order_by(order).all()
        except SQLAlchemyError as exc:
            self._fail(db, "fetch", exc)

    def get(self, db, item_id):
        try:
            return db.query(self.model).filter(self.model.id == item_id).first()
        except SQLAlchemyError as exc:
            self._fail(db, "fetch", exc)

    def create(self, db, fields):
        try:
            now = utcnow()
            item = self.model(**fields)
            item.created_at = now
            if hasattr(item, "updated_at"):
                item.updated_at = now
            db.add(item)
            db.commit()
            db.refresh(item)
            return item
        except SQLAlchemyError as exc:
            self._fail(db, "create", exc)

    def update(self, db, item_id, fields):
        """Merge ``fields`` into the row. Returns None when the id is unknown."""
        try:
            item = db.query(self.model).filter(self.model.id == item_id).first()
            if item is None:
                return None
            for key, value in fields.items():
                setattr(item, key, value)
            if self.stamp_updates:
                item.updated_at = utcnow()
            db.commit()
            db.refresh(item)
            return item
        except SQLAlchemyError as exc:
            self._fail(db, "update", exc)

    def delete(self, db, item_id):
        try:
            deleted = db.query(self.model).filter(self.model.id == item_id).delete()
            db.commit()
            return deleted > 0
        except SQLAlchemyError as exc:
            self._fail(db, "delete", exc)


class SingletonStore:
    """Fetch/upsert for a one-row settings table addressed by SINGLETON_ID."""

    def __init__(self, model, label):
        self.model = model
        self.label = label

    def get(self, db):
        try:
            return db.query(self.model).filter(self.model.id == SINGLETON_ID).first()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("Error fetching %s: %s", self.label, exc)
            raise StoreError(f"Failed to fetch {self.label}", exc) from exc

    def upsert(self, db, fields):
        try:
            now = utcnow()
            item = db.query(self.model).filter(self.model.id == SINGLETON_ID).first()
            if item is None:
                item = self.model(id=SINGLETON_ID, created_at=now)
                db.add(item)
            for key, value in fields.items():
                setattr(item, key, value)
            item.updated_at = now
            db.commit()
            db.refresh(item)
            return item
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("Error updating %s: %s", self.label, exc)
            raise StoreError(f"Failed to update {self.label}", exc) from exc


projects = ResourceStore(Project, "project")
testimonials = ResourceStore(Testimonial, "testimonial")
contacts = ResourceStore(ContactSubmission, "contact", stamp_updates=False)

hero_settings = SingletonStore(HeroSettings, "hero settings")
about_settings = SingletonStore(AboutSettings, "about settings")
admin_credentials = SingletonStore(AdminCredentials, "admin credentials")
