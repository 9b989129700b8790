# ✅ init_db.py: create tables and seed the singleton rows

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

import store
from auth import ensure_admin_credentials
from database import Base, engine, SessionLocal
from public_site import DEFAULT_ABOUT, DEFAULT_HERO


def seed_singletons(db):
    """Create hero/about/admin rows when missing. Existing rows are left alone."""
    created = []
    if store.hero_settings.get(db) is None:
        store.hero_settings.upsert(db, dict(DEFAULT_HERO))
        created.append("hero_settings")
    if store.about_settings.get(db) is None:
        store.about_settings.upsert(db, {
            "profile_image_url": DEFAULT_ABOUT["profile_image_url"],
            "bio": DEFAULT_ABOUT["bio"],
            "achievements": [dict(a) for a in DEFAULT_ABOUT["achievements"]],
        })
        created.append("about_settings")
    if store.admin_credentials.get(db) is None:
        ensure_admin_credentials(db)
        created.append("admin_credentials")
    return created


def init_db():
    print("🔗 Connecting to the database...")
    inspector = inspect(engine)
    print("📋 Tables before:")
    print(inspector.get_table_names())

    Base.metadata.create_all(bind=engine)

    inspector = inspect(engine)
    print("✅ Tables after:")
    print(inspector.get_table_names())

    db = SessionLocal()
    try:
        created = seed_singletons(db)
        if created:
            print("🛠️ Seeded:", ", ".join(created))
        else:
            print("✔️ Settings rows already exist.")
    except (store.StoreError, SQLAlchemyError) as e:
        print("❌ Error seeding settings:", e)
    finally:
        db.close()


# Run only when called directly
if __name__ == "__main__":
    init_db()
    print("📦 Database ready.")
