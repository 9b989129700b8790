from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from config import DATABASE_URL

POSTGRES_URL = DATABASE_URL

if not POSTGRES_URL:
    raise RuntimeError("DATABASE_URL is not configured")

# 🛠️ Hosted providers still hand out postgres:// URLs
if POSTGRES_URL.startswith("postgres://"):
    POSTGRES_URL = POSTGRES_URL.replace("postgres://", "postgresql://", 1)

# 🧱 SQLAlchemy setup
if POSTGRES_URL.startswith("sqlite"):
    # Local runs and tests: one shared connection so in-memory data survives
    engine = create_engine(
        POSTGRES_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
else:
    engine = create_engine(POSTGRES_URL, pool_pre_ping=True)

SessionLocal = sessionmaker(bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# 📦 Create every table
def init_db():
    import models  # noqa: F401
    Base.metadata.create_all(bind=engine)
