"""
Pytest configuration.

The app modules read their settings at import time, so the environment is
pinned here before any test module imports them: an in-memory SQLite
database, fixed secrets, and dummy Cloudinary/Resend credentials (every
outbound HTTP call is patched in the tests).
"""
import os
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["SESSION_SECRET"] = "test-session-secret"
os.environ["DEFAULT_ADMIN_USERNAME"] = "admin"
os.environ["DEFAULT_ADMIN_PASSWORD"] = "admin123"
os.environ["CLOUDINARY_CLOUD_NAME"] = "test-cloud"
os.environ["CLOUDINARY_API_KEY"] = "test-api-key"
os.environ["CLOUDINARY_API_SECRET"] = "test-api-secret"
os.environ["RESEND_API_KEY"] = "re_test"
os.environ["CONTACT_NOTIFY_EMAIL"] = "owner@portfolio.dev"
os.environ["LOG_LEVEL"] = "WARNING"
