import os

# --- 🔐 Database
DATABASE_URL = os.getenv("DATABASE_URL")

# --- 🔒 Security
SECRET_KEY = os.getenv("SECRET_KEY", "your-secret-key")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))
SESSION_SECRET = os.getenv("SESSION_SECRET", SECRET_KEY)

# Seeded into admin_credentials when the singleton row does not exist yet
DEFAULT_ADMIN_USERNAME = os.getenv("DEFAULT_ADMIN_USERNAME", "admin")
DEFAULT_ADMIN_PASSWORD = os.getenv("DEFAULT_ADMIN_PASSWORD", "admin123")

# --- 🖼️ Cloudinary
CLOUDINARY_CLOUD_NAME = os.getenv("CLOUDINARY_CLOUD_NAME", "demo")
CLOUDINARY_API_KEY = os.getenv("CLOUDINARY_API_KEY")
CLOUDINARY_API_SECRET = os.getenv("CLOUDINARY_API_SECRET")
CLOUDINARY_UPLOAD_PRESET = os.getenv("CLOUDINARY_UPLOAD_PRESET", "portfolio_uploads")
CLOUDINARY_FOLDER = os.getenv("CLOUDINARY_FOLDER", "portfolio_uploads")

# --- 📩 Resend
RESEND_API_KEY = os.getenv("RESEND_API_KEY")
EMAIL_FROM = os.getenv("EMAIL_FROM", "Portfolio <noreply@example.com>")
CONTACT_NOTIFY_EMAIL = os.getenv("CONTACT_NOTIFY_EMAIL")
SITE_OWNER_NAME = os.getenv("SITE_OWNER_NAME", "Shaquib Khan")

HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "30"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
