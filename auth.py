from jose import jwt, JWTError
from datetime import datetime, timedelta, timezone
from fastapi import Depends, Header, HTTPException, Request
from passlib.context import CryptContext
from typing import Optional
import logging

import store
from config import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    ALGORITHM,
    DEFAULT_ADMIN_PASSWORD,
    DEFAULT_ADMIN_USERNAME,
    SECRET_KEY,
)
from database import get_db

logger = logging.getLogger(__name__)

COOKIE_NAME = "access_token"

# Password hashing; plaintext rows from older installs still verify and get rehashed on login
pwd_context = CryptContext(schemes=["pbkdf2_sha256", "plaintext"], deprecated=["plaintext"])


class NotAuthenticated(Exception):
    """Raised by admin page dependencies; main.py turns it into a redirect."""


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


# ✅ CREDENTIALS
def ensure_admin_credentials(db):
    """Return the singleton credentials row, seeding the defaults if it is missing."""
    creds = store.admin_credentials.get(db)
    if creds is None:
        logger.info("No admin credentials stored, seeding defaults for %r", DEFAULT_ADMIN_USERNAME)
        creds = store.admin_credentials.upsert(db, {
            "username": DEFAULT_ADMIN_USERNAME,
            "password": hash_password(DEFAULT_ADMIN_PASSWORD),
        })
    return creds


def update_admin_credentials(db, username: str, password: str):
    return store.admin_credentials.upsert(db, {
        "username": username,
        "password": hash_password(password),
    })


# ✅ LOGIN
def authenticate_admin(db, username: str, password: str):
    creds = ensure_admin_credentials(db)
    if username != creds.username:
        return None
    try:
        valid, new_hash = pwd_context.verify_and_update(password, creds.password)
    except ValueError:
        return None
    if not valid:
        return None
    if new_hash:
        logger.info("Rehashing stored password for %r", creds.username)
        creds = store.admin_credentials.upsert(db, {"password": new_hash})
    return creds


# ✅ TOKEN
def create_access_token(data: dict, expires_delta: timedelta = None):
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire, "iat": now})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM), expire


def verify_token(token: str):
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    if payload.get("role") != "admin" or not payload.get("sub"):
        return None
    return payload


def login(db, username: str, password: str):
    """Credential check + token issue. Returns (token, expires_at) or None."""
    admin = authenticate_admin(db, username, password)
    if admin is None:
        logger.warning("Failed admin login for %r", username)
        return None
    logger.info("Admin %r logged in", admin.username)
    return create_access_token({"sub": admin.username, "role": "admin"})


def _token_from_request(request: Request, authorization: Optional[str]):
    if authorization and authorization.lower().startswith("bearer "):
        return authorization.split(" ", 1)[1]
    return request.cookies.get(COOKIE_NAME)


def _current_username(request, authorization, db):
    token = _token_from_request(request, authorization)
    if not token:
        return None
    payload = verify_token(token)
    if not payload:
        return None
    # A token minted for a renamed admin is no longer valid
    creds = ensure_admin_credentials(db)
    if payload["sub"] != creds.username:
        return None
    return payload["sub"]


# ✅ DEPENDENCIES
def get_current_admin(request: Request, authorization: Optional[str] = Header(None), db=Depends(get_db)):
    """API guard: 401 without a valid token."""
    username = _current_username(request, authorization, db)
    if not username:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return username


def require_admin_page(request: Request, db=Depends(get_db)):
    """Page guard: redirects to the login screen without a valid token."""
    username = _current_username(request, None, db)
    if not username:
        raise NotAuthenticated()
    return username


def set_session_cookie(response, token: str):
    response.set_cookie(COOKIE_NAME, token, max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60, httponly=True, samesite="lax")
