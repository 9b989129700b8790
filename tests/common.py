import time
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

import admin
import media
from database import Base, SessionLocal, engine
from main import app

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"


def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    admin.deletions = admin.DeletionTracker()


def new_client(**kwargs):
    return TestClient(app, **kwargs)


def login(client, username=ADMIN_USERNAME, password=ADMIN_PASSWORD):
    response = client.post("/api/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["data"]["access_token"]


def session():
    return SessionLocal()


def http_response(status_code=200, body=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = body or {}
    response.text = str(body)
    return response


PROJECT = {
    "title": "Riverside Villa",
    "description": "A three storey residence on the river bank.",
    "image_url": "https://res.cloudinary.com/test-cloud/image/upload/villa.jpg",
    "tags": ["residential", "concrete"],
    "project_type": "architectural",
}

TESTIMONIAL = {
    "client_name": "Amira Patel",
    "client_title": "Homeowner",
    "content": "The renovation exceeded every expectation.",
    "rating": 5,
    "project_context": "Kitchen remodel",
}


def fake_upload(delays, failing=()):
    """Stand-in for ``media.upload_file``: sleeps per filename, fails the listed ones."""
    def upload(filename, content_type, content):
        time.sleep(delays.get(filename, 0))
        if filename in failing:
            raise media.MediaError(f"Failed to upload {filename}: HTTP 500")
        return {"url": f"https://cdn.test/{filename}", "public_id": f"portfolio_uploads/{filename}",
                "resource_type": media.resource_type_for(content_type)}
    return upload
