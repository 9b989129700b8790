from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import JSONResponse
from typing import List, Optional

import store
from auth import COOKIE_NAME, get_current_admin, login, set_session_cookie, update_admin_credentials
from database import get_db
from media import MediaError, delete_file, upload_files
from public_site import submit_contact
from schemas import (
    AboutSettingsIn,
    AdminCredentialsIn,
    ContactCreate,
    ContactUpdate,
    HeroSettingsIn,
    LoginRequest,
    ProjectCreate,
    ProjectUpdate,
    TestimonialCreate,
    TestimonialUpdate,
    Token,
)
from utils import normalize_achievements

router = APIRouter(prefix="/api")


# --- 📦 Envelopes
def ok(data, **extra):
    return {"data": data, "error": None, **extra}


def fail(message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR):
    return JSONResponse(status_code=status_code, content={"data": None, "error": message})


def missing_id(label):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": f"{label} ID is required"})


def not_found(label):
    return fail(f"{label} not found", status.HTTP_404_NOT_FOUND)


def deleted(item_id):
    return {"success": True, "data": {"id": item_id}}


# --- 🔑 Auth
@router.post("/auth/login")
def api_login(data: LoginRequest, db=Depends(get_db)):
    issued = login(db, data.username, data.password)
    if issued is None:
        return fail("Invalid username or password", status.HTTP_401_UNAUTHORIZED)
    token, expires_at = issued
    response = JSONResponse(content=ok(Token(access_token=token, expires_at=expires_at.isoformat()).model_dump()))
    set_session_cookie(response, token)
    return response


@router.post("/auth/logout")
def api_logout():
    response = JSONResponse(content={"success": True})
    response.delete_cookie(COOKIE_NAME)
    return response


# --- 📂 Projects
@router.get("/projects")
def list_projects(db=Depends(get_db)):
    return ok([p.to_dict() for p in store.projects.list(db)])


@router.post("/projects")
def create_project(project: ProjectCreate, db=Depends(get_db), _: str = Depends(get_current_admin)):
    return ok(store.projects.create(db, project.model_dump()).to_dict())


@router.put("/projects")
def update_project(project: ProjectUpdate, db=Depends(get_db), _: str = Depends(get_current_admin)):
    fields = project.model_dump(exclude_unset=True, exclude={"id"})
    item = store.projects.update(db, project.id, fields)
    if item is None:
        return not_found("Project")
    return ok(item.to_dict())


@router.delete("/projects")
def delete_project(id: Optional[str] = None, db=Depends(get_db), _: str = Depends(get_current_admin)):
    if not id:
        return missing_id("Project")
    if not store.projects.delete(db, id):
        return not_found("Project")
    return deleted(id)


# --- 💬 Testimonials
@router.get("/testimonials")
def list_testimonials(db=Depends(get_db)):
    return ok([t.to_dict() for t in store.testimonials.list(db)])


@router.post("/testimonials")
def create_testimonial(testimonial: TestimonialCreate, db=Depends(get_db), _: str = Depends(get_current_admin)):
    return ok(store.testimonials.create(db, testimonial.model_dump()).to_dict())


@router.put("/testimonials")
def update_testimonial(testimonial: TestimonialUpdate, db=Depends(get_db), _: str = Depends(get_current_admin)):
    fields = testimonial.model_dump(exclude_unset=True, exclude={"id"})
    item = store.testimonials.update(db, testimonial.id, fields)
    if item is None:
        return not_found("Testimonial")
    return ok(item.to_dict())


@router.delete("/testimonials")
def delete_testimonial(id: Optional[str] = None, db=Depends(get_db), _: str = Depends(get_current_admin)):
    if not id:
        return missing_id("Testimonial")
    if not store.testimonials.delete(db, id):
        return not_found("Testimonial")
    return deleted(id)


# --- 📨 Contact submissions
@router.get("/contacts")
def list_contacts(db=Depends(get_db), _: str = Depends(get_current_admin)):
    return ok([c.to_dict() for c in store.contacts.list(db)])


@router.post("/contacts")
async def create_contact(contact: ContactCreate, db=Depends(get_db)):
    row, email_sent = await submit_contact(db, contact.name, contact.email, contact.message)
    return ok(row.to_dict(), email_sent=email_sent)


@router.put("/contacts")
def update_contact(contact: ContactUpdate, db=Depends(get_db), _: str = Depends(get_current_admin)):
    item = store.contacts.update(db, contact.id, {"is_read": contact.is_read})
    if item is None:
        return not_found("Contact")
    return ok(item.to_dict())


@router.delete("/contacts")
def delete_contact(id: Optional[str] = None, db=Depends(get_db), _: str = Depends(get_current_admin)):
    if not id:
        return missing_id("Contact")
    if not store.contacts.delete(db, id):
        return not_found("Contact")
    return deleted(id)


# --- ⚙️ Settings
@router.get("/settings/hero")
def get_hero_settings(db=Depends(get_db)):
    row = store.hero_settings.get(db)
    return ok(row.to_dict() if row else None)


@router.put("/settings/hero")
def put_hero_settings(settings: HeroSettingsIn, db=Depends(get_db), _: str = Depends(get_current_admin)):
    return ok(store.hero_settings.upsert(db, settings.model_dump(exclude_unset=True)).to_dict())


@router.get("/settings/about")
def get_about_settings(db=Depends(get_db)):
    row = store.about_settings.get(db)
    if row is None:
        return ok(None)
    data = row.to_dict()
    data["achievements"] = normalize_achievements(data["achievements"])
    return ok(data)


@router.put("/settings/about")
def put_about_settings(settings: AboutSettingsIn, db=Depends(get_db), _: str = Depends(get_current_admin)):
    return ok(store.about_settings.upsert(db, settings.model_dump(exclude_unset=True)).to_dict())


@router.get("/settings/admin")
def get_admin_settings(db=Depends(get_db), _: str = Depends(get_current_admin)):
    row = store.admin_credentials.get(db)
    return ok(row.to_dict() if row else None)


@router.put("/settings/admin")
def put_admin_settings(credentials: AdminCredentialsIn, db=Depends(get_db), _: str = Depends(get_current_admin)):
    return ok(update_admin_credentials(db, credentials.username, credentials.password).to_dict())


# --- 🖼️ Media
@router.post("/media/upload")
async def upload_media(
    files: List[UploadFile] = File(...),
    project_id: Optional[str] = Form(None),
    db=Depends(get_db),
    _: str = Depends(get_current_admin),
):
    if project_id and store.projects.get(db, project_id) is None:
        return not_found("Project")

    items = [(f.filename, f.content_type, await f.read()) for f in files]
    uploaded_urls = []
    results = await upload_files(items, on_uploaded=lambda result: uploaded_urls.append(result["url"]))

    data = {"files": results}
    if project_id and uploaded_urls:
        # The project can be deleted while the uploads are running
        project = store.projects.get(db, project_id)
        if project is None:
            return not_found("Project")
        gallery = list(project.gallery_urls or []) + uploaded_urls
        updated = store.projects.update(db, project_id, {"gallery_urls": gallery})
        if updated is None:
            return not_found("Project")
        data["project"] = updated.to_dict()

    failed = [r["filename"] for r in results if "error" in r]
    error = f"Failed to upload {', '.join(failed)}" if failed else None
    return {"data": data, "error": error}


@router.delete("/media/delete")
def delete_media(
    public_id: Optional[str] = None,
    resource_type: str = "image",
    _: str = Depends(get_current_admin),
):
    try:
        removed = delete_file(public_id, resource_type)
    except MediaError as exc:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)})
    if not removed:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Failed to delete image"})
    return {"success": True}
