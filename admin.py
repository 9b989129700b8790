from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import RedirectResponse
from pydantic import ValidationError
import logging
import threading

import store
from auth import COOKIE_NAME, login, require_admin_page, set_session_cookie, update_admin_credentials, verify_token
from database import get_db
from media import upload_files
from models import PROJECT_TYPES
from schemas import AdminCredentialsIn, ProjectCreate, TestimonialCreate
from store import StoreError
from templating import flash, render
from utils import ACHIEVEMENT_ICONS, format_tags, migrate_achievements, parse_tags

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin")


class DeletionTracker:
    """Ids with a delete in flight, so a row's controls can be disabled and repeats refused."""

    def __init__(self):
        self._lock = threading.Lock()
        self._pending = set()

    def begin(self, kind, item_id):
        with self._lock:
            if (kind, item_id) in self._pending:
                return False
            self._pending.add((kind, item_id))
            return True

    def finish(self, kind, item_id):
        with self._lock:
            self._pending.discard((kind, item_id))

    def is_deleting(self, kind, item_id):
        with self._lock:
            return (kind, item_id) in self._pending


deletions = DeletionTracker()


def redirect(url):
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


def _load(request, label, loader):
    try:
        return loader()
    except StoreError as exc:
        flash(request, f"Error loading {label}: {exc.message}", "error")
        return []


def _delete(request, db, kind, label, resource, item_id):
    if not deletions.begin(kind, item_id):
        flash(request, f"This {label} is already being deleted.", "error")
        return redirect("/admin")
    try:
        if resource.delete(db, item_id):
            logger.info("Deleted %s %s", kind, item_id)
            flash(request, f"{label.capitalize()} deleted successfully!")
        else:
            flash(request, f"{label.capitalize()} not found.", "error")
    except StoreError:
        flash(request, f"Error deleting {label}. Please try again.", "error")
    finally:
        deletions.finish(kind, item_id)
    return redirect("/admin")


# --- 🔑 Login
@router.get("/login")
def login_page(request: Request):
    token = request.cookies.get(COOKIE_NAME)
    if token and verify_token(token):
        return redirect("/admin")
    return render(request, "admin/login.html")


@router.post("/login")
def login_submit(request: Request, username: str = Form(""), password: str = Form(""), db=Depends(get_db)):
    if not username or not password:
        return render(request, "admin/login.html",
                      {"error": "Please enter both username and password", "username": username},
                      status.HTTP_400_BAD_REQUEST)
    try:
        issued = login(db, username, password)
    except StoreError:
        return render(request, "admin/login.html",
                      {"error": "Login failed. Please try again.", "username": username},
                      status.HTTP_500_INTERNAL_SERVER_ERROR)
    if issued is None:
        return render(request, "admin/login.html",
                      {"error": "Invalid username or password", "username": username},
                      status.HTTP_401_UNAUTHORIZED)

    token, _ = issued
    flash(request, "Login successful!")
    response = redirect("/admin")
    set_session_cookie(response, token)
    return response


# --- 🔚 Logout
@router.get("/logout")
def logout(request: Request):
    flash(request, "Logged out successfully")
    response = redirect("/admin/login")
    response.delete_cookie(COOKIE_NAME)
    return response


# --- 📋 Dashboard
@router.get("")
def dashboard(request: Request, db=Depends(get_db), admin: str = Depends(require_admin_page)):
    projects = _load(request, "projects", lambda: store.projects.list(db))
    testimonials = _load(request, "testimonials", lambda: store.testimonials.list(db))
    contacts = _load(request, "contact messages", lambda: store.contacts.list(db))
    return render(request, "admin/dashboard.html", {
        "admin": admin,
        "projects": projects,
        "testimonials": testimonials,
        "contacts": contacts,
        "unread_count": sum(1 for c in contacts if not c.is_read),
        "is_deleting": deletions.is_deleting,
    })


# --- 📂 Projects
def _project_form(request, project=None, values=None, error=None, status_code=200):
    return render(request, "admin/project_form.html", {
        "project": project,
        "values": values or {},
        "project_types": PROJECT_TYPES,
        "error": error,
    }, status_code)


def _project_values(form):
    return {
        "title": (form.get("title") or "").strip(),
        "description": (form.get("description") or "").strip(),
        "image_url": (form.get("image_url") or "").strip(),
        "tags": form.get("tags") or "",
        "project_type": form.get("project_type") or "architectural",
        "gallery_urls": form.get("gallery_urls") or "",
    }


def _uploads(form, field):
    return [f for f in form.getlist(field) if getattr(f, "filename", None)]


async def _save_project(request, db, project=None):
    form = await request.form()
    values = _project_values(form)
    image_file = _uploads(form, "image_file")
    gallery_files = _uploads(form, "gallery_files")

    if not values["title"] or not values["description"] or not (values["image_url"] or image_file):
        return _project_form(request, project, values, "Please fill in all required fields",
                             status.HTTP_400_BAD_REQUEST)

    gallery = [url.strip() for url in values["gallery_urls"].splitlines() if url.strip()]
    items = [(f.filename, f.content_type, await f.read()) for f in image_file + gallery_files]
    if items:
        def apply(result):
            # The main image, when uploaded, is always the first item of the batch
            if image_file and result["index"] == 0:
                values["image_url"] = result["url"]
            else:
                gallery.append(result["url"])

        results = await upload_files(items, on_uploaded=apply)
        for result in results:
            if "error" in result:
                flash(request, f"Failed to upload {result['filename']}", "error")
        if not values["image_url"]:
            return _project_form(request, project, values, "Main image upload failed",
                                 status.HTTP_400_BAD_REQUEST)

    try:
        payload = ProjectCreate(
            title=values["title"],
            description=values["description"],
            image_url=values["image_url"],
            tags=parse_tags(values["tags"]),
            project_type=values["project_type"],
            gallery_urls=gallery,
        ).model_dump()
    except ValidationError:
        return _project_form(request, project, values, "Please check the project fields",
                             status.HTTP_400_BAD_REQUEST)

    try:
        if project is None:
            store.projects.create(db, payload)
            flash(request, "Project added successfully!")
        else:
            store.projects.update(db, project.id, payload)
            flash(request, "Project updated successfully!")
    except StoreError as exc:
        return _project_form(request, project, values, f"Error saving project: {exc.message}",
                             status.HTTP_500_INTERNAL_SERVER_ERROR)
    return redirect("/admin")


@router.get("/projects/new")
def new_project(request: Request, _: str = Depends(require_admin_page)):
    return _project_form(request)


@router.post("/projects/new")
async def create_project(request: Request, db=Depends(get_db), _: str = Depends(require_admin_page)):
    return await _save_project(request, db)


@router.get("/projects/{project_id}/edit")
def edit_project(request: Request, project_id: str, db=Depends(get_db), _: str = Depends(require_admin_page)):
    project = store.projects.get(db, project_id)
    if project is None:
        flash(request, "Project not found.", "error")
        return redirect("/admin")
    values = project.to_dict()
    values["tags"] = format_tags(project.tags)
    values["gallery_urls"] = "\n".join(project.gallery_urls or [])
    return _project_form(request, project, values)


@router.post("/projects/{project_id}/edit")
async def update_project(request: Request, project_id: str, db=Depends(get_db), _: str = Depends(require_admin_page)):
    project = store.projects.get(db, project_id)
    if project is None:
        flash(request, "Project not found.", "error")
        return redirect("/admin")
    return await _save_project(request, db, project)


@router.get("/projects/{project_id}/delete")
def confirm_delete_project(request: Request, project_id: str, db=Depends(get_db), _: str = Depends(require_admin_page)):
    project = store.projects.get(db, project_id)
    if project is None:
        flash(request, "Project not found.", "error")
        return redirect("/admin")
    return render(request, "admin/confirm_delete.html", {
        "label": "project", "name": project.title, "action": f"/admin/projects/{project_id}/delete",
    })


@router.post("/projects/{project_id}/delete")
def delete_project(request: Request, project_id: str, db=Depends(get_db), _: str = Depends(require_admin_page)):
    return _delete(request, db, "project", "project", store.projects, project_id)


# --- 💬 Testimonials
def _testimonial_form(request, testimonial=None, values=None, error=None, status_code=200):
    return render(request, "admin/testimonial_form.html", {
        "testimonial": testimonial,
        "values": values or {"rating": 5},
        "error": error,
    }, status_code)


def _save_testimonial(request, db, values, testimonial=None):
    if not values["client_name"] or not values["content"] or not values["project_context"]:
        return _testimonial_form(request, testimonial, values, "Please fill in all required fields",
                                 status.HTTP_400_BAD_REQUEST)
    try:
        payload = TestimonialCreate(**values).model_dump()
    except ValidationError:
        return _testimonial_form(request, testimonial, values, "Rating must be between 1 and 5",
                                 status.HTTP_400_BAD_REQUEST)
    try:
        if testimonial is None:
            store.testimonials.create(db, payload)
            flash(request, "Testimonial added successfully!")
        else:
            store.testimonials.update(db, testimonial.id, payload)
            flash(request, "Testimonial updated successfully!")
    except StoreError as exc:
        return _testimonial_form(request, testimonial, values, f"Error saving testimonial: {exc.message}",
                                 status.HTTP_500_INTERNAL_SERVER_ERROR)
    return redirect("/admin")


def _testimonial_values(client_name, client_title, content, rating, project_context):
    return {
        "client_name": client_name.strip(),
        "client_title": client_title.strip(),
        "content": content.strip(),
        "rating": rating,
        "project_context": project_context.strip(),
    }


@router.get("/testimonials/new")
def new_testimonial(request: Request, _: str = Depends(require_admin_page)):
    return _testimonial_form(request)


@router.post("/testimonials/new")
def create_testimonial(
    request: Request,
    client_name: str = Form(""),
    client_title: str = Form(""),
    content: str = Form(""),
    rating: int = Form(5),
    project_context: str = Form(""),
    db=Depends(get_db),
    _: str = Depends(require_admin_page),
):
    values = _testimonial_values(client_name, client_title, content, rating, project_context)
    return _save_testimonial(request, db, values)


@router.get("/testimonials/{testimonial_id}/edit")
def edit_testimonial(request: Request, testimonial_id: str, db=Depends(get_db), _: str = Depends(require_admin_page)):
    testimonial = store.testimonials.get(db, testimonial_id)
    if testimonial is None:
        flash(request, "Testimonial not found.", "error")
        return redirect("/admin")
    return _testimonial_form(request, testimonial, testimonial.to_dict())


@router.post("/testimonials/{testimonial_id}/edit")
def update_testimonial(
    request: Request,
    testimonial_id: str,
    client_name: str = Form(""),
    client_title: str = Form(""),
    content: str = Form(""),
    rating: int = Form(5),
    project_context: str = Form(""),
    db=Depends(get_db),
    _: str = Depends(require_admin_page),
):
    testimonial = store.testimonials.get(db, testimonial_id)
    if testimonial is None:
        flash(request, "Testimonial not found.", "error")
        return redirect("/admin")
    values = _testimonial_values(client_name, client_title, content, rating, project_context)
    return _save_testimonial(request, db, values, testimonial)


@router.get("/testimonials/{testimonial_id}/delete")
def confirm_delete_testimonial(
    request: Request, testimonial_id: str, db=Depends(get_db), _: str = Depends(require_admin_page)
):
    testimonial = store.testimonials.get(db, testimonial_id)
    if testimonial is None:
        flash(request, "Testimonial not found.", "error")
        return redirect("/admin")
    return render(request, "admin/confirm_delete.html", {
        "label": "testimonial",
        "name": testimonial.client_name,
        "action": f"/admin/testimonials/{testimonial_id}/delete",
    })


@router.post("/testimonials/{testimonial_id}/delete")
def delete_testimonial(request: Request, testimonial_id: str, db=Depends(get_db), _: str = Depends(require_admin_page)):
    return _delete(request, db, "testimonial", "testimonial", store.testimonials, testimonial_id)


# --- 📨 Messages
@router.get("/messages/{contact_id}")
def view_message(request: Request, contact_id: str, db=Depends(get_db), _: str = Depends(require_admin_page)):
    contact = store.contacts.get(db, contact_id)
    if contact is None:
        flash(request, "Message not found.", "error")
        return redirect("/admin")
    if not contact.is_read:
        try:
            contact = store.contacts.update(db, contact_id, {"is_read": True})
        except StoreError:
            flash(request, "Error updating message", "error")
    return render(request, "admin/message.html", {"contact": contact})


@router.post("/messages/{contact_id}/read")
def mark_message_read(request: Request, contact_id: str, db=Depends(get_db), _: str = Depends(require_admin_page)):
    try:
        if store.contacts.update(db, contact_id, {"is_read": True}) is None:
            flash(request, "Message not found.", "error")
        else:
            flash(request, "Message marked as read")
    except StoreError:
        flash(request, "Error updating message", "error")
    return redirect("/admin")


@router.get("/messages/{contact_id}/delete")
def confirm_delete_message(request: Request, contact_id: str, db=Depends(get_db), _: str = Depends(require_admin_page)):
    contact = store.contacts.get(db, contact_id)
    if contact is None:
        flash(request, "Message not found.", "error")
        return redirect("/admin")
    return render(request, "admin/confirm_delete.html", {
        "label": "message", "name": contact.name, "action": f"/admin/messages/{contact_id}/delete",
    })


@router.post("/messages/{contact_id}/delete")
def delete_message(request: Request, contact_id: str, db=Depends(get_db), _: str = Depends(require_admin_page)):
    return _delete(request, db, "contact", "message", store.contacts, contact_id)


# --- ⚙️ Settings
def _settings_page(request, db, about_override=None, error=None, status_code=200):
    hero = store.hero_settings.get(db)
    about = store.about_settings.get(db)
    creds = store.admin_credentials.get(db)

    about_data = about.to_dict() if about else {"profile_image_url": "", "bio": "", "achievements": []}
    achievements, migrated = migrate_achievements(about_data["achievements"])
    about_data["achievements"] = achievements
    if about_override is not None:
        about_data.update(about_override)
        migrated = False

    return render(request, "admin/settings.html", {
        "hero": hero.to_dict() if hero else {},
        "about": about_data,
        "achievements_migrated": migrated,
        "icons": ACHIEVEMENT_ICONS,
        "username": creds.username if creds else "",
        "error": error,
    }, status_code)


@router.get("/settings")
def settings_page(request: Request, db=Depends(get_db), _: str = Depends(require_admin_page)):
    try:
        return _settings_page(request, db)
    except StoreError as exc:
        flash(request, f"Error loading settings: {exc.message}", "error")
        return redirect("/admin")


@router.post("/settings/hero")
def save_hero(
    request: Request,
    background_image_url: str = Form(""),
    name: str = Form(""),
    tagline: str = Form(""),
    description: str = Form(""),
    cv_url: str = Form(""),
    db=Depends(get_db),
    _: str = Depends(require_admin_page),
):
    try:
        store.hero_settings.upsert(db, {
            "background_image_url": background_image_url.strip(),
            "name": name.strip(),
            "tagline": tagline.strip(),
            "description": description.strip(),
            "cv_url": cv_url.strip(),
        })
        flash(request, "Hero settings updated successfully!")
    except StoreError:
        flash(request, "Error updating hero settings", "error")
    return redirect("/admin/settings")


def _achievements_from_form(form):
    icons = form.getlist("achievement_icon")
    titles = form.getlist("achievement_title")
    descriptions = form.getlist("achievement_description")
    return [
        {"icon": icon or "Star", "title": title.strip(), "description": description.strip()}
        for icon, title, description in zip(icons, titles, descriptions)
    ]


@router.post("/settings/about")
async def save_about(request: Request, db=Depends(get_db), _: str = Depends(require_admin_page)):
    form = await request.form()
    about = {
        "profile_image_url": (form.get("profile_image_url") or "").strip(),
        "bio": (form.get("bio") or "").strip(),
        "achievements": _achievements_from_form(form),
    }

    # Row editing re-renders the form; only "save" writes
    action = form.get("action") or "save"
    if action == "add":
        about["achievements"].append({"icon": "Star", "title": "", "description": ""})
        return _settings_page(request, db, about)
    if action.startswith("remove:"):
        index = action.split(":", 1)[1]
        if index.isdigit() and int(index) < len(about["achievements"]):
            about["achievements"].pop(int(index))
        return _settings_page(request, db, about)

    if any(not a["title"] for a in about["achievements"]):
        return _settings_page(request, db, about, "Every achievement needs a title", status.HTTP_400_BAD_REQUEST)

    try:
        store.about_settings.upsert(db, about)
        flash(request, "About settings updated successfully!")
    except StoreError:
        flash(request, "Error updating about settings", "error")
    return redirect("/admin/settings")


@router.post("/settings/credentials")
def save_credentials(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    confirm_password: str = Form(""),
    db=Depends(get_db),
    _: str = Depends(require_admin_page),
):
    if password != confirm_password:
        flash(request, "Passwords do not match", "error")
        return redirect("/admin/settings")
    try:
        credentials = AdminCredentialsIn(username=username, password=password)
    except ValidationError:
        flash(request, "Username is required and the password needs at least 6 characters", "error")
        return redirect("/admin/settings")

    try:
        update_admin_credentials(db, credentials.username, credentials.password)
    except StoreError:
        flash(request, "Error updating admin credentials", "error")
        return redirect("/admin/settings")

    # Reissue the cookie so a username change does not log the admin out
    token, _expires = login(db, credentials.username, credentials.password)
    flash(request, "Admin credentials updated successfully!")
    response = redirect("/admin/settings")
    set_session_cookie(response, token)
    return response
