from fastapi import FastAPI, Request, Form, Depends, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import RedirectResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware
import logging
import os

import admin
import api
import store
from auth import NotAuthenticated
from config import LOG_LEVEL, SESSION_SECRET
from database import Base, engine, get_db
from public_site import (
    PROJECT_FILTERS,
    SERVICES,
    filter_projects,
    load_about,
    load_hero,
    load_projects,
    load_testimonials,
    submit_contact,
)
from schemas import ContactCreate
from store import StoreError
from templating import BASE_DIR, flash, render
from widgets import Carousel, TestimonialRotator

# --- 📝 Logging
logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

# --- 🚀 App
app = FastAPI(title="Portfolio")

# --- 🧱 Tables
Base.metadata.create_all(bind=engine)

# --- 📁 Static files
app.mount("/static", StaticFiles(directory=os.path.join(BASE_DIR, "static")), name="static")

# --- 🔀 Session middleware (flash messages)
app.add_middleware(SessionMiddleware, secret_key=SESSION_SECRET)

app.include_router(api.router)
app.include_router(admin.router)


# --- 🚨 Error handling
def _is_api(request: Request):
    return request.url.path.startswith("/api/")


@app.exception_handler(NotAuthenticated)
async def not_authenticated_handler(request: Request, exc: NotAuthenticated):
    return RedirectResponse(url="/admin/login", status_code=status.HTTP_302_FOUND)


@app.exception_handler(RequestValidationError)
async def validation_handler(request: Request, exc: RequestValidationError):
    fields = sorted({str(err["loc"][-1]) for err in exc.errors() if err.get("loc")})
    message = "Missing or invalid fields: " + ", ".join(fields) if fields else "Invalid request"
    if _is_api(request):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"data": None, "error": message})
    return render(request, "error.html", {"message": f"Invalid request. {message}"}, status.HTTP_400_BAD_REQUEST)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"data": None, "error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"data": None, "error": exc.detail})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception for %s %s: %s", request.method, request.url, exc, exc_info=exc)
    if _is_api(request):
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            content={"data": None, "error": "Internal server error"})
    return render(request, "error.html", {"message": "Something went wrong. Please try again."},
                  status.HTTP_500_INTERNAL_SERVER_ERROR)


# --- 🌐 Public page
@app.get("/")
def home(request: Request, filter: str = "all", t: int = 0, db=Depends(get_db)):
    projects = load_projects(db)
    testimonials = load_testimonials(db)
    rotator = TestimonialRotator(len(testimonials.content), start=t)
    return render(request, "index.html", {
        "hero": load_hero(db),
        "about": load_about(db),
        "services": SERVICES,
        "projects": projects,
        "visible_projects": filter_projects(projects.content, filter),
        "filters": PROJECT_FILTERS,
        "active_filter": filter,
        "testimonials": testimonials,
        "rotator": rotator,
    })


# --- 🏛️ Project detail with gallery
@app.get("/projects/{project_id}")
def project_detail(request: Request, project_id: str, slide: int = 0, db=Depends(get_db)):
    project = store.projects.get(db, project_id)
    if project is None:
        return render(request, "error.html", {"message": "Project not found."}, status.HTTP_404_NOT_FOUND)
    slides = [project.image_url] + list(project.gallery_urls or [])
    carousel = Carousel(len(slides), autoplay=True, start=slide)
    return render(request, "project.html", {"project": project, "slides": slides, "carousel": carousel})


# --- 📨 Contact form
@app.post("/contact")
async def contact(
    request: Request,
    name: str = Form(""),
    email: str = Form(""),
    message: str = Form(""),
    db=Depends(get_db),
):
    try:
        data = ContactCreate(name=name.strip(), email=email.strip(), message=message.strip())
    except ValidationError as exc:
        for err in exc.errors():
            flash(request, f"{err['loc'][-1]}: {err['msg']}", "error")
        return RedirectResponse(url="/#contact", status_code=status.HTTP_303_SEE_OTHER)

    try:
        _, email_sent = await submit_contact(db, data.name, data.email, data.message)
    except StoreError:
        flash(request, "Failed to send message. Please try again.", "error")
        return RedirectResponse(url="/#contact", status_code=status.HTTP_303_SEE_OTHER)

    if email_sent:
        flash(request, "Thank you for your message! I'll get back to you soon.")
    else:
        flash(request, "Message saved! I'll get back to you soon.")
    return RedirectResponse(url="/#contact", status_code=status.HTTP_303_SEE_OTHER)
