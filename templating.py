import os

from fastapi import Request
from fastapi.templating import Jinja2Templates

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

templates = Jinja2Templates(directory=os.path.join(BASE_DIR, "templates"))


# --- 🔔 One-shot notifications kept in the session cookie
def flash(request: Request, message: str, category: str = "success"):
    flashes = request.session.get("_flashes", [])
    flashes.append({"category": category, "message": message})
    request.session["_flashes"] = flashes


def get_flashed_messages(request: Request):
    # Error pages can render before the session middleware has run
    if "session" not in request.scope:
        return []
    return request.session.pop("_flashes", [])


templates.env.globals["get_flashed_messages"] = get_flashed_messages


def render(request: Request, name: str, context: dict = None, status_code: int = 200):
    return templates.TemplateResponse(request, name, context or {}, status_code=status_code)
