from datetime import datetime

from fastapi import Request
from fastapi.templating import Jinja2Templates

from app.core.config import settings

templates = Jinja2Templates(directory=settings.TEMPLATES_DIR)


def format_date(value: datetime) -> str:
    """Render timestamps the way the pages show them, e.g. 2024 Mar 5 14:02"""
    if not value:
        return ""
    return f"{value.year} {value.strftime('%b')} {value.day} {value.strftime('%H:%M')}"


templates.env.filters["date"] = format_date


def render(request: Request, name: str, context: dict = None, status_code: int = 200):
    return templates.TemplateResponse(request, name, context or {}, status_code=status_code)


def render_error(request: Request, message: str, status_code: int):
    return render(
        request,
        "error.html",
        {"code": status_code, "message": message},
        status_code=status_code,
    )
