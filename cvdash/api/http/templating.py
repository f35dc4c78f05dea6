from pathlib import Path
from typing import Any, Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates

from cvdash.core.config import settings
from cvdash.domains.identity.entities import User

TEMPLATES_DIR = Path(__file__).resolve().parents[2] / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals["app_name"] = settings.app_name


def render(
    request: Request,
    template_name: str,
    user: Optional[User] = None,
    status_code: int = 200,
    **context: Any
):
    """Рендер шаблона с общим контекстом layout"""
    context.update({"user": user, "upload_url": settings.upload_url})
    return templates.TemplateResponse(request, template_name, context, status_code=status_code)
