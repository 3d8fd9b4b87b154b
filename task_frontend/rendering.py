from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol

from fastapi import Request
from fastapi.responses import Response
from fastapi.templating import Jinja2Templates

from .validation import CLIENT_RULES

TEMPLATES_DIR = Path(__file__).parent / "templates"


class Renderer(Protocol):
    """Turns a view name and its data bag into an HTTP response."""

    def render(
        self,
        request: Request,
        view: str,
        context: dict[str, Any],
        status_code: int = 200,
    ) -> Response: ...


class TemplateRenderer:
    """Renderer backed by the Jinja2 templates shipped with the package."""

    def __init__(self, directory: str | Path = TEMPLATES_DIR) -> None:
        self.templates = Jinja2Templates(directory=str(directory))
        # Length limits for the browser-side validator, exposed on the task form.
        self.templates.env.globals["client_rules"] = CLIENT_RULES

    def render(
        self,
        request: Request,
        view: str,
        context: dict[str, Any],
        status_code: int = 200,
    ) -> Response:
        return self.templates.TemplateResponse(
            request, f"{view}.html", context, status_code=status_code
        )
