"""
Task Management front end

FastAPI app serving the task pages. All task data comes from the remote task
API through a TaskGateway; the gateway and the renderer are passed in so
tests (and other deployments) can swap them.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from . import __version__
from .config import Settings, get_settings
from .gateway import TaskGateway
from .rendering import Renderer, TemplateRenderer
from .routes import router

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"


def create_app(
    gateway: Optional[TaskGateway] = None,
    renderer: Optional[Renderer] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    settings = settings or get_settings()
    owns_gateway = gateway is None
    gateway = gateway or TaskGateway.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("%s using task API at %s", settings.app_name, settings.backend_url)
        yield
        if owns_gateway:
            await gateway.aclose()

    app = FastAPI(
        title="Task Management",
        description="Server-rendered pages for managing tasks held by the task API",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.gateway = gateway
    app.state.renderer = renderer or TemplateRenderer()

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    app.include_router(router)
    return app
