# tests/conftest.py

from __future__ import annotations

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from task_frontend.config import Settings
from task_frontend.main import create_app

from .fakes import FakeGateway, RecordingRenderer

CONTRACT_DIR = Path(__file__).parent / "contract"


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        app_name="task-frontend-test",
        log_level="DEBUG",
        log_dir=None,
        backend_url="http://backend.test",
        backend_timeout_seconds=1.0,
        backend_retries=0,
        host="127.0.0.1",
        port=0,
    )


@pytest.fixture()
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture()
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture()
def client(gateway: FakeGateway, renderer: RecordingRenderer, settings: Settings) -> TestClient:
    """App wired to the scripted gateway and the recording renderer."""
    app = create_app(gateway=gateway, renderer=renderer, settings=settings)
    with TestClient(app, follow_redirects=False) as c:
        yield c


@pytest.fixture()
def html_client(gateway: FakeGateway, settings: Settings) -> TestClient:
    """App wired to the scripted gateway but rendering the real templates."""
    app = create_app(gateway=gateway, settings=settings)
    with TestClient(app, follow_redirects=False) as c:
        yield c


@pytest.fixture(scope="session")
def contract_vectors() -> dict:
    return json.loads((CONTRACT_DIR / "validation_vectors.json").read_text(encoding="utf-8"))
