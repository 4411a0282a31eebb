import os


os.environ["OTEL_SDK_DISABLED"] = "true"

from datetime import UTC, datetime
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from task_service.config import Settings
from task_service.main import create_app
from task_service.services.store import TaskStore


API_KEY = "test-key"
FIXED_NOW = datetime(2024, 5, 1, 12, 30, 15, 250000, tzinfo=UTC)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        api_key=API_KEY,
        log_file=str(tmp_path / "logs" / "access.log"),
    )


@pytest.fixture
def store() -> TaskStore:
    return TaskStore.seeded(clock=lambda: FIXED_NOW)


@pytest.fixture
def access_log() -> MagicMock:
    return MagicMock()


@pytest.fixture
def app(settings: Settings, store: TaskStore, access_log: MagicMock) -> FastAPI:
    return create_app(settings, store=store, access_log=access_log)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"X-API-KEY": API_KEY}
