from pathlib import Path
from typing import Generator
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pytest_mock import MockerFixture

from task_manager.config import Settings
from task_manager.main import app as main_app


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'test_tasks.db'}",
        DB_CONNECT_MAX_RETRIES=1,
        DB_CONNECT_RETRY_DELAY=0,
        OTEL_ENABLED=False,
    )


@pytest.fixture(autouse=True)
def patch_settings(test_settings: Settings, mocker: MockerFixture) -> None:
    mocker.patch("task_manager.main.settings", test_settings)


@pytest.fixture
def test_app() -> Generator[FastAPI, None, None]:
    yield main_app
    main_app.dependency_overrides.clear()


@pytest.fixture
def test_client(test_app: FastAPI) -> Generator[TestClient, None, None]:
    with TestClient(test_app) as client:
        yield client
