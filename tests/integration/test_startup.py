from pathlib import Path
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pytest_mock import MockerFixture

from task_manager.common.connectivity import ConnectionState
from task_manager.config import Settings


def test_server_starts_when_database_is_unreachable(
    test_app: FastAPI, tmp_path: Path, mocker: MockerFixture
) -> None:
    unreachable = Settings(
        DATABASE_URL=f"sqlite:///{tmp_path}/missing/dir/tasks.db",
        DB_CONNECT_MAX_RETRIES=2,
        DB_CONNECT_RETRY_DELAY=0,
    )
    mocker.patch("task_manager.main.settings", unreachable)

    with TestClient(test_app) as client:
        assert test_app.state.storage_state == ConnectionState.GAVE_UP

        assert client.get("/").status_code == 200

        response = client.get("/api/tasks")
        assert response.status_code == 500
        assert response.json() == {"error": "An unexpected error occurred"}

        health = client.get("/healthcheck")
        assert health.status_code == 503
        assert health.json()["database"]["startup"] == "gave_up"


def test_schema_is_created_on_startup(test_app: FastAPI) -> None:
    with TestClient(test_app) as client:
        assert test_app.state.storage_state == ConnectionState.READY
        assert client.get("/api/tasks").json() == []


def test_tasks_table_created_once_database_comes_back(
    test_app: FastAPI, tmp_path: Path, mocker: MockerFixture
) -> None:
    db_dir = tmp_path / "later"
    late_database = Settings(
        DATABASE_URL=f"sqlite:///{db_dir}/tasks.db",
        DB_CONNECT_MAX_RETRIES=1,
        DB_CONNECT_RETRY_DELAY=0,
    )
    mocker.patch("task_manager.main.settings", late_database)

    with TestClient(test_app) as client:
        assert test_app.state.storage_state == ConnectionState.GAVE_UP
        assert client.post("/api/tasks", json={"title": "X"}).status_code == 500

        db_dir.mkdir()

        assert client.get("/healthcheck").status_code == 200
        response = client.post("/api/tasks", json={"title": "X"})
        assert response.status_code == 201
        assert client.get(f"/api/tasks/{response.json()['id']}").status_code == 200


def test_tasks_table_created_on_first_request(
    test_app: FastAPI, tmp_path: Path, mocker: MockerFixture
) -> None:
    db_dir = tmp_path / "later"
    late_database = Settings(
        DATABASE_URL=f"sqlite:///{db_dir}/tasks.db",
        DB_CONNECT_MAX_RETRIES=1,
        DB_CONNECT_RETRY_DELAY=0,
    )
    mocker.patch("task_manager.main.settings", late_database)

    with TestClient(test_app) as client:
        db_dir.mkdir()

        assert test_app.state.schema_ready is False
        assert client.get("/api/tasks").json() == []
        assert test_app.state.schema_ready is True
