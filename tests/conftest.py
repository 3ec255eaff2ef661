# tests/conftest.py

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from task_tracker.app.main import create_app
from task_tracker.infra.db.task_store_dynamodb import DynamoTaskStore

from .fakes import FakeTable

_ENV_VARS = (
    "APP_TITLE",
    "APP_THEME_COLOR",
    "AWS_REGION",
    "DYNAMODB_TABLE_NAME",
    "PORT",
    "TASK_STORE",
    "DB_PATH",
    "LOG_DIR",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Tests start from the documented defaults, whatever the host env holds."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def table() -> FakeTable:
    return FakeTable()


@pytest.fixture()
def store(table: FakeTable) -> DynamoTaskStore:
    """The real DynamoDB store, pointed at an in-process fake table."""
    return DynamoTaskStore("task-tracker-tasks", "us-west-2", client=table)


@pytest.fixture()
def app(store: DynamoTaskStore) -> FastAPI:
    return create_app(lambda: store, configure_logging=False)


@pytest.fixture()
def client(app: FastAPI):
    with TestClient(app) as c:
        yield c
