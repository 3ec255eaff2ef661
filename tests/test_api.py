# tests/test_api.py

from __future__ import annotations

import logging
import re

import pytest
from fastapi.testclient import TestClient

from task_tracker.app.main import create_app
from task_tracker.domain.task_models import now_ms
from task_tracker.infra.db.stores import build_store
from task_tracker.infra.db.task_store_dynamodb import DynamoTaskStore

from .fakes import BrokenStore, FailingTable, FakeTable

ISO_MS = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


def _client_for(store_factory) -> TestClient:
    return TestClient(create_app(store_factory, configure_logging=False))


# --- probes ---

def test_health_touches_nothing(client: TestClient, table: FakeTable) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "healthy"
    assert ISO_MS.match(body["timestamp"])
    assert table.calls == []


def test_ready_when_store_answers(client: TestClient, table: FakeTable) -> None:
    resp = client.get("/ready")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ready"
    assert table.calls == [("scan", {"TableName": "task-tracker-tasks", "Limit": 1})]


def test_not_ready_when_probe_fails(caplog: pytest.LogCaptureFixture) -> None:
    store = DynamoTaskStore("tasks", "us-west-2", client=FailingTable())
    with _client_for(lambda: store) as client, caplog.at_level(logging.INFO):
        resp = client.get("/ready")

    assert resp.status_code == 503
    body = resp.json()
    assert body["status"] == "not ready"
    assert body["reason"] == "DynamoDB connection failed: Requested resource not found"
    assert ISO_MS.match(body["timestamp"])
    assert any(r.levelno == logging.ERROR and getattr(r, "event", None) == "ready.failed" for r in caplog.records)


def test_not_ready_without_store() -> None:
    with _client_for(lambda: build_store("nonsense")) as client:
        resp = client.get("/ready")
        tasks_resp = client.get("/api/tasks")
        create_resp = client.post("/api/tasks", json={"title": "x"})

    assert resp.status_code == 503
    assert resp.json()["reason"] == "Task store not initialized"
    assert tasks_resp.status_code == 500
    assert tasks_resp.json() == {"error": "Task store not initialized"}
    assert create_resp.status_code == 500


# --- tasks ---

def test_create_then_list(client: TestClient, table: FakeTable) -> None:
    started = now_ms()
    resp = client.post("/api/tasks", json={"title": "Buy milk", "description": ""})

    assert resp.status_code == 201
    task = resp.json()["task"]
    assert task["title"] == "Buy milk"
    assert task["description"] == ""
    assert task["status"] == "pending"
    assert task["taskId"]
    assert task["createdAt"] >= started
    assert set(task) == {"taskId", "createdAt", "title", "description", "status"}

    listed = client.get("/api/tasks")
    assert listed.status_code == 200
    assert listed.json()["tasks"][0] == task


def test_list_is_newest_first(client: TestClient, table: FakeTable) -> None:
    table.items.extend([
        {"taskId": "old", "createdAt": 1, "title": "old", "description": "", "status": "pending"},
        {"taskId": "new", "createdAt": 3, "title": "new", "description": "", "status": "pending"},
        {"taskId": "mid", "createdAt": 2, "title": "mid", "description": "", "status": "pending"},
    ])
    for i in range(2):
        client.post("/api/tasks", json={"title": f"fresh {i}"})

    tasks = client.get("/api/tasks").json()["tasks"]

    assert len(tasks) == 5
    stamps = [t["createdAt"] for t in tasks]
    assert stamps == sorted(stamps, reverse=True)
    assert [t["taskId"] for t in tasks[-3:]] == ["new", "mid", "old"]


def test_create_trims_fields(client: TestClient) -> None:
    task = client.post("/api/tasks", json={"title": "  Walk dog  ", "description": "  park  "}).json()["task"]
    assert task["title"] == "Walk dog"
    assert task["description"] == "park"


def test_create_treats_false_description_as_empty(client: TestClient) -> None:
    resp = client.post("/api/tasks", json={"title": "x", "description": False})
    assert resp.status_code == 201
    assert resp.json()["task"]["description"] == ""


@pytest.mark.parametrize(
    "body, error",
    [
        ({"title": ""}, "Title is required and must be a string"),
        ({"title": "   "}, "Title is required and must be a string"),
        ({"title": "t" * 101}, "Title must be 100 characters or less"),
        ({"title": "ok", "description": ["x"]}, "Description must be a string"),
        ({"title": "ok", "description": "d" * 501}, "Description must be 500 characters or less"),
    ],
)
def test_create_rejections_write_nothing(client: TestClient, table: FakeTable, body, error: str) -> None:
    resp = client.post("/api/tasks", json=body)
    assert resp.status_code == 400
    assert resp.json() == {"error": error}
    assert not any(name == "put_item" for name, _ in table.calls)


def test_create_rejects_non_object_body(client: TestClient) -> None:
    resp = client.post("/api/tasks", content=b"[1, 2]", headers={"content-type": "application/json"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Request body must be a JSON object"}

    resp = client.post("/api/tasks", content=b"{not json", headers={"content-type": "application/json"})
    assert resp.status_code == 400


def test_store_failures_are_500_with_message(caplog: pytest.LogCaptureFixture) -> None:
    with _client_for(BrokenStore) as client, caplog.at_level(logging.INFO):
        listed = client.get("/api/tasks")
        created = client.post("/api/tasks", json={"title": "x"})
        ready = client.get("/ready")

    assert listed.status_code == 500
    assert listed.json() == {"error": "Failed to retrieve tasks", "message": "Failed to retrieve tasks: throttled"}
    assert created.status_code == 500
    assert created.json() == {"error": "Failed to create task", "message": "Failed to create task: throttled"}
    assert ready.status_code == 503

    errors = {getattr(r, "event", None) for r in caplog.records if r.levelno == logging.ERROR}
    assert {"tasks.list.failed", "task.create.failed", "ready.failed"} <= errors


def test_malformed_stored_item_is_500_json(client: TestClient, table: FakeTable, caplog: pytest.LogCaptureFixture) -> None:
    table.items.append({"taskId": "legacy", "createdAt": 1})

    with caplog.at_level(logging.INFO):
        resp = client.get("/api/tasks")

    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "Failed to retrieve tasks"
    assert body["message"].startswith("Failed to retrieve tasks: ")
    assert any(r.levelno == logging.ERROR and getattr(r, "event", None) == "tasks.list.failed" for r in caplog.records)


def test_success_and_rejection_logging(client: TestClient, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO):
        task = client.post("/api/tasks", json={"title": "Logged"}).json()["task"]
        client.post("/api/tasks", json={"title": ""})
        client.get("/api/tasks")

    by_event = {getattr(r, "event", None): r for r in caplog.records}
    created = by_event["task.create"]
    assert created.taskId == task["taskId"]
    assert created.title == "Logged"
    assert by_event["tasks.list"].count == 1
    assert by_event["task.create.rejected"].levelno == logging.INFO
    assert not any(r.levelno >= logging.ERROR for r in caplog.records)


# --- config / page ---

def test_config_defaults(client: TestClient) -> None:
    assert client.get("/api/config").json() == {
        "appTitle": "Task Tracker",
        "themeColor": "#0066cc",
        "awsRegion": "us-west-2",
    }


def test_config_follows_env_per_request(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_TITLE", "Ops Board")
    monkeypatch.setenv("APP_THEME_COLOR", "#ff8800")
    monkeypatch.setenv("AWS_REGION", "eu-west-1")
    assert client.get("/api/config").json() == {
        "appTitle": "Ops Board",
        "themeColor": "#ff8800",
        "awsRegion": "eu-west-1",
    }

    monkeypatch.setenv("APP_TITLE", "")
    assert client.get("/api/config").json()["appTitle"] == "Task Tracker"


def test_index_page_renders_config(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_TITLE", "Ops <Board>")
    resp = client.get("/")
    assert resp.status_code == 200
    assert "Ops &lt;Board&gt;" in resp.text
    assert 'id="task-form"' in resp.text
    assert client.get("/static/app.js").status_code == 200


def test_request_id_is_echoed(client: TestClient) -> None:
    resp = client.get("/health", headers={"x-request-id": "abc-123"})
    assert resp.headers["X-Request-ID"] == "abc-123"
    assert client.get("/health").headers["X-Request-ID"]
