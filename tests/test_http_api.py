"""
Feature: HTTP binding of the board and task endpoints
  As a frontend application
  I want JSON endpoints with tagged error bodies
  So that I can tell failures apart by their kind

Scenario: Create board and task over HTTP
Scenario: Errors carry a machine-readable kind and message
Scenario: Values of the wrong JSON type are rejected with a kind
Scenario: Store failures answer 503
Scenario: Health check
"""

import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine, Session, SQLModel
from database import get_session
from main import app


@pytest.fixture(name="client")
def client_fixture():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    SQLModel.metadata.create_all(engine)

    def get_session_override():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()
    SQLModel.metadata.drop_all(engine)


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"message": "Kanban Board API is running"}


def test_board_and_task_round_trip(client):
    response = client.post("/api/boards", json={"name": "Launch", "color": "#00aa00"})
    assert response.status_code == 201
    board = response.json()
    assert board["name"] == "Launch"

    response = client.post("/api/tasks", json={
        "board_id": board["id"],
        "title": "Write copy",
        "priority": "medium",
        "status": "done"
    })
    assert response.status_code == 201
    task = response.json()
    assert task["status"] == "todo"
    assert task["priority"] == "medium"

    response = client.patch(f"/api/tasks/{task['id']}", json={"status": "in_progress", "priority": None})
    assert response.status_code == 200
    updated = response.json()
    assert updated["status"] == "in_progress"
    assert updated["priority"] is None
    assert updated["title"] == "Write copy"

    response = client.get(f"/api/boards/{board['id']}")
    assert response.status_code == 200
    assert [t["id"] for t in response.json()["tasks"]] == [task["id"]]

    response = client.delete(f"/api/boards/{board['id']}")
    assert response.status_code == 200
    assert response.json()["id"] == board["id"]

    response = client.get("/api/tasks", params={"board_id": board["id"]})
    assert response.status_code == 200
    assert response.json() == []

    response = client.get(f"/api/tasks/{task['id']}")
    assert response.status_code == 404
    assert response.json() == {"error": "Task not found", "kind": "not_found"}


def test_delete_task_returns_snapshot(client):
    board = client.post("/api/boards", json={"name": "Board"}).json()
    task = client.post("/api/tasks", json={"board_id": board["id"], "title": "Temporary"}).json()

    response = client.delete(f"/api/tasks/{task['id']}")

    assert response.status_code == 200
    assert response.json()["title"] == "Temporary"
    assert client.get(f"/api/tasks/{task['id']}").status_code == 404


@pytest.mark.parametrize("method, path, body, status_code, kind", [
    ("post", "/api/boards", {"name": " "}, 400, "missing_field"),
    ("post", "/api/tasks", {"board_id": "board_missing", "title": "Orphan"}, 404, "board_not_found"),
    ("post", "/api/tasks", {"title": "No board"}, 400, "missing_field"),
    ("get", "/api/tasks", None, 400, "missing_parameter"),
    ("patch", "/api/tasks/ghost", {"status": "done"}, 404, "not_found"),
    ("delete", "/api/boards/board_missing", None, 404, "not_found"),
])
def test_error_bodies(client, method, path, body, status_code, kind):
    kwargs = {"json": body} if body is not None else {}
    response = client.request(method.upper(), path, **kwargs)

    assert response.status_code == status_code
    payload = response.json()
    assert payload["kind"] == kind
    assert payload["error"]


def test_invalid_priority_creates_nothing(client):
    board = client.post("/api/boards", json={"name": "Launch"}).json()

    response = client.post("/api/tasks", json={"board_id": board["id"], "title": "Hurry", "priority": "urgent"})

    assert response.status_code == 400
    assert response.json() == {
        "error": "Invalid priority. Must be one of: low, medium, high",
        "kind": "invalid_enum"
    }
    assert client.get("/api/tasks", params={"board_id": board["id"]}).json() == []


@pytest.mark.parametrize("field, value", [("priority", 5), ("priority", ["high"]), ("status", 1)])
def test_non_string_enum_values_are_invalid_enum(client, field, value):
    board = client.post("/api/boards", json={"name": "Launch"}).json()
    task = client.post("/api/tasks", json={"board_id": board["id"], "title": "Typed"}).json()

    if field == "status":
        response = client.patch(f"/api/tasks/{task['id']}", json={field: value})
        allowed = "todo, in_progress, done"
    else:
        response = client.post("/api/tasks", json={"board_id": board["id"], "title": "Typed", field: value})
        allowed = "low, medium, high"

    assert response.status_code == 400
    assert response.json() == {"error": f"Invalid {field}. Must be one of: {allowed}", "kind": "invalid_enum"}
    assert client.get(f"/api/tasks/{task['id']}").json()["status"] == "todo"
    assert len(client.get("/api/tasks", params={"board_id": board["id"]}).json()) == 1


@pytest.mark.parametrize("overrides, kind", [
    ({"board_id": 42}, "missing_field"),
    ({"title": 7}, "missing_field"),
    ({"position": "first"}, "invalid_field"),
    ({"due_date": 20261031}, "invalid_field"),
])
def test_wrong_json_types_carry_a_kind(client, overrides, kind):
    board = client.post("/api/boards", json={"name": "Launch"}).json()
    body = dict({"board_id": board["id"], "title": "Typed"}, **overrides)

    response = client.post("/api/tasks", json=body)

    assert response.status_code == 400
    assert response.json()["kind"] == kind
    assert client.get("/api/tasks", params={"board_id": board["id"]}).json() == []


def test_malformed_body_is_tagged_invalid_field(client):
    response = client.post("/api/tasks", content="not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    payload = response.json()
    assert payload["kind"] == "invalid_field"
    assert payload["error"]


def test_store_failure_answers_503():
    broken_session = MagicMock(spec=Session)
    broken_session.exec.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))

    def get_session_override():
        yield broken_session

    app.dependency_overrides[get_session] = get_session_override
    try:
        response = TestClient(app).get("/api/tasks/task_any")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 503
    assert response.json()["kind"] == "store_unavailable"
