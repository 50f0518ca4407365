from fastapi.testclient import TestClient

from api import state
from api.main import app


def test_metrics_endpoint_exposes_prometheus_text(client) -> None:
    r = client.get("/metrics")
    assert r.status_code == 200
    # Prometheus text exposition format content-type
    assert "text/plain" in r.headers.get("content-type", "")
    body = r.text
    assert "taskflow_requests_total" in body
    assert "taskflow_request_latency_seconds" in body
    assert "taskflow_tasks" in body


def test_parse_increments_intake_counter(client) -> None:
    r = client.post("/api/tasks/parse", json={"input": "Call client Rajeev tomorrow 5pm"})
    assert r.status_code == 200

    body = client.get("/metrics").text
    lines = body.splitlines()
    assert any(line.startswith('taskflow_intake_total{outcome="created"}') for line in lines)
    assert any(
        line.startswith('taskflow_requests_total{endpoint="/api/tasks/parse",status="ok"}')
        for line in lines
    )


def test_task_gauge_matches_store(client) -> None:
    client.post("/api/tasks", json={"name": "a", "assignee": "b", "dueDate": "c"})
    client.post("/api/tasks", json={"name": "a", "assignee": "b", "dueDate": "c", "status": "completed"})

    gauges = {}
    for line in client.get("/metrics").text.splitlines():
        if line.startswith("taskflow_tasks{"):
            name, value = line.rsplit(" ", 1)
            gauges[name] = float(value)

    assert gauges['taskflow_tasks{status="pending"}'] == 1
    assert gauges['taskflow_tasks{status="completed"}'] == 1
    assert gauges['taskflow_tasks{status="in-progress"}'] == 0


def test_health(client) -> None:
    r = client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "healthy"
    assert body["store"] == "memory"
    assert body["llm_provider"] == "fake"


def test_startup_without_api_key_does_not_crash(monkeypatch) -> None:
    monkeypatch.setenv("LLM_PROVIDER", "openai")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.setattr(state, "TASK_STORE", "memory")

    with TestClient(app) as c:
        assert c.get("/health").json()["llm_provider"] == "openai"
        r = c.post("/api/tasks/parse", json={"input": "Call mom"})
        assert r.status_code == 500
        assert c.get("/api/tasks").json() == []
