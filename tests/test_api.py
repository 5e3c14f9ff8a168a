"""
API tests for /query and /agents.

The app is built with an orchestrator over a scripted fake model, so no LLM is called.
"""

from fastapi.testclient import TestClient

from app.agent.graph import Orchestrator
from app.core.errors import ModelTransportError
from app.main import create_app


def _client(model) -> TestClient:
    return TestClient(create_app(Orchestrator(model)))


def test_health(fake_model) -> None:
    response = _client(fake_model()).get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_query_delegates_and_runs_function(fake_model) -> None:
    model = fake_model(
        "TO_AGENT: physics\nWhat is the speed of light?",
        'EXECUTE_FUNCTION: getPhysicsConstant\nPARAMS: {"name": "speed of light"}',
    )
    response = _client(model).post("/query", json={"question": "What is the speed of light?"})
    assert response.status_code == 200
    data = response.json()
    assert "299792458" in data["answer"]
    assert data["agent"] == "physics"
    assert data["function"] == "getPhysicsConstant"
    assert data["model_calls"] == 2
    assert isinstance(data["id"], int)
    assert data["timestamp"]


def test_query_direct_answer(fake_model) -> None:
    model = fake_model("TO_USER: Hello! Ask me anything.")
    data = _client(model).post("/query", json={"question": "Hello"}).json()
    assert data["answer"] == "Hello! Ask me anything."
    assert data["agent"] == "tutor"
    assert data["function"] is None
    assert data["model_calls"] == 1
    assert len(model.calls) == 1


def test_query_model_failure_is_still_200(fake_model) -> None:
    model = fake_model(ModelTransportError("HTTP 502"))
    response = _client(model).post("/query", json={"question": "Hello"})
    assert response.status_code == 200
    assert response.json()["agent"] == "tutor"
    assert "HTTP 502" in response.json()["answer"]


def test_query_empty_question_returns_422(fake_model) -> None:
    response = _client(fake_model()).post("/query", json={"question": ""})
    assert response.status_code == 422


def test_query_missing_body_returns_422(fake_model) -> None:
    response = _client(fake_model()).post("/query")
    assert response.status_code == 422


def test_agents_lists_every_agent_with_functions(fake_model) -> None:
    response = _client(fake_model()).get("/agents")
    assert response.status_code == 200
    agents = {a["id"]: a for a in response.json()}
    assert len(agents) == 10
    assert agents["tutor"]["functions"] == []
    assert agents["tutor"]["name"] == "AI Tutor"
    assert "add" in agents["math"]["functions"]
    assert agents["physics"]["description"] == "Physics specialist"
