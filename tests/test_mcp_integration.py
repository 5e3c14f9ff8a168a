"""
Integration tests for MCP tool endpoints.

Functions are called directly through the dispatcher; the model is never used.
"""

import pytest
from fastapi.testclient import TestClient

from app.agent.graph import Orchestrator
from app.main import create_app


@pytest.fixture
def client(fake_model) -> TestClient:
    return TestClient(create_app(Orchestrator(fake_model())))


def test_mcp_list_tools(client: TestClient) -> None:
    """GET /mcp/tools lists every specialist function."""
    response = client.get("/mcp/tools")
    assert response.status_code == 200
    tools = response.json()["tools"]
    names = {(t["specialist"], t["name"]) for t in tools}
    assert ("physics", "getPhysicsConstant") in names
    assert ("math", "add") in names
    assert all(t["specialist"] != "tutor" for t in tools)


def test_mcp_call_add(client: TestClient) -> None:
    """POST /mcp/tools/math/add returns the function's text."""
    response = client.post("/mcp/tools/math/add", json={"params": {"a": 2, "b": 3}})
    assert response.status_code == 200
    assert response.json() == {"specialist": "math", "function": "add", "result": "The sum of 2 and 3 is 5."}


def test_mcp_call_is_case_insensitive_on_specialist(client: TestClient) -> None:
    response = client.post("/mcp/tools/Physics/getPhysicsConstant", json={"params": {"name": "speed of light"}})
    assert response.status_code == 200
    assert "299792458" in response.json()["result"]


def test_mcp_unknown_function_returns_not_found_text(client: TestClient) -> None:
    response = client.post("/mcp/tools/math/integrate", json={"params": {}})
    assert response.status_code == 200
    assert "not found" in response.json()["result"]


def test_mcp_without_body_uses_empty_params(client: TestClient) -> None:
    response = client.post("/mcp/tools/math/add")
    assert response.status_code == 200
    assert response.json()["result"] == "Error: Both parameters must be numbers."


@pytest.mark.parametrize("specialist", ["astrology", "tutor"])
def test_mcp_unknown_specialist_returns_404(client: TestClient, specialist: str) -> None:
    response = client.post(f"/mcp/tools/{specialist}/add", json={"params": {}})
    assert response.status_code == 404
