"""
Shared fixtures: a scripted fake model client so orchestration tests never call a real LLM.
"""

import threading

import pytest

from app.core.errors import OrchestrationCancelledError


class FakeModel:
    """Returns scripted responses in order; an Exception in the script is raised instead."""

    def __init__(self, responses: list) -> None:
        self.responses = list(responses)
        self.calls: list[tuple[str, str]] = []

    def generate(self, system_prompt: str, user_query: str, cancel_event: threading.Event | None = None) -> str:
        self.calls.append((system_prompt, user_query))
        if cancel_event is not None and cancel_event.is_set():
            raise OrchestrationCancelledError()
        if not self.responses:
            raise AssertionError("FakeModel called more times than scripted")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def fake_model():
    """Factory: fake_model("TO_USER: hi", ...) -> FakeModel."""
    def _make(*responses) -> FakeModel:
        return FakeModel(list(responses))
    return _make
