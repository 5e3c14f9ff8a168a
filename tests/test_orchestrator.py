"""
Orchestration tests: coordinator → specialist → function flow over a scripted fake model.
"""

import threading

from app.agent.graph import (
    COORDINATOR_EMPTY_ANSWER,
    EMPTY_QUERY_ANSWER,
    Orchestrator,
)
from app.agent.prompts import COORDINATOR_SYSTEM_PROMPT
from app.agent.specialists import COORDINATOR, SpecialistId
from app.core.config import COORDINATOR_ID
from app.core.errors import ModelTimeoutError, ModelTransportError, ModelUnavailableError


def test_speed_of_light_end_to_end(fake_model) -> None:
    model = fake_model(
        "TO_AGENT: physics\nWhat is the speed of light?",
        'EXECUTE_FUNCTION: getPhysicsConstant\nPARAMS: {"name": "speed of light"}',
    )
    result = Orchestrator(model).run("What is the speed of light?")

    assert "299792458" in result.text
    assert result.text.endswith("🤖 Agent: PHYSICS | Function: getPhysicsConstant")
    assert result.specialist is SpecialistId.PHYSICS
    assert result.function_name == "getPhysicsConstant"
    assert result.model_calls == 2
    assert model.calls[0] == (COORDINATOR_SYSTEM_PROMPT, "What is the speed of light?")
    specialist_prompt, forwarded = model.calls[1]
    assert "getPhysicsConstant" in specialist_prompt
    assert forwarded == "What is the speed of light?"


def test_greeting_is_answered_directly_with_one_call(fake_model) -> None:
    model = fake_model("TO_USER: Hello! What would you like to learn about?")
    result = Orchestrator(model).run("Hello")

    assert len(model.calls) == 1
    assert result.text == "Hello! What would you like to learn about?"
    assert result.specialist is SpecialistId.TUTOR
    assert result.function_name is None
    assert result.model_calls == 1


def test_unparseable_coordinator_output_is_the_answer(fake_model) -> None:
    model = fake_model("Sure, the answer is 4.")
    result = Orchestrator(model).run("What is 2+2?")
    assert result.text == "Sure, the answer is 4."
    assert result.specialist is SpecialistId.TUTOR
    assert len(model.calls) == 1


def test_empty_direct_answer_uses_default(fake_model) -> None:
    result = Orchestrator(fake_model("TO_USER:")).run("Hi")
    assert result.text == COORDINATOR_EMPTY_ANSWER


def test_empty_forwarded_query_falls_back_to_original(fake_model) -> None:
    model = fake_model("TO_AGENT: math", "TO_USER: 4")
    result = Orchestrator(model).run("What is 2+2?")
    assert model.calls[1][1] == "What is 2+2?"
    assert result.text == "4"
    assert result.specialist is SpecialistId.MATH


def test_specialist_free_text_is_attributed_to_specialist(fake_model) -> None:
    model = fake_model("TO_AGENT: biology\nWhy are leaves green?", "Chlorophyll reflects green light.")
    result = Orchestrator(model).run("Why are leaves green?")
    assert result.text == "Chlorophyll reflects green light."
    assert result.specialist is SpecialistId.BIOLOGY
    assert result.model_calls == 2


def test_math_function_with_params(fake_model) -> None:
    model = fake_model("TO_AGENT: math\nAdd 2 and 3", 'EXECUTE_FUNCTION: add\nPARAMS: {"a":2,"b":3}')
    result = Orchestrator(model).run("Add 2 and 3")
    assert result.text.startswith("The sum of 2 and 3 is 5.")
    assert result.specialist is SpecialistId.MATH


def test_hallucinated_function_is_reported(fake_model) -> None:
    model = fake_model("TO_AGENT: math\nIntegrate x", "EXECUTE_FUNCTION: integrate\nPARAMS: {}")
    result = Orchestrator(model).run("Integrate x")
    assert "not found" in result.text
    assert result.specialist is SpecialistId.MATH


def test_unknown_specialist_ends_without_second_call(fake_model) -> None:
    model = fake_model("TO_AGENT: astrology\nWhat is my sign?")
    result = Orchestrator(model).run("What is my sign?")
    assert len(model.calls) == 1
    assert "not available" in result.text
    assert result.specialist is SpecialistId.TUTOR


def test_delegating_to_coordinator_is_rejected(fake_model) -> None:
    model = fake_model("TO_AGENT: tutor\nHello")
    result = Orchestrator(model).run("Hello")
    assert len(model.calls) == 1
    assert result.specialist is SpecialistId.TUTOR


def test_coordinator_model_failure_is_an_answer(fake_model) -> None:
    model = fake_model(ModelTimeoutError("Model call exceeded 30s"))
    result = Orchestrator(model).run("What is the speed of light?")
    assert result.text == "Sorry, I encountered an error while processing your request: Model call exceeded 30s"
    assert result.specialist is SpecialistId.TUTOR
    assert result.model_calls == 1


def test_specialist_model_failure_is_attributed_to_coordinator(fake_model) -> None:
    model = fake_model("TO_AGENT: physics\nWhat is c?", ModelTransportError("HTTP 503"))
    result = Orchestrator(model).run("What is c?")
    assert "HTTP 503" in result.text
    assert result.specialist is SpecialistId.TUTOR
    assert result.model_calls == 2


def test_unconfigured_model_is_an_answer(fake_model) -> None:
    model = fake_model(ModelUnavailableError("No model provider configured."))
    result = Orchestrator(model).run("Hello")
    assert "No model provider configured." in result.text


def test_cancelled_request_yields_terminal_answer(fake_model) -> None:
    cancel = threading.Event()
    cancel.set()
    result = Orchestrator(fake_model("TO_USER: never")).run("Hello", cancel_event=cancel)
    assert result.text == "Request cancelled."
    assert result.specialist is SpecialistId.TUTOR


def test_unexpected_fault_never_escapes(fake_model) -> None:
    result = Orchestrator(fake_model(RuntimeError("bug"))).run("Hello")
    assert result.text.startswith("Error:") and "bug" in result.text
    assert result.specialist is SpecialistId.TUTOR


def test_blank_query_makes_no_model_call(fake_model) -> None:
    model = fake_model()
    result = Orchestrator(model).run("   ")
    assert result.text == EMPTY_QUERY_ANSWER
    assert model.calls == []


def test_message_ids_increase(fake_model) -> None:
    orchestrator = Orchestrator(fake_model("TO_USER: a", "TO_USER: b"))
    first = orchestrator.run("one")
    second = orchestrator.run("two")
    assert second.message_id > first.message_id
    assert second.timestamp >= first.timestamp


def test_deeply_nested_params_still_run_the_function(fake_model) -> None:
    nested = "[" * 100000 + "]" * 100000
    model = fake_model("TO_AGENT: biology\nWhat is DNA?", f"EXECUTE_FUNCTION: explainDNA\nPARAMS: {nested}")
    result = Orchestrator(model).run("What is DNA?")
    assert result.specialist is SpecialistId.BIOLOGY
    assert result.function_name == "explainDNA"
    assert "DNA" in result.text and not result.text.startswith("Error")


def test_query_reaches_the_model_unmodified(fake_model) -> None:
    model = fake_model("TO_USER: 4")
    Orchestrator(model).run("  What is 2+2?\n")
    assert model.calls[0][1] == "  What is 2+2?\n"


def test_coordinator_id_comes_from_config() -> None:
    assert COORDINATOR.value == COORDINATOR_ID == "tutor"
