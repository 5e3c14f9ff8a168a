"""
LangGraph orchestrator: coordinator → (answer | specialist → (answer | function)).

At most two model calls per question: the coordinator (tutor) triages, and a
delegated specialist either answers or names a registered function that the
dispatcher runs. Every path ends in an answer; run() never raises.
"""

import itertools
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal, Protocol, TypedDict

from langgraph.graph import END, StateGraph

from app.agent.dispatcher import execute_function
from app.agent.prompts import COORDINATOR_SYSTEM_PROMPT, build_specialist_prompt
from app.agent.protocol import (
    DelegateToSpecialist,
    InvokeFunction,
    ParseContext,
    RespondToUser,
    parse_directive,
)
from app.agent.registry import DEFAULT_REGISTRY, FunctionRegistry
from app.agent.specialists import COORDINATOR, SpecialistId, parse_specialist_id
from app.core.errors import ModelError, OrchestrationCancelledError

logger = logging.getLogger(__name__)

COORDINATOR_EMPTY_ANSWER = "I'm here to help!"
SPECIALIST_EMPTY_ANSWER = "I couldn't process that request."
EMPTY_QUERY_ANSWER = "Please ask a question and I'll route it to the right tutor."

_message_ids = itertools.count(1)


class ModelHandle(Protocol):
    def generate(self, system_prompt: str, user_query: str, cancel_event: threading.Event | None = None) -> str:
        ...


@dataclass(frozen=True)
class OrchestrationResult:
    text: str
    specialist: SpecialistId
    message_id: int = field(default_factory=lambda: next(_message_ids))
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    function_name: str | None = None
    model_calls: int = 0


class OrchestratorState(TypedDict):
    query: str
    cancel_event: Any  # threading.Event | None
    specialist: str  # SpecialistId value the answer is attributed to
    forwarded_query: str
    function_name: str
    function_params: dict
    answer: str
    done: bool
    model_calls: int


def _model_failure_answer(error: Exception) -> str:
    if isinstance(error, OrchestrationCancelledError):
        return error.message
    message = getattr(error, "message", None) or str(error) or type(error).__name__
    return f"Sorry, I encountered an error while processing your request: {message}"


class Orchestrator:
    """Two-stage delegation pipeline over an injected model handle and function registry."""

    def __init__(self, model: ModelHandle, registry: FunctionRegistry = DEFAULT_REGISTRY) -> None:
        self.model = model
        self.registry = registry
        self._graph = self._build_graph()

    # --- nodes ---

    def _call_coordinator(self, state: OrchestratorState) -> dict:
        """Node 1: coordinator decides to answer directly or delegate."""
        query = state.get("query") or ""
        calls = (state.get("model_calls") or 0) + 1
        logger.info("[graph:call_coordinator] IN  query=%r", query[:200])
        try:
            raw = self.model.generate(COORDINATOR_SYSTEM_PROMPT, query, state.get("cancel_event"))
        except (ModelError, OrchestrationCancelledError) as e:
            logger.warning("[graph:call_coordinator] model call failed: %s", e)
            return {"answer": _model_failure_answer(e), "specialist": COORDINATOR.value, "done": True, "model_calls": calls}
        logger.info("[graph:call_coordinator] llm_raw=%r", raw[:200])

        directive = parse_directive(raw, ParseContext.COORDINATOR)
        if isinstance(directive, DelegateToSpecialist):
            logger.info("[graph:call_coordinator] OUT delegate to=%r", directive.specialist)
            return {
                "specialist": directive.specialist,
                "forwarded_query": directive.forwarded_query,
                "done": False,
                "model_calls": calls,
            }
        text = directive.text if isinstance(directive, RespondToUser) else ""
        logger.info("[graph:call_coordinator] OUT direct answer_len=%d", len(text))
        return {"answer": text or COORDINATOR_EMPTY_ANSWER, "specialist": COORDINATOR.value, "done": True, "model_calls": calls}

    def _call_specialist(self, state: OrchestratorState) -> dict:
        """Node 2: delegated specialist answers or names a function."""
        raw_id = state.get("specialist") or ""
        specialist = parse_specialist_id(raw_id)
        # SpecialistId is closed, so an id outside it has no prompt or functions to offer;
        # the answer is attributed to the tutor because no specialist produced it.
        if specialist is None or specialist == COORDINATOR:
            logger.warning("[graph:call_specialist] unknown specialist %r", raw_id)
            return {
                "answer": f"Sorry, the '{raw_id}' specialist is not available. Please try rephrasing your question.",
                "specialist": COORDINATOR.value,
                "done": True,
            }

        query = (state.get("forwarded_query") or "").strip() or state.get("query") or ""
        functions = list(self.registry.lookup(specialist).values())
        logger.info(
            "[graph:call_specialist] IN  specialist=%s functions=%s query=%r",
            specialist.value, [fn.name for fn in functions], query[:200],
        )
        system_prompt = build_specialist_prompt(specialist, functions)
        calls = (state.get("model_calls") or 0) + 1
        try:
            raw = self.model.generate(system_prompt, query, state.get("cancel_event"))
        except (ModelError, OrchestrationCancelledError) as e:
            logger.warning("[graph:call_specialist] model call failed: %s", e)
            return {"answer": _model_failure_answer(e), "specialist": COORDINATOR.value, "done": True, "model_calls": calls}
        logger.info("[graph:call_specialist] llm_raw=%r", raw[:200])

        directive = parse_directive(raw, ParseContext.SPECIALIST)
        if isinstance(directive, InvokeFunction):
            logger.info("[graph:call_specialist] OUT invoke function=%r", directive.name)
            return {
                "specialist": specialist.value,
                "function_name": directive.name,
                "function_params": dict(directive.params),
                "done": False,
                "model_calls": calls,
            }
        text = directive.text if isinstance(directive, RespondToUser) else ""
        logger.info("[graph:call_specialist] OUT direct answer_len=%d", len(text))
        return {"answer": text or SPECIALIST_EMPTY_ANSWER, "specialist": specialist.value, "done": True, "model_calls": calls}

    def _invoke_function(self, state: OrchestratorState) -> dict:
        """Node 3: run the named function and annotate the result."""
        specialist = SpecialistId(state["specialist"])
        name = state.get("function_name") or ""
        result = execute_function(self.registry, specialist, name, state.get("function_params"))
        answer = f"{result}\n\n🤖 Agent: {specialist.value.upper()} | Function: {name}"
        logger.info("[graph:invoke_function] OUT specialist=%s function=%s result_len=%d", specialist.value, name, len(result))
        return {"answer": answer, "done": True}

    # --- routing ---

    @staticmethod
    def _route_after_coordinator(state: OrchestratorState) -> Literal["call_specialist", "__end__"]:
        return END if state.get("done") else "call_specialist"

    @staticmethod
    def _route_after_specialist(state: OrchestratorState) -> Literal["invoke_function", "__end__"]:
        return END if state.get("done") else "invoke_function"

    def _build_graph(self):
        """
        Build and compile the orchestration graph.
        call_coordinator → (END | call_specialist → (END | invoke_function → END)).
        """
        graph = StateGraph(OrchestratorState)

        graph.add_node("call_coordinator", self._call_coordinator)
        graph.add_node("call_specialist", self._call_specialist)
        graph.add_node("invoke_function", self._invoke_function)

        graph.set_entry_point("call_coordinator")
        graph.add_conditional_edges("call_coordinator", self._route_after_coordinator)
        graph.add_conditional_edges("call_specialist", self._route_after_specialist)
        graph.add_edge("invoke_function", END)

        return graph.compile()

    # --- entry point ---

    def run(self, query: str, cancel_event: threading.Event | None = None) -> OrchestrationResult:
        """
        Answer one question. Always returns a result; model failures, cancellation and
        unexpected faults become an answer attributed to the coordinator.
        """
        query = "" if query is None else str(query)
        if not query.strip():
            return OrchestrationResult(text=EMPTY_QUERY_ANSWER, specialist=COORDINATOR)
        logger.info("[run_orchestrator] START query=%r", query[:200])
        initial: OrchestratorState = {
            "query": query,
            "cancel_event": cancel_event,
            "specialist": COORDINATOR.value,
            "forwarded_query": "",
            "function_name": "",
            "function_params": {},
            "answer": "",
            "done": False,
            "model_calls": 0,
        }
        try:
            final = self._graph.invoke(initial)
        except Exception as e:
            logger.exception("[run_orchestrator] orchestration failed")
            return OrchestrationResult(text=f"Error: {e}", specialist=COORDINATOR)

        specialist = parse_specialist_id(final.get("specialist")) or COORDINATOR
        result = OrchestrationResult(
            text=final.get("answer") or COORDINATOR_EMPTY_ANSWER,
            specialist=specialist,
            function_name=final.get("function_name") or None,
            model_calls=final.get("model_calls") or 0,
        )
        logger.info(
            "[run_orchestrator] END id=%d specialist=%s function=%s model_calls=%d answer_len=%d",
            result.message_id, specialist.value, result.function_name, result.model_calls, len(result.text),
        )
        return result
