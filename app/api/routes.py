"""
API route aggregator: register endpoints; no logic, only delegate to the orchestrator and registry.
"""

import logging

from fastapi import APIRouter, Depends, Request

from app.agent.graph import Orchestrator
from app.agent.specialists import SPECIALIST_PROFILES
from app.schemas.query import AgentInfo, QueryRequest, QueryResponse

logger = logging.getLogger(__name__)
router = APIRouter()


def get_orchestrator(request: Request) -> Orchestrator:
    """Orchestrator handle created by create_app() and stored on app.state."""
    return request.app.state.orchestrator


# --- System ---

@router.get("/", tags=["system"])
def root():
    return {"status": "Multi-agent tutor backend running"}


@router.get("/health", tags=["system"])
def health():
    return {"ok": True}


# --- Agents ---

@router.get(
    "/agents",
    response_model=list[AgentInfo],
    tags=["agents"],
    summary="List the tutor and its specialists",
    description="Returns every agent with its display name, description and the functions it can invoke.",
)
def list_agents(orchestrator: Orchestrator = Depends(get_orchestrator)) -> list[AgentInfo]:
    registry = orchestrator.registry
    return [
        AgentInfo(
            id=sid.value,
            name=profile.name,
            description=profile.description,
            functions=registry.function_names(sid),
        )
        for sid, profile in SPECIALIST_PROFILES.items()
    ]


# --- Query ---

@router.post(
    "/query",
    response_model=QueryResponse,
    tags=["query"],
    summary="Ask the tutor a question",
    description="The tutor answers directly or delegates to a specialist, which may run a function. Always returns an answer; failures are reported in the answer text.",
)
def post_query(body: QueryRequest, orchestrator: Orchestrator = Depends(get_orchestrator)) -> QueryResponse:
    logger.info("[api:post_query] IN  question=%r", body.question)
    result = orchestrator.run(body.question)
    logger.info("[api:post_query] OUT agent=%s function=%s answer_len=%d", result.specialist.value, result.function_name, len(result.text))
    return QueryResponse(
        id=result.message_id,
        answer=result.text,
        agent=result.specialist.value,
        timestamp=result.timestamp,
        function=result.function_name,
        model_calls=result.model_calls,
    )
