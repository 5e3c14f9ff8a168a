"""
Minimal MCP-style tool server: exposes the specialist function registry as a
standardized tool interface, so external agents (or tests) can call a function
directly without going through the model.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from app.agent.dispatcher import execute_function
from app.agent.graph import Orchestrator
from app.agent.specialists import COORDINATOR, parse_specialist_id
from app.api.routes import get_orchestrator
from app.schemas.tools import FunctionCallRequest, FunctionCallResponse

logger = logging.getLogger(__name__)

mcp_router = APIRouter(tags=["mcp"])


@mcp_router.get(
    "/tools",
    summary="MCP tool discovery",
    description="List every specialist function with its parameter hint.",
)
def mcp_list_tools(orchestrator: Orchestrator = Depends(get_orchestrator)) -> dict[str, list[dict[str, Any]]]:
    registry = orchestrator.registry
    tools = [
        {"specialist": sid.value, "name": entry.name, "description": entry.description}
        for sid in registry.specialists()
        for entry in registry.lookup(sid).values()
    ]
    return {"tools": tools}


@mcp_router.post(
    "/tools/{specialist}/{name}",
    response_model=FunctionCallResponse,
    summary="MCP tool: call a specialist function",
    description="Runs the named function through the dispatcher. Unknown specialists return 404; unknown functions return the dispatcher's 'not found' text.",
)
def mcp_call_tool(
    specialist: str,
    name: str,
    body: FunctionCallRequest | None = None,
    orchestrator: Orchestrator = Depends(get_orchestrator),
) -> FunctionCallResponse:
    logger.info("MCP tool called: %s/%s", specialist, name)
    sid = parse_specialist_id(specialist)
    if sid is None or sid == COORDINATOR:
        raise HTTPException(status_code=404, detail=f"Unknown specialist: {specialist!r}")
    params = body.params if body is not None else {}
    result = execute_function(orchestrator.registry, sid, name, params)
    return FunctionCallResponse(specialist=sid.value, function=name, result=result)
