"""Schemas for the MCP-style function endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class FunctionCallRequest(BaseModel):
    """Request body for POST /mcp/tools/{specialist}/{name}."""

    params: dict[str, Any] = Field(default_factory=dict, description="Function parameters (same shape as a PARAMS line).")


class FunctionCallResponse(BaseModel):
    """Result of a direct function call."""

    specialist: str
    function: str
    result: str
