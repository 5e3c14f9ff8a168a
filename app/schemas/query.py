"""Schemas for the query and agents endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field


class QueryRequest(BaseModel):
    """Request body for POST /query. Each question is answered independently (no server-side history)."""

    question: str = Field(..., min_length=1, description="User question for the tutor.")


class QueryResponse(BaseModel):
    """Response for POST /query."""

    id: int = Field(..., description="Message id, increasing across responses.")
    answer: str = Field(..., description="Final answer text.")
    agent: str = Field(..., description="Agent that produced the answer (tutor when answered directly or on error).")
    timestamp: datetime = Field(..., description="UTC time the answer was produced.")
    function: str | None = Field(None, description="Specialist function invoked, if any.")
    model_calls: int = Field(0, description="Number of model calls made (0-2).")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": 1,
                    "answer": "The speed of light (c) is 299792458 m/s. ...",
                    "agent": "physics",
                    "timestamp": "2025-01-01T12:00:00Z",
                    "function": "getPhysicsConstant",
                    "model_calls": 2,
                }
            ]
        }
    }


class AgentInfo(BaseModel):
    """One agent in GET /agents."""

    id: str
    name: str
    description: str
    functions: list[str] = Field(default_factory=list)
