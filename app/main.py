# Run from project root: uvicorn app.main:app --reload

import logging

from fastapi import FastAPI

from app.agent.graph import Orchestrator
from app.agent.llm import ModelClient
from app.agent.registry import DEFAULT_REGISTRY
from app.api.routes import router
from app.core.config import LOG_LEVEL
from app.mcp.server import mcp_router

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)


def create_app(orchestrator: Orchestrator | None = None) -> FastAPI:
    """Build the API. The orchestrator (and its model client) is injected; defaults to env config."""
    if orchestrator is None:
        client = ModelClient()
        if not client.configured:
            logger.warning("No model provider configured; set OPENAI_API_KEY or HF_API_KEY. Queries will return an error answer.")
        orchestrator = Orchestrator(client, DEFAULT_REGISTRY)
    application = FastAPI(title="Multi-Agent Tutor Backend")
    application.state.orchestrator = orchestrator
    application.include_router(router)
    application.include_router(mcp_router, prefix="/mcp")
    return application


app = create_app()


if __name__ == "__main__":
    print("Multi-agent tutor booting...")
