"""
HTTP API over the agent core.

It exposes the following endpoints:
- **GET /health**                      - liveness probe.
- **GET /health/models**               - resolved model per agent and whether it has a key.
- **GET /health/tools**                - integration credential preflight per agent.
- **GET /agents/{agent}/tools**        - tool declarations in OpenAI function-calling format.
- **GET /agents/{agent}/models**       - credentialed models a UI may offer for the agent.
- **POST /agents/{agent}/tools/{tool}** - execute a tool: {"args", "user_id", "confirmed"}
"""

import logging
from contextlib import asynccontextmanager
from typing import (
    Any,
    AsyncIterator,
    Dict,
    List,
)

from fastapi import (
    FastAPI,
    HTTPException,
)
from fastapi.responses import JSONResponse

from q8core.agent import (
    model_router,
    tool_dispatcher,
)
from q8core.agent.confirmation import requires_confirmation
from q8core.agent.preflight import check_all_agents_availability
from q8core.api.models import (
    ConfirmationRequired,
    ToolCallRequest,
)
from q8core.common import (
    AnsiColors,
    colored_print,
)
from q8core.config import settings
from q8core.core.schema import (
    AgentType,
    ModelConfig,
    ModelHealth,
    ToolAvailability,
    ToolResult,
)
from q8core.tools import default_registry
from q8core.tools.mcp_executor import bind_tool_servers

logger = logging.getLogger(__name__)

_SECRET_SETTINGS = {
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "GOOGLE_GENERATIVE_AI_KEY",
    "PERPLEXITY_API_KEY",
    "XAI_API_KEY",
}


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    """Bind the server-backed tool groups before serving requests."""
    bind_tool_servers(default_registry, settings)
    yield


app = FastAPI(
    title="q8core API",
    version="0.1.0",
    description="Multi-agent model routing and tool dispatch",
    lifespan=lifespan,
)


# ---------------------------------------------------------------------------
# Helper functions
# ---------------------------------------------------------------------------
def _agent_or_404(agent: str) -> AgentType:
    try:
        return AgentType.parse(agent)
    except ValueError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
@app.get("/health", summary="Health check")
async def health() -> dict[str, str]:
    """Return a simple liveness payload."""
    return {"status": "ok"}


@app.get("/health/models", response_model=Dict[str, ModelHealth], summary="Model health")
async def models_health() -> Dict[str, ModelHealth]:
    """Resolve every agent's model and report whether a key is configured."""
    return {str(agent): health for agent, health in model_router.check_model_health().items()}


@app.get("/health/tools", response_model=Dict[str, ToolAvailability], summary="Tool preflight")
async def tools_health() -> Dict[str, ToolAvailability]:
    """Report missing integration credentials per agent."""
    return {str(agent): result for agent, result in check_all_agents_availability().items()}


@app.get("/agents/{agent}/tools", summary="List agent tools")
async def agent_tools(agent: str) -> List[Dict[str, Any]]:
    """Tool declarations visible to *agent*'s LLM."""
    return default_registry.get_openai_tools(_agent_or_404(agent))


@app.get("/agents/{agent}/models", response_model=List[ModelConfig], summary="List agent models")
async def agent_models(agent: str) -> List[ModelConfig]:
    """Credentialed models for *agent*.  API keys are never serialised."""
    return model_router.get_available_models(_agent_or_404(agent))


@app.post(
    "/agents/{agent}/tools/{tool}",
    response_model=ToolResult,
    responses={409: {"model": ConfirmationRequired}},
    summary="Execute a tool",
)
async def execute_tool(agent: str, tool: str, req: ToolCallRequest) -> Any:
    """Run *tool* for *agent*; sensitive calls need ``confirmed: true``."""
    agent_type = _agent_or_404(agent)

    if requires_confirmation(tool, req.args) and not req.confirmed:
        logger.info("Tool %s for %s is awaiting confirmation", tool, agent_type)
        return JSONResponse(
            status_code=409, content=ConfirmationRequired(tool=tool).model_dump()
        )

    return await tool_dispatcher.execute_agent_tool(agent_type, tool, req.args, req.user_id)


# ---------------------------------------------------------------------------
# Public helper to launch the API (imported by main.py)
# ---------------------------------------------------------------------------
def run_api(
    host: str = "0.0.0.0", port: int = 8000, reload: bool = False, log_level: str | None = None
) -> None:
    """Start a uvicorn server hosting *app*.

    Parameters
    ----------
    host, port:
        Bind address for the HTTP server.
    reload:
        If *True*, enable auto-reload.
    log_level:
        Logging level to use (default from settings if not provided).
    """

    # Lazy import - keeps uvicorn out of pkg-import time
    import uvicorn  # pylint: disable=import-outside-toplevel

    if log_level is None:
        log_level = settings.LOG_LEVEL

    logger.info(
        "Starting q8core API at %s:%d (reload=%s, log_level=%s)", host, port, reload, log_level
    )
    logger.debug("API settings: %s", settings.model_dump(exclude=_SECRET_SETTINGS))

    colored_print(f"q8core API is running at http://localhost:{port}.", AnsiColors.GREEN)
    colored_print(f"Visit http://localhost:{port}/docs for API documentation.", AnsiColors.BLUE)
    uvicorn.run(
        "q8core.api.app:app",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )


# ---------------------------------------------------------------------------
# `python -m q8core.api.app` helper
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    run_api(reload=True)
