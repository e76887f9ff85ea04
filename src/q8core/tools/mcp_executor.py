"""
HTTP executor for tool servers.

Integration servers (GitHub, Google, Supabase, Home Assistant, Spotify) each run as a small HTTP
service exposing ``POST /execute`` with a ``{"tool", "params", "userId"}`` body.  A successful call
answers ``{"success": true, "result": ...}``; a failure answers a 4xx/5xx status with
``{"error": "..."}``.
"""

import logging
from typing import (
    Any,
    Dict,
    Optional,
)

import httpx

from q8core.config import (
    Settings,
    settings as default_settings,
)
from q8core.core.errors import ToolExecutionError
from q8core.core.schema import ToolResult
from q8core.tools import AgentToolRegistry

logger = logging.getLogger(__name__)


class McpServerExecutor:
    """Callable tool executor that forwards calls to one tool server."""

    def __init__(
        self,
        name: str,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.name = name
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def __repr__(self) -> str:
        return f"McpServerExecutor(name={self.name!r}, base_url={self.base_url!r})"

    async def __call__(
        self, tool_name: str, args: Dict[str, Any], user_id: Optional[str] = None
    ) -> ToolResult:
        payload = {"tool": tool_name, "params": args, "userId": user_id}
        logger.debug("POST %s/execute tool=%s", self.base_url, tool_name)

        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self._transport
        ) as client:
            response = await client.post("/execute", json=payload)

        if response.is_error:
            raise ToolExecutionError(
                f"{self.name} server returned {response.status_code} "
                f"{response.reason_phrase}: {_error_detail(response)}"
            )

        body = response.json()
        if isinstance(body, dict) and body.get("success") is False:
            return ToolResult(
                success=False,
                message=str(body.get("error") or f"{tool_name} failed on the {self.name} server"),
                data=body.get("result"),
            )

        result = body.get("result") if isinstance(body, dict) else body
        return ToolResult(success=True, message=f"Successfully executed {tool_name}", data=result)


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or "no details"
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return str(body)


# Tool group -> settings attribute with the server URL
TOOL_SERVERS: Dict[str, str] = {
    "github": "GITHUB_MCP_URL",
    "supabase": "SUPABASE_MCP_URL",
    "google": "GOOGLE_MCP_URL",
    "home": "HOME_ASSISTANT_MCP_URL",
    "spotify": "SPOTIFY_MCP_URL",
}


def bind_tool_servers(
    registry: AgentToolRegistry, settings: Settings | None = None, replace: bool = False
) -> Dict[str, McpServerExecutor]:
    """
    Bind every server-backed tool group of *registry* to an :class:`McpServerExecutor`.

    Groups that already have an executor are left alone unless *replace* is set.  Returns the
    executors that were bound, by group.
    """
    settings = settings or default_settings
    executors: Dict[str, McpServerExecutor] = {}
    for group, attribute in TOOL_SERVERS.items():
        if registry.is_bound(group) and not replace:
            logger.debug("Tool group '%s' already bound, skipping server binding", group)
            continue
        executor = McpServerExecutor(
            name=group, base_url=getattr(settings, attribute), timeout=settings.MCP_REQUEST_TIMEOUT
        )
        registry.bind(group, executor)
        executors[group] = executor
        logger.debug("Bound tool group '%s' to %s", group, executor.base_url)
    return executors
