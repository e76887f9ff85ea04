"""Tests for the HTTP tool-server executor."""

import json

import httpx
import pytest

from q8core.agent.tool_dispatcher import ToolDispatcher
from q8core.config import Settings
from q8core.core.errors import (
    AUTH_ERROR,
    CONNECTION_ERROR,
    ToolExecutionError,
)
from q8core.tools.mcp_executor import (
    McpServerExecutor,
    bind_tool_servers,
)

pytestmark = pytest.mark.asyncio


def _server(status: int, body, seen=None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status, json=body)

    return httpx.MockTransport(handler)


async def test_posts_execute_request() -> None:
    """Calls are forwarded as POST /execute with tool, params and userId."""
    seen = []
    executor = McpServerExecutor(
        "github",
        "http://localhost:3001/",
        transport=_server(200, {"success": True, "result": {"items": [1, 2]}}, seen),
    )

    result = await executor("github_search_code", {"query": "asyncio"}, "user-7")

    assert result.success
    assert result.message == "Successfully executed github_search_code"
    assert result.data == {"items": [1, 2]}
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "http://localhost:3001/execute"
    assert json.loads(request.content) == {
        "tool": "github_search_code",
        "params": {"query": "asyncio"},
        "userId": "user-7",
    }


async def test_error_status_raises() -> None:
    """Non-2xx answers raise with the server's error text."""
    executor = McpServerExecutor(
        "github", "http://gh", transport=_server(500, {"error": "Internal error"})
    )
    with pytest.raises(ToolExecutionError) as info:
        await executor("github_get_file", {"repo": "a/b", "path": "x"})
    assert str(info.value) == "github server returned 500 Internal Server Error: Internal error"


async def test_reported_failure_is_returned() -> None:
    """A 200 answer with success false becomes a failed result."""
    transport = _server(200, {"success": False, "error": "No active device"})
    executor = McpServerExecutor("spotify", "http://sp", transport=transport)
    result = await executor("spotify_play_pause", {"action": "play"})
    assert not result.success
    assert result.message == "No active device"


async def test_dispatcher_classifies_server_errors(registry) -> None:
    """Server status codes flow into the error classification."""
    transport = _server(401, {"error": "Bad credentials"})
    registry.bind("github", McpServerExecutor("github", "http://gh", transport=transport))
    dispatcher = ToolDispatcher(registry=registry)
    result = await dispatcher.execute("coder", "github_list_prs", {"repo": "a/b"})
    assert not result.success
    assert result.error.code == AUTH_ERROR
    assert "401 Unauthorized" in result.message


async def test_unreachable_server_is_a_connection_error(registry) -> None:
    """Transport failures classify as connection errors."""

    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("All connection attempts failed", request=request)

    registry.bind(
        "home", McpServerExecutor("home", "http://ha", transport=httpx.MockTransport(refuse))
    )
    result = await ToolDispatcher(registry=registry).execute("home", "control_device")
    assert result.error.code == CONNECTION_ERROR
    assert result.error.recoverable is True


async def test_bind_tool_servers(registry) -> None:
    """Server-backed groups are bound to the configured URLs; bound groups are kept."""

    async def custom(tool_name, args, user_id=None):
        return None

    registry.bind("spotify", custom)
    settings = Settings(GITHUB_MCP_URL="http://gh.internal:9001", MCP_REQUEST_TIMEOUT=5.0)

    bound = bind_tool_servers(registry, settings)

    assert set(bound) == {"github", "supabase", "google", "home"}
    assert bound["github"].base_url == "http://gh.internal:9001"
    assert bound["github"].timeout == 5.0
    assert registry.get_executor("coder", "supabase_run_sql") is bound["supabase"]
    assert registry.get_executor("personality", "spotify_search") is custom

    replaced = bind_tool_servers(registry, settings, replace=True)
    assert registry.get_executor("personality", "spotify_search") is replaced["spotify"]
