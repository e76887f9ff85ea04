"""
Dispatches agent tool calls to their executors and wraps every outcome in a :class:`ToolResult`.

The dispatcher is the single place where exceptions from tool executors are caught.  Whatever an
executor does (returns a value, returns a failure, raises, or hangs past its timeout), the caller
gets back a well-formed result carrying ``meta.duration_ms`` and ``meta.trace_id``.
"""

import asyncio
import logging
import time
import traceback
import uuid
from typing import (
    Any,
    Awaitable,
    Dict,
    Mapping,
    Optional,
)

from q8core.config import settings
from q8core.core.errors import (
    ToolExecutionError,
    ToolTimeoutError,
    classify_error,
    error_message,
    friendly_error,
    recovery_suggestion,
)
from q8core.core.schema import (
    AgentType,
    ToolError,
    ToolMeta,
    ToolResult,
)
from q8core.tools import (
    AgentToolRegistry,
    default_registry,
)

logger = logging.getLogger(__name__)

# Per-tool timeouts in milliseconds.  Anything not listed uses the configured default.
TOOL_TIMEOUTS_MS: Dict[str, int] = {
    # GitHub
    "github_search_code": 15000,
    "github_get_file": 10000,
    "github_list_prs": 10000,
    "github_create_issue": 15000,
    "github_create_pr": 20000,
    # Supabase
    "supabase_run_sql": 30000,
    "supabase_get_schema": 10000,
    "supabase_vector_search": 15000,
    # Google
    "gmail_list_messages": 15000,
    "gmail_send_message": 20000,
    "calendar_list_events": 10000,
    "calendar_create_event": 15000,
    "drive_search_files": 15000,
    # Home Assistant
    "control_device": 5000,
    "set_climate": 5000,
    "activate_scene": 5000,
    "get_device_state": 5000,
    # Built-ins
    "get_current_datetime": 1000,
    "calculate": 1000,
    "get_weather": 10000,
}


def new_trace_id(agent: AgentType | str, tool_name: str) -> str:
    """``<agent>-<tool>-<epoch ms>-<8 hex>``; unique even for same-millisecond calls."""
    return f"{agent}-{tool_name}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}"


def _failure_error(message: str, tool_name: str, exc: BaseException | None = None) -> ToolError:
    classification = classify_error(exc if exc is not None else message)
    if exc is not None:
        details = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    else:
        details = message
    return ToolError(
        code=classification.code,
        details=details,
        recoverable=classification.recoverable,
        suggestion=recovery_suggestion(tool_name, message),
        user_message=friendly_error(tool_name),
    )


def _string_error(error: Any) -> str | None:
    return error if isinstance(error, str) and error else None


def normalize_result(tool_name: str, raw: Any) -> ToolResult:
    """
    Turn whatever an executor returned into a :class:`ToolResult`.

    * a ``ToolResult`` is copied as is;
    * a mapping with a ``success`` key is validated as one (a plain-string ``error``, or an error
      mapping without a ``code``, is accepted and classified);
    * any other value becomes the ``data`` of a successful result.

    An empty message is filled in, and a failed result without an error block gets one classified
    from its message.
    """
    if isinstance(raw, ToolResult):
        result = raw.model_copy(deep=True)
    elif isinstance(raw, Mapping) and "success" in raw:
        fields = dict(raw)
        if not fields.get("message"):
            fields["message"] = (
                f"Successfully executed {tool_name}"
                if fields["success"]
                else _string_error(fields.get("error")) or f"Tool '{tool_name}' failed"
            )
        error = fields.get("error")
        if isinstance(error, str):
            fields["error"] = _failure_error(error, tool_name)
        elif isinstance(error, Mapping) and not error.get("code"):
            fields["error"] = {
                **_failure_error(fields["message"], tool_name).model_dump(exclude_none=True),
                **{k: v for k, v in error.items() if v is not None},
            }
        result = ToolResult.model_validate(fields)
    else:
        result = ToolResult(success=True, message=f"Successfully executed {tool_name}", data=raw)

    if not result.message:
        result.message = (
            f"Successfully executed {tool_name}" if result.success else f"Tool '{tool_name}' failed"
        )
    if not result.success and result.error is None:
        result.error = _failure_error(result.message, tool_name)
    return result


class ToolDispatcher:
    """
    Execute ``(agent, tool)`` calls with a per-tool timeout.

    Parameters
    ----------
    registry:
        Where executors are looked up (default: the process-wide registry).
    timeouts:
        Per-tool timeouts in milliseconds (default: :data:`TOOL_TIMEOUTS_MS`).
    default_timeout_ms:
        Timeout for tools missing from *timeouts* (default: ``settings.DEFAULT_TOOL_TIMEOUT_MS``).
    cancel_on_timeout:
        Cancel the executor task when it times out (default: ``settings.CANCEL_TIMED_OUT_TOOLS``).
        When False the task keeps running in the background and its outcome is only logged.
    """

    def __init__(
        self,
        registry: AgentToolRegistry | None = None,
        timeouts: Mapping[str, int] | None = None,
        default_timeout_ms: int | None = None,
        cancel_on_timeout: bool | None = None,
    ) -> None:
        self.registry = registry or default_registry
        self.timeouts = dict(TOOL_TIMEOUTS_MS if timeouts is None else timeouts)
        if default_timeout_ms is None:
            default_timeout_ms = settings.DEFAULT_TOOL_TIMEOUT_MS
        self.default_timeout_ms = default_timeout_ms
        self.cancel_on_timeout = (
            cancel_on_timeout if cancel_on_timeout is not None else settings.CANCEL_TIMED_OUT_TOOLS
        )

    def timeout_for(self, tool_name: str) -> int:
        return self.timeouts.get(tool_name, self.default_timeout_ms)

    async def _run_with_timeout(self, tool_name: str, call: Awaitable[Any], timeout_ms: int) -> Any:
        task = asyncio.ensure_future(call)
        try:
            done, _ = await asyncio.wait({task}, timeout=timeout_ms / 1000)
        except asyncio.CancelledError:
            task.cancel()
            raise

        if task in done:
            # The executor cancelled itself; the caller is still running.
            if task.cancelled():
                raise ToolExecutionError(f"Tool '{tool_name}' was cancelled")
            return task.result()

        if self.cancel_on_timeout:
            task.cancel()
        else:
            task.add_done_callback(_log_abandoned(tool_name))
        raise ToolTimeoutError(f"Tool '{tool_name}' timed out after {timeout_ms}ms")

    async def execute(
        self,
        agent: AgentType | str,
        tool_name: str,
        args: Optional[Dict[str, Any]] = None,
        user_id: Optional[str] = None,
    ) -> ToolResult:
        """
        Run *tool_name* for *agent* and return its :class:`ToolResult`.

        Never raises for tool failures; only cancellation of the calling task propagates.
        """
        source = str(agent)
        trace_id = new_trace_id(source, tool_name)
        timeout_ms = self.timeout_for(tool_name)
        started = time.monotonic()

        logger.info(
            "[ToolExecution] Starting agent=%s tool=%s trace_id=%s timeout_ms=%d",
            source,
            tool_name,
            trace_id,
            timeout_ms,
        )

        try:
            executor = self.registry.get_executor(agent, tool_name)
            raw = await self._run_with_timeout(
                tool_name, executor(tool_name, dict(args or {}), user_id), timeout_ms
            )
            result = normalize_result(tool_name, raw)
        except Exception as exc:  # noqa: BLE001
            duration_ms = _elapsed_ms(started)
            message = error_message(exc)
            error = _failure_error(message, tool_name, exc)
            logger.error(
                "[ToolExecution] Failed agent=%s tool=%s trace_id=%s code=%s recoverable=%s "
                "duration_ms=%d error=%s",
                source,
                tool_name,
                trace_id,
                error.code,
                error.recoverable,
                duration_ms,
                message,
            )
            return ToolResult(
                success=False,
                message=f"Tool '{tool_name}' failed: {message}",
                error=error,
                meta=ToolMeta(duration_ms=duration_ms, source=source, trace_id=trace_id),
            )

        duration_ms = _elapsed_ms(started)
        meta = result.meta.model_dump() if result.meta is not None else {}
        meta.update(duration_ms=duration_ms, source=source, trace_id=trace_id)
        result.meta = ToolMeta(**meta)

        logger.info(
            "[ToolExecution] Completed agent=%s tool=%s trace_id=%s success=%s duration_ms=%d",
            source,
            tool_name,
            trace_id,
            result.success,
            duration_ms,
        )
        return result


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


def _log_abandoned(tool_name: str):
    def _callback(task: "asyncio.Future[Any]") -> None:
        if task.cancelled():
            logger.debug("Abandoned tool call '%s' was cancelled", tool_name)
        elif task.exception() is not None:
            logger.debug("Abandoned tool call '%s' failed late: %s", tool_name, task.exception())
        else:
            logger.debug("Abandoned tool call '%s' finished after its timeout", tool_name)

    return _callback


# ---------------------------------------------------------------------------
# Module-level helper backed by the default registry
# ---------------------------------------------------------------------------
dispatcher = ToolDispatcher()


async def execute_agent_tool(
    agent: AgentType | str,
    tool_name: str,
    args: Optional[Dict[str, Any]] = None,
    user_id: Optional[str] = None,
) -> ToolResult:
    """Execute a tool call with the default dispatcher."""
    return await dispatcher.execute(agent, tool_name, args, user_id)
