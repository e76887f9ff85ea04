"""Shared fixtures for the q8core test suite."""

import asyncio
from typing import (
    Any,
    Dict,
    List,
    Optional,
)

import pytest

from q8core.agent.model_router import ModelRouter
from q8core.core.credentials import StaticCredentials
from q8core.tools import AgentToolRegistry


class RecordingExecutor:
    """Tool executor double that records calls and answers from a script."""

    def __init__(
        self,
        answers: Optional[Dict[str, Any]] = None,
        delays: Optional[Dict[str, float]] = None,
    ) -> None:
        self.answers = answers or {}
        self.delays = delays or {}
        self.calls: List[tuple] = []
        self.cancelled: List[str] = []
        self.finished: List[str] = []

    async def __call__(
        self, tool_name: str, args: Dict[str, Any], user_id: Optional[str] = None
    ) -> Any:
        self.calls.append((tool_name, args, user_id))
        try:
            await asyncio.sleep(self.delays.get(tool_name, 0))
        except asyncio.CancelledError:
            self.cancelled.append(tool_name)
            raise
        self.finished.append(tool_name)
        answer = self.answers.get(tool_name, {"success": True, "message": f"{tool_name} done"})
        if isinstance(answer, BaseException):
            raise answer
        return answer


@pytest.fixture
def make_router():
    """Build a router over an in-memory credential mapping."""

    def _make(**values: str) -> ModelRouter:
        return ModelRouter(credentials=StaticCredentials(values), override_prefix="Q8")

    return _make


@pytest.fixture
def registry() -> AgentToolRegistry:
    """A fresh registry with the standard tool sets and no executors bound."""
    return AgentToolRegistry()
