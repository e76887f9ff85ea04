"""
Tool registry for the agent core.

Each agent sees an ordered list of tool schemas made up of one or more tool *groups* (``home``,
``github``, ``default``, ...).  A group is served by a single executor, an async callable
``(tool_name, args, user_id) -> result``; the registry only routes a call to the right executor,
it does not implement any tool.

Executors are bound per group, either directly:

    registry.bind("home", home_executor)

or, on the default registry, with the decorator:

    @register_executor("finance")
    async def finance_executor(tool_name, args, user_id=None):
        ...
"""

import logging
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
)

from q8core.core.errors import (
    ToolExecutionError,
    ToolNotFoundError,
)
from q8core.core.schema import (
    AgentType,
    ToolSchema,
)
from q8core.tools.coder import (
    GITHUB_TOOLS,
    SUPABASE_TOOLS,
)
from q8core.tools.default import (
    DEFAULT_TOOLS,
    PERSONALITY_TOOLS,
    RESEARCH_TOOLS,
    SECRETARY_EXTRA_TOOLS,
)
from q8core.tools.finance import FINANCE_TOOLS
from q8core.tools.google import GOOGLE_TOOLS
from q8core.tools.home import HOME_TOOLS
from q8core.tools.image import IMAGE_TOOLS
from q8core.tools.knowledge import KNOWLEDGE_TOOLS
from q8core.tools.spotify import SPOTIFY_TOOLS

logger = logging.getLogger(__name__)

ToolExecutor = Callable[[str, Dict[str, Any], Optional[str]], Awaitable[Any]]
"""Async callable serving every tool of one group."""

ToolSet = Tuple[str, Sequence[ToolSchema]]
"""A tool group name and the schemas it contributes, in order."""

AGENT_TOOLSETS: Dict[AgentType, List[ToolSet]] = {
    AgentType.ORCHESTRATOR: [("default", DEFAULT_TOOLS)],
    AgentType.CODER: [("github", GITHUB_TOOLS), ("supabase", SUPABASE_TOOLS)],
    AgentType.RESEARCHER: [("default", RESEARCH_TOOLS), ("knowledge", KNOWLEDGE_TOOLS)],
    AgentType.SECRETARY: [("google", GOOGLE_TOOLS), ("default", SECRETARY_EXTRA_TOOLS)],
    AgentType.PERSONALITY: [("default", PERSONALITY_TOOLS), ("spotify", SPOTIFY_TOOLS)],
    AgentType.HOME: [("home", HOME_TOOLS)],
    AgentType.FINANCE: [("finance", FINANCE_TOOLS)],
    AgentType.IMAGEGEN: [("image", IMAGE_TOOLS)],
}
"""Composition order of tool groups per agent.  Earlier groups win on duplicate names."""


class AgentToolRegistry:
    """Map ``(agent, tool)`` pairs to tool schemas and the executor of their group."""

    def __init__(
        self,
        toolsets: Mapping[AgentType, Sequence[ToolSet]] | None = None,
        executors: Mapping[str, ToolExecutor] | None = None,
    ) -> None:
        self._tools: Dict[AgentType, List[ToolSchema]] = {}
        self._groups: Dict[AgentType, Dict[str, str]] = {}
        self._executors: Dict[str, ToolExecutor] = dict(executors or {})

        for agent, sets in (toolsets if toolsets is not None else AGENT_TOOLSETS).items():
            tools: List[ToolSchema] = []
            groups: Dict[str, str] = {}
            for group, schemas in sets:
                for schema in schemas:
                    if schema.name in groups:
                        logger.warning(
                            "Duplicate tool '%s' for agent %s (group %s); keeping the one from %s",
                            schema.name,
                            agent,
                            group,
                            groups[schema.name],
                        )
                        continue
                    groups[schema.name] = group
                    tools.append(schema)
            self._tools[agent] = tools
            self._groups[agent] = groups

    # ------------------------------------------------------------------
    # Executors
    # ------------------------------------------------------------------
    def bind(self, group: str, executor: ToolExecutor) -> None:
        """Serve every tool of *group* with *executor*, replacing any previous binding."""
        if group in self._executors:
            logger.debug("Rebinding executor for tool group '%s'", group)
        self._executors[group] = executor

    def is_bound(self, group: str) -> bool:
        return group in self._executors

    @property
    def groups(self) -> List[str]:
        """All tool group names referenced by any agent."""
        seen: Dict[str, None] = {}
        for groups in self._groups.values():
            seen.update(dict.fromkeys(groups.values()))
        return list(seen)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def _agent(self, agent: AgentType | str) -> AgentType:
        agent = AgentType.parse(agent)
        if agent not in self._tools:
            raise ValueError(f"No tools configured for agent: {agent}")
        return agent

    def get_agent_tools(self, agent: AgentType | str) -> List[ToolSchema]:
        """The ordered tool schemas shown to *agent*'s LLM."""
        return list(self._tools[self._agent(agent)])

    def get_openai_tools(self, agent: AgentType | str) -> List[Dict[str, Any]]:
        """Same as :meth:`get_agent_tools`, in OpenAI function-calling format."""
        return [tool.to_openai() for tool in self.get_agent_tools(agent)]

    def group_of(self, agent: AgentType | str, tool_name: str) -> str:
        """Name of the group that serves *tool_name* for *agent*."""
        agent = self._agent(agent)
        group = self._groups[agent].get(tool_name)
        if group is None:
            raise ToolNotFoundError(f"Tool '{tool_name}' not found for agent '{agent}'")
        return group

    def get_executor(self, agent: AgentType | str, tool_name: str) -> ToolExecutor:
        """
        Return the executor for *tool_name* as seen by *agent*.

        Raises
        ------
        ToolNotFoundError
            If *agent* does not expose *tool_name*.
        ToolExecutionError
            If the tool's group has no executor bound.
        """
        group = self.group_of(agent, tool_name)
        executor = self._executors.get(group)
        if executor is None:
            raise ToolExecutionError(
                f"Tool group '{group}' is not configured (no executor for '{tool_name}')"
            )
        return executor


default_registry = AgentToolRegistry()
"""Process-wide registry used by the module-level helpers and the API."""


def register_executor(group: str) -> Callable[[ToolExecutor], ToolExecutor]:
    """
    Register an async function as the executor of *group* on the default registry.

    Parameters
    ----------
    group: str
        Tool group name, e.g. ``"finance"``.

    Raises
    ------
    ValueError
        If *group* is unknown or already has an executor.
    """
    if group not in default_registry.groups:
        raise ValueError(f"Unknown tool group '{group}'.")
    if default_registry.is_bound(group):
        raise ValueError(f"Tool group '{group}' already has an executor.")

    def wrapper(fn: ToolExecutor) -> ToolExecutor:
        logger.debug("Registering executor %s for tool group '%s'", fn.__name__, group)
        default_registry.bind(group, fn)
        return fn

    return wrapper


def get_agent_tools(agent: AgentType | str) -> List[ToolSchema]:
    """Tool schemas for *agent* from the default registry."""
    return default_registry.get_agent_tools(agent)
