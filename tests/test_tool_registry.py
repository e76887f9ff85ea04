"""Tests for per-agent tool composition and executor routing."""

import logging

import pytest

import q8core.tools as tools_module
from q8core.core.errors import (
    ToolExecutionError,
    ToolNotFoundError,
)
from q8core.core.schema import (
    AgentType,
    ToolSchema,
)
from q8core.tools import (
    AgentToolRegistry,
    register_executor,
)
from q8core.tools.default import RESEARCH_TOOLS
from q8core.tools.knowledge import KNOWLEDGE_TOOLS


async def _noop(tool_name, args, user_id=None):
    return {"success": True, "message": tool_name}


async def _other(tool_name, args, user_id=None):
    return {"success": True, "message": "other"}


def _names(tools):
    return [tool.name for tool in tools]


@pytest.mark.parametrize(
    ("agent", "count"),
    [
        (AgentType.ORCHESTRATOR, 6),
        (AgentType.CODER, 9),
        (AgentType.RESEARCHER, 6),
        (AgentType.SECRETARY, 13),
        (AgentType.PERSONALITY, 10),
        (AgentType.HOME, 17),
        (AgentType.FINANCE, 10),
        (AgentType.IMAGEGEN, 3),
    ],
)
def test_tool_counts(registry, agent, count) -> None:
    """Each agent sees its full, duplicate-free tool list."""
    names = _names(registry.get_agent_tools(agent))
    assert len(names) == count
    assert len(set(names)) == count


def test_composition_order(registry) -> None:
    """Composed lists keep group order: own tools first, shared groups after."""
    assert _names(registry.get_agent_tools("researcher")) == _names(RESEARCH_TOOLS) + _names(
        KNOWLEDGE_TOOLS
    )
    secretary = _names(registry.get_agent_tools("secretary"))
    assert secretary[0] == "gmail_list_messages"
    assert secretary[-2:] == ["get_current_datetime", "calculate"]
    coder = _names(registry.get_agent_tools(AgentType.CODER))
    assert coder.index("github_create_pr") < coder.index("supabase_run_sql")


def test_duplicates_keep_the_first_entry(caplog) -> None:
    """A later group cannot shadow an earlier tool of the same name."""
    first = ToolSchema(name="lookup", description="first")
    second = ToolSchema(name="lookup", description="second")
    extra = ToolSchema(name="extra", description="extra")
    with caplog.at_level(logging.WARNING):
        registry = AgentToolRegistry(
            toolsets={AgentType.HOME: [("a", [first]), ("b", [second, extra])]}
        )
    tools = registry.get_agent_tools("home")
    assert [(t.name, t.description) for t in tools] == [("lookup", "first"), ("extra", "extra")]
    assert registry.group_of("home", "lookup") == "a"
    assert "Duplicate tool 'lookup'" in caplog.text


def test_openai_format(registry) -> None:
    """Schemas render in OpenAI function-calling shape."""
    tool = registry.get_openai_tools("home")[1]
    assert tool["type"] == "function"
    assert tool["function"]["name"] == "control_device"
    assert tool["function"]["parameters"]["required"] == ["entity_id", "action"]
    assert tool["function"]["parameters"]["properties"]["action"]["enum"] == [
        "turn_on",
        "turn_off",
        "toggle",
    ]


def test_executor_routing_follows_groups(registry) -> None:
    """Composed agents route each tool to the executor of its own group."""
    registry.bind("default", _noop)
    registry.bind("knowledge", _other)
    assert registry.get_executor("researcher", "calculate") is _noop
    assert registry.get_executor("researcher", "search_knowledge") is _other
    assert registry.get_executor("orchestrator", "search_web") is _noop


def test_unknown_tool_raises(registry) -> None:
    """Tools the agent does not expose are reported as not found."""
    registry.bind("home", _noop)
    with pytest.raises(ToolNotFoundError, match="not found for agent 'home'"):
        registry.get_executor("home", "gmail_send_message")


def test_unbound_group_raises(registry) -> None:
    """A known tool without an executor is a configuration error."""
    with pytest.raises(ToolExecutionError, match="not configured"):
        registry.get_executor("finance", "can_i_afford")


def test_unknown_agent_raises(registry) -> None:
    """Unknown agent names are rejected."""
    with pytest.raises(ValueError):
        registry.get_agent_tools("janitor")


def test_register_executor_decorator(monkeypatch) -> None:
    """The decorator binds on the default registry and refuses double registration."""
    fresh = AgentToolRegistry()
    monkeypatch.setattr(tools_module, "default_registry", fresh)

    @register_executor("finance")
    async def finance_executor(tool_name, args, user_id=None):
        return {}

    assert fresh.get_executor("finance", "get_upcoming_bills") is finance_executor
    with pytest.raises(ValueError, match="already has an executor"):
        register_executor("finance")
    with pytest.raises(ValueError, match="Unknown tool group"):
        register_executor("fax")
