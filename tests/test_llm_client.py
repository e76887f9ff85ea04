"""Tests for the chat client's walk along the model chain."""

from types import SimpleNamespace

import httpx
import openai
import pytest

from q8core.agent.llm_client import ChatModelClient
from q8core.core.errors import ModelUnavailableError

pytestmark = pytest.mark.asyncio

_REQUEST = httpx.Request("POST", "https://api.example.test/v1/chat/completions")


def _rate_limited() -> openai.RateLimitError:
    return openai.RateLimitError(
        "Rate limit reached", response=httpx.Response(429, request=_REQUEST), body=None
    )


class FakeProviders:
    """Client factory whose clients answer from a per-model script."""

    def __init__(self, failures=None):
        self.failures = failures or {}
        self.calls = []
        self.configs = []
        self.closed = 0

    def __call__(self, config):
        self.configs.append(config)

        async def create(**kwargs):
            self.calls.append(kwargs)
            failure = self.failures.get(kwargs["model"])
            if failure is not None:
                raise failure
            return {"model": kwargs["model"], "choices": []}

        async def close():
            self.closed += 1

        completions = SimpleNamespace(create=create)
        return SimpleNamespace(chat=SimpleNamespace(completions=completions), close=close)


async def test_primary_answers(make_router) -> None:
    """The first credentialed model is used with the agent's tools."""
    providers = FakeProviders()
    router = make_router(ANTHROPIC_API_KEY="sk-ant")
    client = ChatModelClient(router=router, client_factory=providers)

    messages = [{"role": "user", "content": "hi"}]
    response = await client.complete("coder", messages, temperature=0.2)

    assert response["model"] == "claude-opus-4-5-20251101"
    call = providers.calls[0]
    assert call["temperature"] == 0.2
    assert len(call["tools"]) == 9
    assert call["tools"][0]["function"]["name"] == "github_search_code"
    assert providers.configs[0].base_url == "https://api.anthropic.com/v1/"
    assert providers.configs[0].api_key == "sk-ant"


async def test_retryable_failure_moves_down_the_chain(make_router, caplog) -> None:
    """Rate limits on one model fall through to the next."""
    providers = FakeProviders({"claude-opus-4-5-20251101": _rate_limited()})
    router = make_router(ANTHROPIC_API_KEY="sk-ant", OPENAI_API_KEY="sk-oai")
    client = ChatModelClient(router=router, client_factory=providers)

    response = await client.complete("coder", [{"role": "user", "content": "hi"}])

    assert response["model"] == "claude-sonnet-4-5-20250929"
    assert [c["model"] for c in providers.calls] == [
        "claude-opus-4-5-20251101",
        "claude-sonnet-4-5-20250929",
    ]
    assert "trying claude-sonnet-4-5-20250929" in caplog.text


async def test_connection_errors_are_retryable(make_router) -> None:
    """Connection failures also move on."""
    providers = FakeProviders({"gpt-5-mini": openai.APIConnectionError(request=_REQUEST)})
    client = ChatModelClient(router=make_router(OPENAI_API_KEY="sk-oai"), client_factory=providers)
    response = await client.complete("home", [])
    assert response["model"] == "gpt-5.2"


async def test_non_retryable_error_propagates(make_router) -> None:
    """Other errors stop the walk immediately."""
    providers = FakeProviders({"gpt-5-mini": ValueError("bad request")})
    client = ChatModelClient(router=make_router(OPENAI_API_KEY="sk-oai"), client_factory=providers)
    with pytest.raises(ValueError, match="bad request"):
        await client.complete("home", [])
    assert len(providers.calls) == 1


async def test_exhausted_chain_raises_last_error(make_router) -> None:
    """When every model fails the last provider error is raised."""
    failures = {model: _rate_limited() for model in ("gpt-5-mini", "gpt-5.2", "gpt-5-nano")}
    providers = FakeProviders(failures)
    client = ChatModelClient(router=make_router(OPENAI_API_KEY="sk-oai"), client_factory=providers)
    with pytest.raises(openai.RateLimitError):
        await client.complete("home", [])
    assert len(providers.calls) == 3


async def test_no_credentials_raise_model_unavailable(make_router) -> None:
    """Without any key the failure surfaces at the network boundary."""
    providers = FakeProviders()
    client = ChatModelClient(router=make_router(), client_factory=providers)
    with pytest.raises(ModelUnavailableError, match="gpt-5.2"):
        await client.complete("orchestrator", [])
    assert providers.configs == []


async def test_caller_tools_take_precedence(make_router) -> None:
    """An explicit ``tools`` argument is passed through untouched."""
    providers = FakeProviders()
    client = ChatModelClient(router=make_router(OPENAI_API_KEY="sk-oai"), client_factory=providers)
    await client.complete("home", [], tools=[])
    assert providers.calls[0]["tools"] == []


async def test_clients_are_closed(make_router) -> None:
    """Every client built along the chain is closed, whatever the outcome."""
    providers = FakeProviders({"claude-opus-4-5-20251101": _rate_limited()})
    router = make_router(ANTHROPIC_API_KEY="sk-ant")
    client = ChatModelClient(router=router, client_factory=providers)
    await client.complete("coder", [])
    assert len(providers.configs) == 2
    assert providers.closed == 2

    failing = FakeProviders({"gpt-5-mini": ValueError("bad request")})
    client = ChatModelClient(router=make_router(OPENAI_API_KEY="sk-oai"), client_factory=failing)
    with pytest.raises(ValueError):
        await client.complete("home", [])
    assert failing.closed == 1
