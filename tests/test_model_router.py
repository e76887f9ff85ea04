"""
Tests for model resolution, fallback chains and overrides.

Run with:
$ pytest -q
"""

import logging

import pytest

from q8core.agent.model_router import (
    FALLBACK_CHAINS,
    PRIMARY_MODELS,
    override_env_var,
    parse_model_override,
    supports_vision,
)
from q8core.core.schema import AgentType


def test_every_agent_resolves_without_credentials(make_router) -> None:
    """With no keys at all every agent still gets its primary model, keyless."""
    router = make_router()
    for agent in AgentType:
        config = router.get_model(agent)
        assert config.model == PRIMARY_MODELS[agent].model
        assert config.api_key is None
        assert not config.is_fallback


def test_missing_credentials_are_logged(make_router, caplog) -> None:
    """The keyless last resort is reported at ERROR level."""
    with caplog.at_level(logging.ERROR):
        make_router().get_model("coder")
    assert "No API key available for coder" in caplog.text


def test_primary_used_when_its_key_exists(make_router) -> None:
    """A credentialed primary is not a fallback."""
    config = make_router(ANTHROPIC_API_KEY="sk-ant").get_model(AgentType.CODER)
    assert config.model == "claude-opus-4-5-20251101"
    assert config.provider == "anthropic"
    assert config.api_key == "sk-ant"
    assert config.is_fallback is False


def test_first_credentialed_fallback_is_chosen(make_router) -> None:
    """Without an Anthropic key the coder falls back to the first OpenAI model."""
    config = make_router(OPENAI_API_KEY="sk-oai").get_model("coder")
    assert config.model == "gpt-5.2"
    assert config.provider == "openai"
    assert config.base_url is None
    assert config.is_fallback is True


def test_placeholder_credentials_count_as_missing(make_router) -> None:
    """Empty, blank and placeholder values are not credentials."""
    router = make_router(ANTHROPIC_API_KEY="placeholder", OPENAI_API_KEY="   ")
    assert router.get_model("coder").api_key is None


def test_provider_override_is_used(make_router) -> None:
    """``provider:model`` overrides route through that provider's endpoint."""
    router = make_router(Q8_HOME_MODEL="xai:grok-4", XAI_API_KEY="xai-key")
    config = router.get_model("home")
    assert config.model == "grok-4"
    assert config.provider == "xai"
    assert config.base_url == "https://api.x.ai/v1"
    assert config.is_fallback is False


def test_bare_override_uses_default_provider(make_router) -> None:
    """A bare model name is taken as an OpenAI model."""
    router = make_router(Q8_RESEARCH_MODEL="gpt-4.1", OPENAI_API_KEY="sk-oai")
    config = router.get_model("researcher")
    assert (config.model, config.provider) == ("gpt-4.1", "openai")


def test_unreachable_override_falls_through(make_router, caplog) -> None:
    """An override without a key behaves exactly as if it were not set."""
    plain = make_router(OPENAI_API_KEY="sk-oai").get_model("coder")
    with caplog.at_level(logging.WARNING):
        overridden = make_router(
            OPENAI_API_KEY="sk-oai", Q8_CODER_MODEL="anthropic:claude-haiku"
        ).get_model("coder")
    assert overridden == plain
    assert "has no API key" in caplog.text


def test_chain_is_deduplicated(make_router) -> None:
    """An override equal to a fallback appears only once in the chain."""
    router = make_router(Q8_ROUTER_MODEL="gpt-5-mini", OPENAI_API_KEY="sk-oai")
    chain = router.get_model_chain("orchestrator")
    assert [c.model for c in chain] == ["gpt-5-mini", "gpt-5.2", "gpt-5-nano"]
    assert len({(c.model, c.provider) for c in chain}) == len(chain)


def test_chain_contains_only_credentialed_models(make_router) -> None:
    """Models whose provider has no key are left out of the chain."""
    chain = make_router(PERPLEXITY_API_KEY="pplx").get_model_chain("researcher")
    assert [c.model for c in chain] == ["sonar-reasoning-pro", "sonar-pro", "sonar"]
    assert [c.is_fallback for c in chain] == [False, True, True]


def test_chains_never_repeat_a_model_for_any_agent(make_router) -> None:
    """With every key set no chain lists a (model, provider) pair twice."""
    router = make_router(
        OPENAI_API_KEY="a",
        ANTHROPIC_API_KEY="b",
        GOOGLE_GENERATIVE_AI_KEY="c",
        PERPLEXITY_API_KEY="d",
        XAI_API_KEY="e",
    )
    for agent in AgentType:
        chain = router.get_model_chain(agent)
        assert len(chain) == 1 + len(FALLBACK_CHAINS[agent])
        assert len({(c.model, c.provider) for c in chain}) == len(chain)


def test_available_models_ignore_the_override(make_router) -> None:
    """Model pickers list the primary and fallbacks only."""
    router = make_router(Q8_HOME_MODEL="gpt-4.1", OPENAI_API_KEY="sk-oai")
    models = [c.model for c in router.get_available_models("home")]
    assert models == ["gpt-5-mini", "gpt-5.2", "gpt-5-nano"]


def test_capability_flags(make_router) -> None:
    """Vision and image-generation flags follow the agent type."""
    router = make_router(OPENAI_API_KEY="sk-oai")
    image = router.get_model("imagegen")
    assert image.supports_vision and image.supports_image_gen
    assert image.max_image_resolution == "4k"
    home = router.get_model("home")
    assert not home.supports_vision and not home.supports_image_gen
    assert supports_vision("finance") and not supports_vision(AgentType.PERSONALITY)


def test_api_key_is_not_serialised(make_router) -> None:
    """Dumped configs never carry the secret."""
    config = make_router(OPENAI_API_KEY="sk-secret").get_model("home")
    assert "api_key" not in config.model_dump()
    assert "sk-secret" not in repr(config)


def test_model_health(make_router) -> None:
    """Health reflects key availability per agent."""
    health = make_router(OPENAI_API_KEY="sk-oai").check_model_health()
    assert set(health) == set(AgentType)
    assert health[AgentType.HOME].available
    assert health[AgentType.CODER].model == "gpt-5.2"
    assert health[AgentType.RESEARCHER].model == "gpt-5-mini"
    assert not any(h.available for h in make_router().check_model_health().values())


def test_unknown_agent_raises(make_router) -> None:
    """Unknown agent names are rejected."""
    with pytest.raises(ValueError, match="Unknown agent type"):
        make_router().get_model("janitor")


def test_override_variable_names() -> None:
    """Override variables follow <PREFIX>_<NAME>_MODEL."""
    assert override_env_var(AgentType.ORCHESTRATOR, "Q8") == "Q8_ROUTER_MODEL"
    assert override_env_var(AgentType.RESEARCHER, "Q8") == "Q8_RESEARCH_MODEL"
    assert override_env_var(AgentType.IMAGEGEN, "APP") == "APP_IMAGEGEN_MODEL"


def test_parse_model_override() -> None:
    """Override parsing for provider-qualified, bare and empty values."""
    assert parse_model_override("   ") is None
    google = parse_model_override("google:gemini-3-pro-preview")
    assert google.provider == "google" and google.env_key == "GOOGLE_GENERATIVE_AI_KEY"
    unknown = parse_model_override("acme:big-model")
    assert unknown.provider == "openai" and unknown.model == "acme:big-model"
