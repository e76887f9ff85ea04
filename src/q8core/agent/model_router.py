"""
Model router for the agent core.

Every agent type has a primary model, an ordered fallback chain and an environment override
(``Q8_{AGENT}_MODEL``).  All providers are reached through OpenAI-compatible endpoints, so a model
choice boils down to a model id, a base URL and the credential to send.

Resolution order for :func:`get_model`:

1. Environment override, if its provider has a credential.
2. Primary model, if its provider has a credential.
3. First fallback whose provider has a credential.
4. The primary model without a credential.  The call then fails at the network boundary with a
   clear cause instead of failing here.

What *should* be used lives in the static tables below; whether it is *reachable* is answered by a
:class:`~q8core.core.credentials.CredentialProvider`.
"""

import logging
from typing import (
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
)

from q8core.config import settings
from q8core.core.credentials import (
    CredentialProvider,
    EnvironmentCredentials,
)
from q8core.core.schema import (
    AgentType,
    ModelConfig,
    ModelDefinition,
    ModelHealth,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Providers
# ---------------------------------------------------------------------------
ANTHROPIC_BASE_URL = "https://api.anthropic.com/v1/"
GOOGLE_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
PERPLEXITY_BASE_URL = "https://api.perplexity.ai"
XAI_BASE_URL = "https://api.x.ai/v1"

DEFAULT_PROVIDER = "openai"

# provider -> (base URL, credential variable)
PROVIDERS: Dict[str, tuple[Optional[str], str]] = {
    "openai": (None, "OPENAI_API_KEY"),
    "anthropic": (ANTHROPIC_BASE_URL, "ANTHROPIC_API_KEY"),
    "google": (GOOGLE_BASE_URL, "GOOGLE_GENERATIVE_AI_KEY"),
    "perplexity": (PERPLEXITY_BASE_URL, "PERPLEXITY_API_KEY"),
    "xai": (XAI_BASE_URL, "XAI_API_KEY"),
}


def _define(model: str, provider: str) -> ModelDefinition:
    base_url, env_key = PROVIDERS[provider]
    return ModelDefinition(model=model, provider=provider, base_url=base_url, env_key=env_key)


# ---------------------------------------------------------------------------
# Model tables
# ---------------------------------------------------------------------------
PRIMARY_MODELS: Dict[AgentType, ModelDefinition] = {
    AgentType.ORCHESTRATOR: _define("gpt-5.2", "openai"),
    AgentType.CODER: _define("claude-opus-4-5-20251101", "anthropic"),
    AgentType.RESEARCHER: _define("sonar-reasoning-pro", "perplexity"),
    AgentType.SECRETARY: _define("gemini-3-flash-preview", "google"),
    AgentType.PERSONALITY: _define("grok-4-1-fast", "xai"),
    AgentType.HOME: _define("gpt-5-mini", "openai"),
    AgentType.FINANCE: _define("gemini-3-flash-preview", "google"),
    AgentType.IMAGEGEN: _define("gpt-5-mini", "openai"),
}

FALLBACK_CHAINS: Dict[AgentType, List[ModelDefinition]] = {
    AgentType.ORCHESTRATOR: [
        _define("gpt-5-mini", "openai"),
        _define("gpt-5-nano", "openai"),
    ],
    AgentType.CODER: [
        _define("claude-sonnet-4-5-20250929", "anthropic"),
        _define("gpt-5.2", "openai"),
        _define("gpt-5-mini", "openai"),
    ],
    AgentType.RESEARCHER: [
        _define("sonar-pro", "perplexity"),
        _define("sonar", "perplexity"),
        _define("gpt-5-mini", "openai"),
    ],
    AgentType.SECRETARY: [
        _define("gemini-3-pro-preview", "google"),
        _define("gpt-5-mini", "openai"),
    ],
    AgentType.PERSONALITY: [
        _define("gpt-5.2", "openai"),
        _define("gpt-5-mini", "openai"),
        _define("gpt-5-nano", "openai"),
    ],
    AgentType.HOME: [
        _define("gpt-5.2", "openai"),
        _define("gpt-5-nano", "openai"),
    ],
    AgentType.FINANCE: [
        _define("gemini-3-pro-preview", "google"),
        _define("gpt-5-mini", "openai"),
    ],
    AgentType.IMAGEGEN: [
        _define("gpt-5.2", "openai"),
        _define("gpt-5-nano", "openai"),
    ],
}

# Middle part of the override variable: <PREFIX>_<NAME>_MODEL
MODEL_OVERRIDE_NAMES: Dict[AgentType, str] = {
    AgentType.ORCHESTRATOR: "ROUTER",
    AgentType.CODER: "CODER",
    AgentType.RESEARCHER: "RESEARCH",
    AgentType.SECRETARY: "SECRETARY",
    AgentType.PERSONALITY: "PERSONALITY",
    AgentType.HOME: "HOME",
    AgentType.FINANCE: "FINANCE",
    AgentType.IMAGEGEN: "IMAGEGEN",
}

VISION_AGENTS = frozenset(
    {AgentType.CODER, AgentType.SECRETARY, AgentType.FINANCE, AgentType.IMAGEGEN}
)
IMAGE_GEN_AGENTS = frozenset({AgentType.IMAGEGEN})


def override_env_var(agent: AgentType, prefix: str | None = None) -> str:
    """Name of the environment variable that overrides *agent*'s model."""
    prefix = prefix if prefix is not None else settings.MODEL_OVERRIDE_PREFIX
    return f"{prefix}_{MODEL_OVERRIDE_NAMES[agent]}_MODEL"


def parse_model_override(override: str) -> Optional[ModelDefinition]:
    """
    Parse an override value.

    ``"provider:model"`` selects a known provider; anything else is taken as a model name on the
    default provider.
    """
    override = override.strip()
    if not override:
        return None

    provider, sep, model = override.partition(":")
    provider = provider.strip().lower()
    model = model.strip()
    if sep and model and provider in PROVIDERS:
        return _define(model, provider)

    return _define(override, DEFAULT_PROVIDER)


# ---------------------------------------------------------------------------
# Router
# ---------------------------------------------------------------------------
class ModelRouter:
    """Resolve agent types to :class:`ModelConfig` values."""

    def __init__(
        self,
        credentials: CredentialProvider | None = None,
        primary_models: Mapping[AgentType, ModelDefinition] | None = None,
        fallback_chains: Mapping[AgentType, Sequence[ModelDefinition]] | None = None,
        override_prefix: str | None = None,
    ) -> None:
        self.credentials = credentials or EnvironmentCredentials()
        self.primary_models = dict(primary_models or PRIMARY_MODELS)
        self.fallback_chains = {k: list(v) for k, v in (fallback_chains or FALLBACK_CHAINS).items()}
        self.override_prefix = override_prefix

    # -- helpers -------------------------------------------------------------
    def _primary(self, agent: AgentType) -> ModelDefinition:
        primary = self.primary_models.get(agent)
        if primary is None:
            raise ValueError(f"Unknown agent type: {agent}")
        return primary

    def _has_key(self, definition: ModelDefinition) -> bool:
        return self.credentials.lookup(definition.env_key) is not None

    def _override(self, agent: AgentType) -> tuple[Optional[str], Optional[ModelDefinition]]:
        if agent not in MODEL_OVERRIDE_NAMES:
            return None, None
        raw = self.credentials.lookup(override_env_var(agent, self.override_prefix))
        if not raw:
            return None, None
        return raw, parse_model_override(raw)

    def _build(
        self, agent: AgentType, definition: ModelDefinition, is_fallback: bool
    ) -> ModelConfig:
        image_gen = agent in IMAGE_GEN_AGENTS
        return ModelConfig(
            model=definition.model,
            base_url=definition.base_url,
            api_key=self.credentials.lookup(definition.env_key),
            provider=definition.provider,
            is_fallback=is_fallback,
            supports_vision=agent in VISION_AGENTS,
            supports_image_gen=image_gen,
            max_image_resolution="4k" if image_gen else None,
        )

    def _credentialed(
        self, agent: AgentType, candidates: Iterable[tuple[ModelDefinition, bool]]
    ) -> List[ModelConfig]:
        chain: List[ModelConfig] = []
        seen: set[tuple[str, str]] = set()
        for definition, is_fallback in candidates:
            key = (definition.model, definition.provider)
            if key in seen or not self._has_key(definition):
                continue
            seen.add(key)
            chain.append(self._build(agent, definition, is_fallback))
        return chain

    # -- public API ----------------------------------------------------------
    def get_model(self, agent: AgentType | str) -> ModelConfig:
        """Return the model *agent* should use right now.  Never raises for a known agent."""
        agent = AgentType.parse(agent)
        primary = self._primary(agent)

        raw, override = self._override(agent)
        if override is not None:
            if self._has_key(override):
                logger.debug(
                    "[ModelRouter] Using override for %s: model=%s provider=%s",
                    agent,
                    override.model,
                    override.provider,
                )
                return self._build(agent, override, False)
            logger.warning(
                "[ModelRouter] Override %s for %s has no API key, using fallback", raw, agent
            )

        if self._has_key(primary):
            return self._build(agent, primary, False)

        fallbacks = self.fallback_chains.get(agent, [])
        for fallback in fallbacks:
            if self._has_key(fallback):
                logger.info(
                    "[ModelRouter] Using fallback for %s: primary=%s fallback=%s provider=%s",
                    agent,
                    primary.model,
                    fallback.model,
                    fallback.provider,
                )
                return self._build(agent, fallback, True)

        logger.error(
            "[ModelRouter] No API key available for %s (primary=%s, fallbacks checked=%s)",
            agent,
            primary.model,
            [f.model for f in fallbacks],
        )
        return self._build(agent, primary, False)

    def get_model_chain(self, agent: AgentType | str) -> List[ModelConfig]:
        """All credentialed candidates in preference order: override, primary, fallbacks."""
        agent = AgentType.parse(agent)
        primary = self._primary(agent)

        candidates: List[tuple[ModelDefinition, bool]] = []
        _, override = self._override(agent)
        if override is not None:
            candidates.append((override, False))
        candidates.append((primary, False))
        candidates.extend((f, True) for f in self.fallback_chains.get(agent, []))
        return self._credentialed(agent, candidates)

    def get_available_models(self, agent: AgentType | str) -> List[ModelConfig]:
        """Credentialed primary and fallbacks, without the override; for model pickers."""
        agent = AgentType.parse(agent)
        primary = self._primary(agent)

        candidates = [(primary, False)]
        candidates.extend((f, True) for f in self.fallback_chains.get(agent, []))
        return self._credentialed(agent, candidates)

    def check_model_health(self) -> Dict[AgentType, ModelHealth]:
        """Report, for every agent, which model it resolves to and whether a key was found."""
        report: Dict[AgentType, ModelHealth] = {}
        for agent in AgentType:
            config = self.get_model(agent)
            report[agent] = ModelHealth(
                available=config.has_api_key, model=config.model, provider=config.provider
            )
        return report


def supports_vision(agent: AgentType | str) -> bool:
    """Static capability lookup; independent of credentials."""
    return AgentType.parse(agent) in VISION_AGENTS


# ---------------------------------------------------------------------------
# Module-level helpers backed by a process-wide router
# ---------------------------------------------------------------------------
router = ModelRouter()


def get_model(agent: AgentType | str) -> ModelConfig:
    """Resolve *agent* with the default router."""
    return router.get_model(agent)


def get_model_chain(agent: AgentType | str) -> List[ModelConfig]:
    """Credentialed model chain for *agent* from the default router."""
    return router.get_model_chain(agent)


def get_available_models(agent: AgentType | str) -> List[ModelConfig]:
    """Models a UI may offer for *agent*, from the default router."""
    return router.get_available_models(agent)


def check_model_health() -> Dict[AgentType, ModelHealth]:
    """Model health for every agent, from the default router."""
    return router.check_model_health()
