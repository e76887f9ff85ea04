"""
Chat-completion client that follows an agent's model chain.

This module is the only place that *directly* calls an LLM.  Every provider is reached through an
OpenAI-compatible endpoint, so a single ``openai.AsyncOpenAI`` client per :class:`ModelConfig`
(base URL + key) is enough.  When a provider fails with a retryable error (rate limit, connection
trouble, timeout, 5xx) the next model in :meth:`ModelRouter.get_model_chain` is tried.
"""

import logging
from typing import (
    Any,
    Callable,
    Dict,
    List,
    Sequence,
    Tuple,
    Type,
)

from q8core.agent.model_router import (
    ModelRouter,
    router as default_router,
)
from q8core.core.errors import ModelUnavailableError
from q8core.core.schema import (
    AgentType,
    ModelConfig,
)
from q8core.tools import (
    AgentToolRegistry,
    default_registry,
)

logger = logging.getLogger(__name__)


def _retryable_errors() -> Tuple[Type[BaseException], ...]:
    import openai  # pylint: disable=import-outside-toplevel

    # APITimeoutError is a subclass of APIConnectionError
    return (openai.RateLimitError, openai.APIConnectionError, openai.InternalServerError)


def _openai_client(config: ModelConfig) -> Any:
    import openai  # pylint: disable=import-outside-toplevel

    return openai.AsyncOpenAI(api_key=config.api_key, base_url=config.base_url)


class ChatModelClient:
    """Send chat completions for an agent, falling back along its model chain."""

    def __init__(
        self,
        router: ModelRouter | None = None,
        registry: AgentToolRegistry | None = None,
        client_factory: Callable[[ModelConfig], Any] | None = None,
    ) -> None:
        self.router = router or default_router
        self.registry = registry or default_registry
        self._client_factory = client_factory or _openai_client

    def client_for(self, config: ModelConfig) -> Any:
        """Build a client for *config*; raise :class:`ModelUnavailableError` without a key."""
        if not config.has_api_key:
            raise ModelUnavailableError(
                f"No API key configured for {config.provider} model '{config.model}'"
            )
        return self._client_factory(config)

    async def complete(
        self, agent: AgentType | str, messages: Sequence[Dict[str, Any]], **kwargs: Any
    ) -> Any:
        """
        Create a chat completion for *agent*.

        The agent's tools are passed in OpenAI function-calling format unless the caller supplies
        ``tools`` itself.  Extra keyword arguments go straight to ``chat.completions.create``.

        Raises
        ------
        ModelUnavailableError
            If no model in the chain has an API key.
        openai.OpenAIError
            The last provider error once the chain is exhausted, or any non-retryable error.
        """
        agent = AgentType.parse(agent)
        chain: List[ModelConfig] = self.router.get_model_chain(agent) or [
            self.router.get_model(agent)
        ]

        tools = self.registry.get_openai_tools(agent)
        if tools:
            kwargs.setdefault("tools", tools)

        retryable = _retryable_errors()
        last_error: BaseException | None = None
        for index, config in enumerate(chain):
            client = self.client_for(config)
            try:
                logger.debug(
                    "Chat completion for %s with %s (%s)", agent, config.model, config.provider
                )
                return await client.chat.completions.create(
                    model=config.model, messages=list(messages), **kwargs
                )
            except retryable as exc:
                last_error = exc
                if index + 1 < len(chain):
                    logger.warning(
                        "Model %s (%s) failed for %s: %s; trying %s",
                        config.model,
                        config.provider,
                        agent,
                        exc,
                        chain[index + 1].model,
                    )
            finally:
                await client.close()

        if last_error is None:
            raise ModelUnavailableError(f"No model could be tried for {agent}")
        raise last_error
