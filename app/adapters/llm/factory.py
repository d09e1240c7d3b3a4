"""Factory pattern for creating LLM client instances."""

import logging
from functools import lru_cache

from app.adapters.llm.anthropic_client import AnthropicClient
from app.adapters.llm.base import AbstractLLMClient
from app.core.config import settings
from app.core.errors import MESSAGE_GENERIC_FAILURE, ConfigAppError

logger = logging.getLogger(__name__)


@lru_cache(maxsize=4)
def _build_client(
    api_key: str,
    model: str,
    base_url: str | None,
    timeout_seconds: float,
) -> AbstractLLMClient:
    return AnthropicClient(
        api_key=api_key,
        model=model,
        base_url=base_url,
        timeout_seconds=timeout_seconds,
    )


def create_llm_client() -> AbstractLLMClient:
    """Return an LLM client built from the current settings.

    Reads configuration from app.core.config.settings at call time, so a
    credential added or removed at runtime is picked up by the next request.
    Clients are reused while their configuration is unchanged.

    Returns:
        AbstractLLMClient: Configured LLM client instance.

    Raises:
        ConfigAppError: If the API key is missing or blank. The client sees
            only the generic message.
    """
    api_key = (settings.llm.api_key or "").strip()
    if not api_key:
        logger.error(
            "llm.config_missing",
            extra={"setting": "ANTHROPIC_API_KEY"},
        )
        raise ConfigAppError(
            message=MESSAGE_GENERIC_FAILURE,
            details={"cause": "ANTHROPIC_API_KEY not configured"},
        )

    return _build_client(
        api_key,
        settings.llm.model,
        settings.llm.base_url,
        settings.llm.timeout_seconds,
    )


def clear_llm_client_cache() -> None:
    """Drop cached clients (tests and key rotation)."""
    _build_client.cache_clear()
