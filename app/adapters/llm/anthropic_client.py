"""Anthropic LLM client adapter."""

import logging

from anthropic import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AsyncAnthropic,
    RateLimitError,
)

from app.adapters.llm.base import AbstractLLMClient, ChatMessage, ContentBlock, LLMReply
from app.core.errors import MESSAGE_GENERIC_FAILURE, LLMAppError, UpstreamErrorKind

logger = logging.getLogger(__name__)


def _classify(exc: Exception) -> UpstreamErrorKind:
    """Map an SDK exception to an UpstreamErrorKind by type."""
    if isinstance(exc, RateLimitError):
        return UpstreamErrorKind.RATE_LIMIT
    # APITimeoutError subclasses APIConnectionError, so test it first
    if isinstance(exc, APITimeoutError):
        return UpstreamErrorKind.TIMEOUT
    if isinstance(exc, APIConnectionError):
        return UpstreamErrorKind.CONNECTION
    if isinstance(exc, APIStatusError):
        return UpstreamErrorKind.STATUS
    return UpstreamErrorKind.UNKNOWN


def _block_field(obj: object, name: str):
    """Read a field from an SDK model or a plain dict."""
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


class AnthropicClient(AbstractLLMClient):
    """Client for the Anthropic Messages API.

    Uses the official Anthropic Python SDK with async support. SDK retries
    are disabled: the caller gets exactly one attempt and decides what a
    failure means.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str | None = None,
        timeout_seconds: float = 30.0,
    ) -> None:
        """Initialize the Anthropic async client.

        Args:
            api_key: Anthropic API key for authentication.
            model: Model name (e.g., "claude-3-5-sonnet-20241022").
            base_url: Optional custom base URL for the API.
            timeout_seconds: Timeout for requests in seconds.
        """
        self.client = AsyncAnthropic(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout_seconds,
            max_retries=0,
        )
        self.model = model

    async def create_message(
        self,
        *,
        system: str,
        messages: list[ChatMessage],
        max_tokens: int,
    ) -> LLMReply:
        """Call messages.create and convert the reply to an LLMReply.

        Raises:
            LLMAppError: With the failure classified by exception type. The
                SDK's error text goes to ``details`` only.
        """
        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                system=system,
                messages=[message.to_dict() for message in messages],
            )
        except Exception as exc:
            upstream_kind = _classify(exc)
            raise LLMAppError(
                message=MESSAGE_GENERIC_FAILURE,
                details={
                    "cause": str(exc),
                    "error_type": type(exc).__name__,
                    "upstream_kind": upstream_kind.value,
                    "http_status": getattr(exc, "status_code", None),
                    "model": self.model,
                },
                upstream_kind=upstream_kind,
            ) from exc

        blocks = [
            ContentBlock(
                type=_block_field(block, "type") or "unknown",
                text=_block_field(block, "text"),
            )
            for block in (_block_field(response, "content") or [])
        ]

        usage = getattr(response, "usage", None)
        logger.info(
            "llm.reply_received",
            extra={
                "model": self.model,
                "block_count": len(blocks),
                "input_tokens": getattr(usage, "input_tokens", None),
                "output_tokens": getattr(usage, "output_tokens", None),
            },
        )
        return LLMReply(content=blocks)
