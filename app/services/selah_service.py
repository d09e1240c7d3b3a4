"""Reflection service: one upstream call turned into a reflection payload.

This service owns the upstream conversation shape and the classification of
its outcome:
- Success → trimmed reflection (or a fixed fallback) plus an exit sentence
- Upstream rate limit → RateLimitAppError
- Anything else → LLMAppError (api_error)
"""

import logging
from typing import Callable

from app.adapters.llm.base import AbstractLLMClient, ChatMessage, LLMReply
from app.content.exits import get_random_exit_sentence
from app.content.prompts import SELAH_SYSTEM_PROMPT
from app.core.config import settings
from app.core.errors import (
    MESSAGE_GENERIC_FAILURE,
    MESSAGE_RATE_LIMITED,
    LLMAppError,
    RateLimitAppError,
    UpstreamErrorKind,
)
from app.schemas.selah import SelahRequest, SelahResponse

logger = logging.getLogger(__name__)

FALLBACK_REFLECTION = "You are here."


def build_messages(request: SelahRequest) -> list[ChatMessage]:
    """Build the two-turn conversation sent upstream.

    The question goes first as the assistant's turn, the user's answer
    second. The model's behavior depends on this exact order.
    """
    return [
        ChatMessage(role="assistant", content=request.question),
        ChatMessage(role="user", content=request.message),
    ]


def extract_reflection(reply: LLMReply) -> str:
    """Trimmed text of the first text block, or the fallback when empty."""
    return reply.first_text().strip() or FALLBACK_REFLECTION


class SelahService:
    """Service producing a reflection for one validated request.

    Attributes:
        llm: LLM client adapter.
        pick_exit: Callable returning an exit sentence.
    """

    def __init__(
        self,
        llm: AbstractLLMClient,
        *,
        max_tokens: int | None = None,
        pick_exit: Callable[[], str] = get_random_exit_sentence,
    ) -> None:
        self.llm = llm
        self.max_tokens = max_tokens or settings.llm.max_tokens
        self.pick_exit = pick_exit

    async def reflect(self, request: SelahRequest) -> SelahResponse:
        """Run the upstream call and classify its outcome.

        Args:
            request: Validated request.

        Returns:
            SelahResponse with reflection and exit sentence.

        Raises:
            RateLimitAppError: If the upstream reported a rate limit.
            LLMAppError: For every other upstream failure.
        """
        try:
            reply = await self.llm.create_message(
                system=SELAH_SYSTEM_PROMPT,
                messages=build_messages(request),
                max_tokens=self.max_tokens,
            )
        except LLMAppError as exc:
            self._log_upstream_failure(exc.upstream_kind, exc)
            if exc.is_rate_limited:
                raise RateLimitAppError(
                    message=MESSAGE_RATE_LIMITED,
                    details=exc.details,
                ) from exc
            raise
        except Exception as exc:
            self._log_upstream_failure(UpstreamErrorKind.UNKNOWN, exc)
            raise LLMAppError(
                message=MESSAGE_GENERIC_FAILURE,
                details={"cause": str(exc), "error_type": type(exc).__name__},
            ) from exc

        if not reply.first_text().strip():
            logger.info("selah.fallback_reflection", extra={"block_count": len(reply.content)})
        reflection = extract_reflection(reply)

        return SelahResponse(reflection=reflection, exit_sentence=self.pick_exit())

    @staticmethod
    def _log_upstream_failure(kind: UpstreamErrorKind, exc: Exception) -> None:
        details = getattr(exc, "details", None) or {}
        logger.error(
            "selah.upstream_error",
            extra={
                "upstream_kind": kind.value,
                "error_type": details.get("error_type", type(exc).__name__),
                "error_msg": details.get("cause", str(exc)),
            },
        )
