"""Tests for SelahService: conversation shape and outcome classification."""

from unittest.mock import AsyncMock

import pytest

from app.adapters.llm.base import AbstractLLMClient, ChatMessage, ContentBlock, LLMReply
from app.content.exits import EXIT_SENTENCES
from app.content.prompts import SELAH_SYSTEM_PROMPT
from app.core.errors import (
    LLMAppError,
    RateLimitAppError,
    UpstreamErrorKind,
)
from app.schemas.selah import SelahRequest
from app.services.selah_service import (
    FALLBACK_REFLECTION,
    SelahService,
    build_messages,
    extract_reflection,
)


@pytest.fixture
def mock_llm() -> AsyncMock:
    llm = AsyncMock(spec=AbstractLLMClient)
    llm.create_message.return_value = LLMReply(
        content=[ContentBlock(type="text", text="There is presence here.")]
    )
    return llm


@pytest.fixture
def request_record() -> SelahRequest:
    return SelahRequest(message="I feel calm", question="What is here.")


def test_build_messages_puts_question_first_as_assistant(request_record):
    assert build_messages(request_record) == [
        ChatMessage(role="assistant", content="What is here."),
        ChatMessage(role="user", content="I feel calm"),
    ]


@pytest.mark.parametrize(
    "reply",
    [
        LLMReply(content=[ContentBlock(type="text", text="   ")]),
        LLMReply(content=[ContentBlock(type="image")]),
        LLMReply(content=[]),
    ],
)
def test_extract_reflection_falls_back(reply):
    assert extract_reflection(reply) == FALLBACK_REFLECTION == "You are here."


def test_extract_reflection_trims():
    reply = LLMReply(content=[ContentBlock(type="text", text="\n You sit. \n")])

    assert extract_reflection(reply) == "You sit."


@pytest.mark.asyncio
async def test_reflect_success(mock_llm, request_record):
    service = SelahService(llm=mock_llm, max_tokens=150)

    result = await service.reflect(request_record)

    assert result.reflection == "There is presence here."
    assert result.exit_sentence in EXIT_SENTENCES
    mock_llm.create_message.assert_awaited_once_with(
        system=SELAH_SYSTEM_PROMPT,
        messages=build_messages(request_record),
        max_tokens=150,
    )


@pytest.mark.asyncio
async def test_reflect_uses_injected_exit_picker(mock_llm, request_record):
    service = SelahService(llm=mock_llm, pick_exit=lambda: "This is complete.")

    result = await service.reflect(request_record)

    assert result.exit_sentence == "This is complete."


@pytest.mark.asyncio
async def test_default_max_tokens_from_settings(mock_llm, request_record):
    service = SelahService(llm=mock_llm)

    await service.reflect(request_record)

    assert mock_llm.create_message.await_args.kwargs["max_tokens"] == 150


@pytest.mark.asyncio
async def test_upstream_rate_limit_becomes_rate_limit_error(mock_llm, request_record):
    mock_llm.create_message.side_effect = LLMAppError(
        message="Something went wrong.",
        details={"cause": "429 too many requests for sk-ant-abc"},
        upstream_kind=UpstreamErrorKind.RATE_LIMIT,
    )
    service = SelahService(llm=mock_llm)

    with pytest.raises(RateLimitAppError) as excinfo:
        await service.reflect(request_record)

    assert excinfo.value.to_response() == {
        "error": "rate_limit",
        "message": "Please wait a moment.",
    }


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "kind",
    [UpstreamErrorKind.TIMEOUT, UpstreamErrorKind.CONNECTION, UpstreamErrorKind.STATUS],
)
async def test_other_upstream_failures_stay_api_errors(mock_llm, request_record, kind):
    mock_llm.create_message.side_effect = LLMAppError(
        message="Something went wrong.", upstream_kind=kind
    )
    service = SelahService(llm=mock_llm)

    with pytest.raises(LLMAppError) as excinfo:
        await service.reflect(request_record)

    assert excinfo.value.to_response()["error"] == "api_error"


@pytest.mark.asyncio
async def test_rate_limit_message_text_alone_is_not_a_rate_limit(mock_llm, request_record):
    mock_llm.create_message.side_effect = RuntimeError("RateLimitError: rate limit exceeded")
    service = SelahService(llm=mock_llm)

    with pytest.raises(LLMAppError) as excinfo:
        await service.reflect(request_record)

    assert not isinstance(excinfo.value, RateLimitAppError)
    assert excinfo.value.message == "Something went wrong."
    assert "rate limit" not in excinfo.value.message
