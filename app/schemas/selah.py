"""Pydantic schemas for the reflection endpoint."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


ErrorKindLiteral = Literal["validation_error", "rate_limit", "api_error", "config_error"]


class SelahRequest(BaseModel):
    """A validated reflection request.

    Instances are only built by the validator, after trimming.
    """

    model_config = ConfigDict(frozen=True)

    message: str = Field(
        ...,
        description="The user's trimmed response (1-500 characters).",
    )
    question: str = Field(
        ...,
        description="The trimmed opening question the user answered.",
    )


class SelahResponse(BaseModel):
    """Successful reflection payload."""

    model_config = ConfigDict(populate_by_name=True)

    reflection: str = Field(
        ...,
        description="One plain sentence restating the user's response.",
    )
    exit_sentence: str = Field(
        ...,
        alias="exitSentence",
        description="A closing sentence inviting the user to leave.",
    )


class SelahErrorResponse(BaseModel):
    """Uniform failure payload for every non-200 response."""

    error: ErrorKindLiteral = Field(
        ..., description="Machine-readable error kind."
    )
    message: str = Field(
        ..., description="Short, generic, user-facing message."
    )


class QuestionResponse(BaseModel):
    """An opening question to show the user."""

    question: str = Field(..., description="One of the fixed opening questions.")
