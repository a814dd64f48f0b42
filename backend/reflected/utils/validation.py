from __future__ import annotations

from typing import Any

INVALID_ANSWER_MESSAGE = "Missing or invalid answer."
SHORT_ANSWER_MESSAGE = (
    "Please write at least a few sentences so we can reflect your response meaningfully."
)


class ValidationError(ValueError):
    """Raised when the incoming request payload is invalid."""


def validate_answer(payload: Any, min_length: int) -> str:
    """Return the trimmed answer from a request body or raise ValidationError."""
    if not isinstance(payload, dict):
        raise ValidationError(INVALID_ANSWER_MESSAGE)

    answer = payload.get("answer")
    if not answer or not isinstance(answer, str):
        raise ValidationError(INVALID_ANSWER_MESSAGE)

    trimmed = answer.strip()
    if len(trimmed) < min_length:
        raise ValidationError(SHORT_ANSWER_MESSAGE)
    return trimmed
