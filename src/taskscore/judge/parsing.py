"""
Judge Output Parsing

Strict validation of raw judge content, shared by every judge implementation
so that network judges and the scripted double fail identically.
"""

from __future__ import annotations

import json
import math
from typing import Any

from src.taskscore.contracts import JudgeVerdict
from src.taskscore.exceptions import JudgeResponseFormatError, JudgeScoreOutOfRangeError

SCORE_MIN = 1
SCORE_MAX = 10


def parse_judge_content(content: str | None, model: str | None = None) -> JudgeVerdict:
    """
    Parse raw judge output into a JudgeVerdict.

    The content must be a JSON object with a numeric `score` and a string
    `verdict`. Scores outside [1, 10] are rejected, never clamped. In-range
    fractional scores are rounded half-up.

    Args:
        content: Raw message content returned by the provider
        model: Judge model, attached to raised errors

    Returns:
        JudgeVerdict

    Raises:
        JudgeResponseFormatError: If the content is missing or badly shaped
        JudgeScoreOutOfRangeError: If the score is outside [1, 10]
    """
    if content is None or not content.strip():
        raise JudgeResponseFormatError("No content in judge response", model=model)

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise JudgeResponseFormatError(
            f"Judge response is not valid JSON: {e.msg}", model=model
        ) from e

    if not isinstance(data, dict):
        raise JudgeResponseFormatError("Invalid judge output format", model=model)

    score = data.get("score")
    verdict = data.get("verdict")
    if not _is_number(score) or not isinstance(verdict, str):
        raise JudgeResponseFormatError("Invalid judge output format", model=model)

    if not SCORE_MIN <= score <= SCORE_MAX:
        raise JudgeScoreOutOfRangeError(score, model=model)

    return JudgeVerdict(score=_round_half_up(score), verdict=verdict)


def _is_number(value: Any) -> bool:
    # bool is an int subclass; true/false are not scores
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
