"""Unit tests for strict judge output parsing."""

from __future__ import annotations

import pytest

from src.taskscore.contracts import JudgeVerdict
from src.taskscore.exceptions import (
    JudgeError,
    JudgeResponseFormatError,
    JudgeScoreOutOfRangeError,
)
from src.taskscore.judge import parse_judge_content


class TestValidContent:
    """Tests for content that parses to a verdict."""

    def test_integer_score(self):
        verdict = parse_judge_content('{"score": 8, "verdict": "Good job"}')
        assert verdict == JudgeVerdict(score=8, verdict="Good job")

    @pytest.mark.parametrize("score", [1, 10])
    def test_bounds_inclusive(self, score):
        """Test 1 and 10 are both accepted."""
        assert parse_judge_content(f'{{"score": {score}, "verdict": "x"}}').score == score

    @pytest.mark.parametrize(
        "raw,expected",
        [(7.4, 7), (7.5, 8), (8.5, 9), (1.2, 1), (9.6, 10), (10.0, 10)],
    )
    def test_fractional_scores_round_half_up(self, raw, expected):
        """Test in-range fractional scores round half-up to an integer."""
        assert parse_judge_content(f'{{"score": {raw}, "verdict": "x"}}').score == expected

    def test_surrounding_whitespace_and_extra_keys(self):
        """Test whitespace and extra fields are tolerated."""
        verdict = parse_judge_content('\n  {"score": 5, "verdict": "meh", "notes": []}  \n')
        assert verdict.score == 5
        assert verdict.verdict == "meh"


class TestRejectedContent:
    """Tests for content that must fail."""

    @pytest.mark.parametrize("content", [None, "", "   "])
    def test_no_content(self, content):
        with pytest.raises(JudgeResponseFormatError) as exc_info:
            parse_judge_content(content)
        assert exc_info.value.reason == "No content in judge response"

    @pytest.mark.parametrize(
        "content",
        [
            "Score: 8. Good job.",
            '```json\n{"score": 8, "verdict": "ok"}\n```',
            '{"score": 8, "verdict": "ok"',
        ],
    )
    def test_not_json(self, content):
        """Test prose, fenced JSON and truncated JSON are all rejected."""
        with pytest.raises(JudgeResponseFormatError) as exc_info:
            parse_judge_content(content)
        assert exc_info.value.reason.startswith("Judge response is not valid JSON")

    @pytest.mark.parametrize(
        "content",
        [
            "[8, \"ok\"]",
            "8",
            '{"verdict": "ok"}',
            '{"score": 8}',
            '{"score": "8", "verdict": "ok"}',
            '{"score": true, "verdict": "ok"}',
            '{"score": 8, "verdict": 3}',
            '{"score": null, "verdict": "ok"}',
        ],
    )
    def test_wrong_shape(self, content):
        with pytest.raises(JudgeResponseFormatError) as exc_info:
            parse_judge_content(content)
        assert exc_info.value.reason == "Invalid judge output format"

    @pytest.mark.parametrize("score", [0, 11, -1, 0.4, 10.5, 100])
    def test_out_of_range_rejected_not_clamped(self, score):
        """Test out-of-range raw scores are errors, never clamped."""
        with pytest.raises(JudgeScoreOutOfRangeError) as exc_info:
            parse_judge_content(f'{{"score": {score}, "verdict": "x"}}')
        assert exc_info.value.reason == f"Score out of range: {score}. Must be 1-10."
        assert exc_info.value.score == score

    def test_errors_carry_model(self):
        """Test the model label is attached to parse errors."""
        with pytest.raises(JudgeError) as exc_info:
            parse_judge_content("nope", model="judge-x")
        assert exc_info.value.model == "judge-x"
        assert "judge-x" in str(exc_info.value)
