"""Unit tests for judge transcript assembly."""

from __future__ import annotations

from src.taskscore.core import build_transcript


class TestBuildTranscript:
    """Tests for build_transcript."""

    def test_user_input_and_result(self, make_event):
        """Test the basic two-line transcript."""
        events = [
            make_event("UserInput", "What is 2+2?", at=0),
            make_event("Result", "4", at=1),
        ]
        assert build_transcript(events) == "[UserInput] What is 2+2?\n[Result] 4"

    def test_process_events_excluded(self, make_event):
        """Test tool calls, reasoning and errors never reach the judge."""
        events = [
            make_event("UserInput", "q", at=0),
            make_event("ToolCall", "search()", at=1),
            make_event("McpCall", "fetch()", at=2),
            make_event("SkillCall", "skill()", at=3),
            make_event("Reasoning", "hmm", at=4),
            make_event("Error", "oops", at=5),
            make_event("Result", "a", at=6),
        ]
        assert build_transcript(events) == "[UserInput] q\n[Result] a"

    def test_chronological_regardless_of_input_order(self, make_event):
        """Test lines follow event time, not arrival order."""
        events = [
            make_event("Result", "second answer", at=3),
            make_event("UserInput", "first question", at=0),
            make_event("Result", "first answer", at=1),
            make_event("UserInput", "second question", at=2),
        ]
        assert build_transcript(events) == (
            "[UserInput] first question\n"
            "[Result] first answer\n"
            "[UserInput] second question\n"
            "[Result] second answer"
        )

    def test_missing_message_renders_empty(self, make_event):
        """Test events without a message keep their line with empty text."""
        events = [make_event("UserInput", None, at=0), make_event("Result", "ok", at=1)]
        assert build_transcript(events) == "[UserInput] \n[Result] ok"

    def test_empty(self, make_event):
        """Test no visible events yields an empty transcript."""
        assert build_transcript([]) == ""
        assert build_transcript([make_event("ToolCall")]) == ""

    def test_deterministic(self, make_event):
        """Test identical event sets produce identical text."""
        events = [make_event("UserInput", "q", at=0), make_event("Result", "a", at=1)]
        assert build_transcript(events) == build_transcript(list(reversed(events)))
