"""
Judge Protocol

Any object with a `model` identifier and an async `evaluate` method can
score a task. No inheritance required.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from src.taskscore.contracts import JudgeVerdict


@runtime_checkable
class Judge(Protocol):
    """
    LLM-as-judge gateway.

    One `evaluate` call makes at most one provider request. Implementations
    never retry; any failure is raised to the caller, normally as a
    JudgeError subclass.
    """

    model: str

    async def evaluate(self, rubric: str, expected: str, transcript: str) -> JudgeVerdict:
        """
        Score a transcript against a rubric and expected output.

        Args:
            rubric: Scoring rubric (may be empty)
            expected: Expected output (may be empty)
            transcript: Task transcript from build_transcript

        Returns:
            JudgeVerdict with an integer score in [1, 10]

        Raises:
            JudgeError: On transport failure or malformed output
        """
        ...
