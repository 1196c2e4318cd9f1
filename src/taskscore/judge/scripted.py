"""
Scripted Judge

Deterministic judge for tests and offline runs. Makes no network calls.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass

from src.taskscore.contracts import JudgeVerdict
from src.taskscore.judge.parsing import parse_judge_content

# A verdict to return, an exception to raise, or raw content to parse
ScriptedResponse = JudgeVerdict | Exception | str

DEFAULT_VERDICT = JudgeVerdict(score=8, verdict="Good job")


@dataclass(frozen=True)
class JudgeCall:
    """Arguments of one recorded evaluate() call."""

    rubric: str
    expected: str
    transcript: str


class ScriptedJudge:
    """
    Test double satisfying the Judge protocol.

    Queued responses are consumed first, one per call; after that every call
    gets the fixed `result`. Raw string responses go through the same parser
    as the network judges.

    Usage:
        judge = ScriptedJudge(RuntimeError("LLM returned garbage"))
        orchestrator = ScoringOrchestrator(events, evaluations, scores, judge=judge)
    """

    def __init__(
        self,
        result: ScriptedResponse = DEFAULT_VERDICT,
        model: str = "mock-model",
        responses: Iterable[ScriptedResponse] | None = None,
    ):
        self.model = model
        self._result = result
        self._queue: deque[ScriptedResponse] = deque(responses or ())
        self.calls: list[JudgeCall] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def set_result(self, result: ScriptedResponse) -> None:
        self._result = result

    def enqueue(self, *responses: ScriptedResponse) -> None:
        self._queue.extend(responses)

    async def evaluate(self, rubric: str, expected: str, transcript: str) -> JudgeVerdict:
        self.calls.append(JudgeCall(rubric=rubric, expected=expected, transcript=transcript))

        response = self._queue.popleft() if self._queue else self._result
        if isinstance(response, Exception):
            raise response
        if isinstance(response, str):
            return parse_judge_content(response, model=self.model)
        return response
