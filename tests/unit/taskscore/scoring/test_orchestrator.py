"""
Unit tests for the scoring orchestrator.

Uses the in-memory repositories and the scripted judge; nothing leaves the
process.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from src.taskscore.contracts import EvaluationConfigUpdate
from src.taskscore.core import compute_prompt_hash
from src.taskscore.exceptions import JudgeTransportError, StorageWriteError
from src.taskscore.judge import ScriptedJudge
from src.taskscore.scoring import ScoringOrchestrator, serialize_judge_failure

TENANT = "ws-alpha"
AGENT = "support-bot"

RUBRIC = "Answer accurately"
EXPECTED = "Correct output"


class MappingJudge:
    """Judge returning a fixed raw value instead of a JudgeVerdict."""

    model = "mapping-model"

    def __init__(self, value):
        self.value = value

    async def evaluate(self, rubric, expected, transcript):
        return self.value


async def configure(repos, **fields) -> None:
    update = EvaluationConfigUpdate(
        rubric_text=fields.pop("rubric_text", RUBRIC),
        expected_text=fields.pop("expected_text", EXPECTED),
        **fields,
    )
    await repos.evaluations.upsert(TENANT, AGENT, update)


async def store_task(repos, make_event, task_id: str = "task-1"):
    """Store the two-event arithmetic task and return its Result event."""
    question = make_event("UserInput", "What is 2+2?", at=0, task_id=task_id)
    answer = make_event("Result", "4", at=1, task_id=task_id)
    await repos.events.insert(question)
    await repos.events.insert(answer)
    return answer


# =============================================================================
# Skips
# =============================================================================


class TestSkips:
    """Tests for attempts that end without a judge call."""

    @pytest.mark.asyncio
    async def test_no_judge(self, repos, make_event):
        """Test nothing is stored when no judge is installed."""
        await configure(repos)
        result = await store_task(repos, make_event)
        orchestrator = ScoringOrchestrator.from_provider(repos, judge=None)

        assert await orchestrator.handle_event(result) is None
        assert await repos.scores.list_for_task(TENANT, "task-1") == []

    @pytest.mark.asyncio
    async def test_no_config(self, repos, orchestrator, judge, make_event):
        """Test nothing is stored when the agent has no evaluation config."""
        result = await store_task(repos, make_event)

        assert await orchestrator.handle_event(result) is None
        assert judge.call_count == 0
        assert await repos.scores.list_for_task(TENANT, "task-1") == []

    @pytest.mark.asyncio
    async def test_disabled_config(self, repos, orchestrator, judge, make_event):
        """Test nothing is stored when the config is disabled."""
        await configure(repos, is_enabled=False)
        result = await store_task(repos, make_event)

        assert await orchestrator.handle_event(result) is None
        assert judge.call_count == 0
        assert await repos.scores.list_for_task(TENANT, "task-1") == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "kind", ["UserInput", "ToolCall", "McpCall", "SkillCall", "Reasoning", "Error"]
    )
    async def test_only_result_events_trigger(self, repos, orchestrator, judge, make_event, kind):
        """Test non-Result events never reach the judge."""
        await configure(repos)
        event = make_event(kind, "x")
        await repos.events.insert(event)

        assert await orchestrator.handle_event(event) is None
        assert judge.call_count == 0

    @pytest.mark.asyncio
    async def test_other_agent_config_not_used(self, repos, orchestrator, judge, make_event):
        """Test a config for one agent does not score another agent's task."""
        await configure(repos)
        event = make_event("Result", "done", agent_name="other-bot")
        await repos.events.insert(event)

        assert await orchestrator.handle_event(event) is None
        assert judge.call_count == 0


# =============================================================================
# Successful attempts
# =============================================================================


class TestSuccess:
    """Tests for attempts where the judge returns a verdict."""

    @pytest.mark.asyncio
    async def test_scores_task(self, repos, orchestrator, judge, make_event):
        """Test a Result event produces one stored success row."""
        await configure(repos)
        result = await store_task(repos, make_event)

        score = await orchestrator.handle_event(result)

        assert score is not None
        assert score.score == 8
        assert score.verdict == "Good job"
        assert score.error_json is None
        assert score.evaluation_version == 1
        assert score.llm_model == "mock-model"
        assert score.task_id == "task-1"
        assert score.agent_name == AGENT

        config = await repos.evaluations.get(TENANT, AGENT)
        assert score.evaluation_id == config.id
        assert await repos.scores.list_for_task(TENANT, "task-1") == [score]

    @pytest.mark.asyncio
    async def test_judge_sees_transcript_and_config(self, repos, orchestrator, judge, make_event):
        """Test the judge gets the rubric, expected output and transcript."""
        await configure(repos)
        await make_and_score(repos, orchestrator, make_event)

        call = judge.calls[0]
        assert call.rubric == RUBRIC
        assert call.expected == EXPECTED
        assert call.transcript == "[UserInput] What is 2+2?\n[Result] 4"

    @pytest.mark.asyncio
    async def test_prompt_hash_recorded(self, repos, orchestrator, make_event):
        """Test the stored hash identifies the compiled prompt."""
        await configure(repos)
        score = await make_and_score(repos, orchestrator, make_event)

        assert score.prompt_hash == compute_prompt_hash(
            RUBRIC, EXPECTED, "[UserInput] What is 2+2?\n[Result] 4"
        )

    @pytest.mark.asyncio
    async def test_missing_texts_sent_as_empty(self, repos, orchestrator, judge, make_event):
        """Test a config without rubric or expected output sends empty strings."""
        await repos.evaluations.upsert(TENANT, AGENT, EvaluationConfigUpdate())
        await make_and_score(repos, orchestrator, make_event)

        assert judge.calls[0].rubric == ""
        assert judge.calls[0].expected == ""

    @pytest.mark.asyncio
    async def test_version_follows_config_updates(self, repos, orchestrator, make_event):
        """Test scores carry the version current at the time of the attempt."""
        await configure(repos)
        first = await make_and_score(repos, orchestrator, make_event, task_id="task-1")

        await repos.evaluations.upsert(TENANT, AGENT, EvaluationConfigUpdate(rubric_text="v2"))
        second = await make_and_score(repos, orchestrator, make_event, task_id="task-2")

        assert first.evaluation_version == 1
        assert second.evaluation_version == 2
        stored_first = await repos.scores.get_latest_for_task(TENANT, "task-1")
        assert stored_first.evaluation_version == 1

    @pytest.mark.asyncio
    async def test_each_result_is_an_attempt(self, repos, orchestrator, judge, make_event):
        """Test two Result events for one task produce two rows."""
        await configure(repos)
        first = await store_task(repos, make_event)
        second = make_event("Result", "4 (again)", at=2)
        await repos.events.insert(second)

        await orchestrator.handle_event(first)
        await orchestrator.handle_event(second)

        assert judge.call_count == 2
        assert len(await repos.scores.list_for_task(TENANT, "task-1")) == 2

    @pytest.mark.asyncio
    async def test_mapping_verdict_accepted(self, repos, make_event):
        """Test a judge returning a plain {score, verdict} mapping is scored normally."""
        await configure(repos)
        orchestrator = ScoringOrchestrator.from_provider(
            repos, judge=MappingJudge({"score": 6, "verdict": "Partly right"})
        )

        score = await make_and_score(repos, orchestrator, make_event)

        assert score.score == 6
        assert score.verdict == "Partly right"
        assert score.llm_model == "mapping-model"

    @pytest.mark.asyncio
    async def test_set_judge_swaps_implementation(self, repos, orchestrator, make_event):
        await configure(repos)
        replacement = ScriptedJudge(model="judge-b")
        orchestrator.set_judge(replacement)

        score = await make_and_score(repos, orchestrator, make_event)

        assert orchestrator.get_judge() is replacement
        assert score.llm_model == "judge-b"

    @pytest.mark.asyncio
    async def test_set_judge_none_disables(self, repos, orchestrator, make_event):
        await configure(repos)
        orchestrator.set_judge(None)

        assert await make_and_score(repos, orchestrator, make_event) is None


# =============================================================================
# Failed attempts
# =============================================================================


class TestFailures:
    """Tests for attempts where the judge raises."""

    @pytest.mark.asyncio
    async def test_judge_exception_stored_as_error_row(self, repos, orchestrator, judge, make_event):
        """Test a judge exception is recorded, not raised."""
        await configure(repos)
        judge.set_result(RuntimeError("LLM returned garbage"))

        score = await make_and_score(repos, orchestrator, make_event)

        assert score.score is None
        assert score.verdict is None
        assert score.error == {"error": "LLM returned garbage", "type": "RuntimeError"}
        assert score.evaluation_version == 1
        assert score.llm_model == "mock-model"
        assert score.prompt_hash is not None

        stored = await repos.scores.get_latest_for_task(TENANT, "task-1")
        assert stored.error["error"] == "LLM returned garbage"

    @pytest.mark.asyncio
    async def test_unparseable_output_stored(self, repos, orchestrator, judge, make_event):
        await configure(repos)
        judge.set_result("Score: 8. Good job.")

        score = await make_and_score(repos, orchestrator, make_event)

        assert score.error["type"] == "JudgeResponseFormatError"
        assert score.error["error"].startswith("Judge response is not valid JSON")

    @pytest.mark.asyncio
    async def test_out_of_range_stored(self, repos, orchestrator, judge, make_event):
        await configure(repos)
        judge.set_result('{"score": 15, "verdict": "amazing"}')

        score = await make_and_score(repos, orchestrator, make_event)

        assert score.score is None
        assert score.error == {
            "error": "Score out of range: 15. Must be 1-10.",
            "type": "JudgeScoreOutOfRangeError",
        }

    @pytest.mark.asyncio
    async def test_failure_then_success_latest_wins(self, repos, orchestrator, judge, make_event):
        """Test a later success supersedes an earlier failure as the latest score."""
        await configure(repos)
        judge.enqueue(JudgeTransportError("OpenRouter API error: 503", status_code=503))

        failed = await make_and_score(repos, orchestrator, make_event)
        retry = make_event("Result", "4", at=5)
        await repos.events.insert(retry)
        succeeded = await orchestrator.handle_event(retry)

        assert failed.error["error"] == "OpenRouter API error: 503"
        assert succeeded.score == 8
        latest = await repos.scores.get_latest_for_task(TENANT, "task-1")
        assert latest.id == succeeded.id

    @pytest.mark.asyncio
    async def test_malformed_judge_return_stored(self, repos, make_event):
        """Test a judge returning an invalid value yields an error row, not an exception."""
        await configure(repos)
        orchestrator = ScoringOrchestrator.from_provider(
            repos, judge=MappingJudge({"score": 15, "verdict": "amazing"})
        )

        score = await make_and_score(repos, orchestrator, make_event)

        assert score.score is None
        assert score.error["type"] == "ValidationError"
        assert await repos.scores.get_latest_for_task(TENANT, "task-1") == score

    @pytest.mark.asyncio
    async def test_storage_error_propagates(self, repos, judge, make_event):
        """Test a failure to store the score is raised to the caller."""
        await configure(repos)
        scores = AsyncMock()
        scores.insert.side_effect = StorageWriteError("EvalScore", "connection reset")
        orchestrator = ScoringOrchestrator(repos.events, repos.evaluations, scores, judge=judge)
        result = await store_task(repos, make_event)

        with pytest.raises(StorageWriteError):
            await orchestrator.handle_event(result)


class TestSerializeJudgeFailure:
    """Tests for the stored failure payload."""

    def test_judge_error_uses_bare_reason(self):
        error = JudgeTransportError("OpenRouter API error: 500", model="m", status_code=500)
        assert serialize_judge_failure(error) == (
            '{"error": "OpenRouter API error: 500", "type": "JudgeTransportError"}'
        )

    def test_other_exception_uses_str(self):
        assert serialize_judge_failure(ValueError("bad")) == (
            '{"error": "bad", "type": "ValueError"}'
        )


async def make_and_score(repos, orchestrator, make_event, task_id: str = "task-1"):
    result = await store_task(repos, make_event, task_id=task_id)
    return await orchestrator.handle_event(result)
