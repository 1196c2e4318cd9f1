"""
Scoring Orchestrator

Decides whether a task gets scored, drives the judge, and persists exactly
one EvalScore per attempt. Triggered by Result events; every other event kind
is inert.

Per attempt:
    no judge            -> skip, nothing stored
    no config/disabled  -> skip, nothing stored
    judge succeeds      -> store score + verdict, error null
    judge raises        -> store error payload, score + verdict null

Scores are tagged with the config version read at the start of the attempt,
the judge model and the prompt hash. There is no dedup and no locking: two
Result events for one task produce two attempts.
"""

from __future__ import annotations

import json
import logging
import time
from typing import TYPE_CHECKING

from src.taskscore.common.telemetry import get_scoring_metrics, get_tracer, record_exception
from src.taskscore.contracts import EvalScore, InteractionType, JudgeVerdict
from src.taskscore.core import build_transcript, compile_prompt
from src.taskscore.exceptions import JudgeError

if TYPE_CHECKING:
    from src.taskscore.common.storage import (
        EvaluationConfigRepository,
        EventRepository,
        RepositoryProvider,
        ScoreRepository,
    )
    from src.taskscore.common.telemetry import ScoringMetrics
    from src.taskscore.contracts import EvaluationConfig, InteractionEvent
    from src.taskscore.judge import Judge

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)


def serialize_judge_failure(error: Exception) -> str:
    """Error payload stored on a failed EvalScore."""
    message = error.reason if isinstance(error, JudgeError) else str(error)
    return json.dumps({"error": message, "type": type(error).__name__})


class ScoringOrchestrator:
    """
    Scores finished tasks with an explicitly injected judge.

    The judge belongs to this instance; there is no process-wide judge. It is
    read once at the start of each attempt, so swapping it mid-flight never
    mixes two judges in one score row.

    Usage:
        orchestrator = ScoringOrchestrator.from_provider(provider, judge=create_judge())
        await orchestrator.handle_event(event)
    """

    def __init__(
        self,
        events: EventRepository,
        evaluations: EvaluationConfigRepository,
        scores: ScoreRepository,
        judge: Judge | None = None,
        metrics: ScoringMetrics | None = None,
    ):
        self._events = events
        self._evaluations = evaluations
        self._scores = scores
        self._judge = judge
        self._metrics = metrics or get_scoring_metrics()

    @classmethod
    def from_provider(
        cls,
        provider: RepositoryProvider,
        judge: Judge | None = None,
    ) -> ScoringOrchestrator:
        """Wire an orchestrator to an initialized RepositoryProvider."""
        return cls(provider.events, provider.evaluations, provider.scores, judge=judge)

    def set_judge(self, judge: Judge | None) -> None:
        """Install a judge, or None to disable scoring."""
        self._judge = judge

    def get_judge(self) -> Judge | None:
        return self._judge

    async def handle_event(self, event: InteractionEvent) -> EvalScore | None:
        """Score the event's task if the event is a Result; ignore anything else."""
        if event.interaction_type != InteractionType.RESULT:
            return None
        return await self.score_task_if_needed(event.tenant_id, event.agent_name, event.task_id)

    async def score_task_if_needed(
        self,
        tenant_id: str,
        agent_name: str,
        task_id: str,
    ) -> EvalScore | None:
        """
        Run one scoring attempt for a task.

        Judge failures are recorded as failed EvalScore rows and never raised.
        Storage failures propagate.

        Returns:
            The stored EvalScore, or None when scoring was skipped
        """
        judge = self._judge
        if judge is None:
            logger.debug(f"No judge installed, skipping scoring for task {task_id}")
            self._metrics.record_skip("no_judge", agent_name)
            return None

        with tracer.start_as_current_span("taskscore.score_task") as span:
            span.set_attribute("taskscore.agent_name", agent_name)
            span.set_attribute("taskscore.task_id", task_id[:64])

            config = await self._evaluations.get(tenant_id, agent_name)
            if config is None:
                logger.debug(f"No evaluation config for agent {agent_name}, skipping")
                span.set_attribute("taskscore.skipped", "no_config")
                self._metrics.record_skip("no_config", agent_name)
                return None
            if not config.is_enabled:
                logger.debug(f"Evaluation disabled for agent {agent_name}, skipping")
                span.set_attribute("taskscore.skipped", "disabled")
                self._metrics.record_skip("disabled", agent_name)
                return None

            span.set_attribute("taskscore.evaluation_version", config.version)
            span.set_attribute("taskscore.judge_model", judge.model)

            events = await self._events.list_for_task(tenant_id, task_id)
            transcript = build_transcript(events)
            prompt = compile_prompt(config.rubric_text, config.expected_text, transcript)
            span.set_attribute("taskscore.prompt_hash", prompt.hash)

            score = await self._run_judge(
                judge, config, tenant_id, agent_name, task_id, transcript, prompt.hash, span
            )
            await self._scores.insert(score)
            return score

    async def _run_judge(
        self,
        judge: Judge,
        config: EvaluationConfig,
        tenant_id: str,
        agent_name: str,
        task_id: str,
        transcript: str,
        prompt_hash: str,
        span,
    ) -> EvalScore:
        base = {
            "tenant_id": tenant_id,
            "task_id": task_id,
            "agent_name": agent_name,
            "evaluation_id": config.id,
            "evaluation_version": config.version,
            "llm_model": judge.model,
            "prompt_hash": prompt_hash,
        }

        started = time.perf_counter()
        try:
            verdict = await judge.evaluate(
                config.rubric_text or "",
                config.expected_text or "",
                transcript,
            )
            # JudgeVerdict or a {score, verdict} mapping
            verdict = JudgeVerdict.model_validate(verdict)
        except Exception as e:
            duration_ms = (time.perf_counter() - started) * 1000
            error_json = serialize_judge_failure(e)
            logger.warning(
                f"Judge failed for task {task_id} (agent={agent_name}, "
                f"model={judge.model}): {type(e).__name__}: {e}"
            )
            record_exception(e, span)
            self._metrics.record_attempt(
                agent_name, judge.model, duration_ms, error_type=type(e).__name__
            )
            return EvalScore(**base, error_json=error_json)

        duration_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"Scored task {task_id} (agent={agent_name}, version={config.version}): "
            f"{verdict.score}/10 in {duration_ms:.0f}ms"
        )
        self._metrics.record_attempt(agent_name, judge.model, duration_ms, score=verdict.score)
        return EvalScore(**base, score=verdict.score, verdict=verdict.verdict)
