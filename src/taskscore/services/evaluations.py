"""
Evaluation Config Operations

PUT/GET of per-agent evaluation configs and the agent's score history.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from src.taskscore.exceptions import EntityNotFoundError
from src.taskscore.services.pagination import clamp_limit

if TYPE_CHECKING:
    from src.taskscore.common.storage import RepositoryProvider
    from src.taskscore.contracts import EvalScore, EvaluationConfig, EvaluationConfigUpdate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PutEvaluationResult:
    """Outcome of a PUT: config id, new version, and whether it was created."""

    id: str
    version: int
    created: bool


async def put_evaluation(
    repos: RepositoryProvider,
    tenant_id: str,
    agent_name: str,
    update: EvaluationConfigUpdate,
) -> PutEvaluationResult:
    """
    Create or update an agent's evaluation config.

    The first PUT creates version 1 (empty texts stored as null, enabled by
    default). Each later PUT bumps the version and keeps fields it leaves
    unset. Scores already stored keep the version they were produced under.
    """
    config, created = await repos.evaluations.upsert(tenant_id, agent_name, update)
    logger.info(
        f"Evaluation config for agent {agent_name} "
        f"{'created' if created else 'updated'} (version={config.version})"
    )
    return PutEvaluationResult(id=config.id, version=config.version, created=created)


async def get_evaluation(
    repos: RepositoryProvider,
    tenant_id: str,
    agent_name: str,
) -> EvaluationConfig:
    """
    Fetch an agent's evaluation config.

    Raises:
        EntityNotFoundError: If the agent has no config
    """
    config = await repos.evaluations.get(tenant_id, agent_name)
    if config is None:
        raise EntityNotFoundError("EvaluationConfig", agent_name)
    return config


async def list_scores(
    repos: RepositoryProvider,
    tenant_id: str,
    agent_name: str,
    limit: int = 20,
) -> list[EvalScore]:
    """Recent scores for an agent, newest first. Failed attempts carry their error."""
    return await repos.scores.list_for_agent(tenant_id, agent_name, limit=clamp_limit(limit))
