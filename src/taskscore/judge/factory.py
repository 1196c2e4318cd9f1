"""Judge construction from configuration."""

from __future__ import annotations

import logging

from src.taskscore.config import TaskScoreConfig
from src.taskscore.judge.anthropic_judge import AnthropicJudge
from src.taskscore.judge.openai_judge import OpenAICompatibleJudge
from src.taskscore.judge.protocols import Judge

logger = logging.getLogger(__name__)

_PROVIDER_NAMES = {"openrouter": "OpenRouter", "openai": "OpenAI"}


def create_judge(config: TaskScoreConfig | None = None) -> Judge | None:
    """
    Build the configured judge.

    Returns None when the provider is 'none' or no API key is set. With no
    judge, scoring is skipped and ingestion is unaffected.
    """
    config = config or TaskScoreConfig()

    if config.judge_provider == "none":
        logger.info("Judge provider is 'none', automatic scoring disabled")
        return None

    if not config.judge_api_key:
        logger.warning(
            "No judge API key configured (TASKSCORE_JUDGE_API_KEY or OPENROUTER_API_KEY), "
            "automatic scoring disabled"
        )
        return None

    if config.judge_provider == "anthropic":
        judge: Judge = AnthropicJudge(
            api_key=config.judge_api_key,
            model=config.judge_model,
            max_tokens=config.judge_max_tokens,
            base_url=config.judge_base_url,
            timeout=config.judge_timeout_seconds,
        )
    else:
        judge = OpenAICompatibleJudge(
            api_key=config.judge_api_key,
            model=config.judge_model,
            base_url=config.resolved_base_url(),
            timeout=config.judge_timeout_seconds,
            provider_name=_PROVIDER_NAMES[config.judge_provider],
        )

    logger.info(f"Judge initialized: provider={config.judge_provider}, model={judge.model}")
    return judge
