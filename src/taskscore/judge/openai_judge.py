"""
OpenAI-Compatible Judge

Scores tasks through a chat-completions endpoint. OpenRouter is the default
endpoint; any OpenAI-compatible base URL works.
"""

from __future__ import annotations

import logging
from typing import Any

import openai

from src.taskscore.config import DEFAULT_JUDGE_MODEL, OPENROUTER_BASE_URL
from src.taskscore.contracts import JudgeVerdict
from src.taskscore.core.prompts import build_prompt
from src.taskscore.exceptions import JudgeTransportError
from src.taskscore.judge.parsing import parse_judge_content

logger = logging.getLogger(__name__)


class OpenAICompatibleJudge:
    """
    Judge backed by a single chat completion in JSON mode.

    The client is built with retries disabled: a failed call surfaces
    immediately and the orchestrator records it.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_JUDGE_MODEL,
        base_url: str | None = OPENROUTER_BASE_URL,
        timeout: float | None = None,
        provider_name: str = "OpenRouter",
        client: Any = None,
    ):
        """
        Initialize the judge.

        Args:
            api_key: Provider API key (ignored when `client` is given)
            model: Model identifier sent with every request
            base_url: OpenAI-compatible endpoint; None uses the OpenAI default
            timeout: Request timeout in seconds; None keeps the client default
            provider_name: Label used in error messages
            client: Pre-built AsyncOpenAI-compatible client
        """
        self.model = model
        self.provider_name = provider_name
        if client is None:
            kwargs: dict[str, Any] = {
                "api_key": api_key,
                "base_url": base_url,
                "max_retries": 0,
            }
            if timeout is not None:
                kwargs["timeout"] = timeout
            client = openai.AsyncOpenAI(**kwargs)
        self._client = client

    async def evaluate(self, rubric: str, expected: str, transcript: str) -> JudgeVerdict:
        prompt = build_prompt(rubric, expected, transcript)

        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                response_format={"type": "json_object"},
            )
        except openai.APIStatusError as e:
            raise JudgeTransportError(
                f"{self.provider_name} API error: {e.status_code}",
                model=self.model,
                status_code=e.status_code,
            ) from e
        except openai.APIError as e:
            raise JudgeTransportError(
                f"{self.provider_name} request failed: {e}", model=self.model
            ) from e

        content = response.choices[0].message.content if response.choices else None
        logger.debug(f"Judge {self.model} returned {len(content or '')} chars")
        return parse_judge_content(content, model=self.model)
