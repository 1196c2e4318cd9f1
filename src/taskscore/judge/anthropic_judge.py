"""Judge backed by the Anthropic Messages API."""

from __future__ import annotations

import logging
from typing import Any

import anthropic

from src.taskscore.contracts import JudgeVerdict
from src.taskscore.core.prompts import build_prompt
from src.taskscore.exceptions import JudgeTransportError
from src.taskscore.judge.parsing import parse_judge_content

logger = logging.getLogger(__name__)


class AnthropicJudge:
    """Same contract as OpenAICompatibleJudge, over Claude messages."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "claude-3-5-haiku-latest",
        max_tokens: int = 1024,
        base_url: str | None = None,
        timeout: float | None = None,
        client: Any = None,
    ):
        self.model = model
        self.max_tokens = max_tokens
        if client is None:
            kwargs: dict[str, Any] = {"api_key": api_key, "max_retries": 0}
            if base_url:
                kwargs["base_url"] = base_url
            if timeout is not None:
                kwargs["timeout"] = timeout
            client = anthropic.AsyncAnthropic(**kwargs)
        self._client = client

    async def evaluate(self, rubric: str, expected: str, transcript: str) -> JudgeVerdict:
        prompt = build_prompt(rubric, expected, transcript)

        try:
            message = await self._client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=0.0,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIStatusError as e:
            raise JudgeTransportError(
                f"Anthropic API error: {e.status_code}",
                model=self.model,
                status_code=e.status_code,
            ) from e
        except anthropic.APIError as e:
            raise JudgeTransportError(f"Anthropic request failed: {e}", model=self.model) from e

        text = "".join(
            block.text for block in message.content if getattr(block, "type", None) == "text"
        )
        return parse_judge_content(text, model=self.model)
