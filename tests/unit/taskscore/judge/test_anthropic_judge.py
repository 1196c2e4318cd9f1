"""Unit tests for AnthropicJudge."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import anthropic
import httpx
import pytest

from src.taskscore.exceptions import JudgeResponseFormatError, JudgeTransportError
from src.taskscore.judge import AnthropicJudge

REQUEST = httpx.Request("POST", "https://api.anthropic.com/v1/messages")


def message(*blocks):
    return SimpleNamespace(content=list(blocks))


def text_block(text: str):
    return SimpleNamespace(type="text", text=text)


def make_judge(response=None, side_effect=None) -> tuple[AnthropicJudge, MagicMock]:
    client = MagicMock()
    client.messages.create = AsyncMock(return_value=response, side_effect=side_effect)
    return AnthropicJudge(api_key="k", model="claude-test", max_tokens=256, client=client), client


@pytest.mark.asyncio
async def test_evaluate_sends_prompt_and_parses_text():
    """Test the prompt goes out as one user message and text blocks are parsed."""
    judge, client = make_judge(message(text_block('{"score": 6, "verdict": "partial"}')))

    verdict = await judge.evaluate("Be precise", "42", "[UserInput] q\n[Result] 41")

    assert verdict.score == 6
    assert verdict.verdict == "partial"
    kwargs = client.messages.create.call_args.kwargs
    assert kwargs["model"] == "claude-test"
    assert kwargs["max_tokens"] == 256
    assert kwargs["temperature"] == 0.0
    assert "Be precise" in kwargs["messages"][0]["content"]


@pytest.mark.asyncio
async def test_text_blocks_are_joined():
    """Test JSON split across text blocks is reassembled, other blocks skipped."""
    judge, _ = make_judge(
        message(
            text_block('{"score": 9, '),
            SimpleNamespace(type="thinking", thinking="..."),
            text_block('"verdict": "great"}'),
        )
    )

    verdict = await judge.evaluate("r", "e", "t")
    assert verdict.score == 9


@pytest.mark.asyncio
async def test_no_text_content():
    judge, _ = make_judge(message())

    with pytest.raises(JudgeResponseFormatError):
        await judge.evaluate("r", "e", "t")


@pytest.mark.asyncio
async def test_http_error_status():
    error = anthropic.APIStatusError(
        "overloaded", response=httpx.Response(529, request=REQUEST), body=None
    )
    judge, _ = make_judge(side_effect=error)

    with pytest.raises(JudgeTransportError) as exc_info:
        await judge.evaluate("r", "e", "t")

    assert exc_info.value.reason == "Anthropic API error: 529"
    assert exc_info.value.status_code == 529


@pytest.mark.asyncio
async def test_connection_error():
    judge, _ = make_judge(side_effect=anthropic.APIConnectionError(request=REQUEST))

    with pytest.raises(JudgeTransportError) as exc_info:
        await judge.evaluate("r", "e", "t")
    assert exc_info.value.reason.startswith("Anthropic request failed")


def test_client_built_without_retries():
    with patch("src.taskscore.judge.anthropic_judge.anthropic.AsyncAnthropic") as client_cls:
        AnthropicJudge(api_key="k", timeout=5)

    kwargs = client_cls.call_args.kwargs
    assert kwargs["max_retries"] == 0
    assert kwargs["timeout"] == 5
    assert "base_url" not in kwargs
