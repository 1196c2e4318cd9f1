"""
Judge Prompt Compilation

Builds the fixed judge prompt and its content hash. The hash identifies the
exact prompt a score was produced from and is stored on every score row.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

PROMPT_HASH_LENGTH = 16

JUDGE_PROMPT_TEMPLATE = """You are an evaluation judge. Score the agent's performance on a scale of 1-10.

## Rubric
{rubric}

## Expected Output
{expected}

## Agent Transcript
{transcript}

## Instructions
Evaluate how well the agent's result matches the expected output according to the rubric.
Use an integer score from 1 (completely wrong) to 10 (fully meets the rubric).
You MUST respond with a single JSON object only. No prose, no markdown code fences:
{{"score": <integer 1-10>, "verdict": "<brief explanation>"}}"""


@dataclass(frozen=True)
class CompiledPrompt:
    """Prompt text together with its content hash."""

    text: str
    hash: str


def build_prompt(rubric: str | None, expected: str | None, transcript: str) -> str:
    """Fill the judge template. Missing rubric or expected output render as empty."""
    return JUDGE_PROMPT_TEMPLATE.format(
        rubric=rubric or "",
        expected=expected or "",
        transcript=transcript,
    )


def hash_prompt(prompt: str) -> str:
    """SHA-256 of the prompt, truncated to a short hex id for audit display."""
    return hashlib.sha256(prompt.encode("utf-8")).hexdigest()[:PROMPT_HASH_LENGTH]


def compile_prompt(rubric: str | None, expected: str | None, transcript: str) -> CompiledPrompt:
    text = build_prompt(rubric, expected, transcript)
    return CompiledPrompt(text=text, hash=hash_prompt(text))


def compute_prompt_hash(rubric: str | None, expected: str | None, transcript: str) -> str:
    return compile_prompt(rubric, expected, transcript).hash
