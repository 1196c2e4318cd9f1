"""
Core task logic: status derivation, transcript building and prompt compilation.

Everything here is pure and synchronous.
"""

from src.taskscore.core.prompts import (
    JUDGE_PROMPT_TEMPLATE,
    PROMPT_HASH_LENGTH,
    CompiledPrompt,
    build_prompt,
    compile_prompt,
    compute_prompt_hash,
    hash_prompt,
)
from src.taskscore.core.status import derive_task_status, derive_task_summary, sort_events
from src.taskscore.core.transcript import build_transcript

__all__ = [
    "sort_events",
    "derive_task_status",
    "derive_task_summary",
    "build_transcript",
    "JUDGE_PROMPT_TEMPLATE",
    "PROMPT_HASH_LENGTH",
    "CompiledPrompt",
    "build_prompt",
    "hash_prompt",
    "compile_prompt",
    "compute_prompt_hash",
]
