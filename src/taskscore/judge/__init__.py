"""
Judge Gateway

LLM-as-judge implementations behind one protocol:

- OpenAICompatibleJudge: OpenRouter / OpenAI chat completions
- AnthropicJudge: Anthropic Messages API
- ScriptedJudge: deterministic double for tests
"""

from src.taskscore.judge.anthropic_judge import AnthropicJudge
from src.taskscore.judge.factory import create_judge
from src.taskscore.judge.openai_judge import OpenAICompatibleJudge
from src.taskscore.judge.parsing import SCORE_MAX, SCORE_MIN, parse_judge_content
from src.taskscore.judge.protocols import Judge
from src.taskscore.judge.scripted import DEFAULT_VERDICT, JudgeCall, ScriptedJudge

__all__ = [
    "Judge",
    "parse_judge_content",
    "SCORE_MIN",
    "SCORE_MAX",
    "OpenAICompatibleJudge",
    "AnthropicJudge",
    "ScriptedJudge",
    "JudgeCall",
    "DEFAULT_VERDICT",
    "create_judge",
]
