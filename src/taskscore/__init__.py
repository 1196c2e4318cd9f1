"""
TaskScore - Agent Task Scoring

Records interaction events emitted by AI agents, groups them into tasks and
scores finished tasks against a per-agent rubric with an LLM judge.

Modules:
- contracts: Data models (InteractionEvent, EvaluationConfig, EvalScore, ...)
- core: Pure task logic (status derivation, transcripts, prompts)
- judge: LLM judge gateway and test double
- scoring: Scoring orchestrator
- services: Ingestion and read operations
- common: Shared infrastructure (storage, telemetry, logging)
- cli: Command-line interface
"""

__version__ = "0.1.0"
