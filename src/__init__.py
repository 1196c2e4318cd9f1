"""TaskScore - agent event ingestion and LLM-as-judge task scoring."""

__version__ = "0.1.0"
