"""
Ingest command - Load interaction events from a JSON file.

Usage:
    taskscore ingest events.json --tenant acme

The file holds one event object or an array of them. Result events trigger
scoring when a judge is configured.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.table import Table

from src.taskscore.cli.common import TenantOption, console, format_score, run_with_repos
from src.taskscore.common.storage import RepositoryProvider
from src.taskscore.config import TaskScoreConfig
from src.taskscore.exceptions import EventValidationError
from src.taskscore.judge import create_judge
from src.taskscore.scoring import ScoringOrchestrator
from src.taskscore.services import IngestResult, ingest_event

logger = logging.getLogger(__name__)


def _load_bodies(path: Path) -> list[Any]:
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        console.print(f"[red]Error:[/red] {path} is not valid JSON: {e}")
        raise typer.Exit(1) from e
    return data if isinstance(data, list) else [data]


def ingest_command(
    events_file: Annotated[
        Path,
        typer.Argument(help="JSON file with one event or an array of events", exists=True),
    ],
    tenant: TenantOption,
) -> None:
    """Ingest interaction events and score finished tasks."""
    bodies = _load_bodies(events_file)

    async def _ingest(repos: RepositoryProvider) -> list[IngestResult]:
        orchestrator = ScoringOrchestrator.from_provider(
            repos, judge=create_judge(TaskScoreConfig())
        )
        results = []
        for index, body in enumerate(bodies):
            try:
                results.append(await ingest_event(repos, orchestrator, tenant, body))
            except EventValidationError as e:
                console.print(f"[red]Rejected event #{index}:[/red] {e.reason}")
        return results

    results = run_with_repos(_ingest)

    table = Table(title=f"Ingested {len(results)}/{len(bodies)} events")
    table.add_column("Event ID", style="dim")
    table.add_column("Task")
    table.add_column("Type")
    table.add_column("Score")
    for result in results:
        event = result.event
        score_cell = ""
        if result.score is not None:
            score_cell = (
                format_score(result.score.score)
                if result.score.succeeded
                else "[red]judge error[/red]"
            )
        table.add_row(event.id, event.task_id, event.interaction_type.value, score_cell)
    console.print(table)

    if len(results) < len(bodies):
        raise typer.Exit(1)
