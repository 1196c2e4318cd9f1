"""
Task commands - Inspect one task.

Usage:
    taskscore task show task-123 --tenant acme
    taskscore task events task-123 --tenant acme --limit 50
"""

from __future__ import annotations

import json
from typing import Annotated

import typer
from rich.panel import Panel
from rich.table import Table

from src.taskscore.cli.common import (
    TenantOption,
    console,
    format_score,
    format_status,
    run_with_repos,
)
from src.taskscore.services import get_task_detail, list_task_events

task_app = typer.Typer(
    name="task",
    help="Task inspection commands",
    no_args_is_help=True,
)


@task_app.command("show")
def task_show(
    task_id: Annotated[str, typer.Argument(help="Task id")],
    tenant: TenantOption,
) -> None:
    """Show a task's derived status and latest score."""
    detail = run_with_repos(lambda repos: get_task_detail(repos, tenant, task_id))
    summary = detail.summary

    lines = [
        f"[bold]Agent:[/bold] {summary.agent_name}",
        f"[bold]Status:[/bold] {format_status(summary.status.value)}",
        f"[bold]Started:[/bold] {summary.started_at.isoformat() if summary.started_at else '-'}",
        f"[bold]Duration:[/bold] {summary.duration_ms} ms",
        f"[bold]Events:[/bold] {summary.event_count}  "
        f"[bold]Errors:[/bold] {summary.error_count}  "
        f"[bold]Tool calls:[/bold] {summary.tool_call_count}",
        f"[bold]Score:[/bold] {format_score(detail.score)}",
    ]
    if detail.evaluation_version is not None:
        lines.append(f"[bold]Evaluation version:[/bold] {detail.evaluation_version}")
    if detail.verdict:
        lines.append(f"[bold]Verdict:[/bold] {detail.verdict}")
    if detail.score_error:
        lines.append(f"[bold red]Judge error:[/bold red] {json.dumps(detail.score_error)}")

    console.print(Panel("\n".join(lines), title=f"Task: {task_id}"))


@task_app.command("events")
def task_events(
    task_id: Annotated[str, typer.Argument(help="Task id")],
    tenant: TenantOption,
    limit: Annotated[int, typer.Option("--limit", "-n", help="Maximum events to show")] = 50,
) -> None:
    """List a task's events in chronological order."""
    events = run_with_repos(lambda repos: list_task_events(repos, tenant, task_id, limit=limit))

    table = Table(title=f"Events: {task_id}")
    table.add_column("Time")
    table.add_column("Type")
    table.add_column("Message")
    table.add_column("Data", style="dim")
    for event in events:
        view = event.to_view()
        blob = view["error_json"] or view["result_json"] or view["payload_json"]
        table.add_row(
            view["ts"],
            view["interaction_type"],
            view["message"] or "",
            json.dumps(blob) if blob is not None else "",
        )
    console.print(table)
