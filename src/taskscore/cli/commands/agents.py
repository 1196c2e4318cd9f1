"""
Agent commands - Per-agent totals and task lists.

Usage:
    taskscore agents --tenant acme
    taskscore agent-tasks support-bot --tenant acme
"""

from __future__ import annotations

from typing import Annotated

import typer
from rich.table import Table

from src.taskscore.cli.common import (
    TenantOption,
    console,
    format_score,
    format_status,
    run_with_repos,
)
from src.taskscore.services import list_agent_tasks, list_agents


def agents_command(
    tenant: TenantOption,
    limit: Annotated[int, typer.Option("--limit", "-n", help="Maximum agents to show")] = 20,
) -> None:
    """List agents with task, success and error counts."""
    stats = run_with_repos(lambda repos: list_agents(repos, tenant, limit=limit))

    table = Table(title="Agents")
    table.add_column("Agent", style="bold")
    table.add_column("Tasks", justify="right")
    table.add_column("Succeeded", justify="right", style="green")
    table.add_column("Errors", justify="right", style="red")
    table.add_column("Last Seen")
    for agent in stats:
        table.add_row(
            agent.agent_name,
            str(agent.tasks_count),
            str(agent.success_count),
            str(agent.error_count),
            agent.last_seen.isoformat() if agent.last_seen else "-",
        )
    console.print(table)


def agent_tasks_command(
    agent_name: Annotated[str, typer.Argument(help="Agent name")],
    tenant: TenantOption,
    limit: Annotated[int, typer.Option("--limit", "-n", help="Maximum tasks to show")] = 20,
) -> None:
    """List an agent's tasks with status and latest score."""
    rows = run_with_repos(lambda repos: list_agent_tasks(repos, tenant, agent_name, limit=limit))

    table = Table(title=f"Tasks: {agent_name}")
    table.add_column("Task")
    table.add_column("Status")
    table.add_column("Started")
    table.add_column("Duration (ms)", justify="right")
    table.add_column("Events", justify="right")
    table.add_column("Score")
    for row in rows:
        table.add_row(
            row.task_id,
            format_status(row.status.value),
            row.started_at.isoformat() if row.started_at else "-",
            str(row.duration_ms) if row.duration_ms is not None else "-",
            str(row.event_count),
            format_score(row.score),
        )
    console.print(table)
