"""
Evaluation commands - Manage an agent's evaluation config and read its scores.

Usage:
    taskscore evaluation set support-bot --tenant acme --rubric "Answer accurately"
    taskscore evaluation show support-bot --tenant acme
    taskscore scores support-bot --tenant acme --limit 10
"""

from __future__ import annotations

import json
from typing import Annotated

import typer
from rich.panel import Panel
from rich.table import Table

from src.taskscore.cli.common import TenantOption, console, format_score, run_with_repos
from src.taskscore.contracts import EvaluationConfigUpdate
from src.taskscore.services import get_evaluation, list_scores, put_evaluation

evaluation_app = typer.Typer(
    name="evaluation",
    help="Evaluation config commands",
    no_args_is_help=True,
)


@evaluation_app.command("set")
def evaluation_set(
    agent_name: Annotated[str, typer.Argument(help="Agent name")],
    tenant: TenantOption,
    rubric: Annotated[
        str | None, typer.Option("--rubric", "-r", help="Scoring rubric")
    ] = None,
    expected: Annotated[
        str | None, typer.Option("--expected", "-e", help="Expected output")
    ] = None,
    enabled: Annotated[
        bool | None,
        typer.Option("--enabled/--disabled", help="Turn automatic scoring on or off"),
    ] = None,
) -> None:
    """Create or update an agent's evaluation config. Unset options keep their value."""
    update = EvaluationConfigUpdate(rubric_text=rubric, expected_text=expected, is_enabled=enabled)
    result = run_with_repos(lambda repos: put_evaluation(repos, tenant, agent_name, update))

    action = "Created" if result.created else "Updated"
    console.print(
        f"[green]{action}[/green] evaluation for [bold]{agent_name}[/bold] "
        f"(version {result.version}, id {result.id})"
    )


@evaluation_app.command("show")
def evaluation_show(
    agent_name: Annotated[str, typer.Argument(help="Agent name")],
    tenant: TenantOption,
) -> None:
    """Show an agent's current evaluation config."""
    config = run_with_repos(lambda repos: get_evaluation(repos, tenant, agent_name))

    state = "[green]enabled[/green]" if config.is_enabled else "[yellow]disabled[/yellow]"
    body = (
        f"[bold]Version:[/bold] {config.version}   [bold]Scoring:[/bold] {state}\n"
        f"[bold]Updated:[/bold] {config.updated_at.isoformat()}\n\n"
        f"[bold]Rubric[/bold]\n{config.rubric_text or '[dim](none)[/dim]'}\n\n"
        f"[bold]Expected Output[/bold]\n{config.expected_text or '[dim](none)[/dim]'}"
    )
    console.print(Panel(body, title=f"Evaluation: {agent_name}"))


def scores_command(
    agent_name: Annotated[str, typer.Argument(help="Agent name")],
    tenant: TenantOption,
    limit: Annotated[int, typer.Option("--limit", "-n", help="Maximum scores to show")] = 20,
) -> None:
    """List an agent's most recent scores, newest first."""
    scores = run_with_repos(lambda repos: list_scores(repos, tenant, agent_name, limit=limit))

    table = Table(title=f"Scores: {agent_name}")
    table.add_column("Created")
    table.add_column("Task")
    table.add_column("Score")
    table.add_column("Version", justify="right")
    table.add_column("Model", style="dim")
    table.add_column("Verdict / Error")
    for score in scores:
        detail = score.verdict if score.succeeded else f"[red]{json.dumps(score.error)}[/red]"
        table.add_row(
            score.created_at.isoformat(),
            score.task_id,
            format_score(score.score),
            str(score.evaluation_version),
            score.llm_model or "",
            detail or "",
        )
    console.print(table)
