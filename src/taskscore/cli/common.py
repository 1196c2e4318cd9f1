"""Shared CLI plumbing: console, tenant option and repository lifecycle."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Annotated, TypeVar

import typer
from rich.console import Console

from src.taskscore.common.storage import RepositoryProvider, StorageConfig
from src.taskscore.exceptions import TaskScoreError

console = Console()

T = TypeVar("T")

TenantOption = Annotated[
    str,
    typer.Option("--tenant", "-w", help="Tenant (workspace) id", envvar="TASKSCORE_TENANT"),
]


def run_with_repos(operation: Callable[[RepositoryProvider], Awaitable[T]]) -> T:
    """
    Run an async operation against repositories built from the environment.

    TaskScoreError is reported on the console and turned into exit code 1.
    """

    async def _runner() -> T:
        async with RepositoryProvider(StorageConfig()) as repos:
            return await operation(repos)

    try:
        return asyncio.run(_runner())
    except TaskScoreError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1) from e


def format_score(score: int | None) -> str:
    if score is None:
        return "[dim]-[/dim]"
    color = "green" if score >= 7 else "yellow" if score >= 4 else "red"
    return f"[{color}]{score}/10[/{color}]"


def format_status(status: str) -> str:
    color = {"succeeded": "green", "failed": "red"}.get(status, "yellow")
    return f"[{color}]{status}[/{color}]"
