"""
TaskScore CLI

Entry point for the command-line interface.

Usage:
    taskscore ingest events.json --tenant acme
    taskscore evaluation set support-bot --tenant acme --rubric "Answer accurately"
    taskscore task show task-123 --tenant acme
    python -m src.taskscore.cli.main --help
"""

import atexit

import typer

from src.taskscore.cli.commands.agents import agent_tasks_command, agents_command
from src.taskscore.cli.commands.evaluation import evaluation_app, scores_command
from src.taskscore.cli.commands.ingest import ingest_command
from src.taskscore.cli.commands.tasks import task_app
from src.taskscore.common.logging import configure_sanitized_logging
from src.taskscore.common.telemetry import init_telemetry, shutdown_telemetry
from src.taskscore.config import TaskScoreConfig

app = typer.Typer(
    name="taskscore",
    help="TaskScore - Agent event ingestion and LLM-as-judge task scoring",
    no_args_is_help=True,
)


@app.callback()
def main() -> None:
    """Configure logging and telemetry before any command runs."""
    configure_sanitized_logging(level=TaskScoreConfig().log_level)
    if init_telemetry(service_name="taskscore-cli"):
        atexit.register(shutdown_telemetry)


# Register commands
app.command(name="ingest", help="Ingest events from a JSON file")(ingest_command)
app.command(name="agents", help="List agents with totals")(agents_command)
app.command(name="agent-tasks", help="List an agent's tasks")(agent_tasks_command)
app.command(name="scores", help="List an agent's recent scores")(scores_command)

# Register subcommand groups
app.add_typer(evaluation_app, name="evaluation", help="Evaluation config commands")
app.add_typer(task_app, name="task", help="Task inspection commands")


@app.command()
def version() -> None:
    """Show version information."""
    from src.taskscore import __version__

    typer.echo(f"taskscore version {__version__}")


if __name__ == "__main__":
    app()
