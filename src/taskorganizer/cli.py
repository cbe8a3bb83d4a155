"""Task Organizer CLI entry point."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from . import __version__
from .config import Config
from .state.persistence import JsonFileStore
from .state.tasks import RenameResult, Task, TaskStore
from .state.view import FilterMode, visible
from .utils.logger import EventLogger

STATUS_SYMBOLS = {False: "○", True: "●"}


def open_task_store(config: Config, store_path: Optional[Path] = None) -> TaskStore:
    """Build the TaskStore for this session from config (and an optional path override)."""
    path = store_path or config.store_path
    return TaskStore(
        JsonFileStore(path),
        key=config.store_key,
        logger=EventLogger(config.log_file),
    )


def format_task(task: Task) -> str:
    return f"{STATUS_SYMBOLS[task.completed]} [{task.id}] {task.text}"


def _start_tui(ctx: click.Context) -> None:
    """Helper to launch the Textual TUI."""
    from .interactive import TaskOrganizerApp

    config: Config = ctx.obj["config"]
    try:
        default_filter = FilterMode.coerce(config.default_filter)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc

    app = TaskOrganizerApp(ctx.obj["store"], default_filter=default_filter)
    app.run()


@click.group(invoke_without_command=True)
@click.version_option(version=__version__)
@click.option(
    "--store",
    "store_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Task file to use instead of the configured one.",
)
@click.pass_context
def main(ctx: click.Context, store_path: Optional[Path]) -> None:
    """Task Organizer - personal task list manager."""
    try:
        config = Config()
    except ValueError as exc:  # tomllib.TOMLDecodeError
        raise click.ClickException(f"Invalid configuration: {exc}") from exc

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["store"] = open_task_store(config, store_path)

    if ctx.invoked_subcommand is None:
        _start_tui(ctx)


@main.command()
@click.pass_context
def tui(ctx: click.Context) -> None:
    """Start Textual TUI."""
    _start_tui(ctx)


@main.command()
@click.argument("text", nargs=-1, required=True)
@click.pass_context
def add(ctx: click.Context, text: tuple[str, ...]) -> None:
    """Add a task."""
    store: TaskStore = ctx.obj["store"]
    task = store.create(" ".join(text))
    if task is None:
        click.echo("Nothing to add: task text is empty.")
        return
    click.echo(f"Added {format_task(task)}")


@main.command(name="list")
@click.option(
    "--filter",
    "mode",
    type=click.Choice([mode.value for mode in FilterMode]),
    default=None,
    help="Which tasks to show (default from config).",
)
@click.option("--search", default="", help="Case-insensitive text to look for.")
@click.pass_context
def list_tasks(ctx: click.Context, mode: Optional[str], search: str) -> None:
    """List tasks."""
    store: TaskStore = ctx.obj["store"]
    config: Config = ctx.obj["config"]
    try:
        tasks = visible(store.list_all(), mode or config.default_filter, search)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc

    if not tasks:
        click.echo("No tasks found.")
        return
    for task in tasks:
        click.echo(format_task(task))


@main.command()
@click.argument("task_id", type=int)
@click.argument("text", nargs=-1)
@click.pass_context
def edit(ctx: click.Context, task_id: int, text: tuple[str, ...]) -> None:
    """Change a task's text (empty text cancels)."""
    store: TaskStore = ctx.obj["store"]
    result = store.rename(task_id, " ".join(text))
    if result is RenameResult.UPDATED:
        click.echo(f"Updated {format_task(store.get(task_id))}")
    elif result is RenameResult.CANCELLED:
        click.echo("Edit cancelled: task text unchanged.")
    else:
        click.echo(f"Task {task_id} not found")


@main.command()
@click.argument("task_id", type=int)
@click.pass_context
def toggle(ctx: click.Context, task_id: int) -> None:
    """Mark a task completed or active again."""
    store: TaskStore = ctx.obj["store"]
    task = store.toggle_complete(task_id)
    if task is None:
        click.echo(f"Task {task_id} not found")
        return
    state = "completed" if task.completed else "active"
    click.echo(f"Task {task_id} marked as {state}")


@main.command()
@click.argument("task_id", type=int)
@click.pass_context
def delete(ctx: click.Context, task_id: int) -> None:
    """Delete a task."""
    store: TaskStore = ctx.obj["store"]
    if store.delete(task_id):
        click.echo(f"Task {task_id} deleted")
    else:
        click.echo(f"Task {task_id} not found")


if __name__ == "__main__":
    main()
