"""CLI entry point for toolprep."""

import asyncio
import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from toolprep import __version__
from toolprep.config import ToolConfig, get_settings
from toolprep.errors import ConfigError
from toolprep.loader import load_config_file
from toolprep.observability import LoggingObserver, RecordingObserver
from toolprep.pipeline import PreparationPipeline, TaskState
from toolprep.registry import ToolRegistry

logger = logging.getLogger(__name__)

console = Console(safe_box=True)


class _CliObserver(RecordingObserver):
    """Records failures for the summary table and still logs every event."""

    def __init__(self) -> None:
        super().__init__()
        self._log = LoggingObserver()

    def cycle_started(self, tasks) -> None:
        super().cycle_started(tasks)
        self._log.cycle_started(tasks)

    def task_started(self, task) -> None:
        super().task_started(task)
        self._log.task_started(task)

    def task_succeeded(self, task) -> None:
        super().task_succeeded(task)
        self._log.task_succeeded(task)

    def task_failed(self, task, failure) -> None:
        super().task_failed(task, failure)
        self._log.task_failed(task, failure)

    def cycle_finished(self, available, unavailable) -> None:
        super().cycle_finished(available, unavailable)
        self._log.cycle_finished(available, unavailable)


def _load_registry(config_path: Path | None) -> ToolRegistry:
    settings = get_settings()
    path = config_path or settings.config_path
    editor_config = load_config_file(path)
    return ToolRegistry(
        editor_config,
        default_config=ToolConfig(icon_class_name=settings.default_icon_class),
    )


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="toolprep")
@click.option("--verbose", "-v", is_flag=True, help="Log every preparation step")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """toolprep - prepare editor tools and report which ones are usable."""
    try:
        settings = get_settings()
    except ValidationError as e:
        console.print(f"[red]Invalid settings:[/red] {escape(str(e))}")
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    if ctx.invoked_subcommand is None:
        console.print(
            "[bold blue]toolprep[/bold blue] "
            f"{__version__}\n\n"
            "Commands:\n"
            "  [green]toolprep prepare[/green] [CONFIG]  - Run a preparation cycle\n"
            "  [green]toolprep list[/green] [CONFIG]     - List registered tools\n"
        )


@cli.command()
@click.argument("config_path", required=False, type=click.Path(path_type=Path))
def prepare(config_path: Path | None) -> None:
    """Run one preparation cycle and show which tools are available."""
    try:
        registry = _load_registry(config_path)
    except ConfigError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        sys.exit(1)

    observer = _CliObserver()
    pipeline = PreparationPipeline(registry, observer)
    asyncio.run(pipeline.prepare())

    table = Table(title="Tool Preparation")
    table.add_column("Tool", style="cyan")
    table.add_column("Status", justify="center")
    table.add_column("Error", style="dim")

    status_styles = {
        TaskState.SUCCEEDED: "[green]AVAILABLE[/green]",
        TaskState.FAILED: "[red]UNAVAILABLE[/red]",
    }
    prepared = {task.name: task for task in pipeline.tasks}

    for name in registry.names():
        task = prepared.get(name)
        if task is None:
            table.add_row(name, "[dim]NO PREPARE[/dim]", "")
            continue
        failure = observer.failures.get(name)
        table.add_row(
            name,
            status_styles.get(task.state, task.state.value),
            str(failure.cause) if failure else "",
        )

    console.print(table)
    console.print(
        f"\n[dim]Available: {len(registry.available)} | "
        f"Unavailable: {len(registry.unavailable)} | "
        f"No prepare: {len(registry.unprepared())}[/dim]"
    )


@cli.command("list")
@click.argument("config_path", required=False, type=click.Path(path_type=Path))
def list_tools(config_path: Path | None) -> None:
    """List registered tools in registration order."""
    try:
        registry = _load_registry(config_path)
    except ConfigError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        sys.exit(1)

    if not len(registry):
        console.print("[dim]No tools registered.[/dim]")
        return

    table = Table(title="Registered Tools")
    table.add_column("#", justify="right")
    table.add_column("Tool", style="cyan")
    table.add_column("Prepare", justify="center")
    table.add_column("Icon", style="dim")

    for i, name in enumerate(registry.names(), 1):
        table.add_row(
            str(i),
            name,
            "yes" if registry.has_preparation(name) else "no",
            registry.tool_config(name).icon_class_name,
        )

    console.print(table)


if __name__ == "__main__":
    cli()
