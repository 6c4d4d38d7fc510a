"""Click-based CLI entry point for csvtasks."""

import sys
from pathlib import Path

import click

from ..core.exceptions import CsvTasksError
from ..utils.rich_utils import get_console, install_rich_tracebacks
from .commands import OperationHandler

INPUT_FILE = click.Path(exists=True, file_okay=True, dir_okay=False, readable=True)


def _fail(error: CsvTasksError) -> None:
    click.echo(click.style(f"Error: {error}", fg="red"), err=True)
    sys.exit(1)


@click.group(invoke_without_command=True)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """csvtasks - bulk create and delete tasks from CSV files."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.option("--test-api", is_flag=True, help="Test API access")
def doctor(test_api: bool) -> None:
    """Check configuration and optionally API access."""
    handler = OperationHandler()
    if not handler.handle_doctor(test_api):
        sys.exit(1)


@cli.command()
def lists() -> None:
    """List available task lists."""
    handler = OperationHandler()
    try:
        handler.handle_list_tasklists()
    except CsvTasksError as e:
        _fail(e)


@cli.command(name="import")
@click.argument("input_file", type=INPUT_FILE)
@click.option("--list", "tasklist_id", help="Task list ID (default list if omitted)")
def import_tasks(input_file: str, tasklist_id: str | None) -> None:
    """Create one task per CSV row (columns: title, notes, due)."""
    handler = OperationHandler()
    try:
        result = handler.handle_import(Path(input_file), tasklist_id)
    except CsvTasksError as e:
        _fail(e)
        return
    if result.failures:
        sys.exit(1)


@cli.command()
@click.argument("input_file", type=INPUT_FILE)
@click.option("--list", "tasklist_id", help="Task list ID (default list if omitted)")
@click.option(
    "--dry-run", is_flag=True, help="Preview what would happen without executing"
)
@click.option("--yes", is_flag=True, help="Skip confirmation prompt")
def delete(input_file: str, tasklist_id: str | None, dry_run: bool, yes: bool) -> None:
    """Delete tasks matching the CSV rows (undo an import)."""
    handler = OperationHandler()
    try:
        if dry_run:
            handler.handle_preview_delete(Path(input_file), tasklist_id)
            return

        if not yes:
            click.confirm(
                "You are about to delete every task matching the CSV rows. Continue?",
                abort=True,
            )
        result = handler.handle_delete(Path(input_file), tasklist_id)
    except CsvTasksError as e:
        _fail(e)
        return
    if result.failed:
        sys.exit(1)


def main() -> None:
    """Main entry point for the CLI application."""
    try:
        install_rich_tracebacks()
        cli()
    except KeyboardInterrupt:
        get_console().print("\n[warning]Operation interrupted by user.[/warning]")
        sys.exit(0)


if __name__ == "__main__":
    main()
