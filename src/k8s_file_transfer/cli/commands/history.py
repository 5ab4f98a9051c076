"""CLI commands for the recent transfer history."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import typer

from k8s_file_transfer.cli.commands.base import (
    ForceOption,
    OutputOption,
    confirm_action,
    console,
    handle_config_error,
    resolve_output,
)
from k8s_file_transfer.cli.formatters import OutputFormat, get_formatter
from k8s_file_transfer.core.config.models import ConfigError
from k8s_file_transfer.services.history import (
    EMPTY_MESSAGE,
    NOT_AVAILABLE,
    describe_target,
    format_timestamp,
    truncate_path,
)

if TYPE_CHECKING:
    from k8s_file_transfer.core.config.models import AppConfig
    from k8s_file_transfer.services.history import TransferHistory
    from k8s_file_transfer.services.models import TransferResult

HISTORY_COLUMNS = [
    ("time", "Time"),
    ("direction", "Direction"),
    ("status", "Status"),
    ("local", "Local"),
    ("pod", "Pod Path"),
    ("target", "Target"),
    ("error", "Error"),
]


def _row(result: TransferResult) -> dict[str, Any]:
    request = result.request
    return {
        "time": format_timestamp(result.timestamp),
        "direction": request.direction.label,
        "status": "Success" if result.success else "Failed",
        "local": truncate_path(request.local_path),
        "pod": truncate_path(request.pod_path),
        "target": describe_target(request),
        "error": None if result.success else (result.error or NOT_AVAILABLE),
    }


def register_history_commands(
    app: typer.Typer,
    get_history: Callable[[], TransferHistory],
    get_config: Callable[[], AppConfig],
) -> None:
    """Register the ``history`` command group."""

    history_app = typer.Typer(help="Show or clear recent transfers.")
    app.add_typer(history_app, name="history")

    @history_app.callback(invoke_without_command=True)
    def show_history(
        ctx: typer.Context,
        limit: int | None = typer.Option(
            None, "--limit", "-l", min=1, help="Show at most this many transfers"
        ),
        output: OutputOption = None,
    ) -> None:
        """List recent transfers, newest first.

        Examples:
            kft history
            kft history --limit 5 -o json
        """
        if ctx.invoked_subcommand is not None:
            return

        try:
            fmt = resolve_output(output, get_config())
            history = get_history()
            entries = history.entries[:limit] if limit else history.entries
            formatter = get_formatter(fmt, console)
            if fmt is not OutputFormat.TABLE:
                formatter.format_list(entries, HISTORY_COLUMNS)
            elif not entries:
                console.print(f"[dim]{EMPTY_MESSAGE}[/dim]")
            else:
                rows = [_row(r) for r in entries]
                formatter.format_list(rows, HISTORY_COLUMNS, title="Transfer History")
                console.print(f"[dim]{history.summary}[/dim]")
        except ConfigError as e:
            handle_config_error(e)

    @history_app.command("clear")
    def clear_history(force: ForceOption = False) -> None:
        """Delete all recorded transfers.

        Examples:
            kft history clear --force
        """
        if not force and not confirm_action("Clear all transfer history?"):
            console.print("[yellow]Cancelled[/yellow]")
            raise typer.Exit(0)

        try:
            get_history().clear()
        except ConfigError as e:
            handle_config_error(e)
        console.print("[green]Transfer history cleared[/green]")
