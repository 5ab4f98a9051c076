"""Main CLI entry point using Typer."""

from __future__ import annotations

import typer
from rich.console import Console

from k8s_file_transfer import __version__
from k8s_file_transfer.cli.commands import init, status, tui
from k8s_file_transfer.cli.commands.browse import register_browse_commands
from k8s_file_transfer.cli.commands.history import register_history_commands
from k8s_file_transfer.cli.commands.transfer import register_transfer_commands
from k8s_file_transfer.core.config.models import HISTORY_FILE, AppConfig, load_config
from k8s_file_transfer.integrations.kubectl.client import KubectlClient
from k8s_file_transfer.logging.config import configure_logging
from k8s_file_transfer.services.history import TransferHistory
from k8s_file_transfer.services.transfer import TransferManager

app = typer.Typer(
    name="kft",
    help="Copy files between your machine and Kubernetes pods.",
    add_completion=True,
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"kft version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug mode.",
    ),
) -> None:
    """Kubernetes File Transfer - browse pods and copy files with kubectl."""
    ctx.obj = {"verbose": verbose, "debug": debug}
    configure_logging(verbose=verbose, debug=debug)


# =============================================================================
# Service factories
# =============================================================================


def get_config() -> AppConfig:
    return load_config()


def get_client() -> KubectlClient:
    return KubectlClient.from_config(get_config())


def get_history() -> TransferHistory:
    config = get_config()
    path = HISTORY_FILE if config.history.enabled else None
    return TransferHistory(path, max_entries=config.history.max_entries)


def get_transfer_manager() -> TransferManager:
    return TransferManager(get_client(), get_history())


# Register subcommands
register_browse_commands(app, get_client, get_config)
register_transfer_commands(app, get_transfer_manager, get_config)
register_history_commands(app, get_history, get_config)
app.add_typer(init.app, name="init")
app.command()(status.status)
app.command()(tui.tui)


if __name__ == "__main__":
    app()
