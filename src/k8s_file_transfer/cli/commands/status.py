"""Status command for showing kubectl and configuration health."""

from __future__ import annotations

import platform

import structlog
import typer
from rich.console import Console
from rich.table import Table

from k8s_file_transfer import __version__
from k8s_file_transfer.core.config.models import (
    CONFIG_FILE,
    HISTORY_FILE,
    ConfigError,
    load_config,
)
from k8s_file_transfer.integrations.kubectl.client import KubectlClient
from k8s_file_transfer.integrations.kubectl.exceptions import KubectlError

console = Console()
logger = structlog.get_logger()


def status(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show detailed status information.",
    ),
) -> None:
    """Show kubectl availability, current context and configuration."""
    logger.info("checking_status", verbose=verbose)

    table = Table(title="Kubernetes File Transfer Status")
    table.add_column("Component", style="cyan", no_wrap=True)
    table.add_column("Status", style="green")
    table.add_column("Details", style="dim")

    table.add_row("CLI Version", __version__, "kft")
    table.add_row("Python", platform.python_version(), platform.python_implementation())
    if verbose:
        table.add_row("Platform", platform.system(), platform.release())

    config = None
    try:
        config = load_config()
    except ConfigError as e:
        table.add_row("Configuration", "[red]invalid[/red]", str(e))

    healthy = config is not None
    if config is not None:
        try:
            client = KubectlClient.from_config(config)
            table.add_row("kubectl", client.get_client_version(), client.binary)
            current = client.get_current_context()
            table.add_row("Current Context", current or "[yellow]none[/yellow]", "kubeconfig")
        except KubectlError as e:
            healthy = False
            table.add_row("kubectl", "[red]unavailable[/red]", e.message)

        if verbose:
            defaults = config.defaults
            table.add_row("Default Context", defaults.context or "-", "config")
            table.add_row("Default Namespace", defaults.namespace or "-", "config")
            table.add_row("Default Pod Path", defaults.pod_path, "config")

    console.print(table)

    if CONFIG_FILE.exists():
        console.print(f"\n[green]Configuration found:[/green] {CONFIG_FILE}")
    else:
        console.print(
            "\n[yellow]No configuration found.[/yellow] Run [bold]kft init[/bold] to create one."
        )
    if HISTORY_FILE.exists():
        console.print(f"[green]History file:[/green] {HISTORY_FILE}")

    logger.info("status_check_complete", healthy=healthy)
    if not healthy:
        raise typer.Exit(1)
