"""Init command for writing the default configuration file."""

from __future__ import annotations

import structlog
import typer
from rich.console import Console
from rich.panel import Panel

from k8s_file_transfer.core.config.models import (
    CONFIG_DIR,
    CONFIG_FILE,
    AppConfig,
)

app = typer.Typer(help="Create the kft configuration file.")
console = Console()
logger = structlog.get_logger()


@app.callback(invoke_without_command=True)
def init(
    ctx: typer.Context,
    context: str | None = typer.Option(
        None,
        "--context",
        help="Default kubectl context to record.",
    ),
    namespace: str | None = typer.Option(
        None,
        "--namespace",
        "-n",
        help="Default namespace to record.",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite existing configuration.",
    ),
) -> None:
    """Initialize configuration in ~/.config/kft/."""
    if ctx.invoked_subcommand is not None:
        return

    logger.info("initializing_config", path=str(CONFIG_FILE))

    CONFIG_DIR.mkdir(parents=True, exist_ok=True)

    if CONFIG_FILE.exists() and not force:
        console.print(f"[yellow]Configuration already exists at {CONFIG_FILE}[/yellow]")
        console.print("Use --force to overwrite.")
        raise typer.Exit(code=1)

    config = AppConfig()
    config.defaults.context = context
    config.defaults.namespace = namespace
    CONFIG_FILE.write_text(config.to_yaml())

    console.print(
        Panel(
            f"[green]Configuration initialized successfully![/green]\n\n"
            f"Configuration created at: {CONFIG_FILE}\n\n"
            f"Next steps:\n"
            f"  1. Edit {CONFIG_FILE} to set default targets and timeouts\n"
            f"  2. Run [bold]kft status[/bold] to check kubectl access\n"
            f"  3. Run [bold]kft tui[/bold] to start transferring files",
            title="kft init",
            border_style="green",
        )
    )

    logger.info("configuration_initialized", config_file=str(CONFIG_FILE))
