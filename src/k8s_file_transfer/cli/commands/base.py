"""Shared options, target resolution and error handling for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console

from k8s_file_transfer.cli.formatters import OutputFormat
from k8s_file_transfer.integrations.kubectl.exceptions import (
    KubectlBinaryNotFoundError,
    KubectlCommandError,
    KubectlError,
    KubectlTimeoutError,
)
from k8s_file_transfer.services.selection import DEFAULT_NAMESPACE

if TYPE_CHECKING:
    from k8s_file_transfer.core.config.models import AppConfig, ConfigError
    from k8s_file_transfer.integrations.kubectl.client import KubectlClient
    from k8s_file_transfer.services.exceptions import TransferError

# Shared console instance
console = Console()


# =============================================================================
# Common Typer Option Annotations
# =============================================================================

OutputOption = Annotated[
    OutputFormat | None,
    typer.Option(
        "--output",
        "-o",
        help="Output format: table, json, or yaml (defaults to config)",
        case_sensitive=False,
    ),
]

ContextOption = Annotated[
    str | None,
    typer.Option(
        "--context",
        help="kubectl context (defaults to config, then the current context)",
    ),
]

NamespaceOption = Annotated[
    str | None,
    typer.Option(
        "--namespace",
        "-n",
        help="Kubernetes namespace (defaults to config or 'default')",
    ),
]

ContainerOption = Annotated[
    str | None,
    typer.Option(
        "--container",
        "-c",
        help="Container name for multi-container pods",
    ),
]

PodOption = Annotated[
    str,
    typer.Option(
        "--pod",
        "-p",
        help="Pod name",
    ),
]

ForceOption = Annotated[
    bool,
    typer.Option(
        "--force",
        "-f",
        help="Skip confirmation prompts",
    ),
]


# =============================================================================
# Target Resolution
# =============================================================================


def resolve_output(output: OutputFormat | None, config: AppConfig) -> OutputFormat:
    """Explicit ``--output`` wins over the configured default."""
    return output or OutputFormat(config.output_format)


def resolve_context(
    client: KubectlClient,
    config: AppConfig,
    context: str | None,
) -> str | None:
    """Pick the context: option, then config default, then kubeconfig current."""
    return context or config.defaults.context or client.get_current_context()


def resolve_namespace(config: AppConfig, namespace: str | None) -> str:
    return namespace or config.defaults.namespace or DEFAULT_NAMESPACE


def require_context(
    client: KubectlClient,
    config: AppConfig,
    context: str | None,
) -> str:
    """Like ``resolve_context`` but exits when no context can be found."""
    resolved = resolve_context(client, config, context)
    if not resolved:
        console.print("[red]Error:[/red] No kubectl context selected")
        console.print(
            "\n[dim]Hint: Pass --context or set one with 'kubectl config use-context'.[/dim]"
        )
        raise typer.Exit(1)
    return resolved


# =============================================================================
# Error Handling
# =============================================================================


def handle_kubectl_error(error: KubectlError) -> None:
    """Handle kubectl errors with user-friendly output.

    Args:
        error: The kubectl error to handle.

    Raises:
        typer.Exit: Always exits with code 1.
    """
    if isinstance(error, KubectlBinaryNotFoundError):
        console.print("[red]Error:[/red] kubectl is not available")
        console.print(f"  {error.message}")
        console.print("\n[dim]Hint: Install kubectl or set KFT_KUBECTL to its path.[/dim]")

    elif isinstance(error, KubectlTimeoutError):
        console.print("[red]Error:[/red] Operation timed out")
        console.print(f"  {error.message}")
        console.print(
            "\n[dim]Hint: Raise kubectl.transfer_timeout in the config "
            "or set KFT_TRANSFER_TIMEOUT.[/dim]"
        )

    elif isinstance(error, KubectlCommandError):
        console.print("[red]Error:[/red] kubectl command failed")
        console.print(f"  {error.detail}", markup=False)
        if error.exit_code is not None:
            console.print(f"  Exit code: {error.exit_code}")

    else:
        console.print(f"[red]Error:[/red] {error.message}")

    raise typer.Exit(1)


def handle_config_error(error: ConfigError) -> None:
    """Report an unreadable configuration and exit.

    Raises:
        typer.Exit: Always exits with code 1.
    """
    console.print("[red]Error:[/red] Invalid configuration")
    console.print(f"  {error}", markup=False)
    console.print("\n[dim]Hint: Fix the file or recreate it with 'kft init --force'.[/dim]")
    raise typer.Exit(1)


def handle_transfer_error(error: TransferError) -> None:
    """Report a rejected transfer and exit.

    Raises:
        typer.Exit: Always exits with code 1.
    """
    color = "yellow" if error.severity == "warning" else "red"
    console.print(f"[{color}]Error:[/{color}] {error.message}")
    raise typer.Exit(1)


# =============================================================================
# Confirmation Utilities
# =============================================================================


def confirm_action(message: str, default: bool = False) -> bool:
    """Prompt user to confirm an action."""
    return typer.confirm(message, default=default)
