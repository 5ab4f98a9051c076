"""Command launching the interactive terminal UI."""

from __future__ import annotations

import structlog
import typer

from k8s_file_transfer.cli.commands.base import handle_config_error, handle_kubectl_error
from k8s_file_transfer.core.config.models import ConfigError, load_config
from k8s_file_transfer.integrations.kubectl.exceptions import KubectlError
from k8s_file_transfer.logging.config import configure_logging

logger = structlog.get_logger()


def tui(ctx: typer.Context) -> None:
    """Browse clusters and transfer files interactively."""
    from k8s_file_transfer.tui.apps.transfer import TransferApp

    options = ctx.obj or {}
    # stdout belongs to the screen from here on
    configure_logging(
        verbose=options.get("verbose", False),
        debug=options.get("debug", False),
        console=False,
    )

    try:
        app = TransferApp.from_config(load_config())
    except ConfigError as e:
        handle_config_error(e)
        return
    except KubectlError as e:
        handle_kubectl_error(e)
        return

    logger.info("tui_started")
    app.run()
    logger.info("tui_exited")
