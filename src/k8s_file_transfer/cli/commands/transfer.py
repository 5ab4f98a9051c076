"""CLI commands for copying files to and from a pod."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import typer
from rich.markup import escape

from k8s_file_transfer.cli.commands.base import (
    ContainerOption,
    ContextOption,
    NamespaceOption,
    PodOption,
    console,
    handle_config_error,
    handle_kubectl_error,
    handle_transfer_error,
    require_context,
    resolve_namespace,
)
from k8s_file_transfer.core.config.models import ConfigError
from k8s_file_transfer.integrations.kubectl.exceptions import KubectlError
from k8s_file_transfer.services.exceptions import TransferError
from k8s_file_transfer.services.history import describe_target
from k8s_file_transfer.services.models import TransferDirection, TransferRequest
from k8s_file_transfer.services.transfer import SUCCESS_MESSAGE, failure_message

if TYPE_CHECKING:
    from k8s_file_transfer.core.config.models import AppConfig
    from k8s_file_transfer.services.transfer import TransferManager


def register_transfer_commands(
    app: typer.Typer,
    get_manager: Callable[[], TransferManager],
    get_config: Callable[[], AppConfig],
) -> None:
    """Register the upload and download commands."""

    def _run(
        direction: TransferDirection,
        local_paths: list[str],
        pod: str,
        pod_path: str | None,
        context: str | None,
        namespace: str | None,
        container: str | None,
    ) -> None:
        try:
            config = get_config()
            manager = get_manager()
            request = TransferRequest(
                local_paths=local_paths,
                pod_path=pod_path or config.defaults.pod_path,
                pod_name=pod,
                namespace=resolve_namespace(config, namespace),
                context=require_context(manager.client, config, context),
                container=container,
                direction=direction,
            )
            target = f"{describe_target(request)}:{request.pod_path}"
            console.print(
                f"[cyan]{direction.label}[/cyan] {escape(request.local_path)} "
                f"[dim]<->[/dim] {escape(target)}",
                highlight=False,
            )
            with console.status(f"{direction.label} in progress..."):
                result = manager.execute(request)
        except ConfigError as e:
            handle_config_error(e)
        except TransferError as e:
            handle_transfer_error(e)
        except KubectlError as e:
            handle_kubectl_error(e)
        else:
            if not result.success:
                console.print(f"[red]{escape(failure_message(result))}[/red]")
                raise typer.Exit(result.exit_code or 1)
            if result.output.strip():
                console.print(result.output.rstrip(), markup=False)
            console.print(f"[green]{SUCCESS_MESSAGE}[/green]")

    @app.command("upload")
    def upload(
        local_paths: list[str] = typer.Argument(help="Local files or directories to copy"),
        pod: PodOption = ...,
        path: str | None = typer.Option(
            None, "--path", help="Destination path in the pod (defaults to config)"
        ),
        context: ContextOption = None,
        namespace: NamespaceOption = None,
        container: ContainerOption = None,
    ) -> None:
        """Copy local files into a pod.

        Each local path is copied with its own ``kubectl cp``; the first
        failure stops the upload.

        Examples:
            kft upload ./dump.sql --pod db-0 --path /tmp
            kft upload a.txt b.txt -p web-7d9f -n shop -c app
        """
        _run(TransferDirection.UPLOAD, local_paths, pod, path, context, namespace, container)

    @app.command("download")
    def download(
        pod_path: str = typer.Argument(help="Source path inside the pod"),
        local_path: str = typer.Argument(help="Local destination path"),
        pod: PodOption = ...,
        context: ContextOption = None,
        namespace: NamespaceOption = None,
        container: ContainerOption = None,
    ) -> None:
        """Copy a file or directory out of a pod.

        Examples:
            kft download /var/log/app.log ./app.log --pod web-7d9f
        """
        _run(
            TransferDirection.DOWNLOAD,
            [local_path],
            pod,
            pod_path,
            context,
            namespace,
            container,
        )
