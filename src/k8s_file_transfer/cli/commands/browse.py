"""CLI commands for browsing contexts, namespaces, pods and pod files."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import typer

from k8s_file_transfer.cli.commands.base import (
    ContainerOption,
    ContextOption,
    NamespaceOption,
    OutputOption,
    console,
    handle_config_error,
    handle_kubectl_error,
    require_context,
    resolve_namespace,
    resolve_output,
)
from k8s_file_transfer.cli.formatters import get_formatter
from k8s_file_transfer.core.config.models import ConfigError
from k8s_file_transfer.integrations.kubectl.exceptions import KubectlError

if TYPE_CHECKING:
    from k8s_file_transfer.core.config.models import AppConfig
    from k8s_file_transfer.integrations.kubectl.client import KubectlClient

# =============================================================================
# Column Definitions
# =============================================================================

CONTEXT_COLUMNS = [
    ("current", "Current"),
    ("name", "Name"),
]

NAME_COLUMNS = [("name", "Name")]

FILE_COLUMNS = [
    ("permissions", "Permissions"),
    ("owner", "Owner"),
    ("group", "Group"),
    ("size", "Size"),
    ("modified", "Modified"),
    ("name", "Name"),
    ("link_target", "Target"),
]


def _names(values: list[str]) -> list[dict[str, str]]:
    return [{"name": value} for value in values]


# =============================================================================
# Command Registration
# =============================================================================


def register_browse_commands(
    app: typer.Typer,
    get_client: Callable[[], KubectlClient],
    get_config: Callable[[], AppConfig],
) -> None:
    """Register the cluster browsing commands."""

    @app.command("contexts")
    def list_contexts(output: OutputOption = None) -> None:
        """List kubectl contexts.

        Examples:
            kft contexts
            kft contexts -o json
        """
        try:
            config = get_config()
            client = get_client()
            contexts = client.list_contexts()
            current = client.get_current_context()
            records = [{"current": name == current, "name": name} for name in contexts]
            formatter = get_formatter(resolve_output(output, config), console)
            formatter.format_list(records, CONTEXT_COLUMNS, title="Contexts")
        except ConfigError as e:
            handle_config_error(e)
        except KubectlError as e:
            handle_kubectl_error(e)

    @app.command("namespaces")
    def list_namespaces(
        context: ContextOption = None,
        output: OutputOption = None,
    ) -> None:
        """List namespaces in a context.

        Examples:
            kft namespaces
            kft namespaces --context staging
        """
        try:
            config = get_config()
            client = get_client()
            resolved = require_context(client, config, context)
            namespaces = client.list_namespaces(resolved)
            formatter = get_formatter(resolve_output(output, config), console)
            formatter.format_list(_names(namespaces), NAME_COLUMNS, title=f"Namespaces: {resolved}")
        except ConfigError as e:
            handle_config_error(e)
        except KubectlError as e:
            handle_kubectl_error(e)

    @app.command("pods")
    def list_pods(
        context: ContextOption = None,
        namespace: NamespaceOption = None,
        output: OutputOption = None,
    ) -> None:
        """List pods in a namespace.

        Examples:
            kft pods -n kube-system
        """
        try:
            config = get_config()
            client = get_client()
            resolved = require_context(client, config, context)
            ns = resolve_namespace(config, namespace)
            pods = client.list_pods(resolved, ns)
            formatter = get_formatter(resolve_output(output, config), console)
            formatter.format_list(_names(pods), NAME_COLUMNS, title=f"Pods: {resolved}/{ns}")
        except ConfigError as e:
            handle_config_error(e)
        except KubectlError as e:
            handle_kubectl_error(e)

    @app.command("containers")
    def list_containers(
        pod: str = typer.Argument(help="Pod name"),
        context: ContextOption = None,
        namespace: NamespaceOption = None,
        output: OutputOption = None,
    ) -> None:
        """List the containers of a pod.

        Examples:
            kft containers web-7d9f -n shop
        """
        try:
            config = get_config()
            client = get_client()
            resolved = require_context(client, config, context)
            ns = resolve_namespace(config, namespace)
            containers = client.list_containers(pod, context=resolved, namespace=ns)
            formatter = get_formatter(resolve_output(output, config), console)
            formatter.format_list(_names(containers), NAME_COLUMNS, title=f"Containers: {pod}")
        except ConfigError as e:
            handle_config_error(e)
        except KubectlError as e:
            handle_kubectl_error(e)

    @app.command("ls")
    def list_files(
        pod: str = typer.Argument(help="Pod name"),
        path: str = typer.Argument("/", help="Directory inside the pod"),
        context: ContextOption = None,
        namespace: NamespaceOption = None,
        container: ContainerOption = None,
        output: OutputOption = None,
    ) -> None:
        """List a directory inside a pod.

        Examples:
            kft ls web-7d9f /var/log
            kft ls web-7d9f /data -c sidecar -o json
        """
        try:
            config = get_config()
            client = get_client()
            resolved = require_context(client, config, context)
            ns = resolve_namespace(config, namespace)
            entries = client.list_pod_files(
                pod,
                path,
                namespace=ns,
                context=resolved,
                container=container,
            )
            formatter = get_formatter(resolve_output(output, config), console)
            formatter.format_list(entries, FILE_COLUMNS, title=f"{pod}:{path}")
        except ConfigError as e:
            handle_config_error(e)
        except KubectlError as e:
            handle_kubectl_error(e)
