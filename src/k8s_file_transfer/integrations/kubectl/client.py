"""kubectl CLI wrapper for cluster discovery and pod file transfer.

Wraps the kubectl binary via subprocess for context, namespace, pod and
container listing, ``kubectl cp`` in both directions, and directory
listings inside a pod.
"""

from __future__ import annotations

import json
import shutil
import subprocess
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from k8s_file_transfer.integrations.kubectl.exceptions import (
    KubectlBinaryNotFoundError,
    KubectlCommandError,
    KubectlError,
    KubectlTimeoutError,
)
from k8s_file_transfer.integrations.kubectl.models import (
    KubectlCommandResult,
    PodFileEntry,
    parse_ls_output,
)

if TYPE_CHECKING:
    from k8s_file_transfer.core.config.models import AppConfig

logger = structlog.get_logger()

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DISCOVERY_TIMEOUT_SECONDS = 30
TRANSFER_TIMEOUT_SECONDS = 3600
VERSION_TIMEOUT_SECONDS = 10
DEFAULT_RETRY_ATTEMPTS = 3

CONTAINER_NAMES_JSONPATH = "jsonpath={.spec.containers[*].name}"


def _strip_prefix(lines: str, prefix: str) -> list[str]:
    names = []
    for line in lines.strip().split("\n"):
        name = line.strip()
        if name.startswith(prefix):
            name = name[len(prefix) :]
        if name:
            names.append(name)
    return names


def pod_reference(pod: str, pod_path: str, namespace: str | None = None) -> str:
    """Build the ``[namespace/]pod:path`` operand understood by ``kubectl cp``."""
    if namespace:
        return f"{namespace}/{pod}:{pod_path}"
    return f"{pod}:{pod_path}"


class KubectlClient:
    """Client for interacting with the kubectl CLI.

    Every operation is a single kubectl invocation built as an argument
    list. Read-only discovery calls are retried on timeout; copies are not.

    Example:
        ```python
        client = KubectlClient()
        for ctx in client.list_contexts():
            print(ctx, client.list_namespaces(ctx))
        ```
    """

    def __init__(
        self,
        binary_path: str | None = None,
        *,
        discovery_timeout: int = DISCOVERY_TIMEOUT_SECONDS,
        transfer_timeout: int = TRANSFER_TIMEOUT_SECONDS,
        retry_attempts: int = DEFAULT_RETRY_ATTEMPTS,
    ) -> None:
        """Initialize kubectl client.

        Args:
            binary_path: Optional explicit path to kubectl binary.
                If None, searches PATH.
            discovery_timeout: Timeout in seconds for listing commands.
            transfer_timeout: Timeout in seconds for ``kubectl cp``.
            retry_attempts: Attempts for listing commands that time out.

        Raises:
            KubectlBinaryNotFoundError: If binary not found.
        """
        self._binary = self._find_binary(binary_path)
        self._discovery_timeout = discovery_timeout
        self._transfer_timeout = transfer_timeout
        self._retries = retry_attempts
        self._log = logger.bind(binary=self._binary)
        self._log.debug("kubectl_client_initialized")

    @classmethod
    def from_config(cls, config: AppConfig) -> KubectlClient:
        """Create a client from the application configuration."""
        return cls(
            config.kubectl.binary,
            discovery_timeout=config.kubectl.discovery_timeout,
            transfer_timeout=config.kubectl.transfer_timeout,
            retry_attempts=config.kubectl.retry_attempts,
        )

    @property
    def binary(self) -> str:
        """Resolved path to the kubectl binary."""
        return self._binary

    @staticmethod
    def _find_binary(binary_path: str | None) -> str:
        """Locate kubectl binary.

        Args:
            binary_path: Explicit path or None to search PATH.

        Returns:
            Path to kubectl binary.

        Raises:
            KubectlBinaryNotFoundError: If not found.
        """
        if binary_path:
            path = Path(binary_path).expanduser()
            if not path.exists():
                raise KubectlBinaryNotFoundError(binary_path)
            return str(path.resolve())

        found = shutil.which("kubectl")
        if not found:
            raise KubectlBinaryNotFoundError()

        return found

    @staticmethod
    def _context_args(context: str | None) -> list[str]:
        return [f"--context={context}"] if context else []

    @staticmethod
    def _namespace_args(namespace: str | None) -> list[str]:
        return ["-n", namespace] if namespace else []

    def _run(
        self,
        args: list[str],
        *,
        timeout: int,
    ) -> subprocess.CompletedProcess[str]:
        """Run a kubectl command.

        Args:
            args: Command arguments (without the ``kubectl`` prefix).
            timeout: Timeout in seconds.

        Returns:
            CompletedProcess result.

        Raises:
            KubectlCommandError: On non-zero exit.
            KubectlTimeoutError: On timeout.
        """
        cmd = [self._binary, *args]
        self._log.debug("running_kubectl_command", args=args)

        try:
            return subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=True,
                timeout=timeout,
            )
        except subprocess.CalledProcessError as e:
            stderr = e.stderr.strip() if e.stderr else ""
            raise KubectlCommandError(
                message=f"kubectl command failed: {stderr or f'exit code {e.returncode}'}",
                stderr=e.stderr,
                exit_code=e.returncode,
            ) from e
        except subprocess.TimeoutExpired as e:
            raise KubectlTimeoutError(timeout) from e
        except OSError as e:
            raise KubectlError(message=f"Unable to run kubectl: {e}") from e

    def make_retry_decorator(self) -> Any:
        """Create a retry decorator for listing commands that time out.

        Returns:
            A tenacity retry decorator configured with exponential backoff.
        """
        return retry(
            retry=retry_if_exception_type(KubectlTimeoutError),
            stop=stop_after_attempt(self._retries),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            reraise=True,
        )

    def _run_discovery(self, args: list[str]) -> subprocess.CompletedProcess[str]:
        run = self.make_retry_decorator()(self._run)
        result: subprocess.CompletedProcess[str] = run(args, timeout=self._discovery_timeout)
        return result

    # -----------------------------------------------------------------------
    # Version
    # -----------------------------------------------------------------------

    def get_client_version(self) -> str:
        """Get the kubectl client version string (e.g. ``v1.31.0``).

        Raises:
            KubectlError: If the version command fails or prints garbage.
        """
        result = self._run(
            ["version", "--client", "-o", "json"],
            timeout=VERSION_TIMEOUT_SECONDS,
        )
        try:
            data = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise KubectlError(message="Failed to parse kubectl version output") from e
        return str(data.get("clientVersion", {}).get("gitVersion", "unknown"))

    # -----------------------------------------------------------------------
    # Discovery
    # -----------------------------------------------------------------------

    def list_contexts(self) -> list[str]:
        """List context names from the active kubeconfig."""
        result = self._run_discovery(["config", "get-contexts", "-o", "name"])
        return [ctx for ctx in result.stdout.strip().split("\n") if ctx]

    def get_current_context(self) -> str | None:
        """Return the kubeconfig's current context, or None when unset."""
        try:
            result = self._run_discovery(["config", "current-context"])
        except KubectlCommandError:
            return None
        return result.stdout.strip() or None

    def list_namespaces(self, context: str | None = None) -> list[str]:
        """List namespace names visible in a context.

        Args:
            context: Context to query, or None for the current one.
        """
        args = [*self._context_args(context), "get", "namespaces", "-o", "name"]
        result = self._run_discovery(args)
        return _strip_prefix(result.stdout, "namespace/")

    def list_pods(self, context: str | None = None, namespace: str | None = None) -> list[str]:
        """List pod names in a namespace.

        Args:
            context: Context to query, or None for the current one.
            namespace: Namespace to list, or None for the context default.
        """
        args = [
            *self._context_args(context),
            "get",
            "pods",
            "-o",
            "name",
            *self._namespace_args(namespace),
        ]
        result = self._run_discovery(args)
        return _strip_prefix(result.stdout, "pod/")

    def list_containers(
        self,
        pod: str,
        context: str | None = None,
        namespace: str | None = None,
    ) -> list[str]:
        """List container names declared in a pod spec.

        Args:
            pod: Pod name.
            context: Context to query.
            namespace: Namespace of the pod.
        """
        args = [
            *self._context_args(context),
            "get",
            "pod",
            *self._namespace_args(namespace),
            pod,
            "-o",
            CONTAINER_NAMES_JSONPATH,
        ]
        result = self._run_discovery(args)
        return [name for name in result.stdout.strip().split() if name]

    # -----------------------------------------------------------------------
    # File transfer
    # -----------------------------------------------------------------------

    def copy_to_pod(
        self,
        local_path: str,
        pod: str,
        pod_path: str,
        *,
        namespace: str | None = None,
        context: str | None = None,
        container: str | None = None,
    ) -> KubectlCommandResult:
        """Copy a local file or directory into a pod.

        Args:
            local_path: Source path on this machine.
            pod: Target pod name.
            pod_path: Destination path inside the pod.
            namespace: Namespace of the pod.
            context: Context holding the pod.
            container: Target container for multi-container pods.

        Returns:
            Command result.

        Raises:
            KubectlCommandError: If kubectl exits non-zero.
            KubectlTimeoutError: If the copy exceeds the transfer timeout.
        """
        args = [
            *self._context_args(context),
            "cp",
            local_path,
            pod_reference(pod, pod_path, namespace),
        ]
        if container:
            args.extend(["-c", container])

        result = self._run(args, timeout=self._transfer_timeout)
        self._log.info("kubectl_copy_to_pod_success", pod=pod, local_path=local_path)
        return KubectlCommandResult(
            success=True,
            stdout=result.stdout,
            stderr=result.stderr or "",
            exit_code=result.returncode,
        )

    def copy_from_pod(
        self,
        pod: str,
        pod_path: str,
        local_path: str,
        *,
        namespace: str | None = None,
        context: str | None = None,
        container: str | None = None,
    ) -> KubectlCommandResult:
        """Copy a file or directory out of a pod.

        Args:
            pod: Source pod name.
            pod_path: Source path inside the pod.
            local_path: Destination path on this machine.
            namespace: Namespace of the pod.
            context: Context holding the pod.
            container: Source container for multi-container pods.

        Returns:
            Command result.

        Raises:
            KubectlCommandError: If kubectl exits non-zero.
            KubectlTimeoutError: If the copy exceeds the transfer timeout.
        """
        args = [
            *self._context_args(context),
            "cp",
            pod_reference(pod, pod_path, namespace),
            local_path,
        ]
        if container:
            args.extend(["-c", container])

        result = self._run(args, timeout=self._transfer_timeout)
        self._log.info("kubectl_copy_from_pod_success", pod=pod, local_path=local_path)
        return KubectlCommandResult(
            success=True,
            stdout=result.stdout,
            stderr=result.stderr or "",
            exit_code=result.returncode,
        )

    # -----------------------------------------------------------------------
    # Pod filesystem
    # -----------------------------------------------------------------------

    def list_pod_files_raw(
        self,
        pod: str,
        pod_path: str,
        *,
        namespace: str | None = None,
        context: str | None = None,
        container: str | None = None,
    ) -> str:
        """Run ``ls -la`` inside a pod and return its stdout."""
        args = [
            *self._context_args(context),
            "exec",
            pod,
            *self._namespace_args(namespace),
        ]
        if container:
            args.extend(["-c", container])
        args.extend(["--", "ls", "-la", pod_path])

        result = self._run_discovery(args)
        return result.stdout

    def list_pod_files(
        self,
        pod: str,
        pod_path: str,
        *,
        namespace: str | None = None,
        context: str | None = None,
        container: str | None = None,
    ) -> list[PodFileEntry]:
        """List a directory inside a pod.

        Args:
            pod: Pod name.
            pod_path: Directory (or file) to list.
            namespace: Namespace of the pod.
            context: Context holding the pod.
            container: Container to exec into.

        Returns:
            Parsed directory entries.
        """
        output = self.list_pod_files_raw(
            pod,
            pod_path,
            namespace=namespace,
            context=context,
            container=container,
        )
        return parse_ls_output(output)
