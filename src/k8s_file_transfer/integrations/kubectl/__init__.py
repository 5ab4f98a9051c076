"""kubectl integration - CLI wrapper, result models and exceptions."""

from k8s_file_transfer.integrations.kubectl.client import KubectlClient, pod_reference
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

__all__ = [
    "KubectlBinaryNotFoundError",
    "KubectlClient",
    "KubectlCommandError",
    "KubectlCommandResult",
    "KubectlError",
    "KubectlTimeoutError",
    "PodFileEntry",
    "parse_ls_output",
    "pod_reference",
]
