"""Service-layer exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from k8s_file_transfer.integrations.kubectl.exceptions import KubectlError

Severity = Literal["information", "warning", "error"]

SelectionLevel = Literal["contexts", "namespaces", "pods", "containers"]

_LEVEL_LABELS: dict[str, str] = {
    "contexts": "kubectl contexts",
    "namespaces": "namespaces",
    "pods": "pods",
    "containers": "containers",
}


class TransferError(Exception):
    """Base exception for transfer operations."""

    severity: Severity = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TransferValidationError(TransferError):
    """Raised when a transfer form or target is incomplete."""

    severity: Severity = "warning"


class TransferInProgressError(TransferError):
    """Raised when a transfer is requested while another is running."""

    severity: Severity = "warning"

    def __init__(self) -> None:
        super().__init__("A transfer is already in progress")


class SelectionLoadError(Exception):
    """Raised when listing one level of the target hierarchy fails.

    Attributes:
        level: Which list failed to load.
        cause: The underlying kubectl error.
    """

    def __init__(self, level: SelectionLevel, cause: KubectlError) -> None:
        self.level = level
        self.cause = cause
        self.message = f"Failed to load {_LEVEL_LABELS[level]}: {cause.detail}"
        super().__init__(self.message)
