"""kubectl integration custom exceptions."""

from __future__ import annotations


class KubectlError(Exception):
    """Base exception for kubectl operations.

    Attributes:
        message: Human-readable error message.
        stderr: Standard error captured from the kubectl process.
        exit_code: Process exit code (if the process ran to completion).
    """

    def __init__(
        self,
        message: str,
        stderr: str | None = None,
        exit_code: int | None = None,
    ) -> None:
        """Initialize KubectlError.

        Args:
            message: Human-readable error message.
            stderr: Captured standard error.
            exit_code: Process exit code.
        """
        super().__init__(message)
        self.message = message
        self.stderr = stderr
        self.exit_code = exit_code

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.exit_code is not None:
            return f"{self.message} (exit code: {self.exit_code})"
        return self.message

    @property
    def detail(self) -> str:
        """Most specific description available: stderr, else the message."""
        if self.stderr and self.stderr.strip():
            return self.stderr.strip()
        return self.message


class KubectlBinaryNotFoundError(KubectlError):
    """Raised when the kubectl binary is not found."""

    def __init__(self, binary_path: str | None = None) -> None:
        if binary_path:
            message = f"kubectl binary not found at {binary_path}"
        else:
            message = (
                "kubectl binary not found in PATH. "
                "Install from: https://kubernetes.io/docs/tasks/tools/"
            )
        super().__init__(message=message)
        self.binary_path = binary_path


class KubectlCommandError(KubectlError):
    """Raised when a kubectl command exits with a non-zero status."""


class KubectlTimeoutError(KubectlError):
    """Raised when a kubectl command exceeds its timeout."""

    def __init__(self, timeout_seconds: int) -> None:
        super().__init__(message=f"kubectl command timed out after {timeout_seconds}s")
        self.timeout_seconds = timeout_seconds
