"""Models shared by the selection, transfer and history services."""

from __future__ import annotations

import time
from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class TransferDirection(StrEnum):
    """Direction of a file transfer relative to the pod."""

    UPLOAD = "upload"
    DOWNLOAD = "download"

    @property
    def label(self) -> str:
        """Action label shown on buttons and progress text."""
        return "Upload to Pod" if self is TransferDirection.UPLOAD else "Download from Pod"

    @property
    def opposite(self) -> TransferDirection:
        if self is TransferDirection.UPLOAD:
            return TransferDirection.DOWNLOAD
        return TransferDirection.UPLOAD


class TargetSelection(BaseModel):
    """The context/namespace/pod/container a transfer is aimed at.

    Empty strings mean "not selected".
    """

    model_config = ConfigDict(validate_assignment=True)

    context: str = ""
    namespace: str = ""
    pod: str = ""
    container: str = ""

    @property
    def is_transfer_ready(self) -> bool:
        """Context, namespace and pod are all chosen."""
        return bool(self.context and self.namespace and self.pod)

    @property
    def display_target(self) -> str:
        target = f"{self.context}/{self.namespace}/{self.pod}"
        if self.container:
            target += f" (container: {self.container})"
        return target


class TransferRequest(BaseModel):
    """Everything needed to run one transfer."""

    model_config = ConfigDict(populate_by_name=True)

    local_paths: list[str] = Field(min_length=1, description="Local sources or destination")
    pod_path: str = Field(description="Path inside the pod")
    pod_name: str
    namespace: str
    context: str
    container: str | None = None
    direction: TransferDirection = TransferDirection.UPLOAD

    @property
    def local_path(self) -> str:
        """Local paths as one display string."""
        return ", ".join(self.local_paths)


def split_local_paths(text: str) -> list[str]:
    """Split the comma-separated path list the file picker writes."""
    return [p.strip() for p in text.split(",") if p.strip()]


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


def _now_millis() -> int:
    return time.time_ns() // 1_000_000


class TransferResult(BaseModel):
    """Outcome of a transfer, as stored in history."""

    id: int = Field(default_factory=_now_millis, description="Creation time in epoch ms")
    success: bool
    output: str = ""
    error: str | None = None
    exit_code: int | None = None
    request: TransferRequest
    timestamp: str = Field(default_factory=_now_iso, description="ISO-8601 UTC timestamp")
