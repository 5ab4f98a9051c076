"""Recent transfer history.

Entries are kept newest first and capped at ``MAX_ENTRIES``. When a path
is given the list is persisted as JSON so the CLI and the terminal UI
share it across runs.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import structlog
from pydantic import TypeAdapter, ValidationError

from k8s_file_transfer.services.models import TransferRequest, TransferResult

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

logger = structlog.get_logger()

MAX_ENTRIES = 50
PATH_DISPLAY_LENGTH = 30
NOT_AVAILABLE = "N/A"
EMPTY_MESSAGE = "No transfers yet. Start transferring files to see history here."

_RESULTS_ADAPTER = TypeAdapter(list[TransferResult])


class TransferHistory:
    """Newest-first list of transfer results, optionally backed by a file."""

    def __init__(self, path: Path | None = None, max_entries: int = MAX_ENTRIES) -> None:
        """Initialize the history, loading any persisted entries.

        Args:
            path: JSON file to persist to, or None to keep entries in memory.
            max_entries: Maximum number of entries retained.
        """
        self._path = path
        self._max_entries = max_entries
        self._entries: list[TransferResult] = self._load()

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def entries(self) -> list[TransferResult]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TransferResult]:
        return iter(list(self._entries))

    def add(self, result: TransferResult) -> None:
        """Prepend a result, dropping the oldest beyond the cap."""
        self._entries = [result, *self._entries[: self._max_entries - 1]]
        self._save()

    def clear(self) -> None:
        self._entries = []
        self._save()

    @property
    def summary(self) -> str:
        return f"Showing {len(self._entries)} recent transfers"

    def _load(self) -> list[TransferResult]:
        if self._path is None or not self._path.exists():
            return []
        try:
            entries = _RESULTS_ADAPTER.validate_json(self._path.read_bytes())
        except (OSError, ValidationError) as e:
            logger.warning("history_load_failed", path=str(self._path), error=str(e))
            return []
        return entries[: self._max_entries]

    def _save(self) -> None:
        if self._path is None:
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_bytes(_RESULTS_ADAPTER.dump_json(self._entries, indent=2))
        except OSError as e:
            # Entries stay in memory for this session
            logger.warning("history_save_failed", path=str(self._path), error=str(e))
            return
        logger.debug("history_saved", path=str(self._path), entries=len(self._entries))


# =============================================================================
# Display helpers
# =============================================================================


def truncate_path(path: str | None, max_length: int = PATH_DISPLAY_LENGTH) -> str:
    """Shorten a path from the left so its tail stays visible.

    Example:
        >>> truncate_path("/var/lib/data/very/deep/directory/file.txt")
        '...ery/deep/directory/file.txt'
    """
    if not path:
        return NOT_AVAILABLE
    if len(path) <= max_length:
        return path
    return "..." + path[-(max_length - 3) :]


def format_timestamp(timestamp: str) -> str:
    """Render an ISO timestamp in local time."""
    try:
        moment = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except ValueError:
        return timestamp
    return moment.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def describe_target(request: TransferRequest) -> str:
    """``namespace/pod`` plus the container in parentheses when set."""
    target = f"{request.namespace}/{request.pod_name}"
    if request.container:
        target += f" ({request.container})"
    return target
