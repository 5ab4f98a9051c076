"""Recent transfers panel."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual import on
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.widgets import Button, Static

from k8s_file_transfer.services.history import (
    EMPTY_MESSAGE,
    NOT_AVAILABLE,
    describe_target,
    format_timestamp,
    truncate_path,
)
from k8s_file_transfer.services.models import TransferDirection
from k8s_file_transfer.tui.base import BaseWidget
from k8s_file_transfer.tui.components import ConfirmModal
from k8s_file_transfer.tui.theme import Styles

if TYPE_CHECKING:
    from k8s_file_transfer.services.history import TransferHistory
    from k8s_file_transfer.services.models import TransferResult

CLEARED_MESSAGE = "Transfer history cleared"


def render_entry(result: TransferResult) -> str:
    """Markup for one history entry."""
    request = result.request
    arrow = "↑" if request.direction is TransferDirection.UPLOAD else "↓"
    status = Styles.success("Success") if result.success else Styles.error("Failed")
    lines = [
        f"{Styles.bold(f'{arrow} {request.direction.label}')}  {status}",
        f"Local: {Styles.primary(truncate_path(request.local_path))}",
        f"Pod: {Styles.primary(truncate_path(request.pod_path))}",
        f"Target: {Styles.primary(describe_target(request))}",
    ]
    if not result.success:
        lines.append(f"Error: {Styles.error(result.error or NOT_AVAILABLE)}")
    lines.append(Styles.muted(format_timestamp(result.timestamp)))
    return "\n".join(lines)


class HistoryPanel(BaseWidget):
    """Right-hand panel listing recent transfers, newest first."""

    DEFAULT_CSS = """
    HistoryPanel {
        width: 1fr;
        height: 100%;
        border: round $primary;
        border-title-style: bold;
        padding: 0 1;
    }

    HistoryPanel #history-summary {
        color: $text-muted;
        margin-bottom: 1;
    }

    HistoryPanel #history-list {
        height: 1fr;
    }

    HistoryPanel .history-entry {
        margin-bottom: 1;
        padding: 0 1;
        border-left: tall $success;
    }

    HistoryPanel .history-entry.failed {
        border-left: tall $error;
    }

    HistoryPanel #clear-history {
        width: 100%;
    }
    """

    def __init__(
        self,
        history: TransferHistory,
        *,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self._history = history

    @property
    def history(self) -> TransferHistory:
        return self._history

    def compose(self) -> ComposeResult:
        yield Static("", id="history-summary")
        yield VerticalScroll(id="history-list")
        yield Button("Clear", id="clear-history", variant="error")

    def on_mount(self) -> None:
        self.border_title = "Transfer History"
        self.refresh_entries()

    def refresh_entries(self) -> None:
        """Re-render the list from the history store."""
        entries = self._history.entries
        summary = self.query_one("#history-summary", Static)
        summary.update(self._history.summary if entries else EMPTY_MESSAGE)

        container = self.query_one("#history-list", VerticalScroll)
        container.remove_children()
        container.mount_all(
            Static(
                render_entry(result),
                classes="history-entry" if result.success else "history-entry failed",
            )
            for result in entries
        )
        self.query_one("#clear-history", Button).disabled = not entries

    def request_clear(self) -> None:
        """Ask for confirmation, then clear the history."""
        if not len(self._history):
            return
        self.app.push_screen(
            ConfirmModal(
                "Clear History",
                "Delete all recorded transfers?",
                confirm_label="Clear",
                confirm_variant="error",
            ),
            self._confirm_clear,
        )

    def _confirm_clear(self, confirmed: bool | None) -> None:
        if not confirmed:
            return
        self._history.clear()
        self.refresh_entries()
        self.notify_user(CLEARED_MESSAGE)

    @on(Button.Pressed, "#clear-history")
    def _clear_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.request_clear()
