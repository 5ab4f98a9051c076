"""Main three-panel screen of the transfer app."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Footer, Header

from k8s_file_transfer.tui.apps.transfer.file_transfer_panel import FileTransferPanel
from k8s_file_transfer.tui.apps.transfer.history_panel import HistoryPanel
from k8s_file_transfer.tui.apps.transfer.kubernetes_panel import KubernetesPanel
from k8s_file_transfer.tui.base import BaseScreen

if TYPE_CHECKING:
    from k8s_file_transfer.services.history import TransferHistory
    from k8s_file_transfer.services.selection import SelectionManager
    from k8s_file_transfer.services.transfer import TransferManager


class TransferScreen(BaseScreen[None]):
    """Kubernetes connection, transfer form and history side by side."""

    DEFAULT_CSS = """
    TransferScreen #panels {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("r", "refresh", "Refresh", show=True),
        Binding("s", "swap", "Swap", show=True),
        Binding("t", "transfer", "Transfer", show=True),
        Binding("x", "clear_history", "Clear History", show=True),
    ]

    def __init__(
        self,
        selection: SelectionManager,
        transfers: TransferManager,
        history: TransferHistory,
        *,
        default_pod_path: str,
    ) -> None:
        super().__init__()
        self._selection = selection
        self._transfers = transfers
        self._history = history
        self._default_pod_path = default_pod_path

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="panels"):
            yield KubernetesPanel(self._selection, id="kubernetes-panel")
            yield FileTransferPanel(
                self._transfers,
                default_pod_path=self._default_pod_path,
                id="transfer-panel",
            )
            yield HistoryPanel(self._history, id="history-panel")
        yield Footer()

    @on(KubernetesPanel.SelectionChanged)
    def _selection_changed(self, event: KubernetesPanel.SelectionChanged) -> None:
        self.query_one(FileTransferPanel).set_target(event.selection, event.container)

    @on(FileTransferPanel.TransferFinished)
    def _transfer_finished(self, event: FileTransferPanel.TransferFinished) -> None:
        self.query_one(HistoryPanel).refresh_entries()

    def action_refresh(self) -> None:
        self.query_one(KubernetesPanel).refresh_all()

    def action_swap(self) -> None:
        self.query_one(FileTransferPanel).swap()

    def action_transfer(self) -> None:
        self.query_one(FileTransferPanel).start_transfer()

    def action_clear_history(self) -> None:
        self.query_one(HistoryPanel).request_clear()
