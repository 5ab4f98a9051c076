"""Main Textual application for moving files between this machine and pods."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from k8s_file_transfer.core.config.models import HISTORY_FILE
from k8s_file_transfer.integrations.kubectl.client import KubectlClient
from k8s_file_transfer.services.history import TransferHistory
from k8s_file_transfer.services.models import TargetSelection
from k8s_file_transfer.services.selection import SelectionManager
from k8s_file_transfer.services.transfer import DEFAULT_POD_PATH, TransferManager
from k8s_file_transfer.tui.apps.transfer.screens import TransferScreen

if TYPE_CHECKING:
    from k8s_file_transfer.core.config.models import AppConfig

HELP_TEXT = (
    "r: refresh | s: swap direction | t: transfer | x: clear history | "
    "tab: next field | q: quit"
)


class TransferApp(App[None]):
    """TUI application for Kubernetes file transfers.

    Args:
        client: kubectl client shared by the selection and transfer services.
        history: Where finished transfers are recorded.
        default_pod_path: Pod path the form starts with and resets to.
        initial: Target to preselect before the cluster is queried.
    """

    TITLE = "Kubernetes File Transfer"

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("question_mark", "help", "Help", show=True),
    ]

    def __init__(
        self,
        client: KubectlClient,
        history: TransferHistory | None = None,
        *,
        default_pod_path: str = DEFAULT_POD_PATH,
        initial: TargetSelection | None = None,
    ) -> None:
        super().__init__()
        self._history = history if history is not None else TransferHistory()
        self.selection_manager = SelectionManager(client, initial)
        self.transfer_manager = TransferManager(client, self._history)
        self._default_pod_path = default_pod_path

    @classmethod
    def from_config(cls, config: AppConfig) -> TransferApp:
        """Build the app from configuration.

        The configured default context and namespace are preselected and
        kept if the cluster still has them.

        Raises:
            KubectlBinaryNotFoundError: If kubectl cannot be found.
        """
        path = HISTORY_FILE if config.history.enabled else None
        history = TransferHistory(path, max_entries=config.history.max_entries)
        defaults = config.defaults
        return cls(
            KubectlClient.from_config(config),
            history,
            default_pod_path=defaults.pod_path,
            initial=TargetSelection(
                context=defaults.context or "",
                namespace=defaults.namespace or "",
            ),
        )

    def compose(self) -> ComposeResult:
        yield Header()
        yield Footer()

    def on_mount(self) -> None:
        self.push_screen(
            TransferScreen(
                self.selection_manager,
                self.transfer_manager,
                self._history,
                default_pod_path=self._default_pod_path,
            )
        )

    async def action_quit(self) -> None:
        self.exit()

    def action_help(self) -> None:
        self.notify(HELP_TEXT)
