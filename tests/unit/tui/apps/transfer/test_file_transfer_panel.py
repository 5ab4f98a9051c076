"""Unit tests for the transfer form panel."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from textual import on
from textual.app import App, ComposeResult
from textual.widgets import Button, Input, Label, Static

from k8s_file_transfer.integrations.kubectl.exceptions import KubectlCommandError
from k8s_file_transfer.services.history import TransferHistory
from k8s_file_transfer.services.models import (
    TargetSelection,
    TransferDirection,
    TransferResult,
)
from k8s_file_transfer.services.transfer import (
    MISSING_PATHS_MESSAGE,
    NOT_CONFIGURED_MESSAGE,
    SUCCESS_MESSAGE,
    TransferManager,
)
from k8s_file_transfer.tui.apps.transfer.file_transfer_panel import FileTransferPanel

TARGET = TargetSelection(context="minikube", namespace="shop", pod="web-7d9f")


class PanelTestApp(App[None]):
    """Hosts a single FileTransferPanel."""

    def __init__(self, manager: TransferManager) -> None:
        super().__init__()
        self.manager = manager
        self.finished: list[TransferResult] = []

    def compose(self) -> ComposeResult:
        yield FileTransferPanel(self.manager, default_pod_path="/srv", id="transfer-panel")

    @on(FileTransferPanel.TransferFinished)
    def _finished(self, event: FileTransferPanel.TransferFinished) -> None:
        self.finished.append(event.result)


@pytest.fixture
def history() -> TransferHistory:
    return TransferHistory()


@pytest.fixture
def app(mock_client: MagicMock, history: TransferHistory) -> PanelTestApp:
    return PanelTestApp(TransferManager(mock_client, history))


def _notifications(app: App[None]) -> list[tuple[str, str]]:
    return [(n.message, n.severity) for n in app._notifications]


# ============================================================================
# Form state
# ============================================================================


class TestFormState:
    """Tests for the form widgets and controls."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_initial_state(self, app: PanelTestApp) -> None:
        async with app.run_test() as pilot:
            await pilot.pause()
            panel = app.query_one(FileTransferPanel)

            assert panel.query_one("#pod-path", Input).value == "/srv"
            assert panel.query_one("#transfer", Button).disabled
            info = panel.query_one("#target-info", Static)
            assert NOT_CONFIGURED_MESSAGE in str(info.content)
            assert not panel.query_one("#progress-area").display

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_ready_target_and_paths_enable_transfer(self, app: PanelTestApp) -> None:
        async with app.run_test() as pilot:
            await pilot.pause()
            panel = app.query_one(FileTransferPanel)

            panel.set_target(TARGET.model_copy(), "app")
            panel.query_one("#local-path", Input).value = "report.csv"
            await pilot.pause()

            assert panel.form.local_path == "report.csv"
            assert panel.can_submit
            assert not panel.query_one("#transfer", Button).disabled
            info = str(panel.query_one("#target-info", Static).content)
            assert "minikube/shop/web-7d9f (container: app)" in info

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_set_local_paths_joins_with_commas(self, app: PanelTestApp) -> None:
        async with app.run_test() as pilot:
            await pilot.pause()
            panel = app.query_one(FileTransferPanel)

            panel.set_local_paths(["/home/dev/a.txt", "/home/dev/b.txt"])
            await pilot.pause()

            assert panel.query_one("#local-path", Input).value == "/home/dev/a.txt, /home/dev/b.txt"
            assert panel.form.local_path == "/home/dev/a.txt, /home/dev/b.txt"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_cancelled_pick_keeps_path(self, app: PanelTestApp) -> None:
        async with app.run_test() as pilot:
            await pilot.pause()
            panel = app.query_one(FileTransferPanel)
            panel.set_local_paths(["a.txt"])

            panel.set_local_paths(None)
            panel.set_local_paths([])

            assert panel.form.local_path == "a.txt"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_swap(self, app: PanelTestApp) -> None:
        async with app.run_test() as pilot:
            await pilot.pause()
            panel = app.query_one(FileTransferPanel)
            panel.set_local_paths(["report.csv"])

            panel.swap()
            await pilot.pause()

            assert panel.form.direction is TransferDirection.DOWNLOAD
            assert panel.query_one("#local-path", Input).value == "/srv"
            assert panel.query_one("#pod-path", Input).value == "report.csv"
            assert panel.query_one("#local-heading", Label).content == "Destination (Local)"
            assert panel.query_one("#pod-heading", Label).content == "Source (Pod)"
            assert not panel.query_one("#picker-buttons").display
            assert str(panel.query_one("#transfer", Button).label) == "Download from Pod"


# ============================================================================
# Transfers
# ============================================================================


class TestStartTransfer:
    """Tests for start_transfer."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_not_configured(self, app: PanelTestApp, mock_client: MagicMock) -> None:
        async with app.run_test() as pilot:
            await pilot.pause()
            panel = app.query_one(FileTransferPanel)
            panel.set_local_paths(["report.csv"])

            panel.start_transfer()
            await pilot.pause()

            assert (NOT_CONFIGURED_MESSAGE, "warning") in _notifications(app)
            assert not panel.transferring
            mock_client.copy_to_pod.assert_not_called()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_paths(self, app: PanelTestApp) -> None:
        async with app.run_test() as pilot:
            await pilot.pause()
            panel = app.query_one(FileTransferPanel)
            panel.set_target(TARGET.model_copy())

            panel.start_transfer()
            await pilot.pause()

            assert (MISSING_PATHS_MESSAGE, "warning") in _notifications(app)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_success_resets_form(
        self,
        app: PanelTestApp,
        mock_client: MagicMock,
        history: TransferHistory,
    ) -> None:
        async with app.run_test() as pilot:
            await pilot.pause()
            panel = app.query_one(FileTransferPanel)
            panel.set_target(TARGET.model_copy(), "app")
            panel.set_local_paths(["/home/dev/a.txt", "/home/dev/b.txt"])

            panel.start_transfer()
            await app.workers.wait_for_complete()
            await pilot.pause()

            assert mock_client.copy_to_pod.call_count == 2
            mock_client.copy_to_pod.assert_called_with(
                "/home/dev/b.txt",
                "web-7d9f",
                "/srv",
                namespace="shop",
                context="minikube",
                container="app",
            )
            assert (SUCCESS_MESSAGE, "information") in _notifications(app)
            assert panel.form.local_path == ""
            assert panel.query_one("#local-path", Input).value == ""
            assert panel.query_one("#pod-path", Input).value == "/srv"
            assert not panel.transferring
            assert len(history) == 1
            assert [r.success for r in app.finished] == [True]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failure_keeps_form(
        self,
        app: PanelTestApp,
        mock_client: MagicMock,
        history: TransferHistory,
    ) -> None:
        mock_client.copy_to_pod.side_effect = KubectlCommandError(
            "kubectl command failed", stderr="error: report.csv: no such file", exit_code=1
        )
        async with app.run_test() as pilot:
            await pilot.pause()
            panel = app.query_one(FileTransferPanel)
            panel.set_target(TARGET.model_copy())
            panel.set_local_paths(["report.csv"])

            panel.start_transfer()
            await app.workers.wait_for_complete()
            await pilot.pause()

            assert (
                "Transfer failed: error: report.csv: no such file",
                "error",
            ) in _notifications(app)
            assert panel.form.local_path == "report.csv"
            assert not history.entries[0].success

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failure_text_is_not_markup(
        self, app: PanelTestApp, mock_client: MagicMock
    ) -> None:
        stderr = "tar: [/data/out]: Cannot open: [/b] Permission denied"
        mock_client.copy_to_pod.side_effect = KubectlCommandError(
            "kubectl command failed", stderr=stderr, exit_code=1
        )
        async with app.run_test() as pilot:
            await pilot.pause()
            panel = app.query_one(FileTransferPanel)
            panel.set_target(TARGET.model_copy())
            panel.set_local_paths(["report.csv"])

            panel.start_transfer()
            await app.workers.wait_for_complete()
            await pilot.pause()

            failures = [n for n in app._notifications if n.severity == "error"]
            assert [n.message for n in failures] == [f"Transfer failed: {stderr}"]
            assert not failures[0].markup
            assert not panel.transferring
