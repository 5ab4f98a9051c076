"""Transfer form panel: direction, paths, progress and the Transfer button."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from textual import on, work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widgets import Button, Input, Label, ProgressBar, Select, Static

from k8s_file_transfer.services.exceptions import (
    TransferInProgressError,
    TransferValidationError,
)
from k8s_file_transfer.services.models import (
    TargetSelection,
    TransferDirection,
    TransferRequest,
    TransferResult,
)
from k8s_file_transfer.services.progress import (
    RESET_DELAY_SECONDS,
    TICK_INTERVAL_SECONDS,
    SimulatedProgress,
)
from k8s_file_transfer.services.transfer import (
    DEFAULT_POD_PATH,
    NOT_CONFIGURED_MESSAGE,
    SUCCESS_MESSAGE,
    TransferForm,
    failure_message,
)
from k8s_file_transfer.tui.apps.transfer.file_picker import FilePickerModal, PickerMode
from k8s_file_transfer.tui.base import BaseWidget
from k8s_file_transfer.tui.theme import Styles

if TYPE_CHECKING:
    from textual.timer import Timer

    from k8s_file_transfer.services.transfer import TransferManager

logger = structlog.get_logger()


class FileTransferPanel(BaseWidget):
    """Middle panel holding the transfer form.

    The target comes from ``set_target``; the copy itself runs in a
    thread worker while a timer drives the simulated progress bar.
    """

    DEFAULT_CSS = """
    FileTransferPanel {
        width: 1fr;
        height: 100%;
        border: round $primary;
        border-title-style: bold;
        padding: 0 1;
    }

    FileTransferPanel Label.field-label {
        margin-top: 1;
        color: $text-muted;
    }

    FileTransferPanel #direction-row {
        height: auto;
    }

    FileTransferPanel #direction-select {
        width: 1fr;
    }

    FileTransferPanel #picker-buttons {
        height: auto;
    }

    FileTransferPanel #picker-buttons Button {
        width: 1fr;
    }

    FileTransferPanel #progress-area {
        height: auto;
        margin-top: 1;
    }

    FileTransferPanel #target-info {
        margin-top: 1;
    }

    FileTransferPanel #transfer {
        margin-top: 1;
        width: 100%;
    }
    """

    class TransferFinished(Message):
        """Emitted when a transfer completes, successfully or not."""

        def __init__(self, result: TransferResult) -> None:
            self.result = result
            super().__init__()

    def __init__(
        self,
        manager: TransferManager,
        *,
        default_pod_path: str = DEFAULT_POD_PATH,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self._manager = manager
        self.form = TransferForm(pod_path=default_pod_path, default_pod_path=default_pod_path)
        self.progress = SimulatedProgress()
        self._selection = TargetSelection()
        self._container: str | None = None
        self._transferring = False
        self._timer: Timer | None = None

    @property
    def transferring(self) -> bool:
        return self._transferring

    @property
    def can_submit(self) -> bool:
        return self.form.can_submit(self._selection, self._transferring)

    def compose(self) -> ComposeResult:
        form = self.form
        with Vertical():
            yield Label("Direction", classes="field-label")
            with Horizontal(id="direction-row"):
                yield Select(
                    [(d.label, d) for d in TransferDirection],
                    allow_blank=False,
                    value=form.direction,
                    id="direction-select",
                )
                yield Button("Swap", id="swap")
            yield Label(form.local_heading, classes="field-label", id="local-heading")
            yield Input(form.local_path, placeholder=form.local_placeholder, id="local-path")
            with Horizontal(id="picker-buttons"):
                yield Button("Select Files", id="pick-files")
                yield Button("Select Folder", id="pick-folder")
            yield Label(form.pod_heading, classes="field-label", id="pod-heading")
            yield Input(form.pod_path, placeholder=DEFAULT_POD_PATH, id="pod-path")
            with Vertical(id="progress-area"):
                yield Static("", id="progress-label")
                yield ProgressBar(total=100, show_eta=False, id="progress")
            yield Static("", id="target-info")
            yield Button(form.direction.label, id="transfer", variant="primary", disabled=True)

    def on_mount(self) -> None:
        self.border_title = "File Transfer"
        self.query_one("#progress-area").display = False
        self._update_controls()

    # =========================================================================
    # Public API
    # =========================================================================

    def set_target(
        self,
        selection: TargetSelection,
        container: str | None = None,
    ) -> None:
        """Point the form at a new context/namespace/pod/container."""
        self._selection = selection
        self._container = container
        if self.is_mounted:
            self._update_controls()

    def swap(self) -> None:
        """Flip direction and swap the local and pod paths."""
        if self._transferring:
            return
        self.form.switch_direction()
        self._sync_form_widgets()
        self._update_controls()

    def set_local_paths(self, paths: list[str] | None) -> None:
        """Fill the local path input from the file picker."""
        if not paths:
            return
        self.form.local_path = ", ".join(paths)
        self._sync_form_widgets()
        self._update_controls()

    def open_picker(self, mode: PickerMode) -> None:
        self.app.push_screen(FilePickerModal(mode), self.set_local_paths)

    def start_transfer(self) -> None:
        """Validate the form and start the copy in a worker."""
        if self._transferring:
            self.notify_error(TransferInProgressError())
            return
        try:
            self._manager.validate(self.form, self._selection)
        except TransferValidationError as e:
            self.notify_error(e)
            return

        request = self._manager.build_request(self.form, self._selection, self._container)
        self._transferring = True
        self.progress.reset()
        self._render_progress(request.direction)
        self._timer = self.set_interval(TICK_INTERVAL_SECONDS, self._tick)
        self._update_controls()
        self._execute(request)

    # =========================================================================
    # Worker
    # =========================================================================

    @work(thread=True)
    def _execute(self, request: TransferRequest) -> None:
        try:
            result = self._manager.execute(request)
        except TransferInProgressError as e:
            self.app.call_from_thread(self._rejected, e)
            return
        self.app.call_from_thread(self._finish, result)

    def _tick(self) -> None:
        self.progress.tick()
        self._render_progress(self.form.direction)

    def _stop_timer(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer = None

    def _finish(self, result: TransferResult) -> None:
        self._stop_timer()
        self._transferring = False
        if result.success:
            self.progress.complete()
            self.notify_user(SUCCESS_MESSAGE)
            self.form.reset()
            self._sync_form_widgets()
        else:
            self.progress.fail()
            self.notify_user(failure_message(result), severity="error", markup=False)
        logger.debug("transfer_panel_finished", success=result.success)
        self._render_progress(result.request.direction)
        self.set_timer(RESET_DELAY_SECONDS, self._reset_progress)
        self._update_controls()
        self.post_message(self.TransferFinished(result))

    def _rejected(self, error: TransferInProgressError) -> None:
        self._stop_timer()
        self._transferring = False
        self._reset_progress()
        self.notify_error(error)
        self._update_controls()

    def _reset_progress(self) -> None:
        if self._transferring:
            return
        self.progress.reset()
        self.query_one("#progress", ProgressBar).update(progress=0)
        self.query_one("#progress-area").display = False

    # =========================================================================
    # Rendering
    # =========================================================================

    def _render_progress(self, direction: TransferDirection) -> None:
        self.query_one("#progress-area").display = True
        self.query_one("#progress", ProgressBar).update(progress=self.progress.value)
        if self._transferring:
            text = f"{direction.label} in progress..."
        else:
            text = self.progress.label
        self.query_one("#progress-label", Static).update(Styles.muted(text))

    def _sync_form_widgets(self) -> None:
        form = self.form
        with self.prevent(Select.Changed, Input.Changed):
            self.query_one("#direction-select", Select).value = form.direction
            local = self.query_one("#local-path", Input)
            local.value = form.local_path
            local.placeholder = form.local_placeholder
            self.query_one("#pod-path", Input).value = form.pod_path
        self.query_one("#local-heading", Label).update(form.local_heading)
        self.query_one("#pod-heading", Label).update(form.pod_heading)

    def _update_controls(self) -> None:
        form = self.form
        button = self.query_one("#transfer", Button)
        button.label = form.direction.label
        button.disabled = not self.can_submit

        self.query_one("#picker-buttons").display = form.direction is TransferDirection.UPLOAD
        self.query_one("#swap", Button).disabled = self._transferring
        self.query_one("#direction-select", Select).disabled = self._transferring

        info = self.query_one("#target-info", Static)
        if not self._selection.is_transfer_ready:
            info.update(Styles.warning(NOT_CONFIGURED_MESSAGE))
        else:
            target = self._selection.model_copy(update={"container": self._container or ""})
            info.update(Styles.muted(f"Target: {target.display_target}"))

    # =========================================================================
    # Event Handlers
    # =========================================================================

    @on(Select.Changed, "#direction-select")
    def _direction_changed(self, event: Select.Changed) -> None:
        if not isinstance(event.value, TransferDirection) or event.value is self.form.direction:
            return
        self.form.direction = event.value
        self._sync_form_widgets()
        self._update_controls()

    @on(Input.Changed, "#local-path")
    def _local_changed(self, event: Input.Changed) -> None:
        self.form.local_path = event.value
        self._update_controls()

    @on(Input.Changed, "#pod-path")
    def _pod_changed(self, event: Input.Changed) -> None:
        self.form.pod_path = event.value
        self._update_controls()

    @on(Input.Submitted)
    def _input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        if self.can_submit:
            self.start_transfer()

    @on(Button.Pressed, "#swap")
    def _swap_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.swap()

    @on(Button.Pressed, "#pick-files")
    def _pick_files_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.open_picker("files")

    @on(Button.Pressed, "#pick-folder")
    def _pick_folder_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.open_picker("folder")

    @on(Button.Pressed, "#transfer")
    def _transfer_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.start_transfer()
