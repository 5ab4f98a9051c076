"""Confirmation dialog.

Usage:
    from k8s_file_transfer.tui.components import ConfirmModal

    def handle_result(confirmed: bool | None) -> None:
        if confirmed:
            history.clear()

    app.push_screen(ConfirmModal("Clear History", "Delete all entries?"), handle_result)
"""

from __future__ import annotations

from typing import Literal

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Label, Static

ButtonVariant = Literal["default", "primary", "success", "warning", "error"]


class ConfirmModal(ModalScreen[bool]):
    """Centered yes/no dialog; dismisses with True when confirmed.

    Escape and the cancel button dismiss with False.
    """

    DEFAULT_CSS = """
    ConfirmModal {
        align: center middle;
    }

    ConfirmModal > Container {
        width: auto;
        min-width: 40;
        max-width: 70%;
        height: auto;
        background: $surface;
        border: thick $primary;
        padding: 1 2;
    }

    ConfirmModal .modal-title {
        text-style: bold;
        text-align: center;
        width: 100%;
        margin-bottom: 1;
    }

    ConfirmModal .modal-body {
        width: 100%;
        margin-bottom: 1;
    }

    ConfirmModal .modal-buttons {
        width: 100%;
        height: auto;
        align: center middle;
    }

    ConfirmModal .modal-buttons Button {
        margin: 0 1;
        min-width: 10;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    def __init__(
        self,
        title: str,
        body: str,
        *,
        confirm_label: str = "OK",
        confirm_variant: ButtonVariant = "primary",
        cancel_label: str = "Cancel",
    ) -> None:
        """Initialize the dialog.

        Args:
            title: Title displayed at the top.
            body: Question shown under the title.
            confirm_label: Label of the confirming button.
            confirm_variant: Button variant of the confirming button.
            cancel_label: Label of the cancel button.
        """
        super().__init__()
        self._title = title
        self._body = body
        self._confirm_label = confirm_label
        self._confirm_variant: ButtonVariant = confirm_variant
        self._cancel_label = cancel_label

    def compose(self) -> ComposeResult:
        with Container():
            yield Label(self._title, classes="modal-title")
            yield Static(self._body, classes="modal-body")
            with Horizontal(classes="modal-buttons"):
                yield Button(self._confirm_label, id="confirm", variant=self._confirm_variant)
                yield Button(self._cancel_label, id="cancel")

    def on_mount(self) -> None:
        self.query_one("#cancel", Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(event.button.id == "confirm")

    def action_cancel(self) -> None:
        self.dismiss(False)
