"""Local file and folder picker used by the upload form."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, DirectoryTree, Label, Static

from k8s_file_transfer.tui.theme import Styles

PickerMode = Literal["files", "folder"]

NOTHING_PICKED = "Nothing selected"


class FilePickerModal(ModalScreen[list[str] | None]):
    """Browse the local filesystem and return the picked paths.

    In ``files`` mode selecting a file toggles it in the picked list; in
    ``folder`` mode selecting a directory replaces the pick. Dismisses
    with the picked paths, or None when cancelled.
    """

    DEFAULT_CSS = """
    FilePickerModal {
        align: center middle;
    }

    FilePickerModal > Container {
        width: 80%;
        height: 80%;
        background: $surface;
        border: thick $primary;
        padding: 1 2;
    }

    FilePickerModal #picker-title {
        text-style: bold;
        margin-bottom: 1;
    }

    FilePickerModal DirectoryTree {
        height: 1fr;
    }

    FilePickerModal #picked {
        height: auto;
        max-height: 5;
        margin-top: 1;
    }

    FilePickerModal .picker-buttons {
        height: auto;
        align: right middle;
        margin-top: 1;
    }

    FilePickerModal .picker-buttons Button {
        margin-left: 1;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    def __init__(self, mode: PickerMode = "files", root: Path | None = None) -> None:
        """Initialize the picker.

        Args:
            mode: Pick any number of files, or a single folder.
            root: Directory the tree starts in. Defaults to the home directory.
        """
        super().__init__()
        self._mode: PickerMode = mode
        self._root = root or Path.home()
        self._picked: list[Path] = []

    @property
    def picked(self) -> list[Path]:
        return list(self._picked)

    def compose(self) -> ComposeResult:
        title = "Select Files" if self._mode == "files" else "Select Folder"
        with Container():
            yield Label(title, id="picker-title")
            yield DirectoryTree(self._root, id="picker-tree")
            yield Static(Styles.muted(NOTHING_PICKED), id="picked")
            with Horizontal(classes="picker-buttons"):
                yield Button("Select", id="picker-select", variant="primary", disabled=True)
                yield Button("Cancel", id="picker-cancel")

    def toggle(self, path: Path) -> None:
        """Add or remove a file from the picked list."""
        if path in self._picked:
            self._picked.remove(path)
        else:
            self._picked.append(path)
        self._update_picked()

    def choose_folder(self, path: Path) -> None:
        self._picked = [path]
        self._update_picked()

    def _update_picked(self) -> None:
        picked = self.query_one("#picked", Static)
        if self._picked:
            picked.update("\n".join(Styles.primary(str(p)) for p in self._picked))
        else:
            picked.update(Styles.muted(NOTHING_PICKED))
        self.query_one("#picker-select", Button).disabled = not self._picked

    @on(DirectoryTree.FileSelected)
    def _file_selected(self, event: DirectoryTree.FileSelected) -> None:
        event.stop()
        if self._mode == "files":
            self.toggle(event.path)

    @on(DirectoryTree.DirectorySelected)
    def _directory_selected(self, event: DirectoryTree.DirectorySelected) -> None:
        event.stop()
        if self._mode == "folder":
            self.choose_folder(event.path)

    @on(Button.Pressed, "#picker-select")
    def _select_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss([str(p) for p in self._picked])

    @on(Button.Pressed, "#picker-cancel")
    def _cancel_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)
