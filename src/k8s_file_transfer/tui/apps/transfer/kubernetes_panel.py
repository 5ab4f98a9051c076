"""Cluster target panel: context, namespace, pod and container pickers.

Cluster calls run in thread workers against the shared
``SelectionManager``; the Select widgets are rebuilt from the manager's
state on the UI thread whenever a load finishes.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import structlog
from textual import on, work
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.message import Message
from textual.widgets import Button, Label, Select, Static

from k8s_file_transfer.services.exceptions import SelectionLoadError
from k8s_file_transfer.services.models import TargetSelection
from k8s_file_transfer.tui.base import BaseWidget
from k8s_file_transfer.tui.theme import Styles

if TYPE_CHECKING:
    from k8s_file_transfer.services.selection import SelectionManager

logger = structlog.get_logger()

NOT_SELECTED = "Not selected"


def _options(values: list[str]) -> list[tuple[str, str]]:
    return [(value, value) for value in values]


def _select_value(value: Any) -> str:
    return value if isinstance(value, str) else ""


class KubernetesPanel(BaseWidget):
    """Left-hand panel choosing where files go.

    Emits ``SelectionChanged`` after every change to the target so the
    transfer panel can enable or disable itself.
    """

    DEFAULT_CSS = """
    KubernetesPanel {
        width: 1fr;
        height: 100%;
        border: round $primary;
        border-title-style: bold;
        padding: 0 1;
    }

    KubernetesPanel Label.field-label {
        margin-top: 1;
        color: $text-muted;
    }

    KubernetesPanel Select {
        width: 100%;
    }

    KubernetesPanel #container-info {
        margin-top: 1;
        color: $text-muted;
    }

    KubernetesPanel #refresh {
        margin-top: 1;
        width: 100%;
    }

    KubernetesPanel #status {
        margin-top: 1;
        text-style: bold;
    }

    KubernetesPanel #summary {
        margin-top: 1;
    }
    """

    class SelectionChanged(Message):
        """Emitted when the transfer target changes."""

        def __init__(
            self,
            selection: TargetSelection,
            container: str | None,
            complete: bool,
        ) -> None:
            """Initialize with a snapshot of the target.

            Args:
                selection: Copy of the current selection.
                container: The container transfers should use.
                complete: Whether the target is fully configured.
            """
            self.selection = selection
            self.container = container
            self.complete = complete
            super().__init__()

    def __init__(
        self,
        manager: SelectionManager,
        *,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self._manager = manager
        self._loading = 0

    @property
    def manager(self) -> SelectionManager:
        return self._manager

    @property
    def loading_count(self) -> int:
        """Number of cluster loads still running."""
        return self._loading

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label("Context", classes="field-label")
            yield Select([], prompt="Select context", id="context-select")
            yield Label("Namespace", classes="field-label")
            yield Select([], prompt="Select namespace", id="namespace-select", disabled=True)
            yield Label("Pod", classes="field-label")
            yield Select([], prompt="Select pod", id="pod-select", disabled=True)
            yield Label("Container", classes="field-label", id="container-label")
            yield Select([], prompt="Select container", id="container-select")
            yield Static("", id="container-info")
            yield Button("Refresh", id="refresh", variant="default")
            yield Static("", id="status")
            yield Static("", id="summary")

    def on_mount(self) -> None:
        self.border_title = "Kubernetes Connection"
        self.sync()
        self.refresh_all()

    # =========================================================================
    # Loading
    # =========================================================================

    def load(self, action: Callable[[], object]) -> None:
        """Run a manager call in a worker, then refresh the widgets."""
        self._loading += 1
        self._run_load(action)

    @work(thread=True)
    def _run_load(self, action: Callable[[], object]) -> None:
        logger.debug("selection_load_started", action=getattr(action, "__name__", repr(action)))
        try:
            action()
        except SelectionLoadError as e:
            self.app.call_from_thread(self.notify_error, e)
        finally:
            self.app.call_from_thread(self._load_finished)

    def _load_finished(self) -> None:
        self._loading -= 1
        self.sync()

    def refresh_all(self) -> None:
        """Reload every level of the target."""
        self.load(self._manager.refresh_all)

    # =========================================================================
    # Rendering
    # =========================================================================

    def sync(self) -> None:
        """Rebuild the pickers, status and summary from the manager."""
        manager = self._manager
        sel = manager.selection
        opts = manager.options

        with self.prevent(Select.Changed):
            self._set_select("#context-select", opts.contexts, sel.context, enabled=True)
            self._set_select(
                "#namespace-select", opts.namespaces, sel.namespace, enabled=bool(sel.context)
            )
            self._set_select(
                "#pod-select", opts.pods, sel.pod, enabled=bool(sel.context and sel.namespace)
            )
            self._set_select("#container-select", opts.containers, sel.container, enabled=True)

        multiple = len(opts.containers) > 1
        self.query_one("#container-label", Label).display = multiple
        self.query_one("#container-select", Select).display = multiple

        info = self.query_one("#container-info", Static)
        if len(opts.containers) == 1:
            info.update(f"Container: {opts.containers[0]} (auto-selected)")
            info.display = True
        else:
            info.display = False

        status = self.query_one("#status", Static)
        if manager.is_complete:
            status.update(Styles.success(manager.status_label))
        else:
            status.update(Styles.warning(manager.status_label))

        self.query_one("#summary", Static).update(self._summary_text())

        self.post_message(
            self.SelectionChanged(
                sel.model_copy(),
                manager.effective_container,
                manager.is_complete,
            )
        )

    def _set_select(
        self,
        selector: str,
        values: list[str],
        current: str,
        *,
        enabled: bool,
    ) -> None:
        select: Select[str] = self.query_one(selector, Select)
        select.set_options(_options(values))
        if current and current in values:
            select.value = current
        select.disabled = not enabled

    def _summary_text(self) -> str:
        sel = self._manager.selection
        lines = [
            f"Context: {sel.context or NOT_SELECTED}",
            f"Namespace: {sel.namespace or NOT_SELECTED}",
            f"Pod: {sel.pod or NOT_SELECTED}",
        ]
        container = self._manager.effective_container
        if container:
            lines.append(f"Container: {container}")
        return Styles.muted("\n".join(lines))

    # =========================================================================
    # Event Handlers
    # =========================================================================

    @on(Select.Changed, "#context-select")
    def _context_changed(self, event: Select.Changed) -> None:
        value = _select_value(event.value)
        if value == self._manager.selection.context:
            return
        self._manager.select_context(value, load=False)
        self.sync()
        if value:
            self.load(self._manager.load_namespaces)

    @on(Select.Changed, "#namespace-select")
    def _namespace_changed(self, event: Select.Changed) -> None:
        value = _select_value(event.value)
        if value == self._manager.selection.namespace:
            return
        self._manager.select_namespace(value, load=False)
        self.sync()
        if value:
            self.load(self._manager.load_pods)

    @on(Select.Changed, "#pod-select")
    def _pod_changed(self, event: Select.Changed) -> None:
        value = _select_value(event.value)
        if value == self._manager.selection.pod:
            return
        self._manager.select_pod(value, load=False)
        self.sync()
        if value:
            self.load(self._manager.load_containers)

    @on(Select.Changed, "#container-select")
    def _container_changed(self, event: Select.Changed) -> None:
        value = _select_value(event.value)
        if value == self._manager.selection.container:
            return
        self._manager.select_container(value)
        self.sync()

    @on(Button.Pressed, "#refresh")
    def _refresh_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.refresh_all()
