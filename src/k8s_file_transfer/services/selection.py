"""Cascading context/namespace/pod/container selection.

Choosing a level invalidates every level below it, and loading a level can
auto-select a value (the only context, the ``default`` namespace, the only
container) which in turn loads the next level.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from k8s_file_transfer.integrations.kubectl.exceptions import KubectlError
from k8s_file_transfer.services.base import BaseManager
from k8s_file_transfer.services.exceptions import SelectionLoadError
from k8s_file_transfer.services.models import TargetSelection

if TYPE_CHECKING:
    from k8s_file_transfer.integrations.kubectl.client import KubectlClient

DEFAULT_NAMESPACE = "default"

STATUS_READY = "Ready for Transfer"
STATUS_INCOMPLETE = "Configuration Incomplete"


@dataclass
class SelectionOptions:
    """Values available at each level, as last loaded from the cluster."""

    contexts: list[str] = field(default_factory=list)
    namespaces: list[str] = field(default_factory=list)
    pods: list[str] = field(default_factory=list)
    containers: list[str] = field(default_factory=list)


class SelectionManager(BaseManager):
    """Owns the current target selection and the option lists behind it."""

    _entity_name = "selection"

    def __init__(
        self,
        client: KubectlClient,
        selection: TargetSelection | None = None,
    ) -> None:
        super().__init__(client)
        self.selection = selection or TargetSelection()
        self.options = SelectionOptions()
        self._lock = threading.RLock()

    # =========================================================================
    # Derived state
    # =========================================================================

    @property
    def is_complete(self) -> bool:
        """Transfer-ready, and the container is unambiguous."""
        return self.selection.is_transfer_ready and (
            len(self.options.containers) <= 1 or bool(self.selection.container)
        )

    @property
    def status_label(self) -> str:
        return STATUS_READY if self.is_complete else STATUS_INCOMPLETE

    @property
    def effective_container(self) -> str | None:
        """The chosen container, or the only one the pod has."""
        if self.selection.container:
            return self.selection.container
        if len(self.options.containers) == 1:
            return self.options.containers[0]
        return None

    # =========================================================================
    # Selection (applies the cascade, then loads the next level)
    # =========================================================================

    def select_context(self, context: str, *, load: bool = True) -> None:
        """Choose a context, clearing namespace, pod and container."""
        with self._lock:
            self.selection.context = context
            self._clear_namespace()
        self._log.debug("context_selected", context=context)
        if load and context:
            self.load_namespaces()

    def select_namespace(self, namespace: str, *, load: bool = True) -> None:
        """Choose a namespace, clearing pod and container."""
        with self._lock:
            self.selection.namespace = namespace
            self._clear_pod()
        self._log.debug("namespace_selected", namespace=namespace)
        if load and namespace and self.selection.context:
            self.load_pods()

    def select_pod(self, pod: str, *, load: bool = True) -> None:
        """Choose a pod, clearing the container."""
        with self._lock:
            self.selection.pod = pod
            self._clear_container()
        self._log.debug("pod_selected", pod=pod)
        if load and pod and self.selection.context and self.selection.namespace:
            self.load_containers()

    def select_container(self, container: str) -> None:
        """Choose a container."""
        with self._lock:
            self.selection.container = container
        self._log.debug("container_selected", container=container)

    def _clear_namespace(self) -> None:
        self.selection.namespace = ""
        self.options.namespaces = []
        self._clear_pod()

    def _clear_pod(self) -> None:
        self.selection.pod = ""
        self.options.pods = []
        self._clear_container()

    def _clear_container(self) -> None:
        self.selection.container = ""
        self.options.containers = []

    def _discard_stale(self, level: str, requested: tuple[str, ...]) -> None:
        self._log.debug("stale_load_discarded", level=level, requested="/".join(requested))

    # =========================================================================
    # Loaders
    #
    # kubectl runs outside the lock. Results are applied under it, and only
    # if the parent levels still match what was queried; otherwise the load
    # returns [] and changes nothing.
    # =========================================================================

    def load_contexts(self, *, cascade: bool = True) -> list[str]:
        """Load contexts; auto-select when exactly one exists.

        Raises:
            SelectionLoadError: If kubectl fails.
        """
        try:
            contexts = self._client.list_contexts()
        except KubectlError as e:
            self._log.warning("failed_to_load_contexts", error=str(e))
            raise SelectionLoadError("contexts", e) from e

        with self._lock:
            self.options.contexts = contexts
            if self.selection.context and self.selection.context not in contexts:
                self.select_context("", load=False)
            auto = len(contexts) == 1 and self.selection.context != contexts[0]
            if auto:
                self.select_context(contexts[0], load=False)
        if auto and cascade:
            self.load_namespaces()
        return contexts

    def load_namespaces(self, *, cascade: bool = True) -> list[str]:
        """Load namespaces for the selected context.

        Auto-selects ``default`` when present and no valid namespace is
        chosen. Without a context the namespace level is cleared.

        Raises:
            SelectionLoadError: If kubectl fails.
        """
        context = self.selection.context
        if not context:
            with self._lock:
                self._clear_namespace()
            return []

        try:
            namespaces = self._client.list_namespaces(context)
        except KubectlError as e:
            self._log.warning("failed_to_load_namespaces", error=str(e))
            raise SelectionLoadError("namespaces", e) from e

        with self._lock:
            if self.selection.context != context:
                self._discard_stale("namespaces", (context,))
                return []
            self.options.namespaces = namespaces
            current = self.selection.namespace
            if current and current not in namespaces:
                self.select_namespace("", load=False)
                current = ""
            auto = not current and DEFAULT_NAMESPACE in namespaces
            if auto:
                self.select_namespace(DEFAULT_NAMESPACE, load=False)
        if auto and cascade:
            self.load_pods()
        return namespaces

    def load_pods(self) -> list[str]:
        """Load pods for the selected context and namespace.

        Raises:
            SelectionLoadError: If kubectl fails.
        """
        parent = (self.selection.context, self.selection.namespace)
        if not all(parent):
            with self._lock:
                self._clear_pod()
            return []

        try:
            pods = self._client.list_pods(*parent)
        except KubectlError as e:
            self._log.warning("failed_to_load_pods", error=str(e))
            raise SelectionLoadError("pods", e) from e

        with self._lock:
            if (self.selection.context, self.selection.namespace) != parent:
                self._discard_stale("pods", parent)
                return []
            self.options.pods = pods
            if self.selection.pod and self.selection.pod not in pods:
                self.select_pod("", load=False)
        return pods

    def load_containers(self) -> list[str]:
        """Load containers of the selected pod; auto-select a lone one.

        Raises:
            SelectionLoadError: If kubectl fails.
        """
        sel = self.selection
        parent = (sel.context, sel.namespace, sel.pod)
        if not all(parent):
            with self._lock:
                self._clear_container()
            return []

        context, namespace, pod = parent
        try:
            containers = self._client.list_containers(pod, context=context, namespace=namespace)
        except KubectlError as e:
            self._log.warning("failed_to_load_containers", error=str(e))
            raise SelectionLoadError("containers", e) from e

        with self._lock:
            if (sel.context, sel.namespace, sel.pod) != parent:
                self._discard_stale("containers", parent)
                return []
            self.options.containers = containers
            if len(containers) == 1:
                sel.container = containers[0]
            elif sel.container not in containers:
                sel.container = ""
        return containers

    def refresh_all(self) -> None:
        """Reload every level that currently has a parent selection.

        Raises:
            SelectionLoadError: On the first level that fails to load.
        """
        self.load_contexts(cascade=False)
        if self.selection.context:
            self.load_namespaces(cascade=False)
            if self.selection.namespace:
                self.load_pods()
                if self.selection.pod:
                    self.load_containers()
