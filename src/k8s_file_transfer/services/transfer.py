"""File transfer between the local machine and a pod.

A transfer is one ``kubectl cp`` per source path, run to completion. The
result records success or the failing exit code and stderr; kubectl
failures never escape ``execute`` as exceptions.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

from k8s_file_transfer.integrations.kubectl.exceptions import KubectlError
from k8s_file_transfer.services.base import BaseManager
from k8s_file_transfer.services.exceptions import (
    TransferInProgressError,
    TransferValidationError,
)
from k8s_file_transfer.services.models import (
    TargetSelection,
    TransferDirection,
    TransferRequest,
    TransferResult,
    split_local_paths,
)

if TYPE_CHECKING:
    from k8s_file_transfer.integrations.kubectl.client import KubectlClient
    from k8s_file_transfer.services.history import TransferHistory

DEFAULT_POD_PATH = "/tmp"

NOT_CONFIGURED_MESSAGE = "Please configure Kubernetes connection first"
MISSING_PATHS_MESSAGE = "Please specify both local and pod paths"
SUCCESS_MESSAGE = "Transfer completed successfully!"
FALLBACK_ERROR = "Transfer failed"


@dataclass
class TransferForm:
    """User-editable transfer parameters."""

    direction: TransferDirection = TransferDirection.UPLOAD
    local_path: str = ""
    pod_path: str = DEFAULT_POD_PATH
    default_pod_path: str = DEFAULT_POD_PATH

    @property
    def has_paths(self) -> bool:
        return bool(self.local_path.strip(" ,") and self.pod_path.strip())

    @property
    def local_heading(self) -> str:
        if self.direction is TransferDirection.UPLOAD:
            return "Source (Local)"
        return "Destination (Local)"

    @property
    def pod_heading(self) -> str:
        if self.direction is TransferDirection.UPLOAD:
            return "Destination (Pod)"
        return "Source (Pod)"

    @property
    def local_placeholder(self) -> str:
        if self.direction is TransferDirection.UPLOAD:
            return "Select files or enter path"
        return "Enter destination path"

    def switch_direction(self) -> None:
        """Flip the direction and swap the local and pod paths."""
        self.direction = self.direction.opposite
        self.local_path, self.pod_path = self.pod_path, self.local_path

    def reset(self) -> None:
        """Restore the paths after a successful transfer."""
        self.local_path = ""
        self.pod_path = self.default_pod_path

    def can_submit(self, selection: TargetSelection, transferring: bool = False) -> bool:
        return selection.is_transfer_ready and not transferring and self.has_paths


def failure_message(result: TransferResult) -> str:
    return f"Transfer failed: {result.error or FALLBACK_ERROR}"


class TransferManager(BaseManager):
    """Validates, runs and records transfers, one at a time."""

    _entity_name = "transfer"

    def __init__(
        self,
        client: KubectlClient,
        history: TransferHistory | None = None,
    ) -> None:
        """Initialize the manager.

        Args:
            client: kubectl client used for the copies.
            history: Where results are recorded, if anywhere.
        """
        super().__init__(client)
        self._history = history
        self._lock = threading.Lock()

    @property
    def history(self) -> TransferHistory | None:
        return self._history

    @property
    def in_progress(self) -> bool:
        return self._lock.locked()

    def validate(self, form: TransferForm, selection: TargetSelection) -> None:
        """Check the target and paths are filled in.

        Raises:
            TransferValidationError: With the message to show the user.
        """
        if not selection.is_transfer_ready:
            raise TransferValidationError(NOT_CONFIGURED_MESSAGE)
        if not form.has_paths:
            raise TransferValidationError(MISSING_PATHS_MESSAGE)

    def build_request(
        self,
        form: TransferForm,
        selection: TargetSelection,
        container: str | None = None,
    ) -> TransferRequest:
        """Combine form and selection into a request.

        Args:
            form: Paths and direction.
            selection: Target context/namespace/pod.
            container: Effective container; falls back to the selection's.
        """
        if form.direction is TransferDirection.UPLOAD:
            local_paths = split_local_paths(form.local_path)
        else:
            local_paths = [form.local_path.strip()]
        return TransferRequest(
            local_paths=local_paths,
            pod_path=form.pod_path,
            pod_name=selection.pod,
            namespace=selection.namespace,
            context=selection.context,
            container=container or selection.container or None,
            direction=form.direction,
        )

    def execute(self, request: TransferRequest) -> TransferResult:
        """Run a transfer and record its result.

        Raises:
            TransferInProgressError: If another transfer is running.
        """
        if not self._lock.acquire(blocking=False):
            raise TransferInProgressError()
        try:
            result = self._run(request)
        finally:
            self._lock.release()

        if self._history is not None:
            self._history.add(result)
        return result

    def transfer(
        self,
        form: TransferForm,
        selection: TargetSelection,
        container: str | None = None,
    ) -> TransferResult:
        """Validate, run and record; reset the form paths on success.

        Raises:
            TransferValidationError: If the form or target is incomplete.
            TransferInProgressError: If another transfer is running.
        """
        self.validate(form, selection)
        request = self.build_request(form, selection, container)
        result = self.execute(request)
        if result.success:
            form.reset()
        return result

    def _run(self, request: TransferRequest) -> TransferResult:
        log = self._log.bind(
            direction=request.direction.value,
            pod=request.pod_name,
            namespace=request.namespace,
            context=request.context,
        )
        log.info("transfer_started", local_path=request.local_path, pod_path=request.pod_path)

        outputs: list[str] = []
        try:
            if request.direction is TransferDirection.UPLOAD:
                for local_path in request.local_paths:
                    copied = self._client.copy_to_pod(
                        local_path,
                        request.pod_name,
                        request.pod_path,
                        namespace=request.namespace,
                        context=request.context,
                        container=request.container,
                    )
                    outputs.append(copied.stdout)
            else:
                copied = self._client.copy_from_pod(
                    request.pod_name,
                    request.pod_path,
                    request.local_paths[0],
                    namespace=request.namespace,
                    context=request.context,
                    container=request.container,
                )
                outputs.append(copied.stdout)
        except KubectlError as e:
            log.warning("transfer_failed", error=e.detail, exit_code=e.exit_code)
            return TransferResult(
                success=False,
                output="".join(outputs),
                error=e.detail or FALLBACK_ERROR,
                exit_code=e.exit_code,
                request=request,
            )

        log.info("transfer_completed")
        return TransferResult(success=True, output="".join(outputs), exit_code=0, request=request)
