"""Unit tests for TransferManager and TransferForm."""

from __future__ import annotations

import threading
from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from k8s_file_transfer.integrations.kubectl.exceptions import (
    KubectlCommandError,
    KubectlTimeoutError,
)
from k8s_file_transfer.integrations.kubectl.models import KubectlCommandResult
from k8s_file_transfer.services.exceptions import (
    TransferInProgressError,
    TransferValidationError,
)
from k8s_file_transfer.services.history import TransferHistory
from k8s_file_transfer.services.models import (
    TargetSelection,
    TransferDirection,
    TransferRequest,
    TransferResult,
)
from k8s_file_transfer.services.transfer import (
    MISSING_PATHS_MESSAGE,
    NOT_CONFIGURED_MESSAGE,
    TransferForm,
    TransferManager,
    failure_message,
)

TARGET = TargetSelection(context="minikube", namespace="shop", pod="web-7d9f")


@pytest.fixture
def history() -> TransferHistory:
    return TransferHistory()


@pytest.fixture
def manager(mock_client: MagicMock, history: TransferHistory) -> TransferManager:
    return TransferManager(mock_client, history)


def _not_found() -> KubectlCommandError:
    return KubectlCommandError(
        "kubectl command failed",
        stderr="error: /tmp/missing.txt: no such file or directory\n",
        exit_code=1,
    )


# ============================================================================
# TransferForm
# ============================================================================


@pytest.mark.unit
class TestTransferForm:
    """Tests for the editable form state."""

    def test_defaults(self) -> None:
        form = TransferForm()
        assert form.direction is TransferDirection.UPLOAD
        assert form.pod_path == "/tmp"
        assert not form.has_paths

    def test_has_paths_ignores_separators(self) -> None:
        assert not TransferForm(local_path=" , ", pod_path="/tmp").has_paths
        assert not TransferForm(local_path="a.txt", pod_path="  ").has_paths
        assert TransferForm(local_path="a.txt", pod_path="/tmp").has_paths

    def test_switch_direction_swaps_paths(self) -> None:
        form = TransferForm(local_path="/home/dev/a.txt", pod_path="/data")

        form.switch_direction()

        assert form.direction is TransferDirection.DOWNLOAD
        assert form.local_path == "/data"
        assert form.pod_path == "/home/dev/a.txt"

    def test_switch_twice_restores(self) -> None:
        form = TransferForm(local_path="a", pod_path="b")
        form.switch_direction()
        form.switch_direction()
        assert (form.direction, form.local_path, form.pod_path) == (
            TransferDirection.UPLOAD,
            "a",
            "b",
        )

    def test_headings_follow_direction(self) -> None:
        form = TransferForm()
        assert form.local_heading == "Source (Local)"
        assert form.pod_heading == "Destination (Pod)"
        form.switch_direction()
        assert form.local_heading == "Destination (Local)"
        assert form.pod_heading == "Source (Pod)"
        assert form.local_placeholder == "Enter destination path"

    def test_reset_restores_default_pod_path(self) -> None:
        form = TransferForm(local_path="a.txt", pod_path="/x", default_pod_path="/data")
        form.reset()
        assert form.local_path == ""
        assert form.pod_path == "/data"

    def test_can_submit(self) -> None:
        form = TransferForm(local_path="a.txt")
        assert form.can_submit(TARGET)
        assert not form.can_submit(TARGET, transferring=True)
        assert not form.can_submit(TargetSelection(context="minikube", namespace="shop"))


# ============================================================================
# Validation and requests
# ============================================================================


@pytest.mark.unit
class TestValidate:
    """Tests for TransferManager.validate."""

    def test_missing_target(self, manager: TransferManager) -> None:
        with pytest.raises(TransferValidationError, match=NOT_CONFIGURED_MESSAGE):
            manager.validate(TransferForm(local_path="a.txt"), TargetSelection())

    def test_missing_paths(self, manager: TransferManager) -> None:
        with pytest.raises(TransferValidationError) as exc_info:
            manager.validate(TransferForm(local_path=""), TARGET)
        assert exc_info.value.message == MISSING_PATHS_MESSAGE
        assert exc_info.value.severity == "warning"

    def test_valid(self, manager: TransferManager) -> None:
        manager.validate(TransferForm(local_path="a.txt"), TARGET)


@pytest.mark.unit
class TestBuildRequest:
    """Tests for TransferManager.build_request."""

    def test_upload_splits_paths(self, manager: TransferManager) -> None:
        form = TransferForm(local_path="/a.txt, /b dir ,", pod_path="/data")

        request = manager.build_request(form, TARGET)

        assert request.local_paths == ["/a.txt", "/b dir"]
        assert request.pod_path == "/data"
        assert request.pod_name == "web-7d9f"
        assert request.container is None

    def test_download_keeps_path_whole(self, manager: TransferManager) -> None:
        form = TransferForm(
            direction=TransferDirection.DOWNLOAD,
            local_path=" ./reports, 2024 ",
            pod_path="/var/log/app.log",
        )

        request = manager.build_request(form, TARGET)

        assert request.local_paths == ["./reports, 2024"]
        assert request.direction is TransferDirection.DOWNLOAD

    def test_effective_container_wins(self, manager: TransferManager) -> None:
        selection = TARGET.model_copy(update={"container": "sidecar"})
        request = manager.build_request(TransferForm(local_path="a"), selection, "app")
        assert request.container == "app"

    def test_falls_back_to_selected_container(self, manager: TransferManager) -> None:
        selection = TARGET.model_copy(update={"container": "sidecar"})
        request = manager.build_request(TransferForm(local_path="a"), selection)
        assert request.container == "sidecar"


# ============================================================================
# Execution
# ============================================================================


@pytest.mark.unit
class TestExecute:
    """Tests for TransferManager.execute."""

    def test_upload_copies_each_path(
        self,
        manager: TransferManager,
        mock_client: MagicMock,
        make_request: Callable[..., TransferRequest],
    ) -> None:
        request = make_request(local_paths=["/a.txt", "/b.txt"], container="app")

        result = manager.execute(request)

        assert result.success is True
        assert result.exit_code == 0
        assert mock_client.copy_to_pod.call_count == 2
        mock_client.copy_to_pod.assert_called_with(
            "/b.txt",
            "web-7d9f",
            "/tmp",
            namespace="shop",
            context="minikube",
            container="app",
        )

    def test_download(
        self,
        manager: TransferManager,
        mock_client: MagicMock,
        make_request: Callable[..., TransferRequest],
    ) -> None:
        mock_client.copy_from_pod.return_value = KubectlCommandResult(
            success=True, stdout="tar: Removing leading `/' from member names\n"
        )
        request = make_request(
            direction=TransferDirection.DOWNLOAD,
            local_paths=["./app.log"],
            pod_path="/var/log/app.log",
        )

        result = manager.execute(request)

        assert result.success is True
        assert "Removing leading" in result.output
        mock_client.copy_from_pod.assert_called_once_with(
            "web-7d9f",
            "/var/log/app.log",
            "./app.log",
            namespace="shop",
            context="minikube",
            container=None,
        )

    def test_failure_becomes_result(
        self,
        manager: TransferManager,
        mock_client: MagicMock,
        make_request: Callable[..., TransferRequest],
    ) -> None:
        mock_client.copy_to_pod.side_effect = _not_found()

        result = manager.execute(make_request())

        assert result.success is False
        assert result.exit_code == 1
        assert result.error == "error: /tmp/missing.txt: no such file or directory"

    def test_upload_stops_at_first_failure(
        self,
        manager: TransferManager,
        mock_client: MagicMock,
        make_request: Callable[..., TransferRequest],
    ) -> None:
        mock_client.copy_to_pod.side_effect = [
            KubectlCommandResult(success=True, stdout="first\n"),
            _not_found(),
            KubectlCommandResult(success=True, stdout="third\n"),
        ]

        result = manager.execute(make_request(local_paths=["/1", "/2", "/3"]))

        assert result.success is False
        assert result.output == "first\n"
        assert mock_client.copy_to_pod.call_count == 2

    def test_timeout_has_no_exit_code(
        self,
        manager: TransferManager,
        mock_client: MagicMock,
        make_request: Callable[..., TransferRequest],
    ) -> None:
        mock_client.copy_to_pod.side_effect = KubectlTimeoutError(3600)

        result = manager.execute(make_request())

        assert result.success is False
        assert result.exit_code is None
        assert "timed out" in (result.error or "")

    def test_records_successes_and_failures(
        self,
        manager: TransferManager,
        mock_client: MagicMock,
        history: TransferHistory,
        make_request: Callable[..., TransferRequest],
    ) -> None:
        manager.execute(make_request())
        mock_client.copy_to_pod.side_effect = _not_found()
        manager.execute(make_request())

        assert [r.success for r in history.entries] == [False, True]

    def test_without_history(
        self, mock_client: MagicMock, make_request: Callable[..., TransferRequest]
    ) -> None:
        manager = TransferManager(mock_client)
        assert manager.execute(make_request()).success
        assert manager.history is None

    def test_rejects_concurrent_transfer(
        self,
        manager: TransferManager,
        mock_client: MagicMock,
        make_request: Callable[..., TransferRequest],
    ) -> None:
        """A second execute while one is copying raises TransferInProgressError."""
        started = threading.Event()
        release = threading.Event()

        def slow_copy(*args: object, **kwargs: object) -> KubectlCommandResult:
            started.set()
            release.wait(timeout=5)
            return KubectlCommandResult(success=True, stdout="")

        mock_client.copy_to_pod.side_effect = slow_copy
        worker = threading.Thread(target=manager.execute, args=(make_request(),))
        worker.start()
        try:
            assert started.wait(timeout=5)
            assert manager.in_progress
            with pytest.raises(TransferInProgressError):
                manager.execute(make_request())
        finally:
            release.set()
            worker.join(timeout=5)

        assert not manager.in_progress


@pytest.mark.unit
class TestTransfer:
    """Tests for the validate-run-record convenience method."""

    def test_success_resets_form(self, manager: TransferManager) -> None:
        form = TransferForm(local_path="/a.txt", pod_path="/data", default_pod_path="/tmp")

        result = manager.transfer(form, TARGET)

        assert result.success
        assert form.local_path == ""
        assert form.pod_path == "/tmp"

    def test_failure_keeps_form(self, manager: TransferManager, mock_client: MagicMock) -> None:
        mock_client.copy_to_pod.side_effect = _not_found()
        form = TransferForm(local_path="/a.txt", pod_path="/data")

        result = manager.transfer(form, TARGET)

        assert not result.success
        assert form.local_path == "/a.txt"

    def test_invalid_form_never_runs(
        self, manager: TransferManager, mock_client: MagicMock
    ) -> None:
        with pytest.raises(TransferValidationError):
            manager.transfer(TransferForm(), TARGET)
        mock_client.copy_to_pod.assert_not_called()

    def test_unwritable_history_still_returns_result(
        self, mock_client: MagicMock, temp_dir: Path
    ) -> None:
        blocker = temp_dir / "state"
        blocker.write_text("")
        history = TransferHistory(blocker / "history.json")
        form = TransferForm(local_path="/a.txt", pod_path="/data")

        result = TransferManager(mock_client, history).transfer(form, TARGET)

        assert result.success
        assert history.entries == [result]
        assert form.local_path == ""


@pytest.mark.unit
def test_failure_message_falls_back(make_result: Callable[..., TransferResult]) -> None:
    assert failure_message(make_result(success=False, error="boom")) == "Transfer failed: boom"
    assert failure_message(make_result(success=False)) == "Transfer failed: Transfer failed"
