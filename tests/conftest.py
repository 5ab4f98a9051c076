"""Shared pytest fixtures for k8s_file_transfer tests."""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
import typer
from typer.testing import CliRunner

from k8s_file_transfer.cli.main import app
from k8s_file_transfer.integrations.kubectl.client import KubectlClient
from k8s_file_transfer.integrations.kubectl.models import KubectlCommandResult
from k8s_file_transfer.services.models import (
    TransferDirection,
    TransferRequest,
    TransferResult,
)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_dir() -> Generator[Path]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset environment variables for each test."""
    # Clear any KFT_ prefixed environment variables
    for key in list(os.environ.keys()):
        if key.startswith("KFT_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def isolate_log_files(tmp_path: Path) -> Generator[None]:
    """Keep log files out of the real state directory."""
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    log_dir = tmp_path / "logs"
    with (
        patch("k8s_file_transfer.logging.config.LOG_DIR", log_dir),
        patch("k8s_file_transfer.logging.config.LOG_FILE", log_dir / "kft.log"),
    ):
        yield
    for handler in root.handlers:
        if handler not in original_handlers:
            handler.close()
    root.handlers = original_handlers


@pytest.fixture
def cli_app() -> typer.Typer:
    """Return the CLI app for testing."""
    return app


# ============================================================================
# kubectl fakes
# ============================================================================


@pytest.fixture
def mock_client() -> MagicMock:
    """A KubectlClient double with a small two-context cluster."""
    client = MagicMock(spec=KubectlClient)
    client.binary = "/usr/local/bin/kubectl"
    client.list_contexts.return_value = ["minikube", "production"]
    client.get_current_context.return_value = "minikube"
    client.list_namespaces.return_value = ["default", "kube-system", "shop"]
    client.list_pods.return_value = ["web-7d9f", "db-0"]
    client.list_containers.return_value = ["app"]
    client.copy_to_pod.return_value = KubectlCommandResult(success=True, stdout="")
    client.copy_from_pod.return_value = KubectlCommandResult(success=True, stdout="")
    return client


@pytest.fixture
def make_request() -> Callable[..., TransferRequest]:
    """Factory for transfer requests with sensible defaults."""

    def _make(**overrides: Any) -> TransferRequest:
        values: dict[str, Any] = {
            "local_paths": ["/home/dev/report.csv"],
            "pod_path": "/tmp",
            "pod_name": "web-7d9f",
            "namespace": "shop",
            "context": "minikube",
            "direction": TransferDirection.UPLOAD,
        }
        values.update(overrides)
        return TransferRequest(**values)

    return _make


@pytest.fixture
def make_result(
    make_request: Callable[..., TransferRequest],
) -> Callable[..., TransferResult]:
    """Factory for transfer results; keyword args go to the request."""

    def _make(success: bool = True, error: str | None = None, **request: Any) -> TransferResult:
        return TransferResult(
            success=success,
            error=error,
            exit_code=0 if success else 1,
            request=make_request(**request),
        )

    return _make
