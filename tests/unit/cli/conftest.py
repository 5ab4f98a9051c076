"""Shared fixtures for CLI command tests."""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import MagicMock

import pytest

from k8s_file_transfer.core.config.models import AppConfig
from k8s_file_transfer.services.history import TransferHistory


@pytest.fixture
def config() -> AppConfig:
    """Default configuration; tests mutate it as needed."""
    return AppConfig()


@pytest.fixture
def get_config(config: AppConfig) -> Callable[[], AppConfig]:
    """Create a factory function that returns the test configuration."""
    return lambda: config


@pytest.fixture
def get_client(mock_client: MagicMock) -> Callable[[], MagicMock]:
    """Create a factory function that returns the mock kubectl client."""
    return lambda: mock_client


@pytest.fixture
def mock_transfer_manager(mock_client: MagicMock) -> MagicMock:
    """Create a mock TransferManager wired to the mock client."""
    manager = MagicMock()
    manager.client = mock_client
    return manager


@pytest.fixture
def get_transfer_manager(mock_transfer_manager: MagicMock) -> Callable[[], MagicMock]:
    """Create a factory function that returns mock TransferManager."""
    return lambda: mock_transfer_manager


@pytest.fixture
def history() -> TransferHistory:
    """In-memory transfer history."""
    return TransferHistory()


@pytest.fixture
def get_history(history: TransferHistory) -> Callable[[], TransferHistory]:
    return lambda: history
