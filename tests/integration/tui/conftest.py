"""Shared fixtures for TUI integration tests.

The app runs against the ``mock_client`` cluster from the root conftest.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from unittest.mock import MagicMock

import pytest
from textual.pilot import Pilot

from k8s_file_transfer.services.history import TransferHistory
from k8s_file_transfer.services.models import TargetSelection
from k8s_file_transfer.tui.apps.transfer import TransferApp

AppFactory = Callable[..., TransferApp]
Settle = Callable[[Pilot[None]], Awaitable[None]]


@pytest.fixture
def app_factory(mock_client: MagicMock) -> AppFactory:
    """Build a TransferApp around the mocked kubectl client."""

    def _make(
        initial: TargetSelection | None = None,
        history: TransferHistory | None = None,
        default_pod_path: str = "/tmp",
    ) -> TransferApp:
        return TransferApp(
            mock_client,
            history if history is not None else TransferHistory(),
            default_pod_path=default_pod_path,
            initial=initial,
        )

    return _make


@pytest.fixture
def settle() -> Settle:
    """Wait until background loads and the UI updates they trigger are done.

    A finished load can start the next level's load, so this loops.
    """

    async def _settle(pilot: Pilot[None]) -> None:
        for _ in range(5):
            await pilot.pause()
            await pilot.app.workers.wait_for_complete()
        await pilot.pause()

    return _settle
