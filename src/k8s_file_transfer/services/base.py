"""Base manager for services that drive the kubectl client."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from k8s_file_transfer.integrations.kubectl.client import KubectlClient

logger = structlog.get_logger()


class BaseManager:
    """Base class for kubectl-backed service managers.

    Subclasses set ``_entity_name`` for structured log context.
    """

    _entity_name: str = ""

    def __init__(self, client: KubectlClient) -> None:
        """Initialize the manager.

        Args:
            client: kubectl client instance.
        """
        self._client = client
        self._log = logger.bind(entity=self._entity_name)

    @property
    def client(self) -> KubectlClient:
        return self._client
