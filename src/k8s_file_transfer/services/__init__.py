"""Service layer: target selection, transfers and history."""

from k8s_file_transfer.services.exceptions import (
    SelectionLoadError,
    TransferError,
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
from k8s_file_transfer.services.progress import SimulatedProgress
from k8s_file_transfer.services.selection import SelectionManager, SelectionOptions
from k8s_file_transfer.services.transfer import TransferForm, TransferManager

__all__ = [
    "SelectionLoadError",
    "SelectionManager",
    "SelectionOptions",
    "SimulatedProgress",
    "TargetSelection",
    "TransferDirection",
    "TransferError",
    "TransferForm",
    "TransferHistory",
    "TransferInProgressError",
    "TransferManager",
    "TransferRequest",
    "TransferResult",
    "TransferValidationError",
]
