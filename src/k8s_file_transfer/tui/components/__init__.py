"""Reusable TUI components."""

from k8s_file_transfer.tui.components.modal import ConfirmModal

__all__ = ["ConfirmModal"]
