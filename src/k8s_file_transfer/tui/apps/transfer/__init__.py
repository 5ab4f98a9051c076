"""Kubernetes File Transfer TUI application.

Usage:
    from k8s_file_transfer.tui.apps.transfer import TransferApp

    app = TransferApp.from_config(load_config())
    app.run()
"""

from k8s_file_transfer.tui.apps.transfer.app import TransferApp

__all__ = ["TransferApp"]
