"""Terminal user interface built on Textual."""

from k8s_file_transfer.tui.base import BaseScreen, BaseWidget

__all__ = ["BaseScreen", "BaseWidget"]
