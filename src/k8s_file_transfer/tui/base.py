"""Base classes for TUI screens and widgets.

Usage:
    from k8s_file_transfer.tui import BaseScreen, BaseWidget

    class MyPanel(BaseWidget):
        DEFAULT_CSS = '''
        MyPanel { height: auto; }
        '''
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import structlog
from textual.app import ComposeResult
from textual.screen import Screen
from textual.widget import Widget

from k8s_file_transfer.integrations.kubectl.exceptions import KubectlError
from k8s_file_transfer.services.exceptions import SelectionLoadError, TransferError

if TYPE_CHECKING:
    from textual.notifications import SeverityLevel

T = TypeVar("T")

logger = structlog.get_logger()


def error_notification(error: Exception) -> tuple[str, SeverityLevel]:
    """Message and severity to show for a service or kubectl error."""
    if isinstance(error, TransferError):
        return error.message, error.severity
    if isinstance(error, SelectionLoadError):
        return error.message, "error"
    if isinstance(error, KubectlError):
        return error.detail, "error"
    return str(error), "error"


class BaseWidget(Widget):
    """Base class for custom TUI widgets.

    Subclasses define ``DEFAULT_CSS``, ``compose()`` and their own
    Message subclasses.
    """

    def notify_user(
        self,
        message: str,
        severity: SeverityLevel = "information",
        *,
        markup: bool = True,
    ) -> None:
        """Show a notification to the user.

        Args:
            message: Notification text.
            severity: One of "information", "warning", "error".
            markup: Parse the text as markup. Pass False for text that
                embeds kubectl output.
        """
        self.app.notify(message, severity=severity, markup=markup)

    def notify_error(self, error: Exception) -> None:
        """Log an error and show it as a notification."""
        message, severity = error_notification(error)
        logger.warning("tui_error_reported", widget=type(self).__name__, error=message)
        self.notify_user(message, severity=severity, markup=False)


class BaseScreen(Screen[T]):
    """Base class for TUI screens.

    Type Parameters:
        T: The type returned when the screen is dismissed.
    """

    def go_back(self) -> None:
        """Pop this screen if there is one to return to."""
        if len(self.app.screen_stack) > 1:
            self.app.pop_screen()

    def notify_user(
        self,
        message: str,
        severity: SeverityLevel = "information",
        *,
        markup: bool = True,
    ) -> None:
        self.app.notify(message, severity=severity, markup=markup)

    def compose(self) -> ComposeResult:
        """Compose the screen layout. Must be implemented by subclasses."""
        raise NotImplementedError("Subclasses must implement compose()")
