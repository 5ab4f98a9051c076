"""Theme constants and markup helpers for the terminal UI.

Usage:
    from k8s_file_transfer.tui.theme import Colors, Styles

    DEFAULT_CSS = f'''
    .ready {{ color: {Colors.SUCCESS}; }}
    '''

    label.update(Styles.success("Ready for Transfer"))
"""

from __future__ import annotations

from rich.markup import escape


class Colors:
    """Textual CSS variables used by the panels."""

    SUCCESS = "$success"
    WARNING = "$warning"
    ERROR = "$error"
    PRIMARY = "$primary"

    TEXT_MUTED = "$text-muted"

    SURFACE = "$surface"
    PANEL = "$panel"


class Styles:
    """Rich markup wrappers. Text is escaped before styling."""

    @staticmethod
    def success(text: str) -> str:
        return f"[green]{escape(text)}[/green]"

    @staticmethod
    def warning(text: str) -> str:
        return f"[yellow]{escape(text)}[/yellow]"

    @staticmethod
    def error(text: str) -> str:
        return f"[red]{escape(text)}[/red]"

    @staticmethod
    def muted(text: str) -> str:
        return f"[dim]{escape(text)}[/dim]"

    @staticmethod
    def bold(text: str) -> str:
        return f"[bold]{escape(text)}[/bold]"

    @staticmethod
    def primary(text: str) -> str:
        return f"[cyan]{escape(text)}[/cyan]"
