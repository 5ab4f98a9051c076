"""Output formatters for CLI commands.

Commands hand records to a formatter chosen by ``--output`` so the same
data prints as a Rich table, JSON or YAML.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from collections.abc import Sequence
from enum import StrEnum
from typing import Any

import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table


class OutputFormat(StrEnum):
    """Supported output formats for CLI commands."""

    TABLE = "table"
    JSON = "json"
    YAML = "yaml"


def _to_data(record: Any) -> Any:
    if hasattr(record, "model_dump"):
        return record.model_dump(mode="json", exclude_none=True)
    return record


class Formatter(ABC):
    """Abstract base class for output formatters."""

    def __init__(self, console: Console) -> None:
        self.console = console

    @abstractmethod
    def format_list(
        self,
        records: Sequence[Any],
        columns: list[tuple[str, str]],
        title: str = "",
    ) -> None:
        """Format and display a list of records."""

    @abstractmethod
    def format_dict(self, data: dict[str, Any], title: str = "") -> None:
        """Format and display a dictionary."""

    def format_success(self, message: str) -> None:
        self.console.print(f"[green]{message}[/green]")


class TableFormatter(Formatter):
    """Rich table output formatter."""

    def format_list(
        self,
        records: Sequence[Any],
        columns: list[tuple[str, str]],
        title: str = "",
    ) -> None:
        """Format records as a multi-column table."""
        table = Table(title=title or None, show_header=True)
        for _field_name, header in columns:
            style = "cyan" if header.lower() == "name" else None
            table.add_column(header, style=style, overflow="fold")

        for record in records:
            data = _to_data(record)
            table.add_row(*(self._cell(self._lookup(data, name)) for name, _ in columns))

        self.console.print(table)
        self.console.print(f"\n[dim]Total: {len(records)}[/dim]")

    def format_dict(self, data: dict[str, Any], title: str = "") -> None:
        """Format a dictionary as a two-column table."""
        table = Table(title=title or None, show_header=True)
        table.add_column("Key", style="cyan", no_wrap=True)
        table.add_column("Value", style="green", overflow="fold")
        for key, value in data.items():
            table.add_row(key, self._cell(value))
        self.console.print(table)

    @staticmethod
    def _cell(value: Any) -> str:
        if value is None or value == "":
            return "-"
        if isinstance(value, bool):
            return "Yes" if value else "No"
        if isinstance(value, list):
            return escape(", ".join(str(v) for v in value)) or "-"
        if isinstance(value, dict):
            return escape(json.dumps(value))
        return escape(str(value))

    @staticmethod
    def _lookup(data: Any, field_path: str) -> Any:
        value = data
        for key in field_path.split("."):
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return None
        return value


class JsonFormatter(Formatter):
    """JSON output formatter."""

    def format_list(
        self,
        records: Sequence[Any],
        columns: list[tuple[str, str]],
        title: str = "",
    ) -> None:
        data = [_to_data(r) for r in records]
        self.console.print_json(data={"data": data, "total": len(data)}, default=str)

    def format_dict(self, data: dict[str, Any], title: str = "") -> None:
        self.console.print_json(data=data, default=str)


class YamlFormatter(Formatter):
    """YAML output formatter."""

    def format_list(
        self,
        records: Sequence[Any],
        columns: list[tuple[str, str]],
        title: str = "",
    ) -> None:
        data = [_to_data(r) for r in records]
        self.console.print(
            yaml.safe_dump(data, default_flow_style=False, sort_keys=False),
            markup=False,
            soft_wrap=True,
        )

    def format_dict(self, data: dict[str, Any], title: str = "") -> None:
        self.console.print(
            yaml.safe_dump(data, default_flow_style=False, sort_keys=False),
            markup=False,
            soft_wrap=True,
        )


def get_formatter(format_type: OutputFormat, console: Console | None = None) -> Formatter:
    """Return the formatter for an output format."""
    if console is None:
        console = Console()

    formatters: dict[OutputFormat, type[Formatter]] = {
        OutputFormat.TABLE: TableFormatter,
        OutputFormat.JSON: JsonFormatter,
        OutputFormat.YAML: YamlFormatter,
    }
    return formatters.get(format_type, TableFormatter)(console)
