"""Unit tests for CLI output formatters."""

from __future__ import annotations

import io
import json

import pytest
import yaml
from rich.console import Console

from k8s_file_transfer.cli.formatters import (
    JsonFormatter,
    OutputFormat,
    TableFormatter,
    YamlFormatter,
    get_formatter,
)
from k8s_file_transfer.integrations.kubectl.models import PodFileEntry

COLUMNS = [("name", "Name"), ("size", "Size"), ("link_target", "Target")]


@pytest.fixture
def buffer() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(buffer: io.StringIO) -> Console:
    return Console(file=buffer, width=120, color_system=None)


def _entries() -> list[PodFileEntry]:
    return [
        PodFileEntry(permissions="-rw-r--r--", name="app.log", size="2048"),
        PodFileEntry(
            permissions="lrwxrwxrwx", name="current", size="11", link_target="releases/42"
        ),
    ]


@pytest.mark.unit
class TestGetFormatter:
    """Tests for get_formatter."""

    @pytest.mark.parametrize(
        ("fmt", "expected"),
        [
            (OutputFormat.TABLE, TableFormatter),
            (OutputFormat.JSON, JsonFormatter),
            (OutputFormat.YAML, YamlFormatter),
        ],
    )
    def test_returns_matching_formatter(self, fmt: OutputFormat, expected: type) -> None:
        assert isinstance(get_formatter(fmt, Console()), expected)


@pytest.mark.unit
class TestTableFormatter:
    """Tests for TableFormatter."""

    def test_renders_models(self, console: Console, buffer: io.StringIO) -> None:
        TableFormatter(console).format_list(_entries(), COLUMNS, title="web:/var/log")

        output = buffer.getvalue()
        assert "web:/var/log" in output
        assert "releases/42" in output
        assert "Total: 2" in output

    def test_missing_values_show_dash(self, console: Console, buffer: io.StringIO) -> None:
        TableFormatter(console).format_list([{"name": "a", "size": ""}], COLUMNS)
        row = next(line for line in buffer.getvalue().splitlines() if " a " in line)
        assert row.count("-") >= 2

    def test_markup_in_values_is_escaped(self, console: Console, buffer: io.StringIO) -> None:
        TableFormatter(console).format_list([{"name": "[bold]x[/bold]"}], COLUMNS)
        assert "[bold]x[/bold]" in buffer.getvalue()

    def test_booleans(self, console: Console, buffer: io.StringIO) -> None:
        TableFormatter(console).format_list(
            [{"current": True, "name": "a"}, {"current": False, "name": "b"}],
            [("current", "Current"), ("name", "Name")],
        )
        output = buffer.getvalue()
        assert "Yes" in output
        assert "No" in output

    def test_dotted_lookup(self, console: Console, buffer: io.StringIO) -> None:
        TableFormatter(console).format_list(
            [{"request": {"pod_name": "web-7d9f"}}], [("request.pod_name", "Pod")]
        )
        assert "web-7d9f" in buffer.getvalue()

    def test_format_dict(self, console: Console, buffer: io.StringIO) -> None:
        TableFormatter(console).format_dict({"context": "minikube", "pod": None})
        output = buffer.getvalue()
        assert "minikube" in output
        assert "context" in output


@pytest.mark.unit
class TestStructuredFormatters:
    """Tests for JSON and YAML output."""

    def test_json_list(self, console: Console, buffer: io.StringIO) -> None:
        JsonFormatter(console).format_list(_entries(), COLUMNS)

        data = json.loads(buffer.getvalue())
        assert data["total"] == 2
        assert "link_target" not in data["data"][0]
        assert data["data"][1]["link_target"] == "releases/42"

    def test_json_dict(self, console: Console, buffer: io.StringIO) -> None:
        JsonFormatter(console).format_dict({"context": "minikube"})
        assert json.loads(buffer.getvalue()) == {"context": "minikube"}

    def test_yaml_list(self, console: Console, buffer: io.StringIO) -> None:
        YamlFormatter(console).format_list(_entries(), COLUMNS)

        data = yaml.safe_load(buffer.getvalue())
        assert [e["name"] for e in data] == ["app.log", "current"]

    def test_yaml_keeps_brackets(self, console: Console, buffer: io.StringIO) -> None:
        YamlFormatter(console).format_dict({"name": "[red]x[/red]"})
        assert yaml.safe_load(buffer.getvalue()) == {"name": "[red]x[/red]"}
