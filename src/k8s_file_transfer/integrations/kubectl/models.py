"""Data models for kubectl command results and pod listings."""

from __future__ import annotations

import re
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

# permissions links owner group size month day time-or-year name
_LS_LINE_RE = re.compile(
    r"^(?P<permissions>[-bcdlps][-rwxsStT]{9}[.+@]?)\s+"
    r"(?P<links>\d+)\s+"
    r"(?P<owner>\S+)\s+"
    r"(?P<group>\S+)\s+"
    r"(?P<size>\d+(?:,\s*\d+)?)\s+"
    r"(?P<modified>\S+\s+\S+\s+\S+)\s+"
    r"(?P<name>.+)$"
)


@dataclass
class KubectlCommandResult:
    """Generic result from a kubectl command."""

    success: bool
    stdout: str
    stderr: str = ""
    exit_code: int = 0

    @property
    def output(self) -> str:
        """Return the primary output (stdout)."""
        return self.stdout


class PodFileEntry(BaseModel):
    """A single entry from ``ls -la`` run inside a pod."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    permissions: str = Field(description="Mode string, e.g. drwxr-xr-x")
    links: int = Field(default=1, description="Hard link count")
    owner: str = Field(default="", description="Owning user")
    group: str = Field(default="", description="Owning group")
    size: str = Field(default="0", description="Size in bytes (major, minor for devices)")
    modified: str = Field(default="", description="Modification time as printed by ls")
    name: str = Field(description="Entry name")
    link_target: str | None = Field(default=None, description="Symlink target")

    @property
    def is_directory(self) -> bool:
        return self.permissions.startswith("d")

    @property
    def is_symlink(self) -> bool:
        return self.permissions.startswith("l")


def parse_ls_output(output: str) -> list[PodFileEntry]:
    """Parse ``ls -la`` output into file entries.

    The leading ``total N`` line and lines that do not look like a long
    listing are skipped.

    Args:
        output: Raw stdout from ``ls -la``.

    Returns:
        Entries in listing order.
    """
    entries: list[PodFileEntry] = []
    for line in output.splitlines():
        line = line.rstrip()
        if not line or line.startswith("total "):
            continue
        match = _LS_LINE_RE.match(line)
        if not match:
            continue
        name = match.group("name")
        link_target = None
        if match.group("permissions").startswith("l") and " -> " in name:
            name, link_target = name.split(" -> ", 1)
        entries.append(
            PodFileEntry(
                permissions=match.group("permissions"),
                links=int(match.group("links")),
                owner=match.group("owner"),
                group=match.group("group"),
                size=match.group("size"),
                modified=match.group("modified"),
                name=name,
                link_target=link_target,
            )
        )
    return entries
