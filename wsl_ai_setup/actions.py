from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple, Union

from .lib.command import fmt_argv


@dataclass(frozen=True)
class RunCommand:
    """Run an external command, optionally as another user."""

    argv: Tuple[str, ...]
    run_as: Optional[str] = None
    interactive: bool = False
    env: Mapping[str, str] = field(default_factory=dict)

    def describe(self) -> str:
        who = f" (as {self.run_as})" if self.run_as else ""
        return f"run {fmt_argv(self.argv)}{who}"


@dataclass(frozen=True)
class WriteFile:
    path: str
    contents: str

    def describe(self) -> str:
        return f"write {self.path}"


@dataclass(frozen=True)
class AppendLines:
    """Append lines to a text file.

    With dedupe (the default) lines already present verbatim are skipped.
    """

    path: str
    lines: Tuple[str, ...]
    owner: Optional[str] = None
    dedupe: bool = True

    def describe(self) -> str:
        return f"append {len(self.lines)} line(s) to {self.path}"


@dataclass(frozen=True)
class Symlink:
    target: str
    link: str

    def describe(self) -> str:
        return f"symlink {self.link} -> {self.target}"


@dataclass(frozen=True)
class DownloadFile:
    url: str
    dest: str

    def describe(self) -> str:
        return f"download {self.url} -> {self.dest}"


@dataclass(frozen=True)
class RemoveFile:
    path: str

    def describe(self) -> str:
        return f"remove {self.path}"


Action = Union[RunCommand, WriteFile, AppendLines, Symlink, DownloadFile, RemoveFile]
