from __future__ import annotations

import grp
import logging
import os
import pwd
import shutil
from pathlib import Path
from typing import Optional, Protocol

from .lib.command import run_cmd
from .lib.env import PATHS
from .lib.pkg import dpkg_is_installed

logger = logging.getLogger(__name__)


class Host(Protocol):
    """Read-only view of the machine being provisioned.

    Steps only ever ask questions through this; they never mutate.
    """

    def user_exists(self, user: str) -> bool:
        ...

    def home_dir(self, user: str) -> str:
        ...

    def group_exists(self, group: str) -> bool:
        ...

    def user_in_group(self, user: str, group: str) -> bool:
        ...

    def command_exists(self, name: str) -> bool:
        ...

    def package_installed(self, package: str) -> bool:
        ...

    def path_exists(self, path: str) -> bool:
        ...

    def is_symlink(self, path: str) -> bool:
        ...

    def file_has_line(self, path: str, line: str) -> bool:
        ...

    def tool_version(self, argv: list[str]) -> Optional[str]:
        ...


def read_lines(path: str) -> list[str]:
    p = Path(path)
    if not p.exists():
        return []
    return p.read_text(encoding="utf-8", errors="replace").splitlines()


class SystemHost:
    """Host probe backed by the local passwd/group databases, PATH and dpkg."""

    def user_exists(self, user: str) -> bool:
        try:
            pwd.getpwnam(user)
        except KeyError:
            return False
        return True

    def home_dir(self, user: str) -> str:
        try:
            return pwd.getpwnam(user).pw_dir
        except KeyError:
            return os.path.join(PATHS.home_base, user)

    def group_exists(self, group: str) -> bool:
        try:
            grp.getgrnam(group)
        except KeyError:
            return False
        return True

    def user_in_group(self, user: str, group: str) -> bool:
        try:
            g = grp.getgrnam(group)
        except KeyError:
            return False
        if user in g.gr_mem:
            return True
        try:
            return pwd.getpwnam(user).pw_gid == g.gr_gid
        except KeyError:
            return False

    def command_exists(self, name: str) -> bool:
        return shutil.which(name) is not None

    def package_installed(self, package: str) -> bool:
        return dpkg_is_installed(package)

    def path_exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_symlink(self, path: str) -> bool:
        return os.path.islink(path)

    def file_has_line(self, path: str, line: str) -> bool:
        return line in read_lines(path)

    def tool_version(self, argv: list[str]) -> Optional[str]:
        """First non-empty line mentioning a release/version, best-effort."""

        try:
            r = run_cmd(argv, check=False)
        except OSError:
            return None
        if r.returncode != 0:
            return None
        lines = [ln.strip() for ln in r.stdout.splitlines() if ln.strip()]
        for ln in lines:
            if "release" in ln.lower():
                return ln
        return lines[0] if lines else None
