from __future__ import annotations

import logging
from typing import List, Sequence

from ..actions import RunCommand
from .command import run_cmd

logger = logging.getLogger(__name__)

APT_ENV = {"DEBIAN_FRONTEND": "noninteractive"}


def _apt(*args: str) -> RunCommand:
    return RunCommand(argv=("apt-get", *args), env=APT_ENV)


def apt_update() -> RunCommand:
    return _apt("update")


def apt_upgrade() -> RunCommand:
    return _apt("upgrade", "-y")


def apt_install(packages: Sequence[str]) -> List[RunCommand]:
    if not packages:
        return []
    return [_apt("install", "-y", *packages)]


def apt_autoremove() -> RunCommand:
    return _apt("autoremove", "-y")


def apt_autoclean() -> RunCommand:
    return _apt("autoclean")


def dpkg_install(deb_path: str) -> RunCommand:
    return RunCommand(argv=("dpkg", "-i", deb_path), env=APT_ENV)


def dpkg_is_installed(package: str) -> bool:
    """Return True if dpkg reports the package as installed.

    Missing packages make dpkg-query exit non-zero; that is an answer, not an error.
    """
    r = run_cmd(["dpkg-query", "-W", "-f=${Status}", package], check=False)
    if r.returncode != 0:
        return False
    return r.stdout.strip().endswith("install ok installed")
