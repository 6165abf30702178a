from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from .actions import Action, AppendLines, DownloadFile, RemoveFile, RunCommand, Symlink, WriteFile
from .host import read_lines
from .lib.command import run_cmd
from .lib.net import download
from .lib.runas import run_as_argv

logger = logging.getLogger(__name__)


class Executor:
    """Applies planned actions to the local machine.

    This is the only place host state is mutated. With dry_run every
    action is logged and skipped.
    """

    def __init__(self, *, dry_run: bool = False) -> None:
        self.dry_run = dry_run

    def apply(self, action: Action) -> None:
        if self.dry_run:
            logger.info("Would %s", action.describe())
            return

        if isinstance(action, RunCommand):
            self._run(action)
        elif isinstance(action, WriteFile):
            self._write(action)
        elif isinstance(action, AppendLines):
            self._append(action)
        elif isinstance(action, Symlink):
            self._symlink(action)
        elif isinstance(action, DownloadFile):
            download(action.url, action.dest)
        elif isinstance(action, RemoveFile):
            self._remove(action)
        else:
            raise TypeError(f"Unsupported action: {action!r}")

    def _run(self, action: RunCommand) -> None:
        run_cmd(
            run_as_argv(action.run_as, action.argv),
            env=action.env,
            interactive=action.interactive,
        )

    def _write(self, action: WriteFile) -> None:
        p = Path(action.path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(action.contents, encoding="utf-8")
        logger.info("Wrote %s", str(p))

    def _append(self, action: AppendLines) -> None:
        p = Path(action.path)
        missing = list(action.lines)
        if action.dedupe:
            existing = read_lines(action.path)
            missing = [ln for ln in missing if ln not in existing]
        if not missing:
            logger.info("%s already contains requested lines", str(p))
            return

        created = not p.exists()
        if created:
            p.parent.mkdir(parents=True, exist_ok=True)

        prefix = ""
        if not created:
            raw = p.read_bytes()
            if raw and not raw.endswith(b"\n"):
                prefix = "\n"

        with p.open("a", encoding="utf-8") as f:
            f.write(prefix + "".join(ln + "\n" for ln in missing))

        if created and action.owner:
            shutil.chown(str(p), user=action.owner, group=action.owner)

        logger.info("Appended %d line(s) to %s", len(missing), str(p))

    def _symlink(self, action: Symlink) -> None:
        link = Path(action.link)
        if link.is_dir() and not link.is_symlink():
            logger.warning("%s is a directory; not replacing it with a link to %s", str(link), action.target)
            return
        if link.is_symlink() or link.exists():
            link.unlink()
        link.parent.mkdir(parents=True, exist_ok=True)
        os.symlink(action.target, str(link))
        logger.info("Linked %s -> %s", str(link), action.target)

    def _remove(self, action: RemoveFile) -> None:
        p = Path(action.path)
        if p.exists() or p.is_symlink():
            p.unlink()
            logger.info("Removed %s", str(p))
