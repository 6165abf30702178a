from __future__ import annotations

import logging
import os
from typing import List, Optional

from ..actions import Action, AppendLines, RunCommand
from ..context import RunContext
from ..lib.runas import shell_pipeline
from ..pipeline import ADVISORY, BaseStep

logger = logging.getLogger(__name__)


class UvStep(BaseStep):
    step_id = "50_uv"
    title = "Install UV (Python package manager)"
    policy = ADVISORY

    def _find_uv(self, ctx: RunContext) -> Optional[str]:
        if ctx.host.command_exists("uv"):
            return "uv"
        # The installer drops the binary in the user's home, not on root's PATH.
        for rel in (".local/bin/uv", ".cargo/bin/uv"):
            candidate = os.path.join(ctx.home, rel)
            if ctx.host.path_exists(candidate):
                return candidate
        return None

    def plan(self, ctx: RunContext) -> List[Action]:
        user = ctx.require_username()
        actions: List[Action] = []

        uv = self._find_uv(ctx)
        if uv:
            logger.info("UV already installed: %s", ctx.host.tool_version([uv, "--version"]) or uv)
        else:
            logger.info("Installing UV for user %s...", user)
            actions.append(
                RunCommand(
                    argv=tuple(shell_pipeline(f"curl -LsSf {ctx.config.uv_install_url} | sh")),
                    run_as=user,
                )
            )

        path_line = ctx.config.uv_path_line
        if not ctx.host.file_has_line(ctx.user_bashrc, path_line):
            actions.append(AppendLines(path=ctx.user_bashrc, lines=(path_line,), owner=user))

        return actions

    def finish(self, ctx: RunContext, *, changed: bool) -> None:
        if not changed or ctx.dry_run:
            return
        uv = self._find_uv(ctx)
        if uv:
            logger.info("UV successfully installed: %s", ctx.host.tool_version([uv, "--version"]) or uv)
        else:
            logger.warning("Warning: UV installation may have failed")
