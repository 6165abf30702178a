from __future__ import annotations

import logging
from typing import List

from ..actions import Action, AppendLines
from ..context import RunContext
from ..pipeline import ADVISORY, BaseStep

logger = logging.getLogger(__name__)

START_DIR_LINE = "cd ~"


class ShellStartDirStep(BaseStep):
    step_id = "18_shell_start_dir"
    title = "Configure user home directory startup"
    policy = ADVISORY

    def plan(self, ctx: RunContext) -> List[Action]:
        user = ctx.require_username()
        rc = ctx.user_bashrc
        if ctx.config.guard_start_dir and ctx.host.file_has_line(rc, START_DIR_LINE):
            logger.info("%s already starts in home directory", user)
            return []
        return [
            AppendLines(
                path=rc,
                lines=(START_DIR_LINE,),
                owner=user,
                dedupe=ctx.config.guard_start_dir,
            )
        ]
