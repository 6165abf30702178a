from __future__ import annotations

import logging
from typing import List

from ..actions import Action, AppendLines, Symlink
from ..context import RunContext
from ..pipeline import BaseStep

logger = logging.getLogger(__name__)


class CudaEnvStep(BaseStep):
    step_id = "40_cuda_env"
    title = "Configure CUDA environment"

    def plan(self, ctx: RunContext) -> List[Action]:
        cfg = ctx.config
        user = ctx.require_username()
        lines = cfg.cuda_env_lines
        actions: List[Action] = []

        for path, owner in ((ctx.user_bashrc, user), (cfg.system_bashrc, None)):
            missing = tuple(ln for ln in lines if not ctx.host.file_has_line(path, ln))
            if missing:
                actions.append(AppendLines(path=path, lines=missing, owner=owner))
            else:
                logger.info("CUDA environment already configured in %s", path)

        link = cfg.cuda_symlink
        if ctx.host.is_symlink(link):
            logger.info("%s already linked", link)
        elif ctx.host.path_exists(link):
            logger.warning("%s exists and is not a symlink; leaving it in place", link)
        else:
            actions.append(Symlink(target=cfg.cuda_home, link=link))

        return actions
