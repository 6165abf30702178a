from __future__ import annotations

import logging
from typing import List

from ..actions import Action, RunCommand
from ..context import RunContext
from ..pipeline import BaseStep

logger = logging.getLogger(__name__)


class EnsureUserStep(BaseStep):
    step_id = "10_ensure_user"
    title = "Configure default WSL user"

    def plan(self, ctx: RunContext) -> List[Action]:
        user = ctx.require_username()
        cfg = ctx.config

        if ctx.host.user_exists(user):
            logger.info("User %s already exists", user)
            ctx.decide("user_created", False)
            return []

        logger.info("Creating user: %s", user)
        ctx.decide("user_created", True)
        return [
            RunCommand(argv=("useradd", "-m", "-s", cfg.shell, user)),
            RunCommand(argv=("usermod", "-aG", cfg.admin_group, user)),
            # passwd talks to the terminal directly.
            RunCommand(argv=("passwd", user), interactive=True),
        ]
