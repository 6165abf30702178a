from __future__ import annotations

import logging
from typing import List

from ..actions import Action, RunCommand
from ..context import RunContext
from ..pipeline import ADVISORY, BaseStep

logger = logging.getLogger(__name__)


class GpuGroupsStep(BaseStep):
    step_id = "70_gpu_groups"
    title = "Add user to CUDA/graphics groups"
    policy = ADVISORY

    def plan(self, ctx: RunContext) -> List[Action]:
        user = ctx.require_username()
        actions: List[Action] = []
        skipped: List[str] = []

        for group in ctx.config.gpu_groups:
            if not ctx.host.group_exists(group):
                logger.info("Group %s does not exist on this host (this is normal); skipping", group)
                skipped.append(group)
                continue
            if ctx.host.user_in_group(user, group):
                logger.info("%s already in %s group", user, group)
                continue
            logger.info("Adding %s to %s group...", user, group)
            actions.append(RunCommand(argv=("usermod", "-aG", group, user)))

        ctx.decide("gpu_groups_skipped", skipped)
        return actions

    def finish(self, ctx: RunContext, *, changed: bool) -> None:
        logger.info("GPU access groups configured for %s", ctx.username)
