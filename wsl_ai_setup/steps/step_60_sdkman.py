from __future__ import annotations

import logging
import os
from typing import List

from ..actions import Action, RunCommand
from ..context import RunContext
from ..lib.runas import shell_pipeline
from ..pipeline import TOLERATED, BaseStep

logger = logging.getLogger(__name__)


class SdkmanStep(BaseStep):
    """The SDKMAN installer is known to exit non-zero on success, so failures are tolerated."""

    step_id = "60_sdkman"
    title = "Install SDKMAN (Java/JVM manager)"
    policy = TOLERATED

    def plan(self, ctx: RunContext) -> List[Action]:
        user = ctx.require_username()
        if ctx.host.path_exists(os.path.join(ctx.home, ".sdkman")):
            logger.info("SDKMAN already installed for user: %s", user)
            return []

        logger.info("Installing SDKMAN for user: %s...", user)
        return [
            RunCommand(
                argv=tuple(shell_pipeline(f'curl -s "{ctx.config.sdkman_install_url}" | bash')),
                run_as=user,
            )
        ]

    def finish(self, ctx: RunContext, *, changed: bool) -> None:
        if changed:
            logger.info("SDKMAN installed for user: %s", ctx.username)
        logger.info("After restart, use: sdk list java, sdk install java 21.0.2-tem, etc.")
