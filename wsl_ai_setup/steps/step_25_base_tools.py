from __future__ import annotations

import logging
from typing import List

from ..actions import Action
from ..context import RunContext
from ..lib.pkg import apt_install
from ..pipeline import BaseStep

logger = logging.getLogger(__name__)


class BaseToolsStep(BaseStep):
    """curl, zip and unzip are needed by the vendor installers that follow."""

    step_id = "25_base_tools"
    title = "Install essential tools"

    def plan(self, ctx: RunContext) -> List[Action]:
        missing = [tool for tool in ctx.config.base_tools if not ctx.host.command_exists(tool)]
        if missing:
            logger.info("Installing %s...", ", ".join(missing))
        return list(apt_install(missing))
