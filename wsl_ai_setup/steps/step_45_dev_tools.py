from __future__ import annotations

from typing import List

from ..actions import Action
from ..context import RunContext
from ..lib.pkg import apt_install
from ..pipeline import BaseStep


class DevToolsStep(BaseStep):
    step_id = "45_dev_tools"
    title = "Install additional development tools"

    def plan(self, ctx: RunContext) -> List[Action]:
        return list(apt_install(ctx.config.dev_tools))
