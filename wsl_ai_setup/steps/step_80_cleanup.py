from __future__ import annotations

from typing import List

from ..actions import Action
from ..context import RunContext
from ..lib.pkg import apt_autoclean, apt_autoremove
from ..pipeline import BaseStep


class CleanupStep(BaseStep):
    step_id = "80_cleanup"
    title = "Final cleanup"

    def plan(self, ctx: RunContext) -> List[Action]:
        return [apt_autoremove(), apt_autoclean()]
