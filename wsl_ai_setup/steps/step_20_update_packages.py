from __future__ import annotations

from typing import List

from ..actions import Action
from ..context import RunContext
from ..lib.pkg import apt_update, apt_upgrade
from ..pipeline import BaseStep


class UpdatePackagesStep(BaseStep):
    step_id = "20_update_packages"
    title = "System update"

    def plan(self, ctx: RunContext) -> List[Action]:
        return [apt_update(), apt_upgrade()]
