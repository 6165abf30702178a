from __future__ import annotations

import logging
from typing import List

from ..actions import Action
from ..context import RunContext
from ..errors import ProvisionAborted
from ..pipeline import BaseStep

logger = logging.getLogger(__name__)

INTRO = [
    "=== WSL Debian AI Setup ===",
    "This will:",
    "1. Configure default WSL user",
    "2. Update system packages",
    "3. Install CUDA {cuda} toolkit",
    "4. Install UV (Python package manager)",
    "5. Install SDKMAN (Java/JVM manager)",
    "6. Configure WSL for AI workflows",
]


class ConfirmStep(BaseStep):
    step_id = "00_confirm"
    title = "Confirm"

    def plan(self, ctx: RunContext) -> List[Action]:
        for line in INTRO:
            logger.info(line.format(cuda=ctx.config.cuda_version))
        if not ctx.prompter.confirm("Continue?"):
            raise ProvisionAborted("Declined at confirmation prompt")
        return []
