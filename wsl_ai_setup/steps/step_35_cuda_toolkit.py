from __future__ import annotations

import logging
import os
from typing import List

from ..actions import Action
from ..context import RunContext
from ..lib.pkg import apt_install
from ..pipeline import BaseStep

logger = logging.getLogger(__name__)


class CudaToolkitStep(BaseStep):
    step_id = "35_cuda_toolkit"
    title = "Install CUDA toolkit"

    def _nvcc(self, ctx: RunContext) -> str | None:
        if ctx.host.command_exists("nvcc"):
            return "nvcc"
        # root's PATH does not include the toolkit until the rc files are sourced.
        local = os.path.join(ctx.config.cuda_home, "bin", "nvcc")
        if ctx.host.path_exists(local):
            return local
        return None

    def plan(self, ctx: RunContext) -> List[Action]:
        nvcc = self._nvcc(ctx)
        if nvcc:
            version = ctx.host.tool_version([nvcc, "--version"])
            logger.info("CUDA toolkit already installed: %s", version or "unknown version")
            return []

        logger.info("Installing CUDA toolkit %s...", ctx.config.cuda_version)
        ctx.decide("cuda_version", ctx.config.cuda_version)
        return list(apt_install(ctx.config.cuda_packages))
