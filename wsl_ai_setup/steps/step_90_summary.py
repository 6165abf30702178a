from __future__ import annotations

import logging

from ..context import RunContext
from ..pipeline import TOLERATED, BaseStep

logger = logging.getLogger(__name__)


def summary_lines(username: str, cuda_version: str) -> list[str]:
    return [
        "=== Installation Complete! ===",
        "",
        "Installed components:",
        "- System packages updated",
        f"- CUDA Toolkit {cuda_version}",
        "- UV (Python package manager)",
        "- SDKMAN (Java/JVM manager)",
        "- Development tools",
        f"- Default user: {username}",
        "",
        "IMPORTANT: You must restart WSL for user settings to take effect!",
        "",
        "Next steps:",
        "1. Exit WSL: exit",
        "2. Restart WSL: wsl --shutdown && wsl -d YourDistroName",
        f"3. Log in as {username} and test installations:",
        "   - nvcc --version",
        "   - nvidia-smi",
        "   - uv --version",
        "   - sdk version (SDKMAN)",
        "",
        "=== Setup Complete ===",
    ]


class SummaryStep(BaseStep):
    step_id = "90_summary"
    title = "Summary"
    policy = TOLERATED

    def finish(self, ctx: RunContext, *, changed: bool) -> None:
        # Never prompts: a run resumed past the user step may not know the name.
        username = ctx.username or ctx.config.username or "<your user>"
        for line in summary_lines(username, ctx.config.cuda_version):
            logger.info(line)
