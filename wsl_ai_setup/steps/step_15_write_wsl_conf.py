from __future__ import annotations

import logging
from typing import List

from ..actions import Action, WriteFile
from ..context import RunContext
from ..pipeline import BaseStep

logger = logging.getLogger(__name__)


def render_wsl_conf(username: str) -> str:
    """/etc/wsl.conf contents; section and key names are read by WSL itself."""

    return "\n".join(
        [
            "[user]",
            f"default={username}",
            "",
            "[boot]",
            "systemd=true",
            "",
            "[automount]",
            "enabled=true",
            "root=/mnt/",
            'options="metadata,umask=22,fmask=11"',
            "",
            "[network]",
            "generateHosts=true",
            "generateResolvConf=true",
            "",
            "[interop]",
            "enabled=false",
            "appendWindowsPath=false",
            "",
        ]
    )


class WriteWslConfStep(BaseStep):
    step_id = "15_write_wsl_conf"
    title = "Write WSL configuration"

    def plan(self, ctx: RunContext) -> List[Action]:
        user = ctx.require_username()
        return [WriteFile(path=ctx.config.wsl_conf_path, contents=render_wsl_conf(user))]

    def finish(self, ctx: RunContext, *, changed: bool) -> None:
        logger.info("Default user configured: %s", ctx.username)
        logger.info("WSL will use this user by default after restart")
