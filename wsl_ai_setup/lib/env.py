from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    state_default: str = "/var/lib/wsl-ai-setup/state.json"
    log_default: str = "/var/log/wsl-ai-setup.log"
    wsl_conf: str = "/etc/wsl.conf"
    system_bashrc: str = "/etc/bash.bashrc"
    home_base: str = "/home"


PATHS = Paths()
