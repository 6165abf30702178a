from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .errors import InvalidUsername
from .host import Host
from .lib.prompt import Prompter
from .provision_config import ProvisionConfig

logger = logging.getLogger(__name__)

# Debian adduser's default NAME_REGEX.
USERNAME_RE = re.compile(r"^[a-z][-a-z0-9_]*$")


def validate_username(name: str) -> str:
    name = (name or "").strip()
    if not name or not USERNAME_RE.match(name) or len(name) > 32:
        raise InvalidUsername(
            f"Invalid username {name!r}: use lowercase letters, digits, '-' or '_', starting with a letter"
        )
    return name


@dataclass
class RunContext:
    """Everything a step may look at while planning."""

    config: ProvisionConfig
    host: Host
    prompter: Prompter
    state: Dict[str, Any] = field(default_factory=dict)
    username: Optional[str] = None

    @property
    def dry_run(self) -> bool:
        return self.config.dry_run

    def require_username(self) -> str:
        """Resolve the target user once: config/CLI first, then the prompt."""

        if self.username:
            return self.username
        name = self.config.username or self.prompter.ask(
            "Enter your preferred Linux username (lowercase, no spaces)"
        )
        self.username = validate_username(name)
        self.decide("username", self.username)
        return self.username

    @property
    def home(self) -> str:
        return self.host.home_dir(self.require_username())

    @property
    def user_bashrc(self) -> str:
        return os.path.join(self.home, ".bashrc")

    def decide(self, key: str, value: Any) -> None:
        self.state.setdefault("execution", {}).setdefault("decisions", {})[key] = value
