from __future__ import annotations

import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class Prompter:
    """Interactive questions on the controlling terminal.

    input_fn is injectable so tests can script answers.
    """

    def __init__(self, *, assume_yes: bool = False, input_fn: Optional[Callable[[str], str]] = None) -> None:
        self.assume_yes = assume_yes
        self._input = input_fn or input

    def confirm(self, question: str) -> bool:
        if self.assume_yes:
            logger.info("%s (y/N) -> yes (assumed)", question)
            return True
        reply = self._input(f"{question} (y/N) ").strip()
        return reply[:1] in {"y", "Y"}

    def ask(self, question: str) -> str:
        return self._input(f"{question}: ").strip()
