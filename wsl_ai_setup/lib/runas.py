from __future__ import annotations

import shlex
from typing import Sequence


def run_as_argv(user: str | None, argv: Sequence[str]) -> list[str]:
    """Wrap argv so it runs as `user` with a login environment.

    With no user the argv is returned unchanged (runs as the caller, root).
    """

    if not user:
        return list(argv)
    return ["su", "-", user, "-c", shlex.join(argv)]


def shell_pipeline(script: str) -> list[str]:
    """argv for a shell one-liner such as `curl ... | sh`."""

    return ["bash", "-c", script]
