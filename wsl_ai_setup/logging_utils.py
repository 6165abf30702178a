from __future__ import annotations

import logging
import os
from pathlib import Path

from .lib.env import PATHS

DEFAULT_LOG_PATH = PATHS.log_default
FALLBACK_LOG_NAME = "wsl-ai-setup.log"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


def _open_log_file(log_path: str) -> tuple[logging.Handler, str]:
    """FileHandler for log_path, or for ./wsl-ai-setup.log if that is unwritable."""

    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(log_path), log_path
    except OSError:
        # /var/log is root-only; dry runs usually happen as a normal user.
        fallback = str(Path.cwd() / FALLBACK_LOG_NAME)
        return logging.FileHandler(fallback), fallback


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Send provisioning output (step banners, commands, warnings) to a file and the console.

    Returns the log file actually opened. A second call only adjusts the level.
    """

    root = logging.getLogger()
    root.setLevel(level)
    if getattr(root, "_wsl_ai_setup_log_path", None):
        return root._wsl_ai_setup_log_path  # type: ignore[attr-defined]

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)
    file_handler, chosen_path = _open_log_file(log_path)
    handlers: list[logging.Handler] = [file_handler]
    if also_console:
        handlers.append(logging.StreamHandler())

    for h in handlers:
        h.setFormatter(fmt)
        root.addHandler(h)
    root._wsl_ai_setup_log_path = chosen_path  # type: ignore[attr-defined]

    logging.getLogger(__name__).info("Logging to %s (requested %s)", chosen_path, log_path)
    return chosen_path
