from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"json", "yaml", "yml"}:
        return ext
    # Default to JSON for unknown extensions.
    return "json"


def load_document(path: str) -> Dict[str, Any]:
    """Load a JSON or YAML mapping. A missing file is an empty mapping."""

    p = Path(path)
    if not p.exists():
        return {}

    text = p.read_text(encoding="utf-8")
    if _detect_format(p) in {"yaml", "yml"}:
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text) if text.strip() else {}

    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain an object/mapping, got {type(data).__name__}")

    return data


def load_state(path: str) -> Dict[str, Any]:
    return load_document(path)


def save_state(path: str, state: Dict[str, Any]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    if _detect_format(p) in {"yaml", "yml"}:
        p.write_text(yaml.safe_dump(state, sort_keys=False), encoding="utf-8")
    else:
        p.write_text(json.dumps(state, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into base (mutates base). None values are ignored."""

    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        elif value is not None:
            base[key] = value
    return base


def ensure_defaults(state: Dict[str, Any]) -> Dict[str, Any]:
    """Fill required keys with defaults (without overriding user values)."""

    state.setdefault("version", 1)
    state.setdefault("config", {})
    state.setdefault("execution", {})

    cfg = state["config"]
    cfg.setdefault("username", None)
    cfg.setdefault("assume_yes", False)
    cfg.setdefault("dry_run", False)
    cfg.setdefault("admin_group", "sudo")
    cfg.setdefault("shell", "/bin/bash")
    cfg.setdefault("wsl_conf_path", "/etc/wsl.conf")
    cfg.setdefault("system_bashrc", "/etc/bash.bashrc")
    # The original script appended `cd ~` on every run; false restores that.
    cfg.setdefault("guard_start_dir", True)
    cfg.setdefault("base_tools", ["curl", "zip", "unzip"])
    cfg.setdefault(
        "dev_tools",
        ["python3-dev", "build-essential", "git", "ca-certificates", "gnupg", "lsb-release"],
    )
    cfg.setdefault("gpu_groups", ["video", "render"])

    cuda = cfg.setdefault("cuda", {})
    cuda.setdefault("version", "12.6")
    cuda.setdefault("repo_distro", "debian12")
    cuda.setdefault("repo_arch", "x86_64")
    cuda.setdefault("keyring_package", "cuda-keyring")
    cuda.setdefault("keyring_version", "1.1-1")
    cuda.setdefault("extra_packages", ["libcu++-dev"])
    cuda.setdefault("symlink", "/usr/local/cuda")
    cuda.setdefault("download_dir", "/tmp")

    uv = cfg.setdefault("uv", {})
    uv.setdefault("install_url", "https://astral.sh/uv/install.sh")
    uv.setdefault("path_line", 'export PATH="$HOME/.local/bin:$PATH"')

    sdkman = cfg.setdefault("sdkman", {})
    sdkman.setdefault("install_url", "https://get.sdkman.io")

    exe = state["execution"]
    exe.setdefault("current_step", None)
    exe.setdefault("completed_steps", [])
    exe.setdefault("errors", [])
    exe.setdefault("decisions", {})
    exe.setdefault("steps", {})

    return state


def reset_run_record(state: Dict[str, Any]) -> None:
    """Clear per-run execution fields so the saved record covers one run."""

    exe = state.setdefault("execution", {})
    exe["current_step"] = None
    exe["completed_steps"] = []
    exe["steps"] = {}
    exe["decisions"] = {}
    exe["errors"] = []
    exe["summary"] = {}


def mark_step_completed(state: Dict[str, Any], step_id: str) -> None:
    exe = state.setdefault("execution", {})
    completed = exe.setdefault("completed_steps", [])
    if step_id not in completed:
        completed.append(step_id)


def record_step_outcome(state: Dict[str, Any], step_id: str, outcome: str, detail: str | None = None) -> None:
    steps = state.setdefault("execution", {}).setdefault("steps", {})
    entry: Dict[str, Any] = {"outcome": outcome}
    if detail:
        entry["detail"] = detail
    steps[step_id] = entry
