from __future__ import annotations

import argparse
import copy
import logging
import os
import sys
from typing import Any, Dict, Optional

from .context import RunContext, validate_username
from .errors import InvalidUsername, ProvisionAborted
from .executor import Executor
from .host import Host, SystemHost
from .lib.env import PATHS
from .lib.prompt import Prompter
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import ActionExecutor, run_pipeline, select_steps
from .provision_config import ProvisionConfig, load_config_overrides
from .state_store import deep_merge, ensure_defaults, load_state, reset_run_record, save_state
from .steps import (
    BaseToolsStep,
    CleanupStep,
    ConfirmStep,
    CudaEnvStep,
    CudaRepoStep,
    CudaToolkitStep,
    DevToolsStep,
    EnsureUserStep,
    GpuGroupsStep,
    SdkmanStep,
    ShellStartDirStep,
    SummaryStep,
    UpdatePackagesStep,
    UvStep,
    WriteWslConfStep,
)

logger = logging.getLogger(__name__)


DEFAULT_STATE_PATH = PATHS.state_default


def build_steps():
    return [
        ConfirmStep(),
        EnsureUserStep(),
        WriteWslConfStep(),
        ShellStartDirStep(),
        UpdatePackagesStep(),
        BaseToolsStep(),
        CudaRepoStep(),
        CudaToolkitStep(),
        CudaEnvStep(),
        DevToolsStep(),
        UvStep(),
        SdkmanStep(),
        GpuGroupsStep(),
        CleanupStep(),
        SummaryStep(),
    ]


def run(
    *,
    state_path: str = DEFAULT_STATE_PATH,
    log_path: str = DEFAULT_LOG_PATH,
    config_path: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
    verbose: bool = False,
    host: Optional[Host] = None,
    executor: Optional[ActionExecutor] = None,
    prompter: Optional[Prompter] = None,
) -> Dict[str, Any]:
    """Run the provisioning pipeline and persist a record of what happened.

    The config file and overrides apply to this run only; neither is
    written back to the saved config. The execution record describes the
    latest run alone.
    """

    actual_log_path = configure_logging(
        log_path=log_path, level=logging.DEBUG if verbose else logging.INFO
    )

    state = ensure_defaults(load_state(state_path))
    raw = copy.deepcopy(state["config"])
    if config_path:
        deep_merge(raw, load_config_overrides(config_path))
    deep_merge(raw, overrides or {})
    cfg = ProvisionConfig(raw=raw)

    reset_run_record(state)
    exe = state["execution"]
    exe.setdefault("paths", {})["log_path_requested"] = log_path
    exe.setdefault("paths", {})["log_path_actual"] = actual_log_path

    ctx = RunContext(
        config=cfg,
        host=host or SystemHost(),
        prompter=prompter or Prompter(assume_yes=cfg.assume_yes),
        state=state,
    )

    try:
        result = run_pipeline(
            ctx=ctx,
            steps=build_steps(),
            executor=executor or Executor(dry_run=cfg.dry_run),
            start_at=start_at,
            stop_after=stop_after,
        )
        summary = exe["summary"]
        summary["changed_steps"] = result.changed_steps
        summary["unchanged_steps"] = result.unchanged_steps
        summary["warned_steps"] = result.warned_steps
        summary["tolerated_steps"] = result.tolerated_steps
        summary["actions_applied"] = result.actions_applied
        return state
    except ProvisionAborted:
        logger.info("Aborted; no changes made")
        raise
    except Exception as e:
        logger.exception("Provisioning failed")
        exe["errors"].append({"step": exe.get("current_step"), "error": str(e)})
        raise
    finally:
        if cfg.dry_run:
            logger.info("Dry run: state not saved to %s", state_path)
        else:
            save_state(state_path, state)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="wsl-ai-setup",
        description="Provision a WSL Debian environment for AI/ML work (CUDA, UV, SDKMAN).",
    )
    p.add_argument("--config", default=None, help="YAML/JSON file overriding default settings")
    p.add_argument("--state", default=DEFAULT_STATE_PATH, help="Path to run state (json|yaml)")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to provisioning log")
    p.add_argument("--user", default=None, help="Target Linux username (skips the prompt)")
    p.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
    p.add_argument("--dry-run", action="store_true", help="Log planned actions without executing them")
    p.add_argument("--start-at", default=None, help="Start at step_id (e.g. 30_cuda_repo)")
    p.add_argument("--stop-after", default=None, help="Stop after step_id")
    p.add_argument("--list-steps", action="store_true", help="List step ids and exit")
    p.add_argument("-v", "--verbose", action="store_true", help="Log command output")
    return p


def main(argv: Optional[list[str]] = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)

    steps = build_steps()
    if args.list_steps:
        for step in steps:
            print(f"{step.step_id}\t{step.title}")
        return 0

    try:
        select_steps(steps, start_at=args.start_at, stop_after=args.stop_after)
        if args.user:
            validate_username(args.user)
    except (ValueError, InvalidUsername) as e:
        p.error(str(e))

    if not args.dry_run and os.geteuid() != 0:
        print("wsl-ai-setup must run as root (use sudo), or pass --dry-run", file=sys.stderr)
        return 2

    overrides: Dict[str, Any] = {"username": args.user}
    if args.yes:
        overrides["assume_yes"] = True
    if args.dry_run:
        overrides["dry_run"] = True

    try:
        run(
            state_path=args.state,
            log_path=args.log,
            config_path=args.config,
            overrides=overrides,
            start_at=args.start_at,
            stop_after=args.stop_after,
            verbose=args.verbose,
        )
    except ProvisionAborted:
        return 1
    except KeyboardInterrupt:
        return 130
    except Exception as e:
        print(f"wsl-ai-setup: {e}", file=sys.stderr)
        return 1
    return 0
