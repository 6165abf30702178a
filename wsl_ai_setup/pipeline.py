from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence

from .actions import Action
from .context import RunContext
from .errors import ProvisionAborted, StepFailed
from .state_store import mark_step_completed, record_step_outcome

logger = logging.getLogger(__name__)

# Failure policies
FATAL = "fatal"
ADVISORY = "advisory"
TOLERATED = "tolerated"


class Step(Protocol):
    """A single idempotent step: inspect the host, plan actions."""

    step_id: str
    title: str
    policy: str

    def plan(self, ctx: RunContext) -> List[Action]:
        ...

    def finish(self, ctx: RunContext, *, changed: bool) -> None:
        ...


class BaseStep:
    step_id = ""
    title = ""
    policy = FATAL

    def plan(self, ctx: RunContext) -> List[Action]:
        return []

    def finish(self, ctx: RunContext, *, changed: bool) -> None:
        return None


class ActionExecutor(Protocol):
    def apply(self, action: Action) -> None:
        ...


@dataclass
class PipelineResult:
    changed_steps: List[str] = field(default_factory=list)
    unchanged_steps: List[str] = field(default_factory=list)
    warned_steps: List[str] = field(default_factory=list)
    tolerated_steps: List[str] = field(default_factory=list)
    actions_applied: int = 0


def select_steps(
    steps: Sequence[Step],
    *,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
) -> List[Step]:
    """Contiguous slice of the pipeline; unknown ids are rejected up front."""

    ids = [s.step_id for s in steps]
    for label, wanted in (("start_at", start_at), ("stop_after", stop_after)):
        if wanted is not None and wanted not in ids:
            raise ValueError(f"Unknown {label} step id {wanted!r} (known: {', '.join(ids)})")

    lo = ids.index(start_at) if start_at else 0
    hi = ids.index(stop_after) + 1 if stop_after else len(ids)
    if hi <= lo:
        raise ValueError(f"stop_after {stop_after!r} comes before start_at {start_at!r}")
    return list(steps[lo:hi])


def run_pipeline(
    *,
    ctx: RunContext,
    steps: Sequence[Step],
    executor: ActionExecutor,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
) -> PipelineResult:
    """Run steps in order. Fatal failures raise StepFailed; others are logged and skipped."""

    selected = select_steps(steps, start_at=start_at, stop_after=stop_after)
    result = PipelineResult()
    state = ctx.state

    for step in selected:
        state.setdefault("execution", {})["current_step"] = step.step_id
        logger.info("=== %s ===", step.title)

        try:
            actions = list(step.plan(ctx))
            if not actions:
                logger.info("%s: already satisfied", step.step_id)
            for action in actions:
                logger.info("%s: %s", step.step_id, action.describe())
                executor.apply(action)
                result.actions_applied += 1
            step.finish(ctx, changed=bool(actions))
        except ProvisionAborted:
            raise
        except Exception as e:
            if step.policy == FATAL:
                record_step_outcome(state, step.step_id, "failed", str(e))
                raise StepFailed(step.step_id, e) from e
            if step.policy == ADVISORY:
                logger.warning("Warning: %s did not complete (%s); continuing", step.title, e)
                record_step_outcome(state, step.step_id, "warned", str(e))
                result.warned_steps.append(step.step_id)
            else:
                logger.info("%s failed (%s); failure tolerated, continuing", step.title, e)
                record_step_outcome(state, step.step_id, "tolerated", str(e))
                result.tolerated_steps.append(step.step_id)
            continue

        if actions:
            record_step_outcome(state, step.step_id, "changed")
            result.changed_steps.append(step.step_id)
        else:
            record_step_outcome(state, step.step_id, "unchanged")
            result.unchanged_steps.append(step.step_id)
        mark_step_completed(state, step.step_id)

    state.setdefault("execution", {})["current_step"] = None
    return result
