import pytest

from wsl_ai_setup.actions import RunCommand
from wsl_ai_setup.errors import ProvisionAborted, StepFailed
from wsl_ai_setup.pipeline import ADVISORY, FATAL, TOLERATED, BaseStep, run_pipeline, select_steps

from conftest import SimExecutor


class _Step(BaseStep):
    def __init__(self, step_id, argv=None, policy=FATAL, boom=None):
        self.step_id = step_id
        self.title = f"Step {step_id}"
        self.policy = policy
        self._argv = argv
        self._boom = boom
        self.finished = None

    def plan(self, ctx):
        if self._boom:
            raise self._boom
        return [RunCommand(argv=tuple(self._argv))] if self._argv else []

    def finish(self, ctx, *, changed):
        self.finished = changed


def _ids(steps):
    return [s.step_id for s in steps]


def test_steps_run_in_order_and_outcomes_recorded(make_ctx, host):
    ctx = make_ctx()
    ex = SimExecutor(host)
    steps = [_Step("a", ["true"]), _Step("b"), _Step("c", ["echo", "c"])]

    result = run_pipeline(ctx=ctx, steps=steps, executor=ex)

    assert [a.argv for a in ex.commands()] == [("true",), ("echo", "c")]
    assert result.changed_steps == ["a", "c"]
    assert result.unchanged_steps == ["b"]
    assert result.actions_applied == 2
    assert ctx.state["execution"]["steps"]["b"] == {"outcome": "unchanged"}
    assert ctx.state["execution"]["completed_steps"] == ["a", "b", "c"]
    assert ctx.state["execution"]["current_step"] is None
    assert steps[0].finished is True and steps[1].finished is False


def test_fatal_failure_stops_run(make_ctx, host):
    ctx = make_ctx()
    ex = SimExecutor(host, fail_on=["explode"])
    steps = [_Step("a", ["explode"]), _Step("b", ["never"])]

    with pytest.raises(StepFailed) as err:
        run_pipeline(ctx=ctx, steps=steps, executor=ex)

    assert err.value.step_id == "a"
    assert [a.argv for a in ex.commands()] == [("explode",)]
    assert ctx.state["execution"]["steps"]["a"]["outcome"] == "failed"
    assert ctx.state["execution"]["current_step"] == "a"


def test_advisory_failure_warns_and_continues(make_ctx, host, caplog):
    ex = SimExecutor(host, fail_on=["flaky"])
    steps = [_Step("a", ["flaky"], policy=ADVISORY), _Step("b", ["after"])]

    with caplog.at_level("WARNING"):
        result = run_pipeline(ctx=make_ctx(), steps=steps, executor=ex)

    assert result.warned_steps == ["a"]
    assert result.changed_steps == ["b"]
    assert "Warning: Step a did not complete" in caplog.text


def test_tolerated_failure_continues(make_ctx, host):
    ctx = make_ctx()
    ex = SimExecutor(host, fail_on=["flaky"])
    steps = [_Step("a", ["flaky"], policy=TOLERATED), _Step("b", ["after"])]

    result = run_pipeline(ctx=ctx, steps=steps, executor=ex)

    assert result.tolerated_steps == ["a"]
    assert ctx.state["execution"]["steps"]["a"]["outcome"] == "tolerated"
    assert "a" not in ctx.state["execution"]["completed_steps"]


def test_abort_is_never_tolerated(make_ctx, host):
    steps = [_Step("a", policy=TOLERATED, boom=ProvisionAborted("no")), _Step("b", ["x"])]
    ex = SimExecutor(host)
    with pytest.raises(ProvisionAborted):
        run_pipeline(ctx=make_ctx(), steps=steps, executor=ex)
    assert ex.applied == []


def test_select_steps_slice():
    steps = [_Step("a"), _Step("b"), _Step("c"), _Step("d")]
    assert _ids(select_steps(steps, start_at="b")) == ["b", "c", "d"]
    assert _ids(select_steps(steps, stop_after="b")) == ["a", "b"]
    assert _ids(select_steps(steps, start_at="b", stop_after="c")) == ["b", "c"]


@pytest.mark.parametrize("kwargs", [{"start_at": "zz"}, {"stop_after": "zz"}, {"start_at": "c", "stop_after": "a"}])
def test_select_steps_rejects_bad_ids(kwargs):
    steps = [_Step("a"), _Step("b"), _Step("c")]
    with pytest.raises(ValueError):
        select_steps(steps, **kwargs)


def test_summary_failure_never_fails_the_run(make_ctx, host, monkeypatch):
    import wsl_ai_setup.steps.step_90_summary as summary_mod

    def broken(*a, **k):
        raise RuntimeError("banner")

    monkeypatch.setattr(summary_mod, "summary_lines", broken)
    ctx = make_ctx()

    result = run_pipeline(ctx=ctx, steps=[summary_mod.SummaryStep()], executor=SimExecutor(host))

    assert summary_mod.SummaryStep.policy == TOLERATED
    assert result.tolerated_steps == ["90_summary"]
