import copy

from wsl_ai_setup.context import RunContext
from wsl_ai_setup.lib.prompt import Prompter
from wsl_ai_setup.main import build_steps
from wsl_ai_setup.pipeline import run_pipeline
from wsl_ai_setup.state_store import ensure_defaults
from wsl_ai_setup.steps.step_15_write_wsl_conf import render_wsl_conf

from conftest import FakeHost, SimExecutor, make_config, scripted_input

UNCONDITIONAL = ["15_write_wsl_conf", "20_update_packages", "45_dev_tools", "80_cleanup"]

EXPECTED_RC_LINES = [
    "cd ~",
    "export PATH=/usr/local/cuda-12.6/bin:$PATH",
    "export LD_LIBRARY_PATH=/usr/local/cuda-12.6/lib64:$LD_LIBRARY_PATH",
    'export PATH="$HOME/.local/bin:$PATH"',
]


def _provision(host, *, fail_on=(), answers=("y",), **cfg):
    cfg.setdefault("username", "alice")
    ctx = RunContext(
        config=make_config(**cfg),
        host=host,
        prompter=Prompter(input_fn=scripted_input(answers)),
        state=ensure_defaults({}),
    )
    ex = SimExecutor(host, fail_on=fail_on)
    result = run_pipeline(ctx=ctx, steps=build_steps(), executor=ex)
    return result, ex, ctx


def _snapshot(host):
    return copy.deepcopy(
        (host.users, host.groups, host.commands, host.packages, host.files, host.paths, host.symlinks)
    )


def test_second_run_converges_with_no_redundant_actions():
    host = FakeHost()

    first, _, _ = _provision(host)
    assert "10_ensure_user" in first.changed_steps
    after_first = _snapshot(host)

    second, ex, _ = _provision(host)

    assert _snapshot(host) == after_first
    assert second.changed_steps == UNCONDITIONAL
    assert not any(a.argv[0] in {"useradd", "passwd", "usermod", "dpkg", "bash"} for a in ex.commands())


def test_new_user_created_in_admin_group_with_rc_lines_once():
    host = FakeHost()
    _, ex, _ = _provision(host)

    assert host.user_exists("alice")
    assert host.user_in_group("alice", "sudo")
    assert ("passwd", "alice") in [a.argv for a in ex.commands()]

    rc = host.lines("/home/alice/.bashrc")
    for line in EXPECTED_RC_LINES:
        assert rc.count(line) == 1


def test_existing_user_not_recreated_or_prompted():
    host = FakeHost(users={"alice": "/home/alice"}, files={"/home/alice/.bashrc": ""})
    # Only the confirmation is answered; any extra prompt would exhaust the script.
    _, ex, ctx = _provision(host, answers=("y",))

    argv0 = [a.argv[0] for a in ex.commands()]
    assert "useradd" not in argv0
    assert "passwd" not in argv0
    assert ctx.state["execution"]["decisions"]["user_created"] is False


def test_wsl_conf_identical_across_runs():
    host = FakeHost()
    _provision(host)
    first = host.files["/etc/wsl.conf"]
    _provision(host)
    assert host.files["/etc/wsl.conf"] == first == render_wsl_conf("alice")


def test_missing_render_group_is_skipped():
    host = FakeHost(groups={"sudo": [], "video": []})
    result, ex, _ = _provision(host)

    assert "render" not in host.groups
    assert host.user_in_group("alice", "video")
    assert "70_gpu_groups" in result.changed_steps
    assert not result.warned_steps


def test_sdkman_failure_still_reaches_summary():
    host = FakeHost()
    result, _, ctx = _provision(host, fail_on=["sdkman"])

    assert result.tolerated_steps == ["60_sdkman"]
    assert "90_summary" in ctx.state["execution"]["completed_steps"]
    assert "80_cleanup" in result.changed_steps


def test_uv_failure_is_advisory():
    host = FakeHost()
    result, _, ctx = _provision(host, fail_on=["astral.sh"])

    assert result.warned_steps == ["50_uv"]
    assert "90_summary" in ctx.state["execution"]["completed_steps"]


def test_unguarded_start_dir_appends_every_run():
    host = FakeHost()
    _provision(host, guard_start_dir=False)
    _provision(host, guard_start_dir=False)
    assert host.lines("/home/alice/.bashrc").count("cd ~") == 2
