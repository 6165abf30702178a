from __future__ import annotations

import os
from typing import Dict, Iterable, List, Optional

import pytest

from wsl_ai_setup.actions import AppendLines, DownloadFile, RemoveFile, RunCommand, Symlink, WriteFile
from wsl_ai_setup.context import RunContext
from wsl_ai_setup.lib.command import CommandError
from wsl_ai_setup.lib.prompt import Prompter
from wsl_ai_setup.provision_config import ProvisionConfig
from wsl_ai_setup.state_store import deep_merge, ensure_defaults

# ----------------- Fakes -----------------

TOOL_BINARIES = {"curl": "curl", "zip": "zip", "unzip": "unzip"}


class FakeHost:
    """In-memory host: users, groups, PATH, dpkg database and text files."""

    def __init__(
        self,
        *,
        users: Optional[Dict[str, str]] = None,
        groups: Optional[Dict[str, Iterable[str]]] = None,
        commands: Iterable[str] = (),
        packages: Iterable[str] = (),
        files: Optional[Dict[str, str]] = None,
        paths: Iterable[str] = (),
        symlinks: Optional[Dict[str, str]] = None,
    ):
        self.users: Dict[str, str] = dict(users or {})
        self.groups: Dict[str, set] = {
            g: set(m) for g, m in (groups if groups is not None else {"sudo": [], "video": [], "render": []}).items()
        }
        self.commands = set(commands)
        self.packages = set(packages)
        self.files: Dict[str, str] = dict(files or {})
        self.paths = set(paths)
        self.symlinks: Dict[str, str] = dict(symlinks or {})
        self.probes: List[str] = []

    def user_exists(self, user):
        return user in self.users

    def home_dir(self, user):
        return self.users.get(user, f"/home/{user}")

    def group_exists(self, group):
        return group in self.groups

    def user_in_group(self, user, group):
        return user in self.groups.get(group, set())

    def command_exists(self, name):
        self.probes.append(f"command:{name}")
        return name in self.commands

    def package_installed(self, package):
        return package in self.packages

    def path_exists(self, path):
        return path in self.files or path in self.paths or path in self.symlinks

    def is_symlink(self, path):
        return path in self.symlinks

    def file_has_line(self, path, line):
        return line in self.lines(path)

    def tool_version(self, argv):
        return f"{os.path.basename(argv[0])} 1.0"

    def lines(self, path) -> List[str]:
        return self.files.get(path, "").splitlines()


class SimExecutor:
    """Applies actions to a FakeHost the way the real commands would."""

    def __init__(self, host: FakeHost, *, fail_on: Iterable[str] = ()):
        self.host = host
        self.fail_on = list(fail_on)
        self.applied: List[object] = []

    def apply(self, action):
        self.applied.append(action)
        h = self.host
        if isinstance(action, RunCommand):
            self._run(action)
        elif isinstance(action, WriteFile):
            h.files[action.path] = action.contents
        elif isinstance(action, AppendLines):
            existing = h.lines(action.path)
            new = [ln for ln in action.lines if not (action.dedupe and ln in existing)]
            h.files[action.path] = "".join(ln + "\n" for ln in existing + new)
        elif isinstance(action, Symlink):
            h.symlinks[action.link] = action.target
        elif isinstance(action, DownloadFile):
            h.paths.add(action.dest)
        elif isinstance(action, RemoveFile):
            h.paths.discard(action.path)
        else:
            raise TypeError(action)

    def _run(self, action: RunCommand):
        joined = " ".join(action.argv)
        for needle in self.fail_on:
            if needle in joined:
                raise CommandError(list(action.argv), 1, "simulated failure")

        h = self.host
        argv = list(action.argv)
        if argv[0] == "useradd":
            user = argv[-1]
            h.users[user] = f"/home/{user}"
            h.files.setdefault(f"/home/{user}/.bashrc", "# skel\n")
        elif argv[:2] == ["usermod", "-aG"]:
            h.groups.setdefault(argv[2], set()).add(argv[3])
        elif argv[:3] == ["apt-get", "install", "-y"]:
            for pkg in argv[3:]:
                h.packages.add(pkg)
                if pkg in TOOL_BINARIES:
                    h.commands.add(TOOL_BINARIES[pkg])
                if pkg.startswith("cuda-toolkit-"):
                    version = pkg[len("cuda-toolkit-"):].replace("-", ".")
                    h.paths.add(f"/usr/local/cuda-{version}/bin/nvcc")
        elif argv[:2] == ["dpkg", "-i"]:
            h.packages.add(os.path.basename(argv[2]).split("_")[0])
        elif argv[0] == "bash" and "astral.sh/uv" in joined:
            h.paths.add(f"{h.home_dir(action.run_as)}/.local/bin/uv")
        elif argv[0] == "bash" and "sdkman" in joined:
            h.paths.add(f"{h.home_dir(action.run_as)}/.sdkman")

    def commands(self) -> List[RunCommand]:
        return [a for a in self.applied if isinstance(a, RunCommand)]


def scripted_input(answers: Iterable[str]):
    """input() replacement that records questions and replays answers."""

    it = iter(answers)
    asked: List[str] = []

    def _input(question: str) -> str:
        asked.append(question)
        return next(it)

    _input.asked = asked  # type: ignore[attr-defined]
    return _input


def make_config(**overrides) -> ProvisionConfig:
    state = ensure_defaults({})
    return ProvisionConfig(raw=deep_merge(state["config"], overrides))


# ----------------- Fixtures -----------------


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def make_ctx(host):
    def _make(answers: Iterable[str] = (), *, fake_host: Optional[FakeHost] = None, **cfg) -> RunContext:
        cfg.setdefault("username", "alice")
        return RunContext(
            config=make_config(**cfg),
            host=fake_host or host,
            prompter=Prompter(input_fn=scripted_input(answers)),
            state=ensure_defaults({}),
        )

    return _make
