"""Shared fixtures for the termux-dev test suite."""

import subprocess

import pytest

from termux_dev.context import AppContext
from termux_dev.lib import command as command_mod
from termux_dev.lib.env import Paths
from termux_dev.logging_utils import reset_logging


class FakeSubprocess:
    """Stand-in for subprocess.run that records argv instead of executing.

    - failures: argv prefix -> exit code
    - missing: program names that raise FileNotFoundError
    - outputs: full argv -> captured stdout
    pgrep without configured output exits 1 with empty stdout.
    """

    def __init__(self):
        self.calls = []
        self.kwargs = []
        self.failures = {}
        self.missing = set()
        self.outputs = {}

    def fail(self, *prefix, returncode=1):
        self.failures[tuple(prefix)] = returncode

    def __call__(self, argv, **kwargs):
        argv = list(argv)
        self.calls.append(argv)
        self.kwargs.append(kwargs)
        if argv[0] in self.missing:
            raise FileNotFoundError(2, "No such file or directory", argv[0])

        captured = kwargs.get("stdout") == subprocess.PIPE
        returncode = 0
        for prefix, code in self.failures.items():
            if tuple(argv[: len(prefix)]) == prefix:
                returncode = code
        stdout = self.outputs.get(tuple(argv), "")
        if argv[0] == "pgrep" and not stdout:
            returncode = 1
        return subprocess.CompletedProcess(
            argv,
            returncode,
            stdout=stdout if captured else None,
            stderr="" if captured else None,
        )


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _termux_prefix(monkeypatch):
    """Pretend to run inside Termux unless a test says otherwise."""
    monkeypatch.setenv("PREFIX", "/data/data/com.termux/files/usr")
    monkeypatch.delenv("TERMUX_DEV_HOME", raising=False)


@pytest.fixture
def fake_run(monkeypatch):
    fake = FakeSubprocess()
    monkeypatch.setattr(command_mod.subprocess, "run", fake)
    return fake


@pytest.fixture
def config_dir(tmp_path):
    return tmp_path / ".termux-dev"


@pytest.fixture
def paths(config_dir):
    return Paths(config_dir=config_dir)


@pytest.fixture
def ctx(paths):
    return AppContext.from_paths(paths)


@pytest.fixture
def seeded_ctx(ctx):
    """Context whose settings record was created well in the past."""
    ctx.paths.config_dir.mkdir(parents=True, exist_ok=True)
    ctx.paths.settings_file.write_text(
        '{"createdAt": "2020-01-01T00:00:00.000Z", "lastSetupAt": null, '
        '"x11RepoEnabled": false, "browserPackage": null}\n',
        encoding="utf-8",
    )
    return ctx
