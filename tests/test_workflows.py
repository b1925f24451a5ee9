"""End-to-end tests for each workflow against a fake package manager."""

import json
import os
import stat
from datetime import datetime

import pytest

from termux_dev.commands import doctor as doctor_mod
from termux_dev.context import AppContext
from termux_dev.dispatch import dispatch
from termux_dev.lib.launch_script import render_launch_script


def _settings(ctx):
    return json.loads(ctx.paths.settings_file.read_text())


def _parse(stamp):
    return datetime.fromisoformat(stamp.replace("Z", "+00:00"))


SETUP_CALLS = [
    ["pkg", "update", "-y"],
    ["pkg", "upgrade", "-y"],
    ["pkg", "install", "-y", "git", "nodejs-lts", "python", "openssl-tool", "proot-distro", "wget", "tsu"],
]

INSTALL_CALLS = [
    ["pkg", "install", "-y", "x11-repo"],
    ["pkg", "install", "-y", "tur-repo"],
    ["pkg", "install", "-y", "termux-x11-nightly", "pulseaudio", "mesa"],
    ["pkg", "install", "-y", "chromium"],
]


class TestSetup:
    def test_runs_fixed_sequence_and_records_time(self, seeded_ctx, fake_run):
        assert dispatch(seeded_ctx, "setup") == 0
        assert fake_run.calls == SETUP_CALLS

        data = _settings(seeded_ctx)
        assert data["lastSetupAt"] is not None
        assert _parse(data["lastSetupAt"]) > _parse(data["createdAt"])

    def test_failure_leaves_record_untouched(self, seeded_ctx, fake_run):
        fake_run.fail("pkg", "upgrade", returncode=42)
        assert dispatch(seeded_ctx, "setup") == 42
        assert fake_run.calls == SETUP_CALLS[:2]
        assert _settings(seeded_ctx)["lastSetupAt"] is None

    def test_missing_package_manager_exits_one(self, seeded_ctx, fake_run):
        fake_run.missing.add("pkg")
        assert dispatch(seeded_ctx, "setup") == 1
        assert _settings(seeded_ctx)["lastSetupAt"] is None

    def test_twice_in_a_row(self, seeded_ctx, fake_run):
        assert dispatch(seeded_ctx, "setup") == 0
        first = _settings(seeded_ctx)
        assert dispatch(seeded_ctx, "setup") == 0
        second = _settings(seeded_ctx)

        assert fake_run.calls == SETUP_CALLS * 2
        assert second["createdAt"] == first["createdAt"]
        assert _parse(second["lastSetupAt"]) >= _parse(first["lastSetupAt"])

    def test_dry_run_changes_nothing(self, paths, fake_run):
        ctx = AppContext.from_paths(paths, dry_run=True)
        assert dispatch(ctx, "setup") == 0
        assert fake_run.calls == []
        assert _settings(ctx)["lastSetupAt"] is None


class TestBrowserInstall:
    def test_installs_and_records_state(self, ctx, fake_run):
        assert dispatch(ctx, "browser:install") == 0
        assert fake_run.calls == INSTALL_CALLS

        data = _settings(ctx)
        assert data["x11RepoEnabled"] is True
        assert data["browserPackage"] == "chromium"

        script = ctx.paths.launch_script
        assert script.read_text() == render_launch_script()
        assert os.stat(script).st_mode & stat.S_IXUSR

    def test_always_regenerates_script(self, ctx, fake_run):
        ctx.paths.config_dir.mkdir(parents=True)
        ctx.paths.launch_script.write_text("echo stale\n")
        assert dispatch(ctx, "browser:install") == 0
        assert ctx.paths.launch_script.read_text() == render_launch_script()

    def test_failure_skips_script_and_record(self, ctx, fake_run):
        fake_run.fail("pkg", "install", "-y", "chromium", returncode=100)
        assert dispatch(ctx, "browser:install") == 100
        assert not ctx.paths.launch_script.exists()
        data = _settings(ctx)
        assert data["x11RepoEnabled"] is False
        assert data["browserPackage"] is None

    def test_twice_in_a_row_yields_same_record(self, ctx, fake_run):
        assert dispatch(ctx, "browser:install") == 0
        first = _settings(ctx)
        assert dispatch(ctx, "browser:install") == 0
        assert _settings(ctx) == first


class TestBrowserStart:
    def test_generates_missing_script_then_runs_it(self, ctx, fake_run):
        assert dispatch(ctx, "browser:start", ["--incognito", "https://developer.chrome.com"]) == 0

        script = ctx.paths.launch_script
        assert script.read_text() == render_launch_script()
        assert fake_run.calls == [["bash", str(script), "--incognito", "https://developer.chrome.com"]]

    def test_existing_script_is_not_regenerated(self, ctx, fake_run):
        script = ctx.paths.launch_script
        script.parent.mkdir(parents=True)
        script.write_text("#!/bin/sh\necho custom\n")
        os.utime(script, (1_000_000, 1_000_000))

        assert dispatch(ctx, "browser:start") == 0

        assert script.read_text() == "#!/bin/sh\necho custom\n"
        assert os.stat(script).st_mtime == 1_000_000
        assert fake_run.calls == [["bash", str(script)]]

    def test_script_failure_propagates_exit_code(self, ctx, fake_run):
        fake_run.fail("bash", returncode=5)
        assert dispatch(ctx, "browser:start") == 5

    def test_creates_settings_record(self, ctx, fake_run):
        dispatch(ctx, "browser:start")
        assert ctx.paths.settings_file.exists()


class TestBrowserStatus:
    def test_nothing_running(self, ctx, fake_run, capsys):
        assert dispatch(ctx, "browser:status") == 0
        out = capsys.readouterr().out
        lines = [ln for ln in out.splitlines() if "not running" in ln]
        assert lines == [
            "✖ termux-x11 not running",
            "✖ pulseaudio not running",
            "✖ chromium not running",
        ]

    def test_one_line_per_match(self, ctx, fake_run, capsys):
        fake_run.outputs[("pgrep", "-f", "-a", "chromium")] = "10 chromium --no-sandbox\n11 chromium --type=gpu\n"
        assert dispatch(ctx, "browser:status") == 0
        out = capsys.readouterr().out
        assert "✔ chromium running - 10 chromium --no-sandbox" in out
        assert "✔ chromium running - 11 chromium --type=gpu" in out
        assert "✖ termux-x11 not running" in out
        assert "chromium not running" not in out


class TestDoctor:
    def test_reports_found_and_missing(self, ctx, monkeypatch, capsys):
        found = {"pkg": "/usr/bin/pkg", "chromium": "/usr/bin/chromium"}
        monkeypatch.setattr(doctor_mod.shutil, "which", lambda name: found.get(name))

        assert dispatch(ctx, "doctor") == 0
        out = capsys.readouterr().out
        assert "✔ pkg detected at /usr/bin/pkg" in out
        assert "✔ chromium detected at /usr/bin/chromium" in out
        assert "✖ termux-info not found" in out
        assert "✖ termux-x11 not found" in out
        assert "✖ pulseaudio not found" in out

    def test_everything_missing_still_succeeds(self, ctx, monkeypatch, capsys):
        monkeypatch.setattr(doctor_mod.shutil, "which", lambda name: None)
        assert dispatch(ctx, "doctor") == 0
        assert capsys.readouterr().out.count("not found") == 5

    def test_warns_outside_termux(self, ctx, monkeypatch, caplog):
        monkeypatch.setenv("PREFIX", "/usr")
        monkeypatch.setattr(doctor_mod.shutil, "which", lambda name: None)
        assert dispatch(ctx, "doctor") == 0
        assert "tuned for Termux" in caplog.text


class TestHelp:
    def test_lists_all_commands(self, ctx, capsys):
        assert dispatch(ctx, "help") == 0
        out = capsys.readouterr().out
        for name in ("doctor", "setup", "browser:install", "browser:start", "browser:status"):
            assert f"  {name} " in out
