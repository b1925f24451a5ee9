from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from ..context import AppContext
from ..lib.env import warn_if_not_termux
from ..lib.launch_script import write_launch_script
from ..lib.pkg import enable_repo, pkg_install

logger = logging.getLogger(__name__)

REPO_PACKAGES = ("x11-repo", "tur-repo")
X11_PACKAGES = ("termux-x11-nightly", "pulseaudio", "mesa")
BROWSER_PACKAGE = "chromium"


class BrowserInstallCommand:
    command_id = "browser:install"

    def run(self, ctx: AppContext, args: Sequence[str]) -> int:
        warn_if_not_termux()

        print("▶ Enabling X11 and Tur repos...")
        for repo in REPO_PACKAGES:
            enable_repo(repo, dry_run=ctx.dry_run)

        print("▶ Installing Termux X11 server and dependencies...")
        pkg_install(X11_PACKAGES, dry_run=ctx.dry_run)

        print("▶ Installing Chromium for Termux...")
        pkg_install([BROWSER_PACKAGE], dry_run=ctx.dry_run)

        if ctx.dry_run:
            print("Dry run: launch script and settings record left unchanged.")
            return 0

        # Always regenerated here, unlike browser:start.
        script = write_launch_script(ctx.paths.launch_script)
        ctx.store.update(
            lambda s: replace(s, x11_repo_enabled=True, browser_package=BROWSER_PACKAGE)
        )

        print("")
        print("✔ Browser stack installed.")
        print(f"   Launch it with: {script}")
        print("   or run `termux-dev browser:start` for the default launch flow.")
        return 0
