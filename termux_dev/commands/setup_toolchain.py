from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from ..context import AppContext
from ..lib.env import warn_if_not_termux
from ..lib.pkg import pkg_install, pkg_update, pkg_upgrade
from ..settings_store import utc_now

logger = logging.getLogger(__name__)

BASE_PACKAGES = (
    "git",
    "nodejs-lts",
    "python",
    "openssl-tool",
    "proot-distro",
    "wget",
    "tsu",
)


class SetupCommand:
    command_id = "setup"

    def run(self, ctx: AppContext, args: Sequence[str]) -> int:
        warn_if_not_termux()

        print("▶ Updating Termux package list...")
        pkg_update(dry_run=ctx.dry_run)
        pkg_upgrade(dry_run=ctx.dry_run)

        print("▶ Installing developer essentials...")
        pkg_install(BASE_PACKAGES, dry_run=ctx.dry_run)

        # Only reached when every install above succeeded.
        if ctx.dry_run:
            print("Dry run: settings record left unchanged.")
            return 0
        ctx.store.update(lambda s: replace(s, last_setup_at=utc_now()))

        print("✔ Core developer toolchain is ready.")
        print("   Continue with `termux-dev browser:install` to enable the GUI browser.")
        return 0
