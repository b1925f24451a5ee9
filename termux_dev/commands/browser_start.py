from __future__ import annotations

import logging
from typing import Sequence

from ..context import AppContext
from ..lib.command import run_cmd
from ..lib.env import warn_if_not_termux
from ..lib.launch_script import write_launch_script

logger = logging.getLogger(__name__)


class BrowserStartCommand:
    command_id = "browser:start"

    def run(self, ctx: AppContext, args: Sequence[str]) -> int:
        warn_if_not_termux()
        ctx.store.ensure()

        script = ctx.paths.launch_script
        # An existing script is reused as-is (fast path).
        if not script.exists():
            if ctx.dry_run:
                logger.info("Would write launch script %s", script)
            else:
                write_launch_script(script)

        print("▶ Bootstrapping desktop-class Chromium…")
        run_cmd(["bash", str(script), *args], dry_run=ctx.dry_run)
        return 0
