from __future__ import annotations

from typing import Sequence, Tuple

from ..context import AppContext
from ..lib.procs import find_by_pattern

# (label, pattern)
STATUS_TARGETS: Tuple[Tuple[str, str], ...] = (
    ("termux-x11", "termux-x11"),
    ("pulseaudio", "pulseaudio"),
    ("chromium", "chromium"),
)


class BrowserStatusCommand:
    command_id = "browser:status"

    def run(self, ctx: AppContext, args: Sequence[str]) -> int:
        print("Termux Browser Status")
        print("---------------------")

        for label, pattern in STATUS_TARGETS:
            matches = find_by_pattern(pattern)
            if not matches:
                print(f"✖ {label} not running")
                continue
            for m in matches:
                print(f"✔ {label} running - {m.pid} {m.command_line}")

        print("")
        print("Use `termux-dev browser:start` to launch or relaunch the browser session.")
        return 0
