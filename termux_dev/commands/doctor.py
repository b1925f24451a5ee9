from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..context import AppContext
from ..lib.env import warn_if_not_termux

logger = logging.getLogger(__name__)

# (label, executable)
DOCTOR_PROBES: Tuple[Tuple[str, str], ...] = (
    ("pkg", "pkg"),
    ("termux-info", "termux-info"),
    ("termux-x11", "termux-x11"),
    ("pulseaudio", "pulseaudio"),
    ("chromium", "chromium"),
)


@dataclass(frozen=True)
class ProbeResult:
    name: str
    path: Optional[str]

    @property
    def available(self) -> bool:
        return self.path is not None


def probe_tools(probes: Sequence[Tuple[str, str]] = DOCTOR_PROBES) -> List[ProbeResult]:
    results = []
    for name, executable in probes:
        path = shutil.which(executable)
        logger.info("Probe %s -> %s", name, path or "missing")
        results.append(ProbeResult(name=name, path=path))
    return results


class DoctorCommand:
    """Diagnostic only: missing tools are reported, never fatal."""

    command_id = "doctor"

    def run(self, ctx: AppContext, args: Sequence[str]) -> int:
        warn_if_not_termux()

        print("Termux Dev Doctor")
        print("-----------------")
        for r in probe_tools():
            if r.available:
                print(f"✔ {r.name} detected at {r.path}")
            else:
                print(f"✖ {r.name} not found")

        print("")
        print("Next steps:")
        print("  • Run `termux-dev setup` to install core Termux tooling.")
        print("  • Run `termux-dev browser:install` to provision Chromium + X11.")
        return 0
