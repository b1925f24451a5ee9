from __future__ import annotations

from typing import Sequence

from ..context import AppContext

HELP_TEXT = """\
Termux Dev CLI
==============

Usage:
  termux-dev [--config-dir DIR] [--log FILE] [-v] [--dry-run] <command> [options]

Commands:
  help               Show this message
  doctor             Inspect Termux requirements and installed tooling
  setup              Install base developer dependencies (git, node, python, etc.)
  browser:install    Provision X11, PulseAudio, and the Chromium browser
  browser:start      Launch Chromium with developer flags via Termux X11
  browser:status     Check the running status of X11/PulseAudio/Chromium

Examples:
  termux-dev setup
  termux-dev browser:install
  termux-dev browser:start --incognito https://developer.chrome.com
"""


class HelpCommand:
    command_id = "help"

    def run(self, ctx: AppContext, args: Sequence[str]) -> int:
        print(HELP_TEXT, end="")
        return 0
