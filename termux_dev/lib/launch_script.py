from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

LAUNCH_SCRIPT_MODE = 0o755

TERMUX_BASH = "/data/data/com.termux/files/usr/bin/bash"
DISPLAY = ":0"
PULSE_SERVER = "127.0.0.1"
REMOTE_DEBUGGING_PORT = 9222

BROWSER_BINARY = "chromium"
BROWSER_FLAGS = (
    "--no-sandbox",
    "--enable-features=UseOzonePlatform",
    "--ozone-platform=wayland",
    f"--remote-debugging-port={REMOTE_DEBUGGING_PORT}",
    "--password-store=basic",
)

_TEMPLATE = """\
#!{shell}
set -euo pipefail

if ! command -v termux-x11 >/dev/null 2>&1; then
  echo "termux-x11 is required but missing. Run: termux-dev browser:install"
  exit 1
fi

if ! command -v pulseaudio >/dev/null 2>&1; then
  echo "pulseaudio is required but missing. Run: termux-dev browser:install"
  exit 1
fi

export DISPLAY={display}
export PULSE_SERVER={pulse_server}

if ! pgrep -f termux-x11 >/dev/null 2>&1; then
  echo "Launching Termux X11 server..."
  termux-x11 {display} >/dev/null 2>&1 &
  sleep 2
fi

if ! pgrep -f pulseaudio >/dev/null 2>&1; then
  echo "Starting PulseAudio for sound..."
  pulseaudio --start --exit-idle-time=-1
fi

echo "Starting Chromium with developer flags..."
{browser} \\
{flags} \\
  "$@"
"""


def render_launch_script() -> str:
    """Return the launch script text. Identical on every call."""

    return _TEMPLATE.format(
        shell=TERMUX_BASH,
        display=DISPLAY,
        pulse_server=PULSE_SERVER,
        browser=BROWSER_BINARY,
        flags=" \\\n".join(f"  {flag}" for flag in BROWSER_FLAGS),
    )


def write_launch_script(path: str | Path) -> Path:
    """(Re)generate the launch script at path. Never executes it."""

    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(render_launch_script(), encoding="utf-8")
    p.chmod(LAUNCH_SCRIPT_MODE)
    logger.info("Wrote launch script %s", p)
    return p
