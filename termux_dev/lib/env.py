from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".termux-dev"
SETTINGS_FILE_NAME = "config.json"
LAUNCH_SCRIPT_NAME = "start-browser.sh"
LOG_FILE_NAME = "termux-dev.log"

TERMUX_PREFIX_MARKER = "com.termux"


@dataclass(frozen=True)
class Paths:
    config_dir: Path

    @property
    def settings_file(self) -> Path:
        return self.config_dir / SETTINGS_FILE_NAME

    @property
    def launch_script(self) -> Path:
        return self.config_dir / LAUNCH_SCRIPT_NAME

    @property
    def log_file(self) -> Path:
        return self.config_dir / LOG_FILE_NAME


def resolve_paths(config_dir: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> Paths:
    """Pick the configuration directory.

    Precedence: explicit argument, $TERMUX_DEV_HOME, then $HOME/.termux-dev
    ($USERPROFILE or the working directory when HOME is unset).
    """

    env = os.environ if environ is None else environ
    if config_dir:
        return Paths(config_dir=Path(config_dir).expanduser())
    if env.get("TERMUX_DEV_HOME"):
        return Paths(config_dir=Path(env["TERMUX_DEV_HOME"]).expanduser())
    home = env.get("HOME") or env.get("USERPROFILE") or "."
    return Paths(config_dir=Path(home) / CONFIG_DIR_NAME)


def is_termux(environ: Optional[Mapping[str, str]] = None) -> bool:
    env = os.environ if environ is None else environ
    return TERMUX_PREFIX_MARKER in (env.get("PREFIX") or "")


def warn_if_not_termux(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Log a warning outside Termux. Never blocks the caller."""

    if is_termux(environ):
        return True
    logger.warning("⚠️  This workflow is tuned for Termux. Some commands may not behave elsewhere.")
    return False
