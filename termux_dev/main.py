from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from .context import AppContext
from .dispatch import Command, dispatch
from .lib.env import resolve_paths
from .logging_utils import configure_logging

logger = logging.getLogger(__name__)


def run(
    command: Optional[str],
    args: Sequence[str] = (),
    *,
    config_dir: Optional[str] = None,
    log_path: Optional[str] = None,
    verbose: bool = False,
    dry_run: bool = False,
) -> int:
    """Run one CLI command and return its exit code."""

    paths = resolve_paths(config_dir)
    configure_logging(str(log_path or paths.log_file), verbose=verbose or dry_run)

    ctx = AppContext.from_paths(paths, dry_run=dry_run)
    return dispatch(ctx, command, args)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="termux-dev",
        description="Bootstrap a desktop-class browser workflow inside Termux.",
        epilog=f"Commands: {', '.join(Command.names())}",
    )
    p.add_argument("--config-dir", default=None, help="Settings directory (default: $TERMUX_DEV_HOME or ~/.termux-dev)")
    p.add_argument("--log", default=None, help="Path to log file (default: <config-dir>/termux-dev.log)")
    p.add_argument("-v", "--verbose", action="store_true", help="Show every external command on stderr")
    p.add_argument("--dry-run", action="store_true", help="Log external commands without running them")
    p.add_argument(
        "command_line",
        nargs=argparse.REMAINDER,
        help="<command> [args...]; trailing args are forwarded by browser:start",
    )
    return p


def main(argv: Optional[list[str]] = None) -> int:
    p = build_parser()
    ns = p.parse_args(argv)

    rest = list(ns.command_line)
    command = rest[0] if rest else None

    try:
        return run(
            command,
            rest[1:],
            config_dir=ns.config_dir,
            log_path=ns.log,
            verbose=bool(ns.verbose),
            dry_run=bool(ns.dry_run),
        )
    except KeyboardInterrupt:
        return 130
