from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str


class CommandError(RuntimeError):
    """An external program failed to start or exited non-zero.

    returncode is the exit status the whole CLI should terminate with.
    reason is only set when the program could not be started at all.
    """

    def __init__(self, argv: Sequence[str], returncode: int, *, reason: Optional[str] = None) -> None:
        self.argv = list(argv)
        self.returncode = returncode
        self.reason = reason
        if reason is not None:
            msg = f"Failed to run {self.argv[0] if self.argv else '<empty>'}: {reason}"
        else:
            msg = f'Command "{" ".join(self.argv)}" exited with code {returncode}'
        super().__init__(msg)

    @property
    def not_started(self) -> bool:
        return self.reason is not None


def fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    capture: bool = False,
    env: Mapping[str, str] | None = None,
    cwd: str | None = None,
    dry_run: bool = False,
) -> CmdResult:
    """Run a command to completion with consistent logging.

    - Always logs the command.
    - Inherits stdin/stdout/stderr unless capture=True, so installer
      progress stays visible live.
    - No timeout and no retry.
    - dry_run logs but does not execute.
    """

    argv_list = list(argv)
    logger.info("CMD %s", fmt_argv(argv_list))

    if dry_run:
        logger.info("Would run: %s", fmt_argv(argv_list))
        return CmdResult(argv=argv_list, returncode=0, stdout="", stderr="")

    try:
        p = subprocess.run(
            argv_list,
            text=True,
            stdout=subprocess.PIPE if capture else None,
            stderr=subprocess.PIPE if capture else None,
            cwd=cwd,
            env=dict(os.environ, **(env or {})),
        )
    except OSError as e:
        raise CommandError(argv_list, 1, reason=e.strerror or str(e)) from e

    stdout = p.stdout or ""
    stderr = p.stderr or ""
    if stdout:
        logger.debug("STDOUT %s", stdout.strip())
    if stderr:
        logger.debug("STDERR %s", stderr.strip())

    if check and p.returncode != 0:
        raise CommandError(argv_list, p.returncode)

    return CmdResult(argv=argv_list, returncode=p.returncode, stdout=stdout, stderr=stderr)
