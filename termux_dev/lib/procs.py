from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from .command import CommandError, run_cmd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessMatch:
    pid: int
    command_line: str


def parse_pgrep_output(stdout: str) -> List[ProcessMatch]:
    matches: List[ProcessMatch] = []
    for line in stdout.splitlines():
        line = line.strip()
        if not line:
            continue
        pid_text, _, command_line = line.partition(" ")
        try:
            pid = int(pid_text)
        except ValueError:
            logger.debug("Ignoring unexpected pgrep line: %s", line)
            continue
        matches.append(ProcessMatch(pid=pid, command_line=command_line.strip()))
    return matches


def find_by_pattern(pattern: str) -> List[ProcessMatch]:
    """Return processes whose full command line contains pattern.

    pgrep treats the pattern as a regex; callers pass literal service names.
    A non-zero exit with no output, or a missing pgrep, means "no match".
    """

    try:
        r = run_cmd(["pgrep", "-f", "-a", pattern], check=False, capture=True)
    except CommandError as e:
        logger.warning("Process query unavailable: %s", e)
        return []

    if r.returncode != 0 and not r.stdout.strip():
        return []
    return parse_pgrep_output(r.stdout)
