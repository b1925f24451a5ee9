from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, Iterable, Optional, Protocol, Sequence

from .commands import (
    BrowserInstallCommand,
    BrowserStartCommand,
    BrowserStatusCommand,
    DoctorCommand,
    HelpCommand,
    SetupCommand,
)
from .context import AppContext
from .lib.command import CommandError
from .settings_store import SettingsError

logger = logging.getLogger(__name__)


class Command(str, Enum):
    HELP = "help"
    DOCTOR = "doctor"
    SETUP = "setup"
    BROWSER_INSTALL = "browser:install"
    BROWSER_START = "browser:start"
    BROWSER_STATUS = "browser:status"

    @classmethod
    def parse(cls, name: str) -> Optional["Command"]:
        try:
            return cls(name)
        except ValueError:
            return None

    @classmethod
    def names(cls) -> list[str]:
        return [c.value for c in cls]


DEFAULT_COMMAND = Command.HELP


class Workflow(Protocol):
    """One user-facing command. Returns the process exit code."""

    command_id: str

    def run(self, ctx: AppContext, args: Sequence[str]) -> int:
        ...


def build_workflows(workflows: Optional[Iterable[Workflow]] = None) -> Dict[Command, Workflow]:
    if workflows is None:
        workflows = [
            HelpCommand(),
            DoctorCommand(),
            SetupCommand(),
            BrowserInstallCommand(),
            BrowserStartCommand(),
            BrowserStatusCommand(),
        ]

    table: Dict[Command, Workflow] = {}
    for w in workflows:
        table[Command(w.command_id)] = w

    missing = [c.value for c in Command if c not in table]
    if missing:
        raise RuntimeError(f"No workflow registered for: {', '.join(missing)}")
    return table


def dispatch(
    ctx: AppContext,
    name: Optional[str],
    args: Sequence[str] = (),
    *,
    workflows: Optional[Dict[Command, Workflow]] = None,
) -> int:
    """Route a command name to its workflow and turn failures into an exit code."""

    table = workflows if workflows is not None else build_workflows()

    try:
        # Every invocation guarantees the settings record exists; only the
        # workflows that update it parse it.
        ctx.store.ensure()

        command = DEFAULT_COMMAND if name is None else Command.parse(name)
        if command is None:
            logger.error(
                'Unknown command "%s". Available commands: %s', name, ", ".join(Command.names())
            )
            return 1

        logger.info("Running command %s", command.value)
        return table[command].run(ctx, list(args))
    except CommandError as e:
        logger.error("✖ %s", e)
        return e.returncode
    except SettingsError as e:
        logger.error("✖ %s", e)
        return 1
