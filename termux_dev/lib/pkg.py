from __future__ import annotations

import logging
from typing import Sequence

from .command import run_cmd

logger = logging.getLogger(__name__)

PKG = "pkg"


def pkg_update(*, dry_run: bool = False) -> None:
    run_cmd([PKG, "update", "-y"], dry_run=dry_run)


def pkg_upgrade(*, dry_run: bool = False) -> None:
    run_cmd([PKG, "upgrade", "-y"], dry_run=dry_run)


def pkg_install(packages: Sequence[str], *, dry_run: bool = False) -> None:
    if not packages:
        return
    run_cmd([PKG, "install", "-y", *packages], dry_run=dry_run)


def enable_repo(repo_package: str, *, dry_run: bool = False) -> None:
    """Termux repositories ship as installable packages (x11-repo, tur-repo)."""

    logger.info("Enabling repository %s", repo_package)
    pkg_install([repo_package], dry_run=dry_run)
