from __future__ import annotations

from dataclasses import dataclass

from .lib.env import Paths
from .settings_store import SettingsStore


@dataclass(frozen=True)
class AppContext:
    paths: Paths
    store: SettingsStore
    dry_run: bool = False

    @classmethod
    def from_paths(cls, paths: Paths, *, dry_run: bool = False) -> "AppContext":
        return cls(paths=paths, store=SettingsStore(paths.settings_file), dry_run=dry_run)
