from __future__ import annotations

import copy
import json
import logging
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

SETTINGS_FILE_MODE = 0o600

_KNOWN_KEYS = ("createdAt", "lastSetupAt", "x11RepoEnabled", "browserPackage")


class SettingsError(ValueError):
    """The settings file exists but cannot be parsed into a record."""


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _as_stamp(value: Any) -> Any:
    # Unquoted timestamps in hand-edited YAML load as datetime objects.
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return value


@dataclass
class SettingsRecord:
    created_at: str
    last_setup_at: Optional[str] = None
    x11_repo_enabled: bool = False
    browser_package: Optional[str] = None
    # Keys we do not know about are carried through untouched.
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def fresh(cls, now: Optional[str] = None) -> "SettingsRecord":
        return cls(created_at=now or utc_now())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SettingsRecord":
        created_at = _as_stamp(data.get("createdAt"))
        if not isinstance(created_at, str) or not created_at:
            raise SettingsError("Settings record is missing 'createdAt'")
        x11_repo_enabled = data.get("x11RepoEnabled", False)
        if not isinstance(x11_repo_enabled, bool):
            raise SettingsError(f"'x11RepoEnabled' must be true or false, got {x11_repo_enabled!r}")
        return cls(
            created_at=created_at,
            last_setup_at=_as_stamp(data.get("lastSetupAt")),
            x11_repo_enabled=x11_repo_enabled,
            browser_package=data.get("browserPackage"),
            extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = dict(self.extra)
        out.update(
            {
                "createdAt": self.created_at,
                "lastSetupAt": self.last_setup_at,
                "x11RepoEnabled": self.x11_repo_enabled,
                "browserPackage": self.browser_package,
            }
        )
        return out


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"json", "yaml", "yml"}:
        return ext
    # Default to JSON for unknown extensions.
    return "json"


def load_settings(path: str | Path) -> Dict[str, Any]:
    p = Path(path)

    try:
        text = p.read_text(encoding="utf-8")
        if _detect_format(p) in {"yaml", "yml"}:
            data = yaml.safe_load(text) or {}
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
        raise SettingsError(f"Malformed settings file {p}: {e}") from e
    except OSError as e:
        raise SettingsError(f"Cannot read settings file {p}: {e}") from e

    if not isinstance(data, dict):
        raise SettingsError(f"Settings file must be an object/dict, got {type(data).__name__}")

    return data


def dump_settings(path: str | Path, data: Dict[str, Any]) -> str:
    if _detect_format(Path(path)) in {"yaml", "yml"}:
        return yaml.safe_dump(data, sort_keys=True)
    return json.dumps(data, indent=2, sort_keys=True) + "\n"


def save_settings(path: str | Path, data: Dict[str, Any]) -> None:
    """Replace the settings file in one rename so readers never see half a record."""

    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    text = dump_settings(p, data)

    tmp = p.with_name(f".{p.name}.tmp")
    tmp.unlink(missing_ok=True)
    fd = os.open(str(tmp), os.O_WRONLY | os.O_CREAT | os.O_EXCL, SETTINGS_FILE_MODE)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(text)
    os.replace(tmp, p)


class SettingsStore:
    """Read/update access to the single persisted settings record.

    No locking: one short-lived CLI process at a time is assumed, and
    concurrent writers race with last-writer-wins.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def ensure(self) -> bool:
        """Create the backing file with a default record if missing.

        Returns True when a new file was written.
        """

        if self.path.exists():
            return False
        self.path.parent.mkdir(parents=True, exist_ok=True)
        save_settings(self.path, SettingsRecord.fresh().to_dict())
        logger.info("Created settings record at %s", self.path)
        return True

    def read(self) -> SettingsRecord:
        self.ensure()
        return SettingsRecord.from_dict(load_settings(self.path))

    def write(self, record: SettingsRecord) -> None:
        save_settings(self.path, record.to_dict())

    def update(self, fn: Callable[[SettingsRecord], SettingsRecord]) -> SettingsRecord:
        current = self.read()
        nxt = fn(copy.deepcopy(current))
        self.write(nxt)
        logger.info("Updated settings record at %s", self.path)
        return nxt
