from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

DEFAULT_LOG_NAME = "termux-dev.log"


def configure_logging(
    log_path: str,
    *,
    verbose: bool = False,
) -> str:
    """Configure logging.

    Everything at INFO and above (DEBUG with verbose) is recorded to log_path.
    The console handler writes bare messages to stderr: warnings and errors
    by default, INFO and above with verbose.

    Notes:
    - If log_path cannot be opened (read-only home, odd storage mounts),
      fall back to a file in the working directory.

    Returns the actual file path being used.
    """

    root = logging.getLogger()
    level = logging.DEBUG if verbose else logging.INFO
    root.setLevel(level)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(root, "_termux_dev_configured", False):
        return getattr(root, "_termux_dev_log_path", log_path)

    chosen_path = log_path
    handlers: list[logging.Handler] = []

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    file_handler: Optional[logging.Handler] = None
    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError:
        fallback = str(Path.cwd() / DEFAULT_LOG_NAME)
        file_handler = logging.FileHandler(fallback, encoding="utf-8")
        chosen_path = fallback
    file_handler.setFormatter(fmt)
    handlers.append(file_handler)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter("%(message)s"))
    console.setLevel(logging.INFO if verbose else logging.WARNING)
    handlers.append(console)

    for h in handlers:
        root.addHandler(h)

    setattr(root, "_termux_dev_configured", True)
    setattr(root, "_termux_dev_log_path", chosen_path)
    setattr(root, "_termux_dev_handlers", handlers)

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path


def reset_logging() -> None:
    """Detach handlers installed by configure_logging()."""

    root = logging.getLogger()
    for h in getattr(root, "_termux_dev_handlers", []):
        root.removeHandler(h)
        h.close()
    for attr in ("_termux_dev_configured", "_termux_dev_log_path", "_termux_dev_handlers"):
        if hasattr(root, attr):
            delattr(root, attr)
