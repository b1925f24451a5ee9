"""Termux Dev (Python-first, settings-driven).

Bootstraps a development workflow inside Termux:
- Idempotent, re-runnable package provisioning
- A generated launch script for Termux X11 + PulseAudio + Chromium
- Process-status inspection of the browser stack
- Lightweight settings persisted under ~/.termux-dev
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
