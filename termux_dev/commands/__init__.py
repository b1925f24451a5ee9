from .browser_install import BrowserInstallCommand
from .browser_start import BrowserStartCommand
from .browser_status import BrowserStatusCommand
from .doctor import DoctorCommand
from .help import HelpCommand
from .setup_toolchain import SetupCommand

__all__ = [
    "HelpCommand",
    "DoctorCommand",
    "SetupCommand",
    "BrowserInstallCommand",
    "BrowserStartCommand",
    "BrowserStatusCommand",
]
