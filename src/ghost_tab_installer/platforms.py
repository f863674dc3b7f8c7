"""Platform gate and release platform mapping."""
import platform
import sys

from ghost_tab_installer.config import InstallerConfig
from ghost_tab_installer.errors import UnsupportedPlatformError
from ghost_tab_installer.types import PlatformTarget

SUPPORTED_PLATFORM = "darwin"

# Release artifacts use the vendor-neutral name for 64-bit x86.
ARCH_ALIASES = {
    "x86_64": "amd64",
}


def detect_platform(config: InstallerConfig) -> str:
    return config.mock_platform or sys.platform


def check_platform(current: str) -> None:
    """Reject every platform identifier except macOS."""
    if current != SUPPORTED_PLATFORM:
        raise UnsupportedPlatformError(current)


def normalize_arch(machine: str) -> str:
    return ARCH_ALIASES.get(machine, machine)


def get_platform_target(config: InstallerConfig) -> PlatformTarget:
    """Get the release platform for the current machine."""
    machine = config.arch or platform.machine()
    return PlatformTarget(os_name=SUPPORTED_PLATFORM, arch=normalize_arch(machine))
