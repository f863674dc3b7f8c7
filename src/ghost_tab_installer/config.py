"""Installer configuration, resolved once from the environment."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from ghost_tab_installer.binaries.constants import BINARY_NAME, RELEASE_BASE_URL
from ghost_tab_installer.logging import DEFAULT_LOG_LEVEL

# Ships only VERSION; point GHOST_TAB_DIST_DIR at a full payload tree to install one
PACKAGED_DISTRIBUTION = Path(__file__).resolve().parent / "distribution"

ENV_INSTALL_DIR = "GHOST_TAB_INSTALL_DIR"
ENV_DIST_DIR = "GHOST_TAB_DIST_DIR"
ENV_MOCK_PLATFORM = "GHOST_TAB_MOCK_PLATFORM"
ENV_SKIP_DOWNLOAD = "GHOST_TAB_SKIP_TUI_DOWNLOAD"
ENV_SKIP_EXEC = "GHOST_TAB_SKIP_EXEC"
ENV_RELEASE_URL = "GHOST_TAB_RELEASE_URL"
ENV_LOG_LEVEL = "GHOST_TAB_LOG_LEVEL"


@dataclass(frozen=True)
class InstallerConfig:
    """Paths and switches shared by every installer step"""
    home: Path
    install_dir: Path
    distribution_dir: Path = PACKAGED_DISTRIBUTION
    mock_platform: Optional[str] = None
    arch: Optional[str] = None
    skip_download: bool = False
    skip_exec: bool = False
    release_base_url: str = RELEASE_BASE_URL
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def bin_dir(self) -> Path:
        return self.home / ".local" / "bin"

    @property
    def binary_path(self) -> Path:
        return self.bin_dir / BINARY_NAME

    @classmethod
    def for_home(cls, home: Path, **overrides) -> "InstallerConfig":
        """Config with every path rooted under ``home``."""
        overrides.setdefault("install_dir", default_install_dir(home))
        return cls(home=home, **overrides)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "InstallerConfig":
        """Build the config from ``GHOST_TAB_*`` variables.

        Switches are on for any non-empty value.
        """
        env = os.environ if environ is None else environ

        home = Path(env["HOME"]) if env.get("HOME") else Path.home()
        install_dir = env.get(ENV_INSTALL_DIR)
        dist_dir = env.get(ENV_DIST_DIR)

        return cls(
            home=home,
            install_dir=Path(install_dir) if install_dir else default_install_dir(home),
            distribution_dir=Path(dist_dir) if dist_dir else PACKAGED_DISTRIBUTION,
            mock_platform=env.get(ENV_MOCK_PLATFORM) or None,
            skip_download=bool(env.get(ENV_SKIP_DOWNLOAD)),
            skip_exec=bool(env.get(ENV_SKIP_EXEC)),
            release_base_url=(env.get(ENV_RELEASE_URL) or RELEASE_BASE_URL).rstrip("/"),
            log_level=env.get(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL,
        )


def default_install_dir(home: Path) -> Path:
    return home / ".local" / "share" / "ghost-tab"
