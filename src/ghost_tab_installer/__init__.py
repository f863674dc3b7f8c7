"""Version-gated installer for ghost-tab."""
from ghost_tab_installer.config import InstallerConfig
from ghost_tab_installer.launcher import install, main, run_installer

__version__ = "0.1.0"

__all__ = ["InstallerConfig", "install", "main", "run_installer", "__version__"]
