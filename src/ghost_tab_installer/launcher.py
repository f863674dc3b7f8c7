"""Installer entrypoint: platform gate, sync, binary fetch and handoff."""
import asyncio
import sys
from typing import Optional, Sequence

from ghost_tab_installer.binaries import VersionProbe, ensure_binary
from ghost_tab_installer.config import InstallerConfig
from ghost_tab_installer.errors import InstallerError, log_error
from ghost_tab_installer.handoff import run_handoff
from ghost_tab_installer.logging import configure_logging, get_logger
from ghost_tab_installer.platforms import (
    check_platform,
    detect_platform,
    get_platform_target,
)
from ghost_tab_installer.sync import sync_distribution
from ghost_tab_installer.types import Installation, SyncDecision
from ghost_tab_installer.versions import load_distribution, resolve

logger = get_logger(__name__)


async def install(config: InstallerConfig, probe: Optional[VersionProbe] = None) -> None:
    """Bring the installation and the companion binary up to date."""
    check_platform(detect_platform(config))

    distribution = load_distribution(config.distribution_dir)
    installation = Installation(root=config.install_dir)
    version = distribution.version

    if resolve(version, installation) == SyncDecision.UP_TO_DATE:
        print(f"ghost-tab {version} already up to date")
    else:
        print(f"Installing ghost-tab {version} to {installation.root}...")
        sync_distribution(distribution, installation)
        print(f"Installed ghost-tab {version}")

    if config.skip_download:
        logger.debug({"event": "binary_download_skipped"})
        return

    await ensure_binary(
        version,
        get_platform_target(config),
        config.binary_path,
        probe=probe,
        base_url=config.release_base_url,
    )


async def run_installer(
    config: InstallerConfig,
    args: Sequence[str] = (),
    probe: Optional[VersionProbe] = None,
) -> int:
    """Run the full install and return the process exit status."""
    try:
        await install(config, probe)
        if config.skip_exec:
            return 0
        return await run_handoff(Installation(root=config.install_dir), args)
    except InstallerError as e:
        log_error(e, {"install_dir": str(config.install_dir)}, logger)
        sys.stderr.write(f"Error: {e}\n")
        return e.code


def main() -> None:
    """Run the installer."""
    config = InstallerConfig.from_env()
    configure_logging(config.log_level)
    sys.exit(asyncio.run(run_installer(config, sys.argv[1:])))
