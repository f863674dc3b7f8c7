"""Version resolution against the installation marker."""

from pathlib import Path

from ghost_tab_installer.errors import DistributionError
from ghost_tab_installer.logging import get_logger
from ghost_tab_installer.types import (
    VERSION_FILE,
    Distribution,
    Installation,
    SyncDecision,
)

logger = get_logger(__name__)


def load_distribution(root: Path) -> Distribution:
    """Load the packaged distribution and its version."""
    version_file = root / VERSION_FILE
    try:
        version = version_file.read_text(encoding="utf-8").strip()
    except OSError as e:
        raise DistributionError(
            f"Cannot read distribution version from {version_file}",
            details={"path": str(version_file), "error": str(e)},
        ) from e

    if not version:
        raise DistributionError(
            f"Distribution version file is empty: {version_file}",
            details={"path": str(version_file)},
        )

    return Distribution(root=root, version=version)


def read_installed_version(installation: Installation) -> str:
    """Read the version marker; a missing marker means nothing is installed."""
    try:
        return installation.marker_path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(
            {
                "event": "version_marker_unreadable",
                "marker": str(installation.marker_path),
                "error": str(e),
            }
        )
        return ""


def resolve(target_version: str, installation: Installation) -> SyncDecision:
    """Decide whether the installation must be re-synchronized."""
    installed = read_installed_version(installation)

    decision = (
        SyncDecision.UP_TO_DATE if installed == target_version else SyncDecision.NEEDS_SYNC
    )
    logger.debug(
        {
            "event": "version_resolved",
            "installed": installed,
            "target": target_version,
            "decision": decision.name,
        }
    )
    return decision
