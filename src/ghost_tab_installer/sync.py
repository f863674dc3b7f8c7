"""Distribution synchronization into the installation directory."""

import os
import shutil
import stat
from pathlib import Path
from typing import List, Tuple

from ghost_tab_installer.errors import SyncError
from ghost_tab_installer.logging import get_logger
from ghost_tab_installer.types import Distribution, Installation

logger = get_logger(__name__)

EXECUTABLE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def copy_file(src: Path, dest: Path) -> None:
    """Copy file contents, overwriting ``dest`` and keeping executables executable."""
    dest.parent.mkdir(parents=True, exist_ok=True)
    # Read-only files from a previous sync cannot be opened for writing
    if dest.exists() and not os.access(dest, os.W_OK):
        dest.unlink()
    shutil.copyfile(src, dest)

    mode = src.stat().st_mode
    if mode & EXECUTABLE_BITS:
        os.chmod(dest, stat.S_IMODE(mode))


def copy_tree(src: Path, dest: Path) -> int:
    """Mirror a file or directory tree and return the number of files copied.

    Directories are created before any of their children are visited.
    """
    copied = 0
    pending: List[Tuple[Path, Path]] = [(src, dest)]

    while pending:
        source, target = pending.pop()
        if source.is_dir():
            target.mkdir(parents=True, exist_ok=True)
            pending.extend(
                (child, target / child.name) for child in sorted(source.iterdir())
            )
        else:
            copy_file(source, target)
            copied += 1

    return copied


def write_version_marker(installation: Installation, version: str) -> None:
    installation.root.mkdir(parents=True, exist_ok=True)
    installation.marker_path.write_text(version + "\n", encoding="utf-8")


def sync_distribution(distribution: Distribution, installation: Installation) -> int:
    """Copy the distribution manifest into the installation, then mark its version.

    The marker is only written once every entry has been copied, so a failed
    sync is retried in full on the next run.

    Raises:
        SyncError: If any filesystem operation fails
    """
    copied = 0
    current = None

    try:
        for entry in distribution.manifest:
            src = distribution.root / entry
            if not src.exists():
                logger.debug(
                    {"event": "manifest_entry_missing", "entry": entry, "root": str(distribution.root)}
                )
                continue

            current = entry
            copied += copy_tree(src, installation.root / entry)

        current = None
        write_version_marker(installation, distribution.version)

    except OSError as e:
        details = {
            "entry": current,
            "path": getattr(e, "filename", None),
            "error": str(e),
        }
        logger.debug({"event": "sync_failed", **details})
        target = current or str(installation.marker_path)
        raise SyncError(f"Failed to install {target}: {e}", details=details) from e

    logger.info(
        {
            "event": "distribution_synced",
            "version": distribution.version,
            "install_dir": str(installation.root),
            "files": copied,
        }
    )
    return copied
