"""Core type definitions"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

SyncDecision = Enum("SyncDecision", ["UP_TO_DATE", "NEEDS_SYNC"])

VERSION_FILE = "VERSION"
VERSION_MARKER = ".version"

# Only these top-level entries are installed; packaging metadata stays behind.
MANIFEST = (
    "bin/ghost-tab",
    "lib",
    "templates",
    "ghostty",
    "terminals",
    "wrapper.sh",
    VERSION_FILE,
)


@dataclass(frozen=True)
class Distribution:
    """Read-only source tree bundled with the installer"""
    root: Path
    version: str
    manifest: tuple[str, ...] = MANIFEST


@dataclass(frozen=True)
class Installation:
    """Mutable destination directory"""
    root: Path

    @property
    def marker_path(self) -> Path:
        return self.root / VERSION_MARKER

    @property
    def entrypoint(self) -> Path:
        return self.root / "bin" / "ghost-tab"


@dataclass(frozen=True)
class PlatformTarget:
    """Operating system and architecture used to select a release artifact"""
    os_name: str
    arch: str
