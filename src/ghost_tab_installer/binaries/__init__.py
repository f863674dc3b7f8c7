"""Companion binary management."""
from ghost_tab_installer.binaries.fetcher import (
    build_download_url,
    download_file,
    ensure_binary,
)
from ghost_tab_installer.binaries.probe import (
    SubprocessVersionProbe,
    VersionProbe,
    parse_reported_version,
)

__all__ = [
    "build_download_url",
    "download_file",
    "ensure_binary",
    "SubprocessVersionProbe",
    "VersionProbe",
    "parse_reported_version",
]
