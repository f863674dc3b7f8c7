"""Binary artifact download and version enforcement."""
import os
import tempfile
from pathlib import Path
from typing import Optional

import aiohttp

from ghost_tab_installer.binaries.constants import (
    BINARY_NAME,
    CHUNK_SIZE,
    DOWNLOAD_PATH,
    DOWNLOAD_TIMEOUT,
    RELEASE_BASE_URL,
    RELEASES_PATH,
    REPOSITORY,
    URL_TEMPLATE,
    VERSION_PREFIX,
)
from ghost_tab_installer.binaries.probe import SubprocessVersionProbe, VersionProbe
from ghost_tab_installer.errors import FetchError
from ghost_tab_installer.logging import get_logger
from ghost_tab_installer.types import PlatformTarget

logger = get_logger(__name__)

EXECUTABLE_MODE = 0o755


def build_download_url(
    version: str,
    target: PlatformTarget,
    base_url: str = RELEASE_BASE_URL,
    repo: str = REPOSITORY,
) -> str:
    """Format the release download URL for a version and platform."""
    return URL_TEMPLATE.format(
        base_url=base_url.rstrip("/"),
        repo=repo,
        releases=RELEASES_PATH,
        download=DOWNLOAD_PATH,
        version_prefix=VERSION_PREFIX,
        version=version,
        binary=BINARY_NAME,
        os_name=target.os_name,
        arch=target.arch,
    )


async def download_file(url: str, dest: Path, timeout: float = DOWNLOAD_TIMEOUT) -> int:
    """Download ``url`` to ``dest`` as an executable, replacing it atomically.

    The body is streamed into a temporary file next to ``dest`` so an
    interrupted download never leaves a truncated executable behind.

    Returns:
        Number of bytes written

    Raises:
        FetchError: On network errors, non-2xx responses or write failures
    """
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{dest.name}-", dir=dest.parent)
    except OSError as e:
        raise FetchError(url, f"cannot write to {dest.parent}: {e}") from e

    tmp_path = Path(tmp_name)
    size = 0

    try:
        with os.fdopen(fd, "wb") as f:
            async with aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=timeout)
            ) as session:
                logger.info({"event": "download_started", "url": url, "destination": str(dest)})
                async with session.get(url, allow_redirects=True) as response:
                    if response.status >= 400:
                        logger.debug(
                            {
                                "event": "download_request_failed",
                                "url": url,
                                "status": response.status,
                                "reason": response.reason,
                            }
                        )
                    response.raise_for_status()

                    async for chunk in response.content.iter_chunked(CHUNK_SIZE):
                        f.write(chunk)
                        size += len(chunk)

        os.chmod(tmp_path, EXECUTABLE_MODE)
        os.replace(tmp_path, dest)

    except aiohttp.ClientResponseError as e:
        tmp_path.unlink(missing_ok=True)
        raise FetchError(url, f"HTTP {e.status} {e.message}") from e
    except (aiohttp.ClientError, TimeoutError, OSError) as e:
        tmp_path.unlink(missing_ok=True)
        logger.debug({"event": "download_failed", "url": url, "error": str(e)})
        raise FetchError(url, str(e) or e.__class__.__name__) from e

    logger.info({"event": "download_complete", "url": url, "path": str(dest), "size": size})
    return size


async def ensure_binary(
    version: str,
    target: PlatformTarget,
    binary_path: Path,
    probe: Optional[VersionProbe] = None,
    base_url: str = RELEASE_BASE_URL,
) -> bool:
    """Ensure the binary at ``binary_path`` reports ``version``.

    Returns:
        True when a new binary was downloaded, False when it was already current

    Raises:
        FetchError: If the replacement binary cannot be downloaded
    """
    probe = probe or SubprocessVersionProbe()
    installed = await probe.installed_version(binary_path)

    if installed == version:
        print(f"{BINARY_NAME} {version} already up to date")
        return False

    if installed is None:
        print(f"Downloading {BINARY_NAME} {version}...")
    else:
        print(f"Updating {BINARY_NAME} ({installed} -> {version})...")

    url = build_download_url(version, target, base_url=base_url)
    await download_file(url, binary_path)

    print(f"{BINARY_NAME} {version} installed")
    logger.info(
        {
            "event": "binary_ready",
            "version": version,
            "previous": installed,
            "path": str(binary_path),
        }
    )
    return True
