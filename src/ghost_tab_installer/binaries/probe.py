"""Self-reported version lookup for the installed binary."""

import asyncio
import re
from pathlib import Path
from typing import Optional, Protocol

from ghost_tab_installer.binaries.constants import (
    PROBE_TIMEOUT,
    VERSION_FLAG,
    VERSION_TOKEN,
)
from ghost_tab_installer.logging import get_logger

logger = get_logger(__name__)

_VERSION_PREFIX = re.compile(rf".*{VERSION_TOKEN}\s*")


class VersionProbe(Protocol):
    """Reports the version of an installed binary, or None when it is absent."""

    async def installed_version(self, binary: Path) -> Optional[str]:
        ...


def parse_reported_version(output: str) -> str:
    """Strip everything up to and including the last ``version`` token on the line."""
    return _VERSION_PREFIX.sub("", output, count=1).strip()


class SubprocessVersionProbe:
    """Runs ``<binary> --version`` and parses its output."""

    def __init__(self, timeout: float = PROBE_TIMEOUT):
        self.timeout = timeout

    async def installed_version(self, binary: Path) -> Optional[str]:
        try:
            process = await asyncio.create_subprocess_exec(
                str(binary),
                VERSION_FLAG,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError as e:
            logger.debug({"event": "probe_not_runnable", "binary": str(binary), "error": str(e)})
            return None

        try:
            stdout, _ = await asyncio.wait_for(process.communicate(), self.timeout)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            logger.debug({"event": "probe_timeout", "binary": str(binary), "timeout": self.timeout})
            return None

        if process.returncode != 0:
            logger.debug(
                {"event": "probe_failed", "binary": str(binary), "returncode": process.returncode}
            )
            return None

        try:
            output = stdout.decode()
        except UnicodeDecodeError:
            logger.debug({"event": "probe_output_unreadable", "binary": str(binary)})
            return None

        version = parse_reported_version(output)
        logger.debug({"event": "probe_complete", "binary": str(binary), "version": version})
        return version or None
