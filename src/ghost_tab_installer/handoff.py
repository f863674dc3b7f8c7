"""Handoff to the installed ghost-tab payload."""

import asyncio
import sys
from typing import Sequence

from ghost_tab_installer.errors import HandoffError
from ghost_tab_installer.logging import get_logger
from ghost_tab_installer.types import Installation

logger = get_logger(__name__)

INTERPRETER = "bash"


async def run_handoff(installation: Installation, args: Sequence[str]) -> int:
    """Run the installed entrypoint with the user's arguments and return its exit status.

    Raises:
        HandoffError: If the entrypoint is not installed or cannot be started
    """
    entrypoint = installation.entrypoint
    if not entrypoint.is_file():
        raise HandoffError(str(entrypoint), "entrypoint is not installed")

    cmd = [INTERPRETER, str(entrypoint), *args]
    logger.debug({"event": "handoff_exec", "cmd": cmd})

    # The payload writes to the same descriptors; our status lines go first
    sys.stdout.flush()
    sys.stderr.flush()

    try:
        process = await asyncio.create_subprocess_exec(*cmd)
    except OSError as e:
        raise HandoffError(INTERPRETER, str(e)) from e

    returncode = await process.wait()
    logger.debug({"event": "handoff_complete", "returncode": returncode})

    # Negative codes mean the payload was killed by a signal
    return returncode if returncode >= 0 else 1
