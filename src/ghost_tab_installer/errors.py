"""Error handling for the installer."""
from typing import Any, Dict, Optional

import structlog

from ghost_tab_installer.logging import get_logger

EXIT_FAILURE = 1


def log_error(
    error: Exception,
    context: Optional[Dict[str, Any]] = None,
    logger: Optional[structlog.stdlib.BoundLogger] = None,
) -> None:
    """Log an error with context.

    Logged at debug level; the launcher reports the error to the user itself.
    """
    logger = logger or get_logger(__name__)

    error_info: Dict[str, Any] = {
        "event": "installer_error",
        "error_type": error.__class__.__name__,
        "error_message": str(error),
    }
    if context:
        error_info["context"] = context
    if isinstance(error, InstallerError):
        error_info["code"] = error.code
        error_info["details"] = error.details

    logger.debug(error_info)


class InstallerError(Exception):
    """Base error class for the installer.

    ``code`` is the process exit status the launcher terminates with.
    """

    def __init__(
        self,
        message: str,
        code: int = EXIT_FAILURE,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.code = code
        self.details = details or {}


class UnsupportedPlatformError(InstallerError):
    """Running platform is not supported."""

    def __init__(self, detected: str):
        super().__init__(
            f"ghost-tab only supports macOS (detected: {detected})",
            details={"platform": detected},
        )


class DistributionError(InstallerError):
    """Packaged distribution is unusable."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details=details)


class SyncError(InstallerError):
    """Filesystem failure while mirroring the distribution."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details=details)


class FetchError(InstallerError):
    """Binary artifact could not be downloaded."""

    def __init__(self, url: str, reason: str):
        super().__init__(
            f"Failed to download {url}: {reason}",
            details={"url": url, "reason": reason},
        )


class HandoffError(InstallerError):
    """Installed payload could not be started."""

    def __init__(self, command: str, reason: str):
        super().__init__(
            f"Failed to run {command}: {reason}",
            details={"command": command, "reason": reason},
        )
