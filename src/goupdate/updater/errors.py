"""Exception hierarchy for the updater.

"No upgrade" and "no artifact for this platform" are normal outcomes and
are reported through ``Resolution.status``, not raised.
"""

from __future__ import annotations

from collections.abc import Sequence


class GoUpdateError(Exception):
    """Base class for all goupdate errors."""


class CatalogError(GoUpdateError):
    """The release catalog could not be retrieved or understood."""


class TransportError(CatalogError):
    """The request could not be issued or the connection failed."""


class HTTPStatusError(CatalogError):
    """The index answered with a non-success status."""

    def __init__(self, status_code: int, status_text: str) -> None:
        self.status_code = status_code
        self.status_text = status_text
        super().__init__(f"{status_code} {status_text}".strip())


class DecodeError(CatalogError):
    """The response body is not a valid release catalog."""


class LocalVersionError(GoUpdateError):
    """The installed Go version could not be determined."""


class InstallError(GoUpdateError):
    """An installation step failed."""


class CommandError(InstallError):
    """An external command exited with a non-zero status."""

    def __init__(self, argv: Sequence[str], returncode: int) -> None:
        self.argv = list(argv)
        self.returncode = returncode
        super().__init__(f"command {' '.join(self.argv)!r} exited with status {returncode}")


class ChecksumMismatchError(InstallError):
    """The downloaded archive does not match the published SHA-256."""

    def __init__(self, filename: str, expected: str, actual: str) -> None:
        self.filename = filename
        self.expected = expected
        self.actual = actual
        super().__init__(f"checksum mismatch for {filename}: wanted {expected}, got {actual}")
