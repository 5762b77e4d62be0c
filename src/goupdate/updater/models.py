"""Data models for the Go release catalog and resolution results.

Release and Artifact mirror one entry of ``https://go.dev/dl/?mode=json``.
They are frozen: a catalog is built fresh on every fetch and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


def _require_str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string, got {type(value).__name__}")
    return value


# ------------------------------------------------------------------
# Catalog entries
# ------------------------------------------------------------------


@dataclass(frozen=True)
class Artifact:
    """One downloadable file of a release (archive, installer or source)."""

    filename: str
    os: str
    arch: str
    version: str = ""
    sha256: str = ""
    size: int = 0
    kind: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Artifact:
        """Build an Artifact from a decoded ``files`` entry.

        ``filename``, ``os`` and ``arch`` are required (source archives carry
        empty ``os``/``arch`` strings). The rest are not used for resolution
        and default to empty values when absent.
        """
        if not isinstance(data, dict):
            raise ValueError(f"file entry must be an object, got {type(data).__name__}")
        size = data.get("size") or 0
        if isinstance(size, bool) or not isinstance(size, int):
            raise ValueError(f"field 'size' must be an integer, got {type(size).__name__}")
        return cls(
            filename=_require_str(data, "filename"),
            os=_require_str(data, "os"),
            arch=_require_str(data, "arch"),
            version=str(data.get("version") or ""),
            sha256=str(data.get("sha256") or ""),
            size=size,
            kind=str(data.get("kind") or ""),
        )


@dataclass(frozen=True)
class Release:
    """A published Go distribution and its files."""

    version: str
    stable: bool = False
    files: tuple[Artifact, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Release:
        if not isinstance(data, dict):
            raise ValueError(f"release entry must be an object, got {type(data).__name__}")
        files = data.get("files")
        if not isinstance(files, list):
            raise ValueError("field 'files' must be a list")
        return cls(
            version=_require_str(data, "version"),
            stable=bool(data.get("stable", False)),
            files=tuple(Artifact.from_dict(f) for f in files),
        )


# ------------------------------------------------------------------
# Resolution outcome
# ------------------------------------------------------------------


class ResolutionStatus(Enum):
    """Outcome of comparing the local toolchain against the catalog."""

    NO_UPDATE = "no_update"
    AVAILABLE = "available"
    NO_ARTIFACT = "no_artifact"


@dataclass(frozen=True)
class Resolution:
    """Result of one resolution pass.

    ``release`` is set for AVAILABLE and NO_ARTIFACT; ``artifact`` only for
    AVAILABLE.
    """

    status: ResolutionStatus
    current_version: str
    release: Release | None = None
    artifact: Artifact | None = None
