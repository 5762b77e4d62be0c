"""Version resolution for Go releases.

Decides whether the local toolchain is behind the catalog and picks the
release and platform artifact to install.

Selection trusts catalog order: the upgrade target is the *first* catalog
entry newer than the local version, not the highest version overall. The
Go index lists releases newest-first, so the two agree on real data; on an
unsorted catalog the first newer entry still wins.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from enum import IntEnum

from goupdate.logging import get_logger
from goupdate.updater.models import Artifact, Release, Resolution, ResolutionStatus

log = get_logger("goupdate.updater.resolver")

# vMAJOR[.MINOR[.PATCH[-PRERELEASE][+BUILD]]]; pre-release and build only on a full triple
_SEMVER_RE = re.compile(
    r"^v(?P<major>0|[1-9]\d*)"
    r"(?:\.(?P<minor>0|[1-9]\d*)"
    r"(?:\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<pre>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r")?)?$"
)

SemVer = tuple[int, int, int, tuple[str, ...]]


class Comparison(IntEnum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


def normalize(version: str) -> str:
    """Return the comparable form of a Go version string.

    Strips a leading ``go`` and ensures a leading ``v``, so ``go1.25.0``,
    ``1.25.0`` and ``v1.25.0`` all become ``v1.25.0``. Idempotent.
    """
    version = version.strip()
    if version.startswith("go"):
        version = version[len("go") :]
    if not version.startswith("v"):
        version = "v" + version
    return version


def parse_semver(version: str) -> SemVer | None:
    """Parse a normalized version into (major, minor, patch, pre-release ids).

    Missing minor and patch components count as 0 and build metadata is
    dropped. Returns None if the string is not a semantic version.
    """
    m = _SEMVER_RE.match(version)
    if m is None:
        return None
    pre = m.group("pre")
    if pre is not None and any(_has_leading_zero(ident) for ident in pre.split(".")):
        return None
    return (
        int(m.group("major")),
        int(m.group("minor") or 0),
        int(m.group("patch") or 0),
        tuple(pre.split(".")) if pre else (),
    )


def _has_leading_zero(ident: str) -> bool:
    return ident.isdigit() and len(ident) > 1 and ident.startswith("0")


def _cmp(a: object, b: object) -> int:
    return (a > b) - (a < b)  # type: ignore[operator]


def _compare_prerelease(a: tuple[str, ...], b: tuple[str, ...]) -> int:
    # A version without pre-release identifiers outranks one with them
    if not a or not b:
        return _cmp(not a, not b)

    for x, y in zip(a, b):
        if x == y:
            continue
        x_num, y_num = x.isdigit(), y.isdigit()
        if x_num and y_num:
            return _cmp(int(x), int(y))
        if x_num != y_num:
            # Numeric identifiers have lower precedence than alphanumeric ones
            return -1 if x_num else 1
        return _cmp(x, y)

    return _cmp(len(a), len(b))


def compare(a: str, b: str) -> Comparison:
    """Compare two normalized versions by semantic-version precedence.

    A string that is not a valid semantic version sorts below every valid
    one; two invalid strings compare equal.
    """
    pa, pb = parse_semver(a), parse_semver(b)
    if pa is None or pb is None:
        return Comparison(_cmp(pa is not None, pb is not None))

    core = _cmp(pa[:3], pb[:3])
    if core:
        return Comparison(core)
    return Comparison(_compare_prerelease(pa[3], pb[3]))


def newer_releases(catalog: Iterable[Release], local: str) -> list[Release]:
    """Releases newer than ``local``, in catalog order."""
    current = normalize(local)
    return [r for r in catalog if compare(normalize(r.version), current) is Comparison.GREATER]


def find_upgrade(catalog: Sequence[Release], local: str) -> Release | None:
    """Return the upgrade target for ``local`` or None if it is up to date.

    The target is the first catalog entry newer than ``local``.
    """
    candidates = newer_releases(catalog, local)
    if not candidates:
        return None
    return candidates[0]


def find_release(catalog: Iterable[Release], version: str) -> Release | None:
    """Return the catalog entry matching ``version`` after normalization."""
    wanted = normalize(version)
    return next((r for r in catalog if normalize(r.version) == wanted), None)


def select_artifact(release: Release, target_os: str, target_arch: str) -> Artifact | None:
    """Return the first file of ``release`` built for ``target_os``/``target_arch``.

    Matching is exact and case-sensitive. None means the release ships no
    binary for this platform.
    """
    return next(
        (f for f in release.files if f.os == target_os and f.arch == target_arch),
        None,
    )


def resolve(
    catalog: Sequence[Release],
    local: str,
    target_os: str,
    target_arch: str,
) -> Resolution:
    """Resolve the upgrade target and its artifact for the given platform."""
    current = normalize(local)

    release = find_upgrade(catalog, local)
    if release is None:
        log.debug("resolver_up_to_date", current=current)
        return Resolution(status=ResolutionStatus.NO_UPDATE, current_version=current)

    artifact = select_artifact(release, target_os, target_arch)
    if artifact is None:
        log.info(
            "resolver_no_artifact",
            current=current,
            target=release.version,
            os=target_os,
            arch=target_arch,
        )
        return Resolution(
            status=ResolutionStatus.NO_ARTIFACT,
            current_version=current,
            release=release,
        )

    log.info(
        "resolver_upgrade_found",
        current=current,
        target=release.version,
        filename=artifact.filename,
    )
    return Resolution(
        status=ResolutionStatus.AVAILABLE,
        current_version=current,
        release=release,
        artifact=artifact,
    )
