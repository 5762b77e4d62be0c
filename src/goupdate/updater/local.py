"""Facts about the host: installed Go version and Go platform identifiers."""

from __future__ import annotations

import platform
import re
import subprocess

from goupdate.logging import get_logger
from goupdate.updater.errors import LocalVersionError

log = get_logger("goupdate.updater.local")

# "go version go1.24.3 linux/amd64"
_GO_VERSION_RE = re.compile(r"\bgo(\d+(?:\.\d+)*(?:[a-z]+\d*)?)\b")

# Python's platform names -> GOOS / GOARCH as used by the download index
_GOOS = {
    "linux": "linux",
    "darwin": "darwin",
    "windows": "windows",
    "freebsd": "freebsd",
    "openbsd": "openbsd",
    "netbsd": "netbsd",
    "aix": "aix",
    "sunos": "solaris",
}

_GOARCH = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "386",
    "i686": "386",
    "x86": "386",
    "armv6l": "armv6l",
    "armv7l": "armv6l",
    "ppc64le": "ppc64le",
    "ppc64": "ppc64",
    "s390x": "s390x",
    "riscv64": "riscv64",
    "loongarch64": "loong64",
    "mips64": "mips64",
}


def host_platform(
    target_os: str | None = None,
    target_arch: str | None = None,
) -> tuple[str, str]:
    """Return (GOOS, GOARCH) for the running host.

    Explicit values win. Unknown system or machine names are passed through
    lowercased, so they simply match no artifact.
    """
    if not target_os:
        system = platform.system().lower()
        target_os = _GOOS.get(system, system)
    if not target_arch:
        machine = platform.machine().lower()
        target_arch = _GOARCH.get(machine, machine)
    return target_os, target_arch


def _run(argv: list[str]) -> str | None:
    """Run a go subcommand and return stdout, or None on failure."""
    try:
        proc = subprocess.run(argv, capture_output=True, text=True, timeout=30, check=False)
    except FileNotFoundError:
        log.debug("go_binary_not_found", cmd=argv[0])
        return None
    except (OSError, subprocess.TimeoutExpired) as exc:
        log.warning("go_version_query_failed", cmd=argv, error=str(exc))
        return None

    if proc.returncode != 0:
        log.warning(
            "go_version_query_failed",
            cmd=argv,
            returncode=proc.returncode,
            stderr=proc.stderr[:500],
        )
        return None
    return proc.stdout.strip()


def detect_local_version(go_binary: str = "go") -> str:
    """Return the installed Go version, e.g. ``go1.24.3``.

    Asks ``go env GOVERSION`` first and falls back to parsing ``go version``
    for toolchains that predate the GOVERSION variable.

    Raises:
        LocalVersionError: go is missing or reports no usable version.
    """
    version = _run([go_binary, "env", "GOVERSION"])
    if version:
        log.debug("local_version_detected", version=version, source="go env")
        return version

    output = _run([go_binary, "version"])
    if output:
        m = _GO_VERSION_RE.search(output)
        if m:
            version = m.group(0)
            log.debug("local_version_detected", version=version, source="go version")
            return version

    raise LocalVersionError(
        f"could not determine the installed Go version using {go_binary!r}; "
        "is Go installed and on PATH? Pass --current to set it explicitly"
    )
