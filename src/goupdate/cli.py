"""Command-line entry point for goupdate.

One front-end for every mode: batch upgrade (default), ``--check``,
``--doctor`` and ``--interactive``. Errors are turned into exit status 1
here and nowhere else.
"""

from __future__ import annotations

import argparse
import shlex
import sys
from collections.abc import Sequence

import httpx
from pydantic import ValidationError

from goupdate import __version__
from goupdate.config import Settings, get_settings
from goupdate.logging import get_logger, setup_logging
from goupdate.picker import select_one
from goupdate.updater.catalog import ReleaseCatalog
from goupdate.updater.doctor import check_dependencies, required_commands
from goupdate.updater.errors import GoUpdateError
from goupdate.updater.installer import Installer
from goupdate.updater.local import detect_local_version, host_platform
from goupdate.updater.models import Artifact, Release, ResolutionStatus
from goupdate.updater.resolver import find_release, normalize, resolve, select_artifact

log = get_logger("goupdate.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="goupdate",
        description="Upgrade the system Go installation to the latest release from go.dev",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--doctor",
        action="store_true",
        help="Run a system check to verify that all required packages are installed",
    )
    mode.add_argument(
        "--check", action="store_true", help="Check if a new version of Go is available"
    )
    mode.add_argument(
        "-i",
        "--interactive",
        action="store_true",
        help="Pick the version to install from the list of releases",
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="Print the install commands without running them"
    )
    parser.add_argument(
        "--current", metavar="VERSION", help="Installed Go version (default: ask `go env`)"
    )
    parser.add_argument("--os", dest="target_os", help="Target GOOS (default: this host)")
    parser.add_argument("--arch", dest="target_arch", help="Target GOARCH (default: this host)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


# ------------------------------------------------------------------
# Modes
# ------------------------------------------------------------------


def run_doctor(settings: Settings) -> int:
    missing = check_dependencies(required_commands(settings.use_sudo))
    for cmd in missing:
        print(f'❌ "{cmd}" is not installed. Please install it to proceed.')
    if missing:
        return 1
    print("Dependencies check passed successfully.")
    return 0


def fetch_catalog(settings: Settings) -> list[Release]:
    with httpx.Client(timeout=settings.request_timeout, follow_redirects=True) as client:
        catalog = ReleaseCatalog(
            client,
            endpoint=settings.catalog_url,
            user_agent=settings.user_agent,
            referer=settings.referer,
        )
        return catalog.fetch()


def install(settings: Settings, release: Release, artifact: Artifact, dry_run: bool) -> int:
    installer = Installer(settings)
    if dry_run:
        for argv in installer.plan(release, artifact):
            print(shlex.join(argv))
        return 0

    installer.install(release, artifact)
    print(f"Installed {release.version} into {installer.install_dir}.")
    return 0


def run_interactive(
    settings: Settings,
    releases: list[Release],
    target_os: str,
    target_arch: str,
    dry_run: bool,
) -> int:
    choice = select_one([r.version for r in releases], title="Go releases")
    if choice is None:
        print("Nothing selected.")
        return 0

    release = find_release(releases, choice)
    artifact = select_artifact(release, target_os, target_arch) if release else None
    if release is None or artifact is None:
        print(f"{choice} has no download for {target_os}/{target_arch}.", file=sys.stderr)
        return 1

    print(f"{choice}? Sounds good to me.")
    return install(settings, release, artifact, dry_run)


def run_upgrade(
    settings: Settings,
    releases: list[Release],
    local: str,
    target_os: str,
    target_arch: str,
    *,
    check_only: bool,
    dry_run: bool,
) -> int:
    resolution = resolve(releases, local, target_os, target_arch)

    release = resolution.release
    if resolution.status is ResolutionStatus.NO_UPDATE or release is None:
        print("You are using the latest version.")
        return 0

    latest = normalize(release.version)
    if check_only:
        print(f"New version available! Current: {resolution.current_version}, Latest: {latest}")
        return 0

    if resolution.artifact is None:
        print(
            f"{release.version} has no download for {target_os}/{target_arch}.",
            file=sys.stderr,
        )
        return 1

    return install(settings, release, resolution.artifact, dry_run)


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, run the selected mode and return the exit status."""
    args = build_parser().parse_args(argv)
    try:
        setup_logging()
        settings = get_settings()
    except ValidationError as exc:
        print(f"error: invalid configuration: {exc}", file=sys.stderr)
        return 1

    if args.doctor:
        return run_doctor(settings)

    target_os, target_arch = host_platform(
        args.target_os or settings.target_os,
        args.target_arch or settings.target_arch,
    )

    try:
        releases = fetch_catalog(settings)
        if args.interactive:
            return run_interactive(settings, releases, target_os, target_arch, args.dry_run)

        local = args.current or detect_local_version(settings.go_binary)
        return run_upgrade(
            settings,
            releases,
            local,
            target_os,
            target_arch,
            check_only=args.check,
            dry_run=args.dry_run,
        )
    except GoUpdateError as exc:
        log.error("goupdate_failed", error=str(exc), error_type=type(exc).__name__)
        print(f"error: {exc}", file=sys.stderr)
        return 1


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
