"""Installer for a resolved Go release.

Downloads the archive with wget, unpacks it next to the download, and
swaps it in for the existing installation. All subprocess calls go
through a single ``run_command`` callable so the sequence can be planned,
printed, or run against a fake in tests.
"""

from __future__ import annotations

import hashlib
import subprocess
from collections.abc import Callable, Sequence
from pathlib import Path

from goupdate.config import Settings
from goupdate.constants import EXTRACTED_DIR_NAME, HASH_CHUNK_SIZE
from goupdate.logging import get_logger
from goupdate.updater.errors import ChecksumMismatchError, CommandError, InstallError
from goupdate.updater.models import Artifact, Release

log = get_logger("goupdate.updater.installer")

CommandRunner = Callable[[Sequence[str]], int]


def run_command(argv: Sequence[str]) -> int:
    """Run ``argv`` with this process's stdin/stdout/stderr and return its exit status."""
    try:
        return subprocess.run(list(argv), check=False).returncode
    except FileNotFoundError:
        log.error("installer_cmd_not_found", cmd=argv[0])
        return 127


def sha256_file(path: Path) -> str:
    digest = hashlib.sha256()
    with path.open("rb") as fh:
        for chunk in iter(lambda: fh.read(HASH_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


class Installer:
    """Replaces the Go installation with a release archive.

    Typical flow:
    1. ``plan(release, artifact)`` - the command sequence, nothing executed
    2. ``install(release, artifact)`` - download, verify, unpack, swap, report
    """

    def __init__(self, settings: Settings, run_command: CommandRunner = run_command) -> None:
        self._settings = settings
        self._run_command = run_command

    @property
    def download_dir(self) -> Path:
        return Path(self._settings.download_dir)

    @property
    def install_dir(self) -> Path:
        return Path(self._settings.install_dir)

    def download_url(self, artifact: Artifact) -> str:
        return f"{self._settings.base_url}{artifact.filename}"

    def archive_path(self, artifact: Artifact) -> Path:
        return self.download_dir / artifact.filename

    # ------------------------------------------------------------------
    # Command sequence
    # ------------------------------------------------------------------

    def _privileged(self, *argv: str) -> list[str]:
        return ["sudo", *argv] if self._settings.use_sudo else list(argv)

    def download_command(self, artifact: Artifact) -> list[str]:
        return [
            "wget",
            "-c",
            f"--tries={self._settings.wget_tries}",
            f"--read-timeout={self._settings.wget_read_timeout}",
            "-P",
            str(self.download_dir),
            self.download_url(artifact),
        ]

    def unpack_commands(self, artifact: Artifact) -> list[list[str]]:
        archive = str(self.archive_path(artifact))
        return [
            ["tar", "-xzvf", archive, "-C", str(self.download_dir)],
            ["rm", "-rf", archive],
        ]

    def swap_commands(self, remove_existing: bool) -> list[list[str]]:
        extracted = str(self.download_dir / EXTRACTED_DIR_NAME)
        cmds: list[list[str]] = []
        if remove_existing:
            cmds.append(self._privileged("rm", "-rf", str(self.install_dir)))
        cmds.append(self._privileged("chown", "-R", self._settings.owner, extracted))
        cmds.append(self._privileged("mv", "-v", extracted, str(self.install_dir)))
        return cmds

    def verify_command(self) -> list[str]:
        return [str(self.install_dir / "bin" / "go"), "version"]

    def plan(self, release: Release, artifact: Artifact) -> list[list[str]]:
        """Return every command ``install`` would run, in order."""
        return [
            self.download_command(artifact),
            *self.unpack_commands(artifact),
            *self.swap_commands(remove_existing=self.install_dir.exists()),
            self.verify_command(),
        ]

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def _run(self, argv: Sequence[str], step: str) -> None:
        log.info("installer_step", step=step, cmd=" ".join(argv))
        returncode = self._run_command(argv)
        if returncode != 0:
            log.error("installer_step_failed", step=step, cmd=list(argv), returncode=returncode)
            raise CommandError(argv, returncode)

    def verify_checksum(self, artifact: Artifact) -> None:
        """Compare the downloaded archive against the published SHA-256.

        A mismatching archive is deleted before raising.
        """
        path = self.archive_path(artifact)
        try:
            actual = sha256_file(path)
            mismatch = actual.lower() != artifact.sha256.lower()
            if mismatch:
                path.unlink(missing_ok=True)
        except OSError as exc:
            log.error("installer_checksum_unreadable", path=str(path), error=str(exc))
            raise InstallError(f"cannot verify {artifact.filename}: {exc}") from exc
        if mismatch:
            log.error(
                "installer_checksum_mismatch",
                filename=artifact.filename,
                expected=artifact.sha256,
                actual=actual,
            )
            raise ChecksumMismatchError(artifact.filename, artifact.sha256, actual)
        log.debug("installer_checksum_ok", filename=artifact.filename)

    def install(self, release: Release, artifact: Artifact) -> None:
        """Download ``artifact`` and make it the system Go installation.

        Raises:
            CommandError: a step exited non-zero; later steps are not run.
            ChecksumMismatchError: the archive does not match the index.
            InstallError: the downloaded archive could not be read.
        """
        log.info(
            "installer_started",
            version=release.version,
            filename=artifact.filename,
            install_dir=str(self.install_dir),
        )

        self._run(self.download_command(artifact), "download")

        if self._settings.verify_checksum and artifact.sha256:
            self.verify_checksum(artifact)

        for argv in self.unpack_commands(artifact):
            self._run(argv, "unpack")

        for argv in self.swap_commands(remove_existing=self.install_dir.exists()):
            self._run(argv, "swap")

        self._run(self.verify_command(), "verify")
        log.info("installer_success", version=release.version)
