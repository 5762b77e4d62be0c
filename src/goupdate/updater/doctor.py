"""Dependency check for the external tools the installer shells out to."""

from __future__ import annotations

import shutil
from collections.abc import Callable, Iterable

from goupdate.constants import REQUIRED_COMMANDS
from goupdate.logging import get_logger

log = get_logger("goupdate.updater.doctor")


def check_dependencies(
    commands: Iterable[str] = REQUIRED_COMMANDS,
    which: Callable[[str], str | None] | None = None,
) -> list[str]:
    """Return the commands from ``commands`` that are not on PATH."""
    which = which or shutil.which
    missing: list[str] = []
    for cmd in commands:
        path = which(cmd)
        if path is None:
            log.warning("dependency_missing", cmd=cmd)
            missing.append(cmd)
        else:
            log.debug("dependency_found", cmd=cmd, path=path)
    return missing


def required_commands(use_sudo: bool) -> tuple[str, ...]:
    """Tools the installer needs with the given sudo setting."""
    return (*REQUIRED_COMMANDS, "sudo") if use_sudo else REQUIRED_COMMANDS
