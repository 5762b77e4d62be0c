"""Shared fixtures for goupdate tests."""

from __future__ import annotations

import os
from typing import Any

import pytest

from goupdate.config import Settings, get_settings
from goupdate.updater.models import Artifact, Release


def _make_file(
    os_: str = "linux",
    arch: str = "amd64",
    version: str = "go1.25.0",
    kind: str = "archive",
    **overrides: Any,
) -> dict[str, Any]:
    """Build a ``files`` entry as the download index returns it."""
    ext = "zip" if os_ == "windows" else "tar.gz"
    entry: dict[str, Any] = {
        "filename": f"{version}.{os_}-{arch}.{ext}",
        "os": os_,
        "arch": arch,
        "version": version,
        "sha256": "2852af0cb20a13139b3448992e69b868e50ed0f8a1e5940ee1de9e19a123b613",
        "size": 57 * 1024 * 1024,
        "kind": kind,
    }
    entry.update(overrides)
    return entry


def _make_entry(
    version: str,
    platforms: tuple[tuple[str, str], ...] = (("linux", "amd64"), ("darwin", "arm64")),
    stable: bool = True,
) -> dict[str, Any]:
    """Build a release entry as the download index returns it."""
    return {
        "version": version,
        "stable": stable,
        "files": [_make_file(os_, arch, version) for os_, arch in platforms],
    }


def _make_release(
    version: str,
    platforms: tuple[tuple[str, str], ...] = (("linux", "amd64"), ("darwin", "arm64")),
) -> Release:
    """Build a Release model directly."""
    return Release(
        version=version,
        stable=True,
        files=tuple(Artifact.from_dict(_make_file(o, a, version)) for o, a in platforms),
    )


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch):
    """Keep the cached settings and GOUPDATE_* variables from leaking between tests."""
    for key in list(os.environ):
        if key.upper().startswith("GOUPDATE_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing downloads and the install dir into tmp_path."""
    return Settings(
        download_dir=str(tmp_path / "dl"),
        install_dir=str(tmp_path / "local" / "go"),
        _env_file=None,
    )


@pytest.fixture
def catalog() -> list[Release]:
    """Newest-first catalog as served by go.dev."""
    return [_make_release("go1.25.0"), _make_release("go1.24.3"), _make_release("go1.23.1")]


@pytest.fixture
def make_file():
    """Factory for raw ``files`` entries."""
    return _make_file


@pytest.fixture
def make_entry():
    """Factory for raw release entries."""
    return _make_entry


@pytest.fixture
def make_release():
    """Factory for Release models."""
    return _make_release
