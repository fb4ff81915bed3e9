"""Shared test fixtures and in-memory adapters."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from evm.app import AppContext
from evm.errors import NotInstalledError
from evm.home.symlink import SymlinkVersionRepository
from evm.settings import Settings


class InMemoryVersionRepository:
    """VersionRepositoryPort without a filesystem.

    ``broken`` holds versions whose server binary is missing.
    """

    def __init__(
        self,
        settings: Settings,
        installed: list[str] | None = None,
        active: str | None = None,
    ) -> None:
        self._settings = settings
        self.installed: set[str] = set(installed or [])
        self.active = active
        self.broken: set[str] = set()
        self.activations: list[str] = []

    def version_path(self, version: str) -> Path:
        return self._settings.version_dir(version)

    def is_installed(self, version: str) -> bool:
        return version in self.installed

    def installed_versions(self) -> list[str]:
        return sorted(self.installed, reverse=True)

    def current_version(self) -> str | None:
        return self.active

    def activate(self, version: str) -> None:
        if version not in self.installed:
            raise NotInstalledError(f"Version {version} is not installed.")
        self.activations.append(version)
        self.active = version

    def delete(self, version: str) -> Path:
        self.installed.discard(version)
        return self.version_path(version)

    def active_root(self) -> Path:
        return self._settings.link_path

    def active_binary(self) -> Path:
        return self.active_root() / "bin" / self._settings.product

    def active_binary_exists(self) -> bool:
        return (
            self.active is not None
            and self.active in self.installed
            and self.active not in self.broken
        )


class FakeExtractor:
    """Records extraction calls and lays out a version directory like tar would."""

    def __init__(self, settings: Settings, *, fail: Exception | None = None) -> None:
        self._settings = settings
        self.fail = fail
        self.calls: list[tuple[Path, Path]] = []

    async def is_available(self) -> bool:
        return True

    async def extract(self, archive: Path, destination: Path) -> None:
        self.calls.append((archive, destination))
        if self.fail is not None:
            raise self.fail
        name = archive.name.removesuffix(".tar.gz")
        bin_dir = destination / name / "bin"
        bin_dir.mkdir(parents=True)
        (bin_dir / self._settings.product).write_text("#!/bin/sh\n")


def make_archive_fetcher() -> MagicMock:
    """A fetcher that writes a placeholder archive."""

    async def _fetch(url: str, destination: Path) -> bool:
        if destination.exists():
            return False
        destination.write_bytes(b"archive")
        return True

    fetcher = MagicMock()
    fetcher.fetch = AsyncMock(side_effect=_fetch)
    return fetcher


def make_resolver(url: str = "https://example.invalid/es.tar.gz") -> MagicMock:
    resolver = MagicMock()
    resolver.resolve = AsyncMock(return_value=url)
    return resolver


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    home = tmp_path / "evm-home"
    home.mkdir()
    return Settings(home=home)


@pytest.fixture()
def fake_repo(settings: Settings) -> InMemoryVersionRepository:
    return InMemoryVersionRepository(settings)


@pytest.fixture()
def fs_app(settings: Settings) -> AppContext:
    """AppContext over a real managed home with network and tar stubbed out."""
    return AppContext(
        settings=settings,
        http_client=MagicMock(spec=httpx.AsyncClient),
        repository=SymlinkVersionRepository(settings),
        resolver=make_resolver(),
        fetcher=make_archive_fetcher(),
        extractor=FakeExtractor(settings),
    )


@pytest.fixture()
def mem_app(settings: Settings, fake_repo: InMemoryVersionRepository) -> AppContext:
    """AppContext over the in-memory repository."""
    return AppContext(
        settings=settings,
        http_client=MagicMock(spec=httpx.AsyncClient),
        repository=fake_repo,
        resolver=make_resolver(),
        fetcher=make_archive_fetcher(),
        extractor=FakeExtractor(settings),
    )


def install_on_disk(settings: Settings, version: str, *, with_binary: bool = True) -> Path:
    """Create ``<home>/elasticsearch-<version>`` the way an extracted archive looks."""
    root = settings.version_dir(version)
    (root / "bin").mkdir(parents=True)
    if with_binary:
        (root / "bin" / settings.product).write_text("#!/bin/sh\n")
    return root
