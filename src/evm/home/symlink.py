"""Symlink-backed version repository.

Invariants:
  1. ``<home>/<product>`` is a relative symlink to one ``<product>-<version>``
     directory, or absent.
  2. Repointing is atomic: a new link is created under a unique temp name,
     then renamed over the old one with os.replace().
  3. Nothing but ``activate`` writes the link.
"""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import uuid
from pathlib import Path

from evm.errors import ManagedHomeError, NotInstalledError
from evm.settings import Settings

logger = logging.getLogger(__name__)


class SymlinkVersionRepository:
    """Reads and writes version state directly in the managed home."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def version_path(self, version: str) -> Path:
        return self._settings.version_dir(version)

    def is_installed(self, version: str) -> bool:
        path = self.version_path(version)
        if path.parent != self._settings.home:
            return False
        return path.is_dir() and not path.is_symlink()

    def installed_versions(self) -> list[str]:
        home = self._settings.home
        if not home.is_dir():
            return []
        prefix = self._settings.dir_prefix
        names = [
            entry.name
            for entry in home.iterdir()
            if entry.name.startswith(prefix) and entry.is_dir() and not entry.is_symlink()
        ]
        # Lexical on the directory name: "5.9.0" sorts above "5.10.0".
        return [name[len(prefix) :] for name in sorted(names, reverse=True)]

    def current_version(self) -> str | None:
        link = self._settings.link_path
        if not link.is_symlink():
            return None
        target = Path(os.readlink(link)).name
        prefix = self._settings.dir_prefix
        if not target.startswith(prefix) or len(target) == len(prefix):
            logger.warning("%s points at unexpected target %s", link, target)
            return None
        return target[len(prefix) :]

    def activate(self, version: str) -> None:
        target = self.version_path(version)
        if not self.is_installed(version):
            raise NotInstalledError(
                f"Version {version} is not installed. Run 'evm install {version}' first."
            )
        if self.current_version() == version:
            logger.info("Version %s is already active", version)
            return

        link = self._settings.link_path
        if link.exists() and not link.is_symlink():
            raise ManagedHomeError(
                f"{link} exists and is not a symlink. Move it out of the way and re-run."
            )
        tmp_link = link.with_name(f".{link.name}.{uuid.uuid4().hex}")
        os.symlink(target.name, tmp_link)
        try:
            os.replace(tmp_link, link)
        except OSError as exc:
            with contextlib.suppress(OSError):
                os.unlink(tmp_link)
            raise ManagedHomeError(f"Failed to point {link} at {target.name}: {exc}") from exc
        logger.info("Active version is now %s", version)

    def delete(self, version: str) -> Path:
        path = self.version_path(version)
        shutil.rmtree(path)
        logger.info("Removed %s", path)
        return path

    def active_root(self) -> Path:
        return self._settings.link_path

    def active_binary(self) -> Path:
        return self.active_root() / "bin" / self._settings.product

    def active_binary_exists(self) -> bool:
        return self.active_binary().is_file()
