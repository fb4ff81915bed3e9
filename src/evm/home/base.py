"""Port: installed versions and the active-version pointer."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class VersionRepositoryPort(Protocol):
    """Port over the managed home.

    The active-version pointer is the only source of truth for which
    version is active. ``activate`` must never leave a window where no
    version appears active.
    """

    def is_installed(self, version: str) -> bool: ...

    def installed_versions(self) -> list[str]:
        """Installed version strings, reverse lexical order of directory name."""
        ...

    def current_version(self) -> str | None:
        """The active version, or None when nothing has been activated."""
        ...

    def activate(self, version: str) -> None:
        """Point the active pointer at *version*. Raises NotInstalledError."""
        ...

    def delete(self, version: str) -> Path:
        """Remove *version*'s directory and return the removed path."""
        ...

    def version_path(self, version: str) -> Path: ...

    def active_root(self) -> Path:
        """Path through which the active version is reached."""
        ...

    def active_binary(self) -> Path: ...

    def active_binary_exists(self) -> bool: ...
