"""Ports: download URL resolution and archive transfer."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class DownloadResolverPort(Protocol):
    """Port for mapping a version string to a confirmed download URL."""

    async def resolve(self, version: str) -> str:
        """Return the archive URL for *version*.

        Raises UnknownVersionFamilyError or ArtifactNotFoundError.
        """
        ...


class ArchiveFetcherPort(Protocol):
    """Port for transferring an archive to local disk."""

    async def fetch(self, url: str, destination: Path) -> bool:
        """Download *url* to *destination*. Returns False if it was already there."""
        ...
