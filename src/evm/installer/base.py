"""Port: archive extraction."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class ArchiveExtractorPort(Protocol):
    """Port for unpacking a downloaded archive."""

    async def is_available(self) -> bool:
        """Check if the extraction tool is installed on the system."""
        ...

    async def extract(self, archive: Path, destination: Path) -> None:
        """Unpack *archive* into *destination*. Raises ExtractionError."""
        ...
