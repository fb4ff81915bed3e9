"""tar-based archive extractor."""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path

from evm.errors import ExtractionError
from evm.process import run_command


@dataclass(frozen=True, slots=True)
class TarExtractor:
    """Unpacks .tar.gz archives with the system tar."""

    timeout: float = 600.0

    async def is_available(self) -> bool:
        return shutil.which("tar") is not None

    async def extract(self, archive: Path, destination: Path) -> None:
        if not await self.is_available():
            raise ExtractionError("tar is not installed. Install it and re-run the command.")

        returncode, stdout, stderr = await run_command(
            ["tar", "-xzf", str(archive), "-C", str(destination)],
            timeout=self.timeout,
        )
        if returncode != 0:
            raise ExtractionError(
                f"Failed to extract {archive}: {stderr or stdout or f'exit code {returncode}'}. "
                "The archive was kept; delete it to force a fresh download."
            )
