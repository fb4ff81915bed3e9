"""Stream version archives to the managed home."""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from pathlib import Path

import httpx

from evm.errors import DownloadError

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1024 * 1024


class HttpArchiveFetcher:
    """Downloads an archive atomically: temp file in the same directory, then os.replace.

    An archive already present under the destination name is trusted and
    reused, which lets an interrupted install be re-run without a second
    transfer.
    """

    def __init__(self, http_client: httpx.AsyncClient, *, timeout: float = 600.0) -> None:
        self._http = http_client
        self._timeout = timeout

    async def fetch(self, url: str, destination: Path) -> bool:
        if destination.exists():
            logger.info("Reusing existing archive %s", destination)
            return False

        destination.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=str(destination.parent), prefix=f".{destination.name}.", suffix=".part"
        )
        try:
            with os.fdopen(fd, "wb") as out:
                await self._stream_to(url, out)
            os.replace(tmp_path, destination)
            tmp_path = None
        except httpx.HTTPError as exc:
            raise DownloadError(f"Failed to download {url}: {exc}") from exc
        except OSError as exc:
            raise DownloadError(f"Failed to write {destination}: {exc}") from exc
        finally:
            if tmp_path is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_path)

        logger.info("Downloaded %s to %s", url, destination)
        return True

    async def _stream_to(self, url: str, out) -> None:
        received = 0
        async with self._http.stream("GET", url, timeout=self._timeout) as resp:
            resp.raise_for_status()
            async for chunk in resp.aiter_bytes(_CHUNK_SIZE):
                out.write(chunk)
                received += len(chunk)
        logger.debug("Received %d bytes from %s", received, url)
