"""Composition root: wires adapters for one command invocation."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx

from evm.download.base import ArchiveFetcherPort, DownloadResolverPort
from evm.download.fetcher import HttpArchiveFetcher
from evm.download.resolver import HttpDownloadResolver
from evm.home.base import VersionRepositoryPort
from evm.home.symlink import SymlinkVersionRepository
from evm.installer.base import ArchiveExtractorPort
from evm.installer.extractor import TarExtractor
from evm.settings import Settings


@dataclass(frozen=True, slots=True)
class AppContext:
    """Shared state for the command being run.

    Stateful adapters (network, filesystem, subprocess) are injected here.
    Pure helpers such as URL building and plugin-tool detection stay as
    direct module imports.
    """

    settings: Settings
    http_client: httpx.AsyncClient
    repository: VersionRepositoryPort
    resolver: DownloadResolverPort
    fetcher: ArchiveFetcherPort
    extractor: ArchiveExtractorPort


@asynccontextmanager
async def app_lifespan(settings: Settings) -> AsyncIterator[AppContext]:
    """Open the shared HTTP client and build the adapters around it.

    The transport is created without retries; a failed request is reported
    and the user re-runs the command.
    """
    async with httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout, connect=10.0),
        follow_redirects=True,
    ) as http_client:
        yield AppContext(
            settings=settings,
            http_client=http_client,
            repository=SymlinkVersionRepository(settings),
            resolver=HttpDownloadResolver(http_client),
            fetcher=HttpArchiveFetcher(http_client, timeout=settings.download_timeout),
            extractor=TarExtractor(timeout=settings.download_timeout),
        )
