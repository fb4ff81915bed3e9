"""install tool -- download, unpack and (on first install) activate a version."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from evm.errors import AlreadyInstalledError, ExtractionError
from evm.models import InstallResult
from evm.settings import check_version, ensure_home

if TYPE_CHECKING:
    from evm.app import AppContext

logger = logging.getLogger(__name__)


async def install_version(app: AppContext, version: str) -> InstallResult:
    """Install an Elasticsearch version into the managed home.

    Steps:
    1. Refuse if the version directory already exists (no network call)
    2. Resolve and confirm the download URL
    3. Download the archive, reusing one left by an earlier attempt
    4. Extract it, then delete the archive
    5. Activate the new version if no working version is active

    A failed extraction keeps the archive so a re-run can skip the download.

    Raises:
        InvalidOptionError, AlreadyInstalledError, UnknownVersionError, DownloadError,
        ExtractionError.
    """
    check_version(version)
    repo = app.repository
    settings = app.settings

    if repo.is_installed(version):
        raise AlreadyInstalledError(
            f"Version {version} is already installed at {repo.version_path(version)}."
        )

    url = await app.resolver.resolve(version)

    home = ensure_home(settings)
    archive = settings.archive_path(version)
    downloaded = await app.fetcher.fetch(url, archive)

    logger.info("Extracting %s into %s", archive, home)
    await app.extractor.extract(archive, home)
    archive.unlink(missing_ok=True)

    if not repo.is_installed(version):
        raise ExtractionError(
            f"Archive for {version} did not contain {settings.version_dir(version).name}/."
        )

    activated = False
    if not repo.active_binary_exists():
        repo.activate(version)
        activated = True

    return InstallResult(
        version=version,
        url=url,
        path=str(repo.version_path(version)),
        activated=activated,
        downloaded=downloaded,
    )
