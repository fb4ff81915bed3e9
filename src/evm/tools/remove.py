"""remove tool -- delete an installed version that is not active."""

from __future__ import annotations

from typing import TYPE_CHECKING

from evm.errors import NotInstalledError, VersionInUseError
from evm.models import RemoveResult
from evm.settings import check_version

if TYPE_CHECKING:
    from evm.app import AppContext


def remove_version(app: AppContext, version: str) -> RemoveResult:
    """Delete *version*'s directory.

    The active version can never be removed; activate another one first.
    The active link is not touched.
    """
    check_version(version)
    repo = app.repository
    if not repo.is_installed(version):
        raise NotInstalledError(f"Version {version} is not installed.")

    if repo.current_version() == version:
        raise VersionInUseError(
            f"Version {version} is in use. Switch with 'evm use <version>' before removing it."
        )

    path = repo.delete(version)
    return RemoveResult(version=version, path=str(path))
