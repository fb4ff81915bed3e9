"""list and which tools -- inspect installed versions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from evm.models import InstalledVersion

if TYPE_CHECKING:
    from evm.app import AppContext


def current_version(app: AppContext) -> str | None:
    """Return the active version, or None if no version was ever activated."""
    return app.repository.current_version()


def list_versions(app: AppContext) -> list[InstalledVersion]:
    """List installed versions in reverse lexical order, flagging the active one.

    Ordering compares directory names as strings, so "5.9.0" lists before
    "5.10.0".
    """
    repo = app.repository
    active = repo.current_version()
    return [
        InstalledVersion(
            version=version,
            path=str(repo.version_path(version)),
            active=version == active,
        )
        for version in repo.installed_versions()
    ]
