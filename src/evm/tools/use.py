"""use tool -- switch the active version."""

from __future__ import annotations

from typing import TYPE_CHECKING

from evm.settings import check_version

if TYPE_CHECKING:
    from evm.app import AppContext


def use_version(app: AppContext, version: str) -> str:
    """Make *version* the active version. Raises InvalidOptionError, NotInstalledError."""
    app.repository.activate(check_version(version))
    return version
