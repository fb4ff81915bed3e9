"""start tool -- validate and build the server command line."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from evm.download.resolver import version_family
from evm.errors import InvalidConfigPathError, NotInstalledError

if TYPE_CHECKING:
    from evm.app import AppContext

# 1.x and 2.x take JVM-style system properties; 5.x introduced -E settings.
_LEGACY_CONFIG_FAMILIES = frozenset({"1", "2"})


def config_path_flag(version: str | None, config_dir: Path) -> str:
    """Return the flag that points the server at *config_dir*."""
    if version is not None and version_family(version) in _LEGACY_CONFIG_FAMILIES:
        return f"-Des.path.conf={config_dir}"
    return f"-Epath.conf={config_dir}"


def build_start_command(app: AppContext, config_path: str | None = None) -> list[str]:
    """Return the argv that launches the active server.

    Everything is validated here, before any process hand-off.

    Raises:
        NotInstalledError: No active version with a server binary.
        InvalidConfigPathError: *config_path* is not an existing directory.
    """
    repo = app.repository
    if not repo.active_binary_exists():
        raise NotInstalledError("No active Elasticsearch version. Run 'evm install <version>'.")

    cmd = [str(repo.active_binary())]
    if config_path is not None:
        config_dir = Path(config_path).expanduser()
        if not config_dir.is_dir():
            raise InvalidConfigPathError(f"Config path {config_path} is not a directory.")
        cmd.append(config_path_flag(repo.current_version(), config_dir.resolve()))
    return cmd
