"""Runtime settings resolved from the environment.

Layout under the managed home:
  <home>/elasticsearch-<version>/        one directory per installed version
  <home>/elasticsearch                   symlink to the active version
  <home>/elasticsearch-<version>.tar.gz  download staging, removed after extraction
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from evm.errors import InvalidOptionError

logger = logging.getLogger(__name__)

PRODUCT = "elasticsearch"
HOME_ENV_VAR = "EVM_HOME"
LOG_LEVEL_ENV_VAR = "EVM_LOG_LEVEL"

_DEFAULT_PROGRAM = "evm"
_DEFAULT_LOG_LEVEL = "WARNING"
_ARCHIVE_SUFFIX = ".tar.gz"


@dataclass(frozen=True, slots=True)
class Settings:
    """Where evm keeps its state and how it talks to the network."""

    home: Path
    product: str = PRODUCT
    log_level: str = _DEFAULT_LOG_LEVEL
    http_timeout: float = 30.0
    download_timeout: float = 600.0

    @property
    def link_path(self) -> Path:
        return self.home / self.product

    @property
    def dir_prefix(self) -> str:
        return f"{self.product}-"

    def version_dir(self, version: str) -> Path:
        return self.home / f"{self.dir_prefix}{version}"

    def archive_path(self, version: str) -> Path:
        return self.home / f"{self.dir_prefix}{version}{_ARCHIVE_SUFFIX}"


def check_version(version: str) -> str:
    """Reject version arguments that would name a path outside the managed home.

    Raises:
        InvalidOptionError: Empty, dot-prefixed, or containing a path separator or "..".
    """
    if (
        not version
        or version.startswith(".")
        or "/" in version
        or "\\" in version
        or ".." in version
    ):
        raise InvalidOptionError(f"Invalid version '{version}'. Expected something like 5.3.1.")
    return version


def default_home(program: str | None = None) -> Path:
    """Return ``~/.<program>``, named after the invoked executable."""
    name = Path(program or sys.argv[0] or _DEFAULT_PROGRAM).name
    if not name or name.startswith("__"):
        name = _DEFAULT_PROGRAM
    return Path.home() / f".{name}"


def load_settings(
    program: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Build Settings from environment variables.

    Args:
        program: Name the tool was invoked as; selects the default home.
        environ: Environment mapping. Defaults to ``os.environ``.
    """
    env = os.environ if environ is None else environ
    override = env.get(HOME_ENV_VAR, "").strip()
    home = Path(override).expanduser() if override else default_home(program)
    log_level = env.get(LOG_LEVEL_ENV_VAR, "").strip().upper() or _DEFAULT_LOG_LEVEL
    return Settings(home=home, log_level=log_level)


def ensure_home(settings: Settings) -> Path:
    """Create the managed home on first use."""
    if not settings.home.is_dir():
        logger.info("Creating managed home at %s", settings.home)
        settings.home.mkdir(parents=True, exist_ok=True)
    return settings.home
