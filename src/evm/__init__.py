"""evm: install, switch, and run Elasticsearch versions side by side."""

from __future__ import annotations

from importlib import metadata

DISTRIBUTION = "evm"
UNRELEASED_VERSION = "0.0.0+local"


def package_version() -> str:
    """Version of the installed distribution; a local marker when running from a checkout."""
    try:
        return metadata.version(DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return UNRELEASED_VERSION


__version__ = package_version()


def main() -> None:
    """Entry point for the `evm` CLI."""
    from evm.cli import run_cli

    raise SystemExit(run_cli())
