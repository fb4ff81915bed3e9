"""Exception hierarchy for evm.

All exceptions inherit from EvmError (single catch point).
Messages are printed to the terminal as-is -- clear, actionable, no stack traces.
"""

from __future__ import annotations


class EvmError(Exception):
    """Base exception for all evm errors."""


class UnknownVersionError(EvmError):
    """The requested version cannot be downloaded."""


class UnknownVersionFamilyError(UnknownVersionError):
    """The version's leading component matches no known download scheme."""


class ArtifactNotFoundError(UnknownVersionError):
    """The download server does not have an archive for this version."""


class AlreadyInstalledError(EvmError):
    """The version is already installed."""


class NotInstalledError(EvmError):
    """The version (or any active version) is not installed."""


class VersionInUseError(EvmError):
    """Attempted to remove the active version."""


class InvalidConfigPathError(EvmError):
    """The --config-path option does not name an existing directory."""


class PluginToolMissingError(EvmError):
    """The active version ships no known plugin manager."""


class InvalidOptionError(EvmError):
    """Bad command-line option, missing argument, or unknown plugin mode."""


class DownloadError(EvmError):
    """Transferring the version archive failed."""


class ExtractionError(EvmError):
    """Unpacking the version archive failed."""


class ManagedHomeError(EvmError):
    """The managed home holds something evm did not create."""


class LaunchError(EvmError):
    """The server binary or plugin tool could not be executed."""
