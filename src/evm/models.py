"""Domain models for evm. All frozen dataclasses -- no mutation after creation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

# ─── Enumerations ─────────────────────────────────────────────


class PluginMode(StrEnum):
    LIST = "list"
    INSTALL = "install"
    REMOVE = "remove"


class PluginGeneration(StrEnum):
    MODERN = "modern"
    LEGACY = "legacy"


# ─── Version Models ───────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class InstalledVersion:
    """A version directory under the managed home."""

    version: str
    path: str
    active: bool = False


# ─── Plugin Models ────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class PluginCommandShape:
    """Argument layout of one plugin-manager generation.

    Each field is the literal token the tool expects for that mode;
    install/remove tokens are followed by the plugin name.
    """

    generation: PluginGeneration
    relative_path: str
    list_token: str
    install_token: str
    remove_token: str

    def arguments(self, mode: PluginMode, name: str = "") -> list[str]:
        match mode:
            case PluginMode.LIST:
                return [self.list_token]
            case PluginMode.INSTALL:
                return [self.install_token, name]
            case PluginMode.REMOVE:
                return [self.remove_token, name]


@dataclass(frozen=True, slots=True)
class PluginTool:
    """A plugin-manager executable found inside the active version."""

    path: str
    shape: PluginCommandShape

    def command(self, mode: PluginMode, name: str = "") -> list[str]:
        return [self.path, *self.shape.arguments(mode, name)]


# ─── Tool Return Models ───────────────────────────────────────


@dataclass(frozen=True, slots=True)
class InstallResult:
    version: str
    url: str
    path: str
    activated: bool
    downloaded: bool = True


@dataclass(frozen=True, slots=True)
class RemoveResult:
    version: str
    path: str
