"""plugin tool -- forward plugin management to the active version's plugin manager."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from evm.errors import InvalidOptionError, NotInstalledError
from evm.models import PluginMode
from evm.plugins.detection import detect_plugin_tool
from evm.process import run_passthrough

if TYPE_CHECKING:
    from evm.app import AppContext

logger = logging.getLogger(__name__)

_NAMED_MODES = frozenset({PluginMode.INSTALL, PluginMode.REMOVE})


def build_plugin_command(app: AppContext, mode: str, name: str | None = None) -> list[str]:
    """Resolve the plugin manager and build its argv for *mode*.

    Raises:
        NotInstalledError: No active version with a server binary.
        PluginToolMissingError: The active version has no plugin manager.
        InvalidOptionError: Unknown mode, or install/remove without a name.
    """
    repo = app.repository
    if not repo.active_binary_exists():
        raise NotInstalledError("No active Elasticsearch version. Run 'evm install <version>'.")

    tool = detect_plugin_tool(repo.active_root())

    try:
        plugin_mode = PluginMode(mode)
    except ValueError:
        valid = ", ".join(m.value for m in PluginMode)
        raise InvalidOptionError(f"Unknown plugin mode '{mode}'. Use one of: {valid}.") from None

    if plugin_mode in _NAMED_MODES and not name:
        raise InvalidOptionError(f"Plugin {plugin_mode.value} requires a plugin name.")

    return tool.command(plugin_mode, name or "")


async def manage_plugins(app: AppContext, mode: str = "list", name: str | None = None) -> int:
    """Run the plugin manager and return its exit status unchanged."""
    cmd = build_plugin_command(app, mode, name)
    logger.info("Running plugin manager: %s", " ".join(cmd))
    return await run_passthrough(cmd)
