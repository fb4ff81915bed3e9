"""Locate the plugin manager shipped with the active version.

5.x ships ``bin/elasticsearch-plugin`` with plain subcommands. Older
releases ship ``bin/plugin`` whose subcommands are ``--``-prefixed flags.
The modern tool wins when both are present.
"""

from __future__ import annotations

import logging
from pathlib import Path

from evm.errors import PluginToolMissingError
from evm.models import PluginCommandShape, PluginGeneration, PluginTool

logger = logging.getLogger(__name__)

MODERN_SHAPE = PluginCommandShape(
    generation=PluginGeneration.MODERN,
    relative_path="bin/elasticsearch-plugin",
    list_token="list",
    install_token="install",
    remove_token="remove",
)

LEGACY_SHAPE = PluginCommandShape(
    generation=PluginGeneration.LEGACY,
    relative_path="bin/plugin",
    list_token="--list",
    install_token="--install",
    remove_token="--remove",
)

_PROBE_ORDER: tuple[PluginCommandShape, ...] = (MODERN_SHAPE, LEGACY_SHAPE)


def detect_plugin_tool(install_root: Path) -> PluginTool:
    """Return the first plugin manager found under *install_root*.

    Raises:
        PluginToolMissingError: If neither generation is present.
    """
    for shape in _PROBE_ORDER:
        candidate = install_root / shape.relative_path
        if candidate.is_file():
            logger.debug("Using %s plugin tool at %s", shape.generation.value, candidate)
            return PluginTool(path=str(candidate), shape=shape)

    expected = " or ".join(shape.relative_path for shape in _PROBE_ORDER)
    raise PluginToolMissingError(
        f"No plugin manager found in {install_root} (looked for {expected})."
    )
