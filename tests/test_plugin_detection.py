"""Tests for plugins/detection.py -- choosing the plugin-manager generation."""

from __future__ import annotations

from pathlib import Path

import pytest

from evm.errors import PluginToolMissingError
from evm.models import PluginGeneration, PluginMode
from evm.plugins.detection import LEGACY_SHAPE, MODERN_SHAPE, detect_plugin_tool


def _touch(root: Path, relative: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("#!/bin/sh\n")
    return path


class TestDetectPluginTool:
    def test_modern(self, tmp_path: Path):
        path = _touch(tmp_path, "bin/elasticsearch-plugin")

        tool = detect_plugin_tool(tmp_path)

        assert tool.shape.generation is PluginGeneration.MODERN
        assert tool.path == str(path)

    def test_legacy_fallback(self, tmp_path: Path):
        _touch(tmp_path, "bin/plugin")

        assert detect_plugin_tool(tmp_path).shape is LEGACY_SHAPE

    def test_modern_preferred_when_both_exist(self, tmp_path: Path):
        _touch(tmp_path, "bin/plugin")
        _touch(tmp_path, "bin/elasticsearch-plugin")

        assert detect_plugin_tool(tmp_path).shape is MODERN_SHAPE

    def test_missing(self, tmp_path: Path):
        (tmp_path / "bin").mkdir()

        with pytest.raises(PluginToolMissingError, match="bin/elasticsearch-plugin"):
            detect_plugin_tool(tmp_path)


class TestCommandShapes:
    @pytest.mark.parametrize(
        ("mode", "name", "modern", "legacy"),
        [
            (PluginMode.LIST, "", ["list"], ["--list"]),
            (PluginMode.INSTALL, "icu", ["install", "icu"], ["--install", "icu"]),
            (PluginMode.REMOVE, "icu", ["remove", "icu"], ["--remove", "icu"]),
        ],
    )
    def test_arguments(self, mode, name, modern, legacy):
        assert MODERN_SHAPE.arguments(mode, name) == modern
        assert LEGACY_SHAPE.arguments(mode, name) == legacy
