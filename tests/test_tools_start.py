"""Tests for the start tool (tools/start.py)."""

from __future__ import annotations

from pathlib import Path

import pytest
from conftest import install_on_disk

from evm.app import AppContext
from evm.errors import InvalidConfigPathError, NotInstalledError
from evm.tools.start import build_start_command, config_path_flag


class TestBuildStartCommand:
    def test_binary_only(self, fs_app: AppContext):
        install_on_disk(fs_app.settings, "5.3.1")
        fs_app.repository.activate("5.3.1")

        assert build_start_command(fs_app) == [
            str(fs_app.settings.link_path / "bin" / "elasticsearch")
        ]

    def test_config_path_appends_flag(self, fs_app: AppContext, tmp_path: Path):
        install_on_disk(fs_app.settings, "5.3.1")
        fs_app.repository.activate("5.3.1")
        conf = tmp_path / "conf"
        conf.mkdir()

        cmd = build_start_command(fs_app, str(conf))

        assert cmd[1] == f"-Epath.conf={conf.resolve()}"

    def test_legacy_config_flag(self, fs_app: AppContext, tmp_path: Path):
        install_on_disk(fs_app.settings, "1.7.3")
        fs_app.repository.activate("1.7.3")

        cmd = build_start_command(fs_app, str(tmp_path))

        assert cmd[1] == f"-Des.path.conf={tmp_path.resolve()}"

    def test_nonexistent_config_path(self, fs_app: AppContext):
        install_on_disk(fs_app.settings, "5.3.1")
        fs_app.repository.activate("5.3.1")

        with pytest.raises(InvalidConfigPathError):
            build_start_command(fs_app, "/nonexistent")

    def test_config_path_must_be_directory(self, fs_app: AppContext, tmp_path: Path):
        install_on_disk(fs_app.settings, "5.3.1")
        fs_app.repository.activate("5.3.1")
        afile = tmp_path / "elasticsearch.yml"
        afile.write_text("cluster.name: dev\n")

        with pytest.raises(InvalidConfigPathError):
            build_start_command(fs_app, str(afile))

    def test_no_active_version(self, fs_app: AppContext):
        with pytest.raises(NotInstalledError):
            build_start_command(fs_app)

    def test_active_binary_missing(self, fs_app: AppContext):
        install_on_disk(fs_app.settings, "5.3.1", with_binary=False)
        fs_app.repository.activate("5.3.1")

        with pytest.raises(NotInstalledError):
            build_start_command(fs_app)


class TestConfigPathFlag:
    @pytest.mark.parametrize(
        ("version", "prefix"),
        [("1.7.3", "-Des.path.conf="), ("2.4.0", "-Des.path.conf="), ("5.3.1", "-Epath.conf=")],
    )
    def test_by_family(self, version: str, prefix: str):
        assert config_path_flag(version, Path("/etc/es")) == f"{prefix}/etc/es"
