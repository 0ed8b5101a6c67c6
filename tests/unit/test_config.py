"""Tests for runtime settings and the project file loader."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from shipforge.config import ShipforgeSettings
from shipforge.loader import ModelLoadError, load_context, load_model
from shipforge.models import PlatformFilter, SyftFormat

PROJECT_TOML = """
output_directory = "target/release"

[project]
name = "app"
version = "1.2.3"

[[files]]
path = "build/app-{{projectVersion}}.zip"
extra_properties = { individualChecksum = true }

[[distributions]]
name = "cli"
extra_properties = { skipSbomSyft = true }

[[distributions.artifacts]]
path = "build/cli-{{platform}}.tar.gz"
platform = "linux-x86_64"

[checksum]
algorithms = ["sha256", "sha512"]

[catalog.sbom.syft]
enabled = true
formats = ["spdx-json"]

[[uploaders]]
name = "mirror"
catalogs = false
"""


class TestShipforgeSettings:
    def test_defaults(self):
        config = ShipforgeSettings()
        assert config.log_level == "INFO"
        assert config.fail_fast is False
        assert config.config_file == Path("shipforge.toml")
        assert config.syft_executable == "syft"

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("SHIPFORGE_FAIL_FAST", "true")
        monkeypatch.setenv("SHIPFORGE_SYFT_EXECUTABLE", "/opt/syft/bin/syft")
        monkeypatch.setenv("SHIPFORGE_TOOL_TIMEOUT_SECONDS", "30")
        config = ShipforgeSettings()
        assert config.fail_fast is True
        assert config.syft_executable == "/opt/syft/bin/syft"
        assert config.tool_timeout_seconds == 30


class TestLoadModel:
    def test_toml(self, tmp_path):
        path = tmp_path / "shipforge.toml"
        path.write_text(PROJECT_TOML)

        model = load_model(path)

        assert model.project.version == "1.2.3"
        assert model.output_directory == Path("target/release")
        assert model.files[0].extra_property_is_true("individualChecksum")
        assert model.distributions[0].artifacts[0].platform == "linux-x86_64"
        assert model.catalog.sbom.syft.formats == [SyftFormat.SPDX_JSON]
        assert model.find_target("mirror").catalogs is False

    def test_json(self, tmp_path):
        path = tmp_path / "shipforge.json"
        path.write_text(json.dumps({"project": {"name": "app", "version": "1"}}))
        assert load_model(path).project.name == "app"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ModelLoadError, match="Cannot read"):
            load_model(tmp_path / "nope.toml")

    def test_malformed_toml(self, tmp_path):
        path = tmp_path / "shipforge.toml"
        path.write_text("[project\nname=")
        with pytest.raises(ModelLoadError, match="Malformed"):
            load_model(path)

    def test_invalid_model(self, tmp_path):
        path = tmp_path / "shipforge.toml"
        path.write_text('[project]\nname = "app"\n')
        with pytest.raises(ModelLoadError, match="Invalid project file"):
            load_model(path)

    def test_json_must_be_object(self, tmp_path):
        path = tmp_path / "shipforge.json"
        path.write_text("[1, 2]")
        with pytest.raises(ModelLoadError, match="top level"):
            load_model(path)


class TestLoadContext:
    def test_basedir_defaults_to_file_directory(self, tmp_path):
        path = tmp_path / "shipforge.toml"
        path.write_text(PROJECT_TOML)

        ctx = load_context(path, platform_filter=PlatformFilter(selected=["osx"]))

        assert ctx.basedir == tmp_path.resolve()
        assert ctx.output_directory == tmp_path.resolve() / "target/release"
        assert ctx.checksums_directory.name == "checksums"
        assert not ctx.model.distributions[0].artifacts[0].is_selected(ctx)

    def test_explicit_basedir(self, tmp_path):
        path = tmp_path / "conf" / "shipforge.toml"
        path.parent.mkdir()
        path.write_text(PROJECT_TOML)
        ctx = load_context(path, basedir=tmp_path)
        assert ctx.basedir == tmp_path.resolve()
