"""Tests for the Pydantic models — validation, immutability, defaults."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from shipforge.models import (
    Algorithm,
    Artifact,
    Asset,
    AssetKind,
    ChecksumConfig,
    CyclonedxFormat,
    Distribution,
    PlatformFilter,
    ReleaseModel,
    SbomConfig,
    SigningConfig,
    SigningMode,
    SyftFormat,
)
from shipforge.models.artifacts import is_true
from shipforge.models.config import CyclonedxCatalogerConfig, SyftCatalogerConfig


class TestFlags:
    @pytest.mark.parametrize("value", [True, "true", "TRUE", "yes", "1", 1])
    def test_truthy(self, value):
        assert is_true(value)

    @pytest.mark.parametrize("value", [False, None, "false", "no", "", 0, []])
    def test_falsy(self, value):
        assert not is_true(value)


class TestPlatformFilter:
    def test_no_platform_always_selected(self):
        assert PlatformFilter(selected=["osx"], rejected=["linux"]).accepts("")

    def test_empty_filter_accepts_everything(self):
        assert PlatformFilter().accepts("linux-x86_64")

    def test_selected_matches_os_prefix(self):
        f = PlatformFilter(selected=["linux"])
        assert f.accepts("linux-x86_64")
        assert f.accepts("linux")
        assert not f.accepts("linuxish")
        assert not f.accepts("osx-aarch_64")

    def test_rejected_wins(self):
        f = PlatformFilter(selected=["linux"], rejected=["linux-aarch_64"])
        assert f.accepts("linux-x86_64")
        assert not f.accepts("linux-aarch_64")


class TestArtifact:
    def test_frozen(self):
        artifact = Artifact(path="a.zip")
        with pytest.raises(ValidationError):
            artifact.path = "b.zip"

    def test_effective_path_substitutes_tokens(self, make_context, project_dir):
        ctx = make_context()
        artifact = Artifact(
            path="out/{{projectName}}-{{projectVersion}}-{{platform}}.zip",
            platform="linux-x86_64",
        )
        assert artifact.effective_path(ctx) == project_dir / "out/app-1.0.0-linux-x86_64.zip"

    def test_effective_path_distribution_token(self, make_context, project_dir):
        ctx = make_context()
        dist = Distribution(name="cli")
        artifact = Artifact(path="build/{{distributionName}}.tar")
        assert artifact.effective_path(ctx, dist) == project_dir / "build/cli.tar"

    def test_absolute_path_kept(self, make_context, tmp_path):
        ctx = make_context()
        target = (tmp_path / "elsewhere.zip").resolve()
        assert Artifact(path=str(target)).effective_path(ctx) == target

    def test_selection_follows_platform_filter(self, make_context):
        ctx = make_context(platform_filter=PlatformFilter(selected=["osx"]))
        assert not Artifact(path="a", platform="linux-x86_64").is_active_and_selected(ctx)
        assert Artifact(path="a", platform="osx-x86_64").is_active_and_selected(ctx)
        assert not Artifact(path="a", active=False).is_active_and_selected(ctx)

    def test_optional_flag(self):
        assert Artifact(path="a", extra_properties={"optional": "true"}).is_optional
        assert not Artifact(path="a").is_optional


class TestAsset:
    def test_equality_by_effective_path(self, tmp_path):
        path = tmp_path / "app.zip"
        assert Asset.file(path) == Asset.checksum(path)
        assert hash(Asset.file(path)) == hash(Asset.signature(path))

    def test_sort_by_filename(self, tmp_path):
        b = Asset.file(tmp_path / "a" / "b.zip")
        a = Asset.file(tmp_path / "z" / "a.zip")
        assert sorted([b, a]) == [a, b]

    def test_factories_set_kind(self, tmp_path):
        assert Asset.catalog(tmp_path / "x").kind == AssetKind.CATALOG
        assert Asset.file(tmp_path / "x").artifact.path == str((tmp_path / "x").resolve())


class TestConfig:
    def test_algorithm_hashlib_names(self):
        assert Algorithm.SHA3_256.hashlib_name == "sha3_256"
        assert Algorithm.SHA_256.hashlib_name == "sha256"

    def test_checksum_manifest_name(self):
        assert ChecksumConfig().resolved_name(Algorithm.SHA_512) == "checksums_sha512.txt"

    @pytest.mark.parametrize(
        "config, expected",
        [
            (SigningConfig(), ".asc"),
            (SigningConfig(armored=False), ".sig"),
            (SigningConfig(mode=SigningMode.KEYLESS), ".sig"),
            (SigningConfig(signature_extension=".minisig"), ".minisig"),
        ],
    )
    def test_signature_extension(self, config, expected):
        assert config.resolved_signature_extension == expected

    def test_format_extensions(self):
        assert SyftFormat.SPDX_JSON.extension == ".spdx.json"
        assert SyftFormat.SPDX_TAG_VALUE.extension == ".spdx"
        assert CyclonedxFormat.XML.extension == ".cdx.xml"

    def test_active_catalogers_in_declaration_order(self):
        sbom = SbomConfig(
            syft=SyftCatalogerConfig(enabled=True),
            cyclonedx=CyclonedxCatalogerConfig(enabled=True),
        )
        assert sbom.active_cataloger_types() == ["cyclonedx", "syft"]
        assert SbomConfig(enabled=False, syft=SyftCatalogerConfig(enabled=True)).active_cataloger_types() == []

    def test_release_model_from_dict(self):
        model = ReleaseModel.model_validate(
            {
                "project": {"name": "app", "version": "2.0"},
                "distributions": [{"name": "cli", "active": False}],
                "uploaders": [{"name": "mirror", "signatures": False}],
            }
        )
        assert model.active_distributions == []
        assert model.find_target("mirror").signatures is False
        assert model.find_target("release") is model.release
        assert model.find_target("nope") is None
        assert model.output_directory == Path("out/shipforge")
