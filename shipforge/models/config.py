"""Release model — project, checksum, signing, catalog and target configuration.

Loaded from ``shipforge.toml`` (or ``shipforge.json``) by
``shipforge.loader.load_model``.  Every model is frozen.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from shipforge.models.artifacts import Artifact, Distribution


class ProjectInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    version: str


# ---------------------------------------------------------------------------
# Checksums
# ---------------------------------------------------------------------------


class Algorithm(str, Enum):
    """Supported digest algorithms; values are ``hashlib`` names."""

    MD5 = "md5"
    SHA_1 = "sha1"
    SHA_256 = "sha256"
    SHA_384 = "sha384"
    SHA_512 = "sha512"
    SHA3_256 = "sha3-256"
    SHA3_512 = "sha3-512"

    @property
    def hashlib_name(self) -> str:
        return self.value.replace("-", "_")


class ChecksumConfig(BaseModel):
    """Checksum policy.

    ``individual`` is the global default for per-artifact checksum files;
    artifacts and distributions may override it with ``individualChecksum``.
    """

    model_config = ConfigDict(frozen=True)

    algorithms: list[Algorithm] = [Algorithm.SHA_256]
    individual: bool = False
    files: bool = True
    artifacts: bool = True
    name: str = "checksums_{{algorithm}}.txt"

    def resolved_name(self, algorithm: Algorithm) -> str:
        """Filename of the consolidated manifest for *algorithm*."""
        return self.name.replace("{{algorithm}}", algorithm.value)


# ---------------------------------------------------------------------------
# Signing
# ---------------------------------------------------------------------------


class SigningMode(str, Enum):
    FILE = "file"
    MEMORY = "memory"
    COMMAND = "command"
    KEYLESS = "keyless"


class SigningConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    mode: SigningMode = SigningMode.FILE
    armored: bool = True
    signature_extension: str | None = None
    public_key_file: Path | None = None  # keyless only; relative to basedir

    @property
    def resolved_signature_extension(self) -> str:
        if self.signature_extension:
            return self.signature_extension
        if self.mode == SigningMode.KEYLESS:
            return ".sig"
        return ".asc" if self.armored else ".sig"


# ---------------------------------------------------------------------------
# SBOM catalogs
# ---------------------------------------------------------------------------


class SyftFormat(str, Enum):
    SYFT_JSON = "syft-json"
    CYCLONEDX_JSON = "cyclonedx-json"
    CYCLONEDX_XML = "cyclonedx-xml"
    SPDX_JSON = "spdx-json"
    SPDX_TAG_VALUE = "spdx-tag-value"
    GITHUB_JSON = "github-json"
    TABLE = "table"

    @property
    def extension(self) -> str:
        return _SYFT_EXTENSIONS[self]


_SYFT_EXTENSIONS: dict[SyftFormat, str] = {
    SyftFormat.SYFT_JSON: ".syft.json",
    SyftFormat.CYCLONEDX_JSON: ".cdx.json",
    SyftFormat.CYCLONEDX_XML: ".cdx.xml",
    SyftFormat.SPDX_JSON: ".spdx.json",
    SyftFormat.SPDX_TAG_VALUE: ".spdx",
    SyftFormat.GITHUB_JSON: ".github.json",
    SyftFormat.TABLE: ".txt",
}


class CyclonedxFormat(str, Enum):
    JSON = "json"
    XML = "xml"

    @property
    def extension(self) -> str:
        return f".cdx.{self.value}"


class PackConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    # Defaults to "{{projectName}}-{{projectVersion}}-<cataloger>-sboms"
    name: str | None = None


class SyftCatalogerConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    version: str = ""
    formats: list[SyftFormat] = [SyftFormat.SPDX_JSON, SyftFormat.CYCLONEDX_JSON]
    pack: PackConfig = PackConfig()


class CyclonedxCatalogerConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    version: str = ""
    formats: list[CyclonedxFormat] = [CyclonedxFormat.JSON, CyclonedxFormat.XML]
    pack: PackConfig = PackConfig()


class SbomConfig(BaseModel):
    """SBOM backends; declaration order is execution order."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    cyclonedx: CyclonedxCatalogerConfig = CyclonedxCatalogerConfig()
    syft: SyftCatalogerConfig = SyftCatalogerConfig()

    def cataloger_configs(
        self,
    ) -> dict[str, CyclonedxCatalogerConfig | SyftCatalogerConfig]:
        return {"cyclonedx": self.cyclonedx, "syft": self.syft}

    def active_cataloger_types(self) -> list[str]:
        if not self.enabled:
            return []
        return [t for t, c in self.cataloger_configs().items() if c.enabled]


class CatalogConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    sbom: SbomConfig = SbomConfig()


# ---------------------------------------------------------------------------
# Publish targets
# ---------------------------------------------------------------------------


class PublishTarget(BaseModel):
    """Activation flags of a release or upload target."""

    model_config = ConfigDict(frozen=True)

    name: str = "release"
    enabled: bool = True
    upload_assets: bool = True
    files: bool = True
    artifacts: bool = True
    checksums: bool = True
    signatures: bool = True
    catalogs: bool = True


# ---------------------------------------------------------------------------
# Root model
# ---------------------------------------------------------------------------


class ReleaseModel(BaseModel):
    """Everything the pipeline needs to know about one project release."""

    model_config = ConfigDict(frozen=True)

    project: ProjectInfo
    output_directory: Path = Path("out/shipforge")
    files: list[Artifact] = []
    distributions: list[Distribution] = []
    checksum: ChecksumConfig = ChecksumConfig()
    signing: SigningConfig = SigningConfig()
    catalog: CatalogConfig = CatalogConfig()
    release: PublishTarget = PublishTarget()
    uploaders: list[PublishTarget] = Field(default_factory=list)

    @property
    def active_distributions(self) -> list[Distribution]:
        return [d for d in self.distributions if d.active]

    def find_target(self, name: str) -> PublishTarget | None:
        if name == self.release.name:
            return self.release
        for uploader in self.uploaders:
            if uploader.name == name:
                return uploader
        return None
