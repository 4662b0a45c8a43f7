"""Release schema - Normalized release entries and per-provider catalog records.

Each provider's JSON shape gets its own model with a to_entries() method that
converges on ReleaseEntry. Call sites only ever see ReleaseEntry.
"""

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from .host import UNKNOWN
from .host import normalize_arch
from .host import normalize_os
from .utils import detect_archive_format
from .utils import filename_from_url
from .version import LTS_MAJORS
from .version import VersionSpec
from .version import is_lts_version
from .version import parse_version


class ReleaseEntry(BaseModel):
    """One downloadable release from one catalog, provider-agnostic (immutable).

    Uniquely identified by (provider, raw_version, os, arch).
    """

    model_config = ConfigDict(frozen=True)

    raw_version: str
    spec: VersionSpec
    os: str
    arch: str
    is_lts: bool = False
    download_url: str = ""
    provider: str

    @property
    def key(self) -> tuple[str, str, str, str]:
        return (self.provider, self.raw_version, self.os, self.arch)

    @property
    def major(self) -> int:
        return self.spec.major

    @property
    def minor(self) -> int:
        return self.spec.minor or 0

    @property
    def patch(self) -> int:
        return self.spec.patch or 0

    @property
    def archive_format(self) -> str | None:
        return detect_archive_format(self.download_url) if self.download_url else None

    @property
    def filename(self) -> str:
        return filename_from_url(self.download_url)

    @property
    def is_downloadable(self) -> bool:
        """True when the entry has a download URL in a supported archive format."""
        return bool(self.download_url) and self.archive_format is not None


class _CatalogRecord(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


# Provider A: Eclipse Adoptium


class AdoptiumPackage(_CatalogRecord):
    link: str = ""


class AdoptiumBinary(_CatalogRecord):
    os: str = ""
    architecture: str = ""
    package: AdoptiumPackage = Field(default_factory=AdoptiumPackage)


class AdoptiumVersionData(_CatalogRecord):
    openjdk_version: str


class AdoptiumRelease(_CatalogRecord):
    """Feature-release record: one version, many platform binaries."""

    binaries: list[AdoptiumBinary] = Field(default_factory=list)
    version_data: AdoptiumVersionData

    def to_entries(self, provider: str = "adoptium") -> list[ReleaseEntry]:
        """One entry per binary.

        Raises:
            ParseError: If openjdk_version cannot be parsed
        """
        version = self.version_data.openjdk_version
        spec = parse_version(version, concrete=True)
        lts = is_lts_version(version)
        return [
            ReleaseEntry(
                raw_version=version,
                spec=spec,
                os=normalize_os(binary.os),
                arch=normalize_arch(binary.architecture),
                is_lts=lts,
                download_url=binary.package.link,
                provider=provider,
            )
            for binary in self.binaries
        ]


# Provider B: Azul Zulu


def infer_platform(name: str) -> tuple[str, str]:
    """Infer (os, arch) from an Azul package name.

    Example:
        >>> infer_platform("zulu17.44.53-ca-jdk17.0.8.1-win_x64.zip")
        ('windows', 'x64')
    """
    lowered = name.lower()
    os_name = UNKNOWN
    for token, value in (("win_", "windows"), ("linux_", "linux"), ("macosx_", "mac"), ("macos_", "mac")):
        if token in lowered:
            os_name = value
            break

    arch = UNKNOWN
    arch_tokens = (
        ("_x64", "x64"),
        ("_aarch64", "aarch64"),
        ("_arm64", "aarch64"),
        ("_i686", "x32"),
        ("_x86", "x32"),
        ("_arm", "arm"),
    )
    for token, value in arch_tokens:
        if token in lowered:
            arch = value
            break
    return os_name, arch


class AzulPackage(_CatalogRecord):
    """Flat package record with an integer-array version."""

    name: str = ""
    java_version: list[int] = Field(default_factory=list)
    download_url: str = ""
    latest: bool = False

    @property
    def version_string(self) -> str:
        return ".".join(str(n) for n in self.java_version)

    def to_entries(self, provider: str = "azul") -> list[ReleaseEntry]:
        """Single entry; platform inferred from the package name.

        Raises:
            ParseError: If java_version is empty
        """
        spec = parse_version(self.version_string, concrete=True)
        os_name, arch = infer_platform(self.name)
        return [
            ReleaseEntry(
                raw_version=self.version_string,
                spec=spec,
                os=os_name,
                arch=arch,
                is_lts=spec.major in LTS_MAJORS,
                download_url=self.download_url,
                provider=provider,
            )
        ]


# Provider C: BellSoft Liberica


class LibericaRelease(_CatalogRecord):
    """Flat record with plain-string version and platform fields."""

    version: str
    os: str = ""
    architecture: str = ""
    bitness: int | None = None
    download_url: str = Field(default="", alias="downloadUrl")
    lts: bool | None = Field(default=None, alias="LTS")

    def to_entries(self, provider: str = "liberica") -> list[ReleaseEntry]:
        """Single entry; 64-bit "x86" is reported as x64.

        Raises:
            ParseError: If version cannot be parsed
        """
        spec = parse_version(self.version, concrete=True)
        arch = normalize_arch(self.architecture)
        if arch == "x32" and self.bitness == 64:
            arch = "x64"
        elif arch == "arm" and self.bitness == 64:
            arch = "aarch64"
        return [
            ReleaseEntry(
                raw_version=self.version,
                spec=spec,
                os=normalize_os(self.os),
                arch=arch,
                is_lts=bool(self.lts) or is_lts_version(self.version),
                download_url=self.download_url,
                provider=provider,
            )
        ]


# Provider D: user-configured private catalog


class PrivateRelease(_CatalogRecord):
    """Record served by a private catalog endpoint."""

    version: str
    download_url: str = Field(default="", alias="download")
    os: str = ""
    arch: str = ""
    lts: bool = False

    def to_entries(self, provider: str = "private") -> list[ReleaseEntry]:
        """Single entry with the catalog's own LTS flag.

        Raises:
            ParseError: If version cannot be parsed
        """
        spec = parse_version(self.version, concrete=True)
        return [
            ReleaseEntry(
                raw_version=self.version,
                spec=spec,
                os=normalize_os(self.os),
                arch=normalize_arch(self.arch),
                is_lts=self.lts,
                download_url=self.download_url,
                provider=provider,
            )
        ]


CatalogRecord = AdoptiumRelease | AzulPackage | LibericaRelease | PrivateRelease
