"""jdk-resolver - Resolve JDK version requests across release catalogs and install them.

Public API:
- parse_version / VersionSpec: "17", "17.0.5", "8u352", "1.8.0_352-b09" → (major, minor, patch)
- catalogs: Adoptium, Azul, Liberica and a private endpoint, normalized to ReleaseEntry
- match / rank: partial-version matching, per-major recommendation, best-of selection
- extract / normalize: traversal-safe .zip and .tar.gz extraction, nested-folder flattening
- install: the whole pipeline, returning the installation root

This is library mechanism; apps inject policy (versions directory, provider, config).
"""

from .catalogs import PROVIDERS
from .catalogs import CatalogFetchResult
from .catalogs import fetch_all_catalogs
from .catalogs import fetch_catalog
from .catalogs import get_adapter
from .config import ResolverConfig
from .exceptions import AmbiguousReleaseError
from .exceptions import ConfigError
from .exceptions import ExtractionError
from .exceptions import LayoutError
from .exceptions import NetworkError
from .exceptions import NoMatchError
from .exceptions import ParseError
from .exceptions import ResolverError
from .exceptions import UnsupportedFormatError
from .extractor import ExtractionResult
from .extractor import extract_archive
from .host import HostPlatform
from .host import detect_host
from .installer import install
from .installer import install_archive
from .installer import install_release
from .installer import resolve_release
from .layout import looks_like_installation
from .layout import normalize_layout
from .matcher import filter_for_platform
from .matcher import match_candidates
from .matcher import select_release
from .protocols import CatalogAdapter
from .ranking import filter_entries
from .ranking import latest_release
from .ranking import recommend_per_major
from .ranking import select_best
from .resolver import InstalledReleaseResolver
from .schema import ReleaseEntry
from .version import VersionSpec
from .version import is_lts_version
from .version import parse_version

__all__ = [
    # Versions
    "VersionSpec",
    "parse_version",
    "is_lts_version",
    # Catalogs
    "ReleaseEntry",
    "CatalogAdapter",
    "CatalogFetchResult",
    "PROVIDERS",
    "get_adapter",
    "fetch_catalog",
    "fetch_all_catalogs",
    # Matching and ranking
    "match_candidates",
    "filter_for_platform",
    "select_release",
    "recommend_per_major",
    "select_best",
    "latest_release",
    "filter_entries",
    # Installation
    "ExtractionResult",
    "extract_archive",
    "looks_like_installation",
    "normalize_layout",
    "resolve_release",
    "install_archive",
    "install_release",
    "install",
    "InstalledReleaseResolver",
    # Platform and configuration
    "HostPlatform",
    "detect_host",
    "ResolverConfig",
    # Exceptions
    "ResolverError",
    "ParseError",
    "NetworkError",
    "NoMatchError",
    "AmbiguousReleaseError",
    "ExtractionError",
    "UnsupportedFormatError",
    "LayoutError",
    "ConfigError",
]

__version__ = "0.1.0"
