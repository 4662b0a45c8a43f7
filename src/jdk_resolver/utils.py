"""Archive-format and download-URL helpers.

Shared by the release schema (is an entry downloadable?), the extractor
(which reader to use) and the installer (where to save the download).
"""

import logging
import os
from urllib.parse import unquote
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

ZIP = "zip"
TAR_GZ = "tar.gz"

SUPPORTED_FORMATS = (ZIP, TAR_GZ)


def filename_from_url(url: str) -> str:
    """Extract the file name from a download URL.

    Query strings and fragments are dropped, percent-escapes decoded. Encoded
    separators ("%2F", "%5C") are decoded before the last segment is taken, so
    the result never contains a path separator.

    Args:
        url: Download URL

    Returns:
        Last path segment, or an empty string when the URL has no usable name

    Examples:
        >>> filename_from_url("https://example.com/jdk/OpenJDK17U-jdk_x64_linux.tar.gz?raw=1")
        'OpenJDK17U-jdk_x64_linux.tar.gz'
    """
    path = unquote(urlparse(url).path).replace("\\", "/")
    name = path.rsplit("/", 1)[-1]
    if name in (".", ".."):
        return ""
    return name


def detect_archive_format(name: str) -> str | None:
    """Detect archive format from a file name or URL suffix.

    Args:
        name: File name, path or URL

    Returns:
        "zip", "tar.gz", or None when the suffix is not supported
    """
    if "://" in name:
        name = filename_from_url(name)
    lowered = name.lower()
    if lowered.endswith(".zip"):
        return ZIP
    if lowered.endswith(".tar.gz"):
        return TAR_GZ
    return None


def release_dir_name(raw_version: str) -> str:
    """Directory name for an installed release (the resolved version string).

    Path separators are replaced so the name always stays a single component.
    """
    name = raw_version.strip().replace("/", "_").replace("\\", "_")
    if name in ("", ".", ".."):
        logger.warning(f"Unusable version string for a directory name: {raw_version!r}")
        return "release"
    return name


def is_within_directory(directory: str, target: str) -> bool:
    """Check that target lies inside directory (both absolute and normalized)."""
    try:
        return os.path.commonpath([directory, target]) == directory
    except ValueError:
        # Different drives on Windows
        return False
