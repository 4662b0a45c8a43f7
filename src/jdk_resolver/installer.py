"""Release installation pipeline.

Mechanism not policy: the app decides where releases live (versions_dir),
which provider to ask and how progress is shown; the library resolves,
downloads, extracts and normalizes.

Process:
1. Fetch the provider catalog
2. Match the request, filter by platform, pick the best release
3. Download the archive into the versions directory
4. Extract into a staging directory and normalize its layout
5. Rename the staging directory into place
"""

import logging
import shutil
import tempfile
from pathlib import Path

from .catalogs import fetch_catalog
from .config import ResolverConfig
from .exceptions import ExtractionError
from .exceptions import LayoutError
from .exceptions import NoMatchError
from .exceptions import ResolverError
from .exceptions import UnsupportedFormatError
from .extractor import DIR_MODE
from .extractor import extract_archive
from .host import UNKNOWN
from .host import HostPlatform
from .host import detect_host
from .host import executable_name
from .http import ProgressCallback
from .http import download_file
from .layout import normalize_layout
from .matcher import select_release
from .schema import ReleaseEntry
from .utils import is_within_directory
from .utils import release_dir_name
from .version import parse_version

logger = logging.getLogger(__name__)


def resolve_release(request: str, entries: list[ReleaseEntry], host: HostPlatform | None = None) -> ReleaseEntry:
    """
    Resolve a user version request against catalog entries.

    Args:
        request: Version request ("17", "17.0", "17.0.5", "8u352", ...)
        entries: Catalog entries
        host: Target platform; detected when omitted

    Returns:
        The release to install

    Raises:
        ParseError: If the request is not a valid version
        NoMatchError: If no downloadable entry matches
    """
    spec = parse_version(request)
    return select_release(spec, entries, host=host)


def install_archive(
    archive_path: Path,
    versions_dir: Path,
    version: str,
    *,
    executable: str | None = None,
) -> Path:
    """
    Extract and normalize an archive that is already on disk.

    Used by install_release after the download, and by apps that re-extract a
    kept archive. The archive is extracted into a staging directory inside
    versions_dir and only renamed to versions_dir/<version> once the layout is
    valid. An earlier installation of the same version is moved aside first and
    deleted only after the new one is in place.

    Args:
        archive_path: Local .zip or .tar.gz archive
        versions_dir: Directory holding installed releases (app policy)
        version: Version string naming the installation directory
        executable: Launcher expected in bin/ (host default when omitted)

    Returns:
        Installation root (directly contains bin/ and lib/)

    Raises:
        UnsupportedFormatError: If the archive is not .zip or .tar.gz
        ExtractionError: If the archive is missing or cannot be extracted
        LayoutError: If no valid installation is found or it cannot be moved into place

    Example:
        >>> install_archive(Path("OpenJDK17U-jdk_x64_linux.tar.gz"), versions_dir, "17.0.5+8")
        PosixPath('/home/me/.jdks/versions/17.0.5+8')
    """
    executable = executable or detect_host().executable
    versions_dir.mkdir(parents=True, exist_ok=True)
    target = versions_dir / release_dir_name(version)

    staging = Path(tempfile.mkdtemp(prefix=f".{target.name}_", suffix="_extract", dir=versions_dir))
    previous = None
    try:
        extract_archive(archive_path, staging)
        root = normalize_layout(staging, executable)
        root.chmod(DIR_MODE)

        if target.exists():
            logger.info(f"Replacing existing installation at {target}")
            previous = versions_dir / f".{target.name}_replaced"
            if previous.exists():
                shutil.rmtree(previous)
            target.rename(previous)

        try:
            root.rename(target)
        except OSError:
            if previous is not None:
                previous.rename(target)
                previous = None
            raise

    except Exception as e:
        shutil.rmtree(staging, ignore_errors=True)
        if isinstance(e, ResolverError):
            raise
        raise LayoutError(f"Failed to move installation into {target}: {e}", context={"target": str(target)}) from e

    if previous is not None:
        shutil.rmtree(previous, ignore_errors=True)

    logger.info(f"Installed {archive_path.name} at {target}")
    return target


def _archive_path(entry: ReleaseEntry, versions_dir: Path, target_name: str) -> Path:
    name = entry.filename
    if not name or Path(name).name != name:
        name = f"{target_name}.{entry.archive_format}"
    archive_path = versions_dir / name

    if not is_within_directory(str(versions_dir.resolve()), str(archive_path.resolve())):
        raise ExtractionError(
            f"Refusing to download {entry.download_url} outside {versions_dir}",
            context={"url": entry.download_url, "destination": str(archive_path)},
        )
    return archive_path


def install_release(
    entry: ReleaseEntry,
    versions_dir: Path,
    *,
    executable: str | None = None,
    progress: ProgressCallback | None = None,
    keep_archive: bool = False,
) -> Path:
    """
    Download one release and install it with install_archive().

    The archive is saved inside versions_dir under the URL's file name (or
    <version>.<format> when the URL has none).

    Args:
        entry: Release to install
        versions_dir: Directory holding installed releases (app policy)
        executable: Launcher expected in bin/; derived from the entry's OS when omitted
        progress: Optional download progress callback (bytes_done, bytes_total)
        keep_archive: Keep the downloaded archive after a successful install

    Returns:
        Installation root (directly contains bin/ and lib/)

    Raises:
        NoMatchError: If the entry has no download URL
        UnsupportedFormatError: If the download is not .zip or .tar.gz
        NetworkError: If the download fails
        ExtractionError: If the archive cannot be extracted
        LayoutError: If no valid installation is found or it cannot be moved into place
    """
    if not entry.download_url:
        raise NoMatchError(
            f"Release {entry.raw_version} from {entry.provider} has no download URL",
            context={"release": entry.raw_version, "provider": entry.provider},
        )
    if entry.archive_format is None:
        raise UnsupportedFormatError(
            f"Release {entry.raw_version} is not distributed as .zip or .tar.gz: {entry.download_url}",
            context={"url": entry.download_url},
        )

    if executable is None:
        executable = executable_name(entry.os) if entry.os != UNKNOWN else detect_host().executable

    versions_dir.mkdir(parents=True, exist_ok=True)
    target_name = release_dir_name(entry.raw_version)
    archive_path = _archive_path(entry, versions_dir, target_name)

    logger.info(f"Installing {entry.provider} {entry.raw_version} to {versions_dir / target_name}")
    download_file(entry.download_url, archive_path, progress=progress)

    target = install_archive(archive_path, versions_dir, entry.raw_version, executable=executable)

    if not keep_archive:
        archive_path.unlink(missing_ok=True)

    logger.info(f"Successfully installed {entry.raw_version} at {target}")
    return target


def install(
    request: str,
    versions_dir: Path,
    *,
    provider: str | None = None,
    config: ResolverConfig | None = None,
    host: HostPlatform | None = None,
    progress: ProgressCallback | None = None,
    keep_archive: bool = False,
) -> Path:
    """
    Resolve a version request against a provider catalog and install it.

    Args:
        request: Version request ("17", "21.0.2", "8u352", ...)
        versions_dir: Directory holding installed releases (app policy)
        provider: Provider name; the config's effective provider when omitted
        config: Injected configuration
        host: Target platform; detected when omitted
        progress: Optional download progress callback
        keep_archive: Keep the downloaded archive after a successful install

    Returns:
        Installation root, ready to be exported by the app (JAVA_HOME, PATH)

    Example:
        >>> root = install("21", Path.home() / ".jdks" / "versions", provider="adoptium")
        >>> print(root)
        /home/me/.jdks/versions/21.0.4+7-LTS
    """
    spec = parse_version(request)
    host = host or detect_host()
    entries = fetch_catalog(provider, config=config, host=host)
    entry = select_release(spec, entries, host=host)
    return install_release(entry, versions_dir, progress=progress, keep_archive=keep_archive)
