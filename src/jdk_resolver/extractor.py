"""Archive extraction with path-traversal protection.

Supports .zip and .tar.gz. Every member path is joined to the destination and
normalized; members that would land outside the destination are skipped, not
fatal. Failures abort the job and leave already written files in place.
"""

import logging
import os
import shutil
import tarfile
import zipfile
import zlib
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path

from .exceptions import ExtractionError
from .exceptions import UnsupportedFormatError
from .utils import TAR_GZ
from .utils import ZIP
from .utils import detect_archive_format
from .utils import is_within_directory

logger = logging.getLogger(__name__)

DIR_MODE = 0o755

_ARCHIVE_ERRORS = (OSError, EOFError, zlib.error, zipfile.BadZipFile, zipfile.LargeZipFile, tarfile.TarError)


@dataclass
class ExtractionResult:
    """Record of one extraction job."""

    archive: Path
    destination: Path
    written: int = 0
    skipped: list[str] = field(default_factory=list)


def safe_member_path(dest_root: str, member_name: str) -> str | None:
    """Resolve an archive member name against the destination.

    Args:
        dest_root: Absolute, normalized destination directory
        member_name: Name as stored in the archive

    Returns:
        Normalized absolute target path, or None when it escapes dest_root
    """
    joined = os.path.normpath(os.path.join(dest_root, member_name))
    if not is_within_directory(dest_root, joined):
        return None
    return joined


def extract_archive(archive_path: Path, dest_dir: Path) -> ExtractionResult:
    """
    Extract a .zip or .tar.gz archive into dest_dir.

    Args:
        archive_path: Downloaded archive
        dest_dir: Destination directory (created if needed)

    Returns:
        ExtractionResult with the number of written members and skipped member names

    Raises:
        UnsupportedFormatError: If the suffix is neither .zip nor .tar.gz
        ExtractionError: If the archive is unreadable or a write fails mid-stream
    """
    archive_format = detect_archive_format(archive_path.name)
    if archive_format is None:
        raise UnsupportedFormatError(
            f"Unsupported archive format: {archive_path.name}",
            context={"archive": str(archive_path)},
        )

    result = ExtractionResult(archive=archive_path, destination=dest_dir)
    logger.info(f"Extracting {archive_path.name} to {dest_dir}")

    try:
        dest_dir.mkdir(parents=True, exist_ok=True)
        dest_root = os.path.normpath(os.path.abspath(dest_dir))
        if archive_format == ZIP:
            _extract_zip(archive_path, dest_root, result)
        elif archive_format == TAR_GZ:
            _extract_tar_gz(archive_path, dest_root, result)
    except _ARCHIVE_ERRORS as e:
        raise ExtractionError(
            f"{archive_format} extraction of {archive_path.name} failed: {e}",
            context={"archive": str(archive_path), "destination": str(dest_dir), "written": result.written},
        ) from e

    if result.skipped:
        logger.warning(f"Skipped {len(result.skipped)} unsafe member(s) in {archive_path.name}")
    logger.info(f"Extracted {result.written} member(s) from {archive_path.name}")
    return result


def _reject(result: ExtractionResult, name: str) -> None:
    logger.warning(f"Refusing to extract '{name}': path escapes destination")
    result.skipped.append(name)


def _extract_zip(archive_path: Path, dest_root: str, result: ExtractionResult) -> None:
    with zipfile.ZipFile(archive_path) as zf:
        for info in zf.infolist():
            target = safe_member_path(dest_root, info.filename)
            if target is None:
                _reject(result, info.filename)
                continue

            if info.is_dir():
                os.makedirs(target, mode=DIR_MODE, exist_ok=True)
                continue

            if target == dest_root:
                _reject(result, info.filename)
                continue

            os.makedirs(os.path.dirname(target), mode=DIR_MODE, exist_ok=True)
            with zf.open(info) as src, open(target, "wb") as out:
                shutil.copyfileobj(src, out)

            mode = (info.external_attr >> 16) & 0o777
            if mode:
                os.chmod(target, mode)
            result.written += 1


def _extract_tar_gz(archive_path: Path, dest_root: str, result: ExtractionResult) -> None:
    # Stream mode: gzip decompressor feeding a sequential tar reader
    with tarfile.open(archive_path, mode="r|gz") as tf:
        for member in tf:
            if not (member.isdir() or member.isreg()):
                logger.debug(f"Ignoring non-regular member '{member.name}' ({member.type!r})")
                continue

            target = safe_member_path(dest_root, member.name)
            if target is None:
                _reject(result, member.name)
                continue

            if member.isdir():
                os.makedirs(target, mode=DIR_MODE, exist_ok=True)
                continue

            if target == dest_root:
                _reject(result, member.name)
                continue

            os.makedirs(os.path.dirname(target), mode=DIR_MODE, exist_ok=True)
            src = tf.extractfile(member)
            if src is None:
                continue
            with src, open(target, "wb") as out:
                shutil.copyfileobj(src, out)

            mode = member.mode & 0o777
            if mode:
                os.chmod(target, mode)
            result.written += 1
