"""Installation layout normalization.

Archives ship their payload in one of two shapes:
- Flat: dest/bin/java, dest/lib/ (already the installation root)
- Nested: dest/jdk-17.0.5+8/bin/java (wrapped in a versioned folder)

normalize_layout() flattens the nested shape so the installation root always
directly contains bin/ and lib/.
"""

import logging
import shutil
import tempfile
from pathlib import Path

from .exceptions import LayoutError
from .host import detect_host

logger = logging.getLogger(__name__)


def _default_executable() -> str:
    return detect_host().executable


def looks_like_installation(path: Path, executable: str | None = None) -> bool:
    """Check whether a directory is a complete installation root.

    Args:
        path: Candidate directory
        executable: Launcher expected in bin/ (host default when omitted)

    Returns:
        True if path has bin/ and lib/ directories and bin/<executable> is a file
    """
    executable = executable or _default_executable()
    return (path / "bin").is_dir() and (path / "lib").is_dir() and (path / "bin" / executable).is_file()


def find_installation_root(dest_dir: Path, executable: str | None = None) -> Path:
    """
    Locate the installation root inside an extraction directory.

    Strategy 1: exactly one immediate child directory looks like an installation
    Strategy 2: dest_dir itself looks like an installation

    Raises:
        LayoutError: If dest_dir is missing, several children qualify, or nothing does
    """
    executable = executable or _default_executable()
    if not dest_dir.is_dir():
        raise LayoutError(
            f"Extraction directory does not exist: {dest_dir}",
            context={"destination": str(dest_dir)},
        )

    nested = sorted(
        child
        for child in dest_dir.iterdir()
        if child.is_dir() and looks_like_installation(child, executable)
    )

    if len(nested) > 1:
        raise LayoutError(
            f"Found {len(nested)} installations inside {dest_dir}: {', '.join(p.name for p in nested)}",
            context={"destination": str(dest_dir), "candidates": [str(p) for p in nested]},
        )
    if nested:
        return nested[0]

    if looks_like_installation(dest_dir, executable):
        return dest_dir

    raise LayoutError(
        f"No installation found in {dest_dir}.\n"
        f"Expected at:\n"
        f"  - {dest_dir / 'bin' / executable} (flat structure), or\n"
        f"  - {dest_dir / '*' / 'bin' / executable} (nested structure)",
        context={"destination": str(dest_dir), "executable": executable},
    )


def _move(src: Path, dest: Path) -> None:
    try:
        shutil.move(str(src), str(dest))
    except OSError as e:
        raise LayoutError(f"Failed to move {src} to {dest}: {e}", context={"source": str(src)}) from e


def flatten_directory(nested_root: Path, dest_dir: Path) -> None:
    """
    Move the contents of nested_root up into dest_dir.

    Process:
    1. Move every child of nested_root into a temporary sibling staging directory
    2. Remove the emptied nested_root
    3. Move every staged item into dest_dir
    4. Remove the staging directory

    Staging makes a child named like nested_root itself safe to move.

    Raises:
        LayoutError: If any move fails or an item already exists in dest_dir
    """
    staging = Path(tempfile.mkdtemp(prefix=f".{dest_dir.name}_", suffix="_staging", dir=dest_dir.parent))
    logger.debug(f"Flattening {nested_root} into {dest_dir} via {staging}")

    try:
        for item in list(nested_root.iterdir()):
            _move(item, staging / item.name)

        try:
            nested_root.rmdir()
        except OSError as e:
            raise LayoutError(f"Failed to remove {nested_root}: {e}", context={"nested_root": str(nested_root)}) from e

        for item in list(staging.iterdir()):
            target = dest_dir / item.name
            if target.exists():
                raise LayoutError(
                    f"Cannot flatten: {target} already exists",
                    context={"destination": str(dest_dir), "item": item.name},
                )
            _move(item, target)
    except LayoutError:
        logger.error(f"Flattening {nested_root} failed; moved files remain in {staging}")
        raise

    staging.rmdir()


def normalize_layout(dest_dir: Path, executable: str | None = None) -> Path:
    """
    Ensure dest_dir directly contains the installation (bin/, lib/).

    Args:
        dest_dir: Extraction directory
        executable: Launcher expected in bin/ (host default when omitted)

    Returns:
        The effective installation root (dest_dir after flattening)

    Raises:
        LayoutError: If no usable installation is found or flattening fails

    Example:
        >>> extract_archive(Path("OpenJDK17U-jdk_x64_linux.tar.gz"), Path("versions/17.0.5+8"))
        >>> normalize_layout(Path("versions/17.0.5+8"))
        PosixPath('versions/17.0.5+8')
    """
    root = find_installation_root(dest_dir, executable)
    if root == dest_dir:
        logger.debug(f"{dest_dir} already is the installation root")
        return dest_dir

    logger.info(f"Flattening nested directory {root.name} into {dest_dir}")
    flatten_directory(root, dest_dir)
    return dest_dir
