"""Installed release resolver - Resolve version requests to installed directories.

The versions directory is app policy and must be injected; the resolver only
performs direct filesystem checks, no caching.

Unlike catalog resolution (which silently prefers the highest version), an
ambiguous request here is reported so the user can choose.
"""

import logging
from pathlib import Path

from .exceptions import AmbiguousReleaseError
from .exceptions import NoMatchError
from .exceptions import ParseError
from .host import detect_host
from .layout import looks_like_installation
from .matcher import version_matches
from .version import parse_version

logger = logging.getLogger(__name__)


class InstalledReleaseResolver:
    """
    Resolve version requests to installed release directories.

    Each installed release is a directory named by its version string
    (e.g. "17.0.5+8") that directly contains bin/ and lib/.
    """

    def __init__(self, versions_dir: Path, executable: str | None = None):
        """Initialize resolver with app-provided versions directory.

        Args:
            versions_dir: Directory holding installed releases
            executable: Launcher expected in bin/ (host default when omitted)

        Example:
            >>> resolver = InstalledReleaseResolver(Path.home() / ".jdks" / "versions")
        """
        self.versions_dir = versions_dir
        self.executable = executable or detect_host().executable

    def list_installed(self) -> list[tuple[str, Path]]:
        """
        List installed releases.

        Returns:
            (directory_name, path) tuples for every valid installation, sorted by
            version (unparseable names last, alphabetically)
        """
        if not self.versions_dir.exists():
            return []

        installed = []
        for child in self.versions_dir.iterdir():
            if not child.is_dir() or child.name.startswith("."):
                continue
            if looks_like_installation(child, self.executable):
                installed.append((child.name, child))
            else:
                logger.debug(f"Ignoring {child}: not a complete installation")

        def sort_key(item: tuple[str, Path]) -> tuple[int, tuple[int, int, int], str]:
            try:
                return (0, parse_version(item[0], concrete=True).as_tuple(), item[0])
            except ParseError:
                return (1, (0, 0, 0), item[0])

        return sorted(installed, key=sort_key)

    def find(self, request: str) -> list[Path]:
        """
        Find installed releases matching a request.

        Resolution order:
        1. Directory named exactly like the request (a single path component)
        2. Every installation whose directory name parses to a matching version

        Args:
            request: Directory name or version request ("17", "17.0.5+8")

        Returns:
            Matching installation paths (possibly empty)

        Raises:
            ParseError: If the request is neither an installed directory name nor a version
        """
        request = request.strip()
        if request not in ("", ".", "..") and Path(request).name == request:
            exact = self.versions_dir / request
            if exact.is_dir() and looks_like_installation(exact, self.executable):
                return [exact]

        spec = parse_version(request)
        matches = []
        for name, path in self.list_installed():
            try:
                installed = parse_version(name, concrete=True)
            except ParseError:
                logger.debug(f"Skipping installation with unparseable name: {name}")
                continue
            if version_matches(spec, installed):
                matches.append(path)
        return matches

    def resolve(self, request: str) -> Path:
        """
        Resolve a request to exactly one installed release.

        Returns:
            Installation root

        Raises:
            NoMatchError: If nothing is installed for the request
            AmbiguousReleaseError: If several installations match
        """
        matches = self.find(request)
        if not matches:
            raise NoMatchError(
                f"No installed release matches '{request}' in {self.versions_dir}",
                context={"request": request, "versions_dir": str(self.versions_dir)},
                suggestion="Install it first, or list the installed releases.",
            )
        if len(matches) > 1:
            names = [p.name for p in matches]
            raise AmbiguousReleaseError(
                f"Multiple installed releases match '{request}': {', '.join(names)}",
                candidates=names,
                context={"request": request},
            )
        return matches[0]
