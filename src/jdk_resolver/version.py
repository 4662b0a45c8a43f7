"""Version string parsing.

Converts user requests and catalog version strings into a (major, minor, patch)
VersionSpec, absorbing the legacy JDK 8 encodings ("8u352", "1.8.0_352-b09").

One normalization policy applies everywhere:
- catalog entries are concrete releases: unspecified minor/patch become 0
- user requests keep unspecified components (None) so "17" matches any 17.x.y
"""

import logging
import re

from pydantic import BaseModel
from pydantic import ConfigDict

from .exceptions import ParseError

logger = logging.getLogger(__name__)

LTS_MAJORS = frozenset({8, 11, 17, 21, 25})

# "8u352", "8u352-b08"
_UPDATE_FORM = re.compile(r"^(\d+)u(\d+)(?:[-+].*)?$", re.ASCII | re.IGNORECASE)
# "1.8.0", "1.8.0_352", "1.8.0_352-b09"
_LEGACY_DOTTED_FORM = re.compile(r"^1\.(\d+)\.0(?:_(\d+))?(?:[-+].*)?$", re.ASCII)
_BUILD_METADATA = re.compile(r"[-+]")


class VersionSpec(BaseModel):
    """Parsed, possibly partial, version (immutable).

    None in minor or patch means "unspecified" and is distinct from 0.
    """

    model_config = ConfigDict(frozen=True)

    major: int
    minor: int | None = None
    patch: int | None = None

    @property
    def is_partial(self) -> bool:
        return self.minor is None or self.patch is None

    def as_tuple(self) -> tuple[int, int, int]:
        """Concrete (major, minor, patch) with unspecified components as 0."""
        return (self.major, self.minor or 0, self.patch or 0)

    def concrete(self) -> "VersionSpec":
        """Same spec with unspecified components promoted to 0."""
        major, minor, patch = self.as_tuple()
        return VersionSpec(major=major, minor=minor, patch=patch)

    def __str__(self) -> str:
        parts = [str(self.major)]
        if self.minor is not None:
            parts.append(str(self.minor))
            if self.patch is not None:
                parts.append(str(self.patch))
        return ".".join(parts)


def _component(text: str) -> int | None:
    if text.isascii() and text.isdigit():
        return int(text)
    return None


def parse_version(text: str, *, concrete: bool = False) -> VersionSpec:
    """Parse a version string into a VersionSpec.

    Args:
        text: Version string from a user request or a catalog
        concrete: True when the string describes a cataloged release; unspecified
            minor/patch are then promoted to 0

    Returns:
        VersionSpec

    Raises:
        ParseError: If the string is empty or its major component is not a
            non-negative integer

    Examples:
        >>> parse_version("17")
        VersionSpec(major=17, minor=None, patch=None)
        >>> parse_version("17", concrete=True).as_tuple()
        (17, 0, 0)
        >>> parse_version("1.8.0_352-b09").as_tuple()
        (8, 0, 352)
    """
    if text is None:
        raise ParseError("Version string is missing")

    value = text.strip()
    if not value:
        raise ParseError("Version string is empty", context={"version": text})

    legacy = _UPDATE_FORM.match(value) or _LEGACY_DOTTED_FORM.match(value)
    if legacy:
        update = legacy.group(2)
        return VersionSpec(major=int(legacy.group(1)), minor=0, patch=int(update) if update else 0)

    core = _BUILD_METADATA.split(value, maxsplit=1)[0]
    parts = core.split(".")

    major = _component(parts[0])
    if major is None:
        raise ParseError(f"Invalid major version in '{text}'", context={"version": text})

    minor = _component(parts[1]) if len(parts) > 1 else None
    patch = _component(parts[2]) if len(parts) > 2 else None

    spec = VersionSpec(major=major, minor=minor, patch=patch)
    if concrete:
        spec = spec.concrete()
    return spec


def is_lts_version(text: str) -> bool:
    """Check whether a version string belongs to a Long-Term Support line.

    Used for catalogs that do not flag LTS releases themselves.
    """
    if "lts" in text.lower():
        return True
    try:
        return parse_version(text).major in LTS_MAJORS
    except ParseError:
        logger.debug(f"Cannot determine LTS status of unparseable version '{text}'")
        return False
