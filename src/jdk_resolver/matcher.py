"""Candidate matching - filter catalog entries against a (possibly partial) request.

Matching rules (catalog entries are always concrete):
- "17"     → same major
- "17.0"   → same major and minor
- "17.0.5" → same major, minor and patch
"""

import logging

from .exceptions import NoMatchError
from .host import HostPlatform
from .host import detect_host
from .ranking import select_best
from .schema import ReleaseEntry
from .version import VersionSpec

logger = logging.getLogger(__name__)


def version_matches(spec: VersionSpec, candidate: VersionSpec) -> bool:
    """Check whether a concrete version satisfies a (possibly partial) request."""
    major, minor, patch = candidate.as_tuple()

    if spec.minor is None and spec.patch is None:
        return major == spec.major
    if spec.patch is None:
        return major == spec.major and minor == spec.minor
    return (major, minor, patch) == (spec.major, spec.minor or 0, spec.patch)


def matches_spec(spec: VersionSpec, entry: ReleaseEntry) -> bool:
    """Check whether a catalog entry satisfies a requested version."""
    return version_matches(spec, entry.spec)


def match_candidates(spec: VersionSpec, candidates: list[ReleaseEntry]) -> list[ReleaseEntry]:
    """
    Filter candidates down to those matching the requested version.

    Args:
        spec: Parsed user request (unspecified components preserved)
        candidates: Catalog entries, in catalog order

    Returns:
        Matching entries in catalog order

    Raises:
        NoMatchError: If nothing matches
    """
    matched = [entry for entry in candidates if matches_spec(spec, entry)]
    logger.debug(f"Version {spec} matched {len(matched)} of {len(candidates)} entries")

    if not matched:
        raise NoMatchError(
            f"No release matches version {spec}",
            context={"requested": str(spec), "candidates": len(candidates)},
        )
    return matched


def filter_for_platform(entries: list[ReleaseEntry], host: HostPlatform) -> list[ReleaseEntry]:
    """
    Keep downloadable entries, preferring those built for the host platform.

    Entries without a download URL or in an unsupported archive format are
    dropped first. If any remaining entry matches the host's (os, arch), only
    those are returned; otherwise all remaining entries, in catalog order.

    Raises:
        NoMatchError: If no entry is downloadable
    """
    downloadable = [entry for entry in entries if entry.is_downloadable]
    if not downloadable:
        raise NoMatchError(
            "No matching release has a downloadable .zip or .tar.gz archive",
            context={"host": f"{host.os}/{host.arch}", "matched": len(entries)},
        )

    native = [entry for entry in downloadable if host.matches(entry.os, entry.arch)]
    if native:
        return native

    logger.warning(
        f"No release built for {host.os}/{host.arch}; falling back to {len(downloadable)} other archive(s)"
    )
    return downloadable


def select_release(
    spec: VersionSpec,
    candidates: list[ReleaseEntry],
    host: HostPlatform | None = None,
) -> ReleaseEntry:
    """
    Pick the single release to install for a request.

    Process:
    1. Version match
    2. Platform filter
    3. Best-of selection (highest version, LTS on ties)

    Raises:
        NoMatchError: If no candidate survives matching and platform filtering
    """
    host = host or detect_host()
    matched = match_candidates(spec, candidates)
    eligible = filter_for_platform(matched, host)
    best = select_best(eligible)
    if best is None:
        raise NoMatchError(f"No release matches version {spec}", context={"requested": str(spec)})
    logger.info(f"Selected {best.provider} {best.raw_version} ({best.os}/{best.arch}) for request {spec}")
    return best
