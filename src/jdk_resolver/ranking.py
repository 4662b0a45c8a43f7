"""Release ranking.

Ranking is purely a function of the numeric version triple and the LTS flag;
release dates, popularity and checksums are never considered.
"""

from collections import defaultdict

from .schema import ReleaseEntry


def recommendation_key(entry: ReleaseEntry) -> tuple[bool, int, int]:
    """Per-major preference: LTS first, then patch, then minor."""
    return (entry.is_lts, entry.patch, entry.minor)


def recommend_per_major(entries: list[ReleaseEntry]) -> list[ReleaseEntry]:
    """
    Recommend one release per major line.

    Within each major the entries are sorted descending by (is_lts, patch, minor),
    stable with respect to catalog order, and the first is taken.

    Args:
        entries: Catalog entries

    Returns:
        One entry per major, ordered by ascending major

    Example:
        >>> for entry in recommend_per_major(fetch_catalog("adoptium")):
        ...     print(entry.major, entry.raw_version)
        17 17.0.12+7
        21 21.0.4+7
    """
    groups: dict[int, list[ReleaseEntry]] = defaultdict(list)
    for entry in entries:
        groups[entry.major].append(entry)

    recommended = []
    for major in sorted(groups):
        ranked = sorted(groups[major], key=recommendation_key, reverse=True)
        recommended.append(ranked[0])
    return recommended


def select_best(entries: list[ReleaseEntry]) -> ReleaseEntry | None:
    """
    Select the highest (major, minor, patch); ties go to LTS, then catalog order.

    Returns:
        Best entry, or None for an empty list
    """
    if not entries:
        return None
    return max(entries, key=lambda e: (e.major, e.minor, e.patch, e.is_lts))


def latest_release(entries: list[ReleaseEntry]) -> ReleaseEntry | None:
    """Newest release of a catalog by version triple alone."""
    if not entries:
        return None
    return max(entries, key=lambda e: (e.major, e.minor, e.patch))


def filter_entries(
    entries: list[ReleaseEntry],
    *,
    major: int | None = None,
    lts_only: bool = False,
    major_only: bool = False,
) -> list[ReleaseEntry]:
    """
    Narrow a catalog listing.

    Args:
        entries: Catalog entries
        major: Keep only this major line
        lts_only: Keep only LTS releases
        major_only: Keep only x.0.y releases (minor == 0)

    Returns:
        Filtered entries in catalog order
    """
    result = []
    for entry in entries:
        if major is not None and entry.major != major:
            continue
        if lts_only and not entry.is_lts:
            continue
        if major_only and entry.minor != 0:
            continue
        result.append(entry)
    return result
