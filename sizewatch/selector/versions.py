"""Tracked-version selection and predecessor lookup.

One version is tracked per active major line (the newest entry of that
line, prereleases included) plus the single newest nightly build.  The
predecessor of a version is looked up across every known release, not
just the ones inside the tracking window.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime, timedelta

import semver

from sizewatch.errors import InvalidVersionError
from sizewatch.models.releases import Release

NIGHTLY_MARKER = "nightly"


def parse_version(version: str) -> semver.Version:
    """Parse *version* as a semantic version, tolerating one leading ``v``.

    Raises:
        InvalidVersionError: if the string is not a semantic version.
    """
    text = version[1:] if version[:1] in ("v", "V") else version
    try:
        return semver.Version.parse(text)
    except (TypeError, ValueError):
        raise InvalidVersionError(version) from None


def is_nightly(version: str) -> bool:
    """True when the prerelease tag starts with the nightly marker."""
    prerelease = parse_version(version).prerelease
    if not prerelease:
        return False
    return prerelease.split(".", 1)[0] == NIGHTLY_MARKER


def _unique_sorted(versions: Iterable[str], descending: bool) -> list[tuple[semver.Version, str]]:
    """Parse, deduplicate by semantic identity and sort.

    The first spelling of a version wins when duplicates occur.
    """
    parsed: dict[semver.Version, str] = {}
    for version in versions:
        key = parse_version(version)
        parsed.setdefault(key, version)
    return sorted(parsed.items(), key=lambda item: item[0], reverse=descending)


def latest_versions(
    releases: Iterable[Release],
    window_days: int,
    now: datetime | None = None,
) -> list[str]:
    """Return the versions worth tracking among releases published in the window.

    Output is one entry per major line in descending major order, followed
    by the newest nightly when one was published in the window.  An empty
    window yields an empty list.
    """
    now = now or datetime.now(tz=UTC)
    cutoff = now - timedelta(days=window_days)
    eligible = [release.version for release in releases if release.published_at > cutoff]
    ordered = _unique_sorted(eligible, descending=True)

    tracked: list[str] = []
    seen_majors: set[int] = set()
    nightly: str | None = None
    for parsed, version in ordered:
        if is_nightly(version):
            if nightly is None:
                nightly = version
            continue
        if parsed.major in seen_majors:
            continue
        seen_majors.add(parsed.major)
        tracked.append(version)

    if nightly is not None:
        tracked.append(nightly)
    return tracked


def previous_version(releases: Iterable[Release], version: str) -> str | None:
    """Return the release immediately preceding *version*, or None.

    None is returned when *version* is the oldest known release or is not
    a known release at all.
    """
    target = parse_version(version)
    ordered = _unique_sorted((release.version for release in releases), descending=False)
    for index, (parsed, _) in enumerate(ordered):
        if parsed == target:
            return ordered[index - 1][1] if index > 0 else None
    return None
