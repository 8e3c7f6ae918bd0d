"""Version selection: which releases to track and their predecessors.

Submodules:
    versions -- Semantic-version parsing, tracked-version selection and
                predecessor lookup.
"""

from sizewatch.selector.versions import (
    is_nightly,
    latest_versions,
    parse_version,
    previous_version,
)

__all__ = [
    "is_nightly",
    "latest_versions",
    "parse_version",
    "previous_version",
]
