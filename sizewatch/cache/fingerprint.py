"""SizeChange fingerprinting."""

from __future__ import annotations

import hashlib
import json

from sizewatch.models.releases import SizeChange


def fingerprint(change: SizeChange) -> str:
    """Return a SHA-256 hex digest identifying *change* by content.

    Only the version pair, the platform and both sizes contribute; derived
    deltas do not.  Keys are sorted so the digest never depends on field
    order.
    """
    payload = json.dumps(
        {
            "base_version": change.base.version,
            "changed_version": change.changed.version,
            "platform": change.platform,
            "base_size": change.base.size_in_bytes,
            "changed_size": change.changed.size_in_bytes,
        },
        sort_keys=True,
        separators=(",", ":"),
    )
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()
