"""Entry point for `python -m sizewatch`.

Usage:
    python -m sizewatch
"""

from __future__ import annotations

import asyncio

from sizewatch.app import main

raise SystemExit(asyncio.run(main()))
