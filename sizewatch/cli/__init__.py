"""sizewatch command-line interface.

Exposes:
    cli -- Click group entry point (registered as ``sizewatch`` script).
"""

from sizewatch.cli.main import cli

__all__ = ["cli"]
