"""tpology command-line interface.

Exposes:
    cli -- Click group entry point (registered as ``tpology`` script).
"""

from tpology.cli.main import cli

__all__ = ["cli"]
