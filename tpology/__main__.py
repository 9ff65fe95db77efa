"""Entry point for `python -m tpology`.

Usage:
    python -m tpology resource list
    uv run python -m tpology resource graph -o graph.dot
"""

from __future__ import annotations

from tpology.cli.main import cli

cli(prog_name="tpology")
