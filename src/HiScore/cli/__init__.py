"""CLI package for HiScore command orchestration.

Click definitions live in `ui`, resource setup and error handling in
`runner`, and command logic in `commands`.
"""

from __future__ import annotations

__all__ = ["CommandRunner", "main"]

from HiScore.cli.runner import CommandRunner
from HiScore.cli.ui import cli


def main() -> None:
    """Run HiScore CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
