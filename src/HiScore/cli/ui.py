"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

from pathlib import Path

import click

from HiScore.cli.runner import CommandRunner
from HiScore.config import load_config, load_config_with_defaults, parse_config_dict

DEFAULT_CONFIG = Path("config/default.yml")

_documents_options = [
    click.option(
        "--dir",
        "-d",
        "directory",
        type=click.Path(path_type=Path, file_okay=False),
        default=None,
        help="Directory to recursively search for documents.",
    ),
    click.option(
        "--file",
        "-f",
        "file",
        type=click.Path(path_type=Path, dir_okay=False),
        default=None,
        help="Single document to process.",
    ),
]


def documents_options(func):
    """Attach the --dir/--file document selection options."""
    for option in reversed(_documents_options):
        func = option(func)
    return func


def _require_documents(directory: Path | None, file: Path | None) -> None:
    if directory is None and file is None:
        raise click.UsageError("Either --dir or --file is required.")
    if directory is not None and file is not None:
        raise click.UsageError("--dir and --file are mutually exclusive.")


@click.group(help="HiScore: score documents with Histogram Query Language (HQL) queries.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG,
    show_default=True,
    help="Path to YAML config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    The default config file is optional; built-in defaults apply without it.
    Any other config file is deep-merged over the default config file when
    that exists.

    Args:
        ctx: Click context.
        config_path: Path to YAML config file.
    """
    if config_path == DEFAULT_CONFIG:
        ctx.obj = load_config(config_path) if config_path.exists() else parse_config_dict({})
    elif DEFAULT_CONFIG.exists():
        ctx.obj = load_config_with_defaults(config_path, DEFAULT_CONFIG)
    else:
        ctx.obj = load_config(config_path)


@cli.command("score")
@click.option(
    "--query",
    "-q",
    "query_file",
    type=click.Path(path_type=Path, dir_okay=False, exists=True),
    required=True,
    help="Histogram query file with one HQL expression per line.",
)
@documents_options
@click.pass_context
def score_cmd(ctx: click.Context, query_file: Path, directory: Path | None, file: Path | None) -> None:
    """Score documents with a query file and write reports.

    Args:
        ctx: Click context.
        query_file: Histogram query file.
        directory: Directory with documents.
        file: Single document.
    """
    _require_documents(directory, file)
    CommandRunner(ctx.obj).run_score(ctx.command.name, query_file, directory, file)


@cli.command("search")
@click.argument("expression")
@documents_options
@click.pass_context
def search_cmd(ctx: click.Context, expression: str, directory: Path | None, file: Path | None) -> None:
    """Search documents matching a single HQL EXPRESSION.

    Args:
        ctx: Click context.
        expression: HQL expression.
        directory: Directory with documents.
        file: Single document.
    """
    _require_documents(directory, file)
    CommandRunner(ctx.obj).run_search(ctx.command.name, expression, directory, file)


@cli.command("check")
@click.option(
    "--query",
    "-q",
    "query_file",
    type=click.Path(path_type=Path, dir_okay=False, exists=True),
    required=True,
    help="Histogram query file to validate.",
)
@click.pass_context
def check_cmd(ctx: click.Context, query_file: Path) -> None:
    """Compile a query file and print its expressions and score range.

    Args:
        ctx: Click context.
        query_file: Histogram query file.
    """
    CommandRunner(ctx.obj).run_check(ctx.command.name, query_file)
