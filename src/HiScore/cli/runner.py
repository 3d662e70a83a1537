"""Command runner for coordinating CLI execution.

Manages logging configuration, component creation and error handling for
command execution.
"""

from __future__ import annotations

from pathlib import Path

import click

from HiScore.analysis import find_documents
from HiScore.cli.commands import CheckCommand, ScoreCommand, SearchCommand
from HiScore.config import AppConfig
from HiScore.hql import QuerySet, compile_expression
from HiScore.services import create_scoring_service, create_search_service
from HiScore.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution.

    Handles logging configuration, component creation, and error handling for
    CLI commands.
    """

    def __init__(self, config: AppConfig) -> None:
        """Initialize command runner.

        Args:
            config: Application configuration.
        """
        self.config = config

    def _configure_logging(self, action: str) -> None:
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )

    def _documents(self, directory: Path | None, file: Path | None) -> list[Path]:
        if file is not None:
            return find_documents(file)
        if directory is not None:
            return find_documents(directory, self.config.documents.pattern)
        return []

    def run_score(self, action: str, query_file: Path, directory: Path | None, file: Path | None) -> None:
        """Score documents with a query file.

        Args:
            action: The CLI command name (e.g., 'score').
            query_file: HQL query file.
            directory: Directory searched recursively for documents.
            file: Single document.

        Raises:
            click.Abort: When scoring fails.
        """
        self._configure_logging(action)
        try:
            log.info("Reading histogram query file: %s", query_file)
            query_set = QuerySet.from_file(query_file)
            documents = self._documents(directory, file)
            command = ScoreCommand(
                config=self.config,
                query_set=query_set,
                query_file=query_file,
                documents=documents,
                service=create_scoring_service(self.config, query_set),
            )
            command.execute()
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Scoring failed: %s", e)
            raise click.Abort from e

    def run_search(self, action: str, expression: str, directory: Path | None, file: Path | None) -> int:
        """Search documents with a single expression.

        Returns:
            Number of matching documents.

        Raises:
            click.Abort: When the search fails.
        """
        self._configure_logging(action)
        try:
            node = compile_expression(expression)
            documents = self._documents(directory, file)
            command = SearchCommand(
                expression_text=expression,
                expression=node,
                documents=documents,
                service=create_search_service(self.config, node),
            )
            return command.execute()
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Search failed: %s", e)
            raise click.Abort from e

    def run_check(self, action: str, query_file: Path) -> None:
        """Compile a query file and print its overview.

        Raises:
            click.Abort: When the query file does not compile.
        """
        self._configure_logging(action)
        try:
            CheckCommand(query_set=QuerySet.from_file(query_file)).execute()
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Invalid histogram query: %s", e)
            raise click.Abort from e
