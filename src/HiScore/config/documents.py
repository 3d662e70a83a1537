"""Documents domain configuration (discovery and parallelism)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from HiScore.config.common import expect_int, expect_str, get_optional_value, get_section


@dataclass(frozen=True, slots=True)
class DocumentsConfig:
    """Document discovery settings.

    Attributes:
        pattern: Glob pattern for documents found in directories.
        workers: Number of documents analysed concurrently.
    """

    pattern: str
    workers: int


def load_documents(raw: Mapping[str, Any]) -> DocumentsConfig:
    """Load documents domain config from raw mapping."""
    section = get_section(raw, "documents", required=False)
    return DocumentsConfig(
        pattern=expect_str(get_optional_value(section, "pattern", "*.pdf"), "documents.pattern"),
        workers=expect_int(get_optional_value(section, "workers", 4), "documents.workers"),
    )


def check_documents(config: DocumentsConfig) -> None:
    """Validate documents domain constraints."""
    if not config.pattern.strip():
        raise ValueError("documents.pattern must not be empty")
    if config.workers <= 0:
        raise ValueError("documents.workers must be positive")
