"""Report domain configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from HiScore.config.common import (
    expect_bool,
    expect_int,
    expect_str,
    get_optional_value,
    get_section,
)


@dataclass(frozen=True, slots=True)
class ReportConfig:
    """Report output settings.

    Attributes:
        summary: Write a summary next to the query file.
        reports: Write one report next to each document.
        explain: Include per-expression scores in reports.
        histograms: Include full word histograms in reports.
        histogram_min_count: Smallest count listed in full histograms.
        extension: Suffix replacing the source file extension of output files.
    """

    summary: bool
    reports: bool
    explain: bool
    histograms: bool
    histogram_min_count: int
    extension: str


def load_report(raw: Mapping[str, Any]) -> ReportConfig:
    """Load report domain config from raw mapping.

    Raises:
        TypeError: If config types are invalid.
    """
    section = get_section(raw, "report", required=False)
    return ReportConfig(
        summary=expect_bool(get_optional_value(section, "summary", True), "report.summary"),
        reports=expect_bool(get_optional_value(section, "reports", True), "report.reports"),
        explain=expect_bool(get_optional_value(section, "explain", False), "report.explain"),
        histograms=expect_bool(get_optional_value(section, "histograms", False), "report.histograms"),
        histogram_min_count=expect_int(
            get_optional_value(section, "histogram_min_count", 2),
            "report.histogram_min_count",
        ),
        extension=expect_str(get_optional_value(section, "extension", "hiscore.yaml"), "report.extension"),
    )


def check_report(config: ReportConfig) -> None:
    """Validate report domain constraints.

    Raises:
        ValueError: If values violate report constraints.
    """
    if config.histogram_min_count < 1:
        raise ValueError("report.histogram_min_count must be positive")
    extension = config.extension.strip()
    if not extension or extension.startswith(".") or "/" in extension:
        raise ValueError("report.extension must be a bare file suffix like 'hiscore.yaml'")
