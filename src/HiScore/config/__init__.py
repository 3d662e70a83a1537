from __future__ import annotations

"""Public configuration API for HiScore."""

from HiScore.config.app import (
    AppConfig,
    load_config,
    load_config_with_defaults,
    merge_config_dicts,
    parse_config_dict,
)
from HiScore.config.documents import DocumentsConfig
from HiScore.config.report import ReportConfig
from HiScore.config.runtime import RuntimeConfig

__all__ = [
    "RuntimeConfig",
    "DocumentsConfig",
    "ReportConfig",
    "AppConfig",
    "load_config",
    "load_config_with_defaults",
    "merge_config_dicts",
    "parse_config_dict",
]
