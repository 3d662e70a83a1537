"""Tests for layered config parsing and validation."""

import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from HiScore.config import load_config, load_config_with_defaults, merge_config_dicts, parse_config_dict


def _base_raw_config() -> dict:
    return {
        "log": {"level": "info", "to_file": False, "dir": "log"},
        "documents": {"pattern": "*.pdf", "workers": 2},
        "report": {
            "summary": True,
            "reports": False,
            "explain": True,
            "histograms": False,
            "histogram_min_count": 3,
            "extension": "score.yaml",
        },
    }


class TestConfigParsing(unittest.TestCase):
    def test_parse_success_nested_access(self) -> None:
        cfg = parse_config_dict(_base_raw_config())
        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertEqual(cfg.documents.workers, 2)
        self.assertFalse(cfg.report.reports)
        self.assertTrue(cfg.report.explain)
        self.assertEqual(cfg.report.histogram_min_count, 3)
        self.assertEqual(cfg.report.extension, "score.yaml")

    def test_empty_mapping_uses_defaults(self) -> None:
        cfg = parse_config_dict({})
        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertEqual(cfg.documents.pattern, "*.pdf")
        self.assertEqual(cfg.documents.workers, 4)
        self.assertTrue(cfg.report.summary)
        self.assertEqual(cfg.report.extension, "hiscore.yaml")

    def test_invalid_values(self) -> None:
        cases = [
            ({"log": {"level": "LOUD"}}, ValueError, "log.level"),
            ({"documents": {"workers": 0}}, ValueError, "documents.workers"),
            ({"documents": {"workers": True}}, TypeError, "documents.workers"),
            ({"documents": {"pattern": " "}}, ValueError, "documents.pattern"),
            ({"report": {"explain": "yes"}}, TypeError, "report.explain"),
            ({"report": {"histogram_min_count": 0}}, ValueError, "report.histogram_min_count"),
            ({"report": {"extension": ".yaml"}}, ValueError, "report.extension"),
            ({"report": []}, TypeError, "report"),
        ]
        for raw, error, key in cases:
            with self.subTest(key=key):
                with self.assertRaises(error) as ctx:
                    parse_config_dict(raw)
                self.assertIn(key, str(ctx.exception))


class TestConfigLayering(unittest.TestCase):
    def test_merge_is_deep(self) -> None:
        merged = merge_config_dicts(_base_raw_config(), {"report": {"explain": False}})
        self.assertFalse(merged["report"]["explain"])
        self.assertEqual(merged["report"]["extension"], "score.yaml")

    def test_override_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            default = Path(tmp) / "default.yml"
            override = Path(tmp) / "custom.yml"
            default.write_text("documents:\n  pattern: '*.pdf'\n  workers: 4\n", encoding="utf-8")
            override.write_text("documents:\n  workers: 8\n", encoding="utf-8")

            cfg = load_config_with_defaults(override, default_path=default)
        self.assertEqual(cfg.documents.workers, 8)
        self.assertEqual(cfg.documents.pattern, "*.pdf")

    def test_load_single_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.yml"
            path.write_text("log:\n  level: debug\n", encoding="utf-8")
            cfg = load_config(path)
        self.assertEqual(cfg.runtime.level, "DEBUG")
        self.assertEqual(cfg.documents.workers, 4)

    def test_non_mapping_root(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.yml"
            path.write_text("- a\n- b\n", encoding="utf-8")
            with self.assertRaises(ValueError):
                load_config(path)

    def test_repository_default_config(self) -> None:
        cfg = load_config(REPO_ROOT / "config" / "default.yml")
        self.assertEqual(cfg, parse_config_dict({}))


if __name__ == "__main__":
    unittest.main()
