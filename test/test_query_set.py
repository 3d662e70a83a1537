"""Tests for query preprocessing, query set compilation and scoring."""

import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from HiScore.hql import (
    And,
    CompilationError,
    DegenerateScoreError,
    FrequencyModels,
    QuerySet,
    ScoreRecord,
    Value,
    compile_query_set,
)
from HiScore.hql.preprocessor import DEFAULT_WEIGHT, parse_options, preprocess
from HiScore.hql.scoring import realize_scores, score_bounds


class TestPreprocessor(unittest.TestCase):
    def test_continuation_and_weight(self) -> None:
        items = list(preprocess(["[weight=3] a \\", "b"]))
        self.assertEqual(len(items), 1)
        self.assertEqual(items[0].text, "a b")
        self.assertEqual(items[0].weight, 3.0)
        self.assertEqual(items[0].source, "[weight=3] a b")

    def test_lowercase_trim_and_skip(self) -> None:
        items = list(preprocess(["", "   ", "# a comment", "  NEURAL Network  ", "\t# indented comment"]))
        self.assertEqual([item.text for item in items], ["neural network"])
        self.assertEqual(items[0].weight, DEFAULT_WEIGHT)

    def test_comment_inside_continuation_is_skipped(self) -> None:
        items = list(preprocess(["&& a \\", "# ignored \\", "b"]))
        self.assertEqual([item.text for item in items], ["&& a b"])

    def test_dangling_continuation(self) -> None:
        with self.assertRaises(CompilationError) as ctx:
            list(preprocess(["a", "b \\"]))
        self.assertEqual(ctx.exception.source, "b ")

    def test_malformed_weight_defaults(self) -> None:
        self.assertEqual(parse_options("[weight=abc] a").weight, DEFAULT_WEIGHT)
        self.assertEqual(parse_options("[weight=] a").weight, DEFAULT_WEIGHT)
        self.assertEqual(parse_options("[weight=nan] a").weight, DEFAULT_WEIGHT)

    def test_weight_forms(self) -> None:
        self.assertEqual(parse_options("[weight=-2] a").weight, -2.0)
        self.assertEqual(parse_options("[weight=.5] a").weight, 0.5)
        self.assertEqual(parse_options("[weight=1e2] a").weight, 100.0)
        self.assertEqual(parse_options("[ weight = 2.5 ] a").weight, 2.5)

    def test_unknown_options_and_flags_are_ignored(self) -> None:
        item = parse_options("[cached, color=red, weight=4] a")
        self.assertEqual(item.weight, 4.0)
        self.assertEqual(item.text, "a")

    def test_extra_equals_keeps_first_value(self) -> None:
        self.assertEqual(parse_options("[weight=1.5=2] a").weight, 1.5)

    def test_no_options_block(self) -> None:
        item = parse_options("|| a b")
        self.assertEqual(item.text, "|| a b")
        self.assertEqual(item.weight, DEFAULT_WEIGHT)


class TestQuerySet(unittest.TestCase):
    def test_words_and_bounds(self) -> None:
        query_set = compile_query_set(
            [
                "[weight=2] && a 'b c'",
                "[weight=-1] > d a 2",
                "[weight=3] !\"e f\"",
            ]
        )
        self.assertEqual(len(query_set), 3)
        self.assertEqual(query_set.words, frozenset({"a", "b c", "d", "e f"}))
        self.assertEqual(query_set.weights, (2.0, -1.0, 3.0))
        self.assertEqual(query_set.min_score, -1.0)
        self.assertEqual(query_set.max_score, 5.0)
        self.assertEqual(query_set.queries[0].expression, And((Value("a"), Value("b c"))))

    def test_expressions_keep_source_order(self) -> None:
        query_set = QuerySet.from_expressions("b", "a", "c")
        self.assertEqual(query_set.expressions, ("b", "a", "c"))

    def test_empty_query_set(self) -> None:
        query_set = compile_query_set(["# nothing here", ""])
        self.assertEqual(len(query_set), 0)
        self.assertEqual(query_set.words, frozenset())
        self.assertEqual((query_set.min_score, query_set.max_score), (0.0, 0.0))

    def test_compilation_is_all_or_nothing(self) -> None:
        with self.assertRaises(CompilationError) as ctx:
            compile_query_set(["a", "[weight=2] || b && c", "d"])
        self.assertEqual(ctx.exception.source, "[weight=2] || b && c")
        self.assertIn("|| b && c", str(ctx.exception))

    def test_lex_error_is_wrapped(self) -> None:
        with self.assertRaises(CompilationError) as ctx:
            compile_query_set(["a $ b"])
        self.assertEqual(ctx.exception.source, "a $ b")

    def test_long_negation_chain_compiles(self) -> None:
        query_set = compile_query_set(["!" * 1200 + "a"])
        self.assertEqual(query_set.words, frozenset({"a"}))
        self.assertEqual(query_set.evaluate(FrequencyModels(single={})).scores, (0.0,))
        self.assertEqual(query_set.evaluate(FrequencyModels(single={"a": 1})).scores, (1.0,))

    def test_excessive_nesting_is_a_compilation_error(self) -> None:
        depth = 5000
        line = "(|| " * depth + "a" + ")" * depth
        with self.assertRaises(CompilationError) as ctx:
            compile_query_set([line])
        self.assertEqual(ctx.exception.source, line)

    def test_from_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "query.hql"
            path.write_text(
                "# topic query\n[weight=2] && neural \\\n  network\n[weight=-1] survey\n",
                encoding="utf-8",
            )
            query_set = QuerySet.from_file(path)
        self.assertEqual(query_set.expressions, ("&& neural network", "survey"))
        self.assertEqual(query_set.weights, (2.0, -1.0))


class TestScoring(unittest.TestCase):
    def test_end_to_end(self) -> None:
        query_set = compile_query_set(["[weight=2.0] a", "[weight=-1.0] b"])
        self.assertEqual(query_set.min_score, -1.0)
        self.assertEqual(query_set.max_score, 2.0)

        record = query_set.evaluate(FrequencyModels(single={"a": 1, "b": 1}))
        self.assertEqual(record.scores, (2.0, -1.0))
        self.assertEqual(record.total_score, 1.0)
        self.assertEqual(record.total_score_normalized, 0.0)
        self.assertEqual(record.total_score_cut_normalized, 0.5)
        self.assertEqual(record.satisfied, (True, True))

    def test_unsatisfied_scores_zero(self) -> None:
        query_set = compile_query_set(["[weight=2.0] a", "[weight=-1.0] b"])
        record = query_set.evaluate(FrequencyModels(single={"b": 4}))
        self.assertEqual(record.scores, (0.0, -1.0))
        self.assertEqual(record.satisfied, (False, True))
        self.assertEqual(record.total_score_cut_normalized, 0.0)

    def test_docstring_example(self) -> None:
        query_set = compile_query_set(["[weight=2] && neural network", "! survey"])
        record = query_set.evaluate(FrequencyModels(single={"neural": 3, "network": 1}))
        self.assertEqual(record.total_score, 3.0)

    def test_degenerate_normalization(self) -> None:
        record = compile_query_set([]).evaluate(FrequencyModels(single={}))
        self.assertEqual(record.total_score, 0.0)
        with self.assertRaises(DegenerateScoreError):
            record.total_score_normalized
        with self.assertRaises(DegenerateScoreError):
            record.total_score_cut_normalized

    def test_zero_max_score_with_negative_total(self) -> None:
        record = ScoreRecord(scores=(-1.0,), min_score=-1.0, max_score=0.0)
        self.assertEqual(record.total_score_cut_normalized, 0.0)
        self.assertEqual(record.total_score_normalized, -2.0)

    def test_realize_scores_length_mismatch(self) -> None:
        with self.assertRaises(ValueError):
            realize_scores([1.0, 2.0], [True])

    def test_score_bounds_ignore_zero_weights(self) -> None:
        self.assertEqual(score_bounds([0.0, 1.5, -0.5, 0.0]), (-0.5, 1.5))


if __name__ == "__main__":
    unittest.main()
