"""Tests for the HQL lexer and parser."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))
sys.path.insert(0, str(REPO_ROOT / "test"))

from hql_corpus import INVALID_EXPRESSIONS, VALID_EXPRESSIONS
from HiScore.hql import (
    And,
    GreaterThan,
    HQLError,
    LexError,
    Not,
    Or,
    QuerySyntaxError,
    Value,
    parse_expression,
)
from HiScore.hql.lexer import TokenType, tokenize
from HiScore.hql.nodes import iter_terms


class TestLexer(unittest.TestCase):
    def test_operator_tokens(self) -> None:
        tokens = tokenize("&& || ! > ( )")
        self.assertEqual(
            [t.type for t in tokens],
            [TokenType.AND, TokenType.OR, TokenType.NOT, TokenType.GT, TokenType.LPAREN, TokenType.RPAREN],
        )

    def test_words_phrases_and_integers(self) -> None:
        tokens = tokenize("w1 'a b' \"c d\" 42 foo_bar -x")
        self.assertEqual(
            [(t.type, t.text) for t in tokens],
            [
                (TokenType.WORD, "w1"),
                (TokenType.SQ_PHRASE, "'a b'"),
                (TokenType.DQ_PHRASE, '"c d"'),
                (TokenType.INT, "42"),
                (TokenType.WORD, "foo_bar"),
                (TokenType.WORD, "-x"),
            ],
        )

    def test_whitespace_is_discarded(self) -> None:
        tokens = tokenize(" \tw1\r\n w2 ")
        self.assertEqual([t.text for t in tokens], ["w1", "w2"])

    def test_unknown_character_fails(self) -> None:
        with self.assertRaises(LexError) as ctx:
            tokenize("w1 $ w2")
        self.assertEqual(ctx.exception.position, 3)

    def test_unterminated_phrase_fails(self) -> None:
        with self.assertRaises(LexError):
            tokenize("'open phrase")

    def test_single_ampersand_fails(self) -> None:
        with self.assertRaises(LexError):
            tokenize("& w1")


class TestParserConformance(unittest.TestCase):
    def test_valid_expressions(self) -> None:
        for text in VALID_EXPRESSIONS:
            with self.subTest(expression=text):
                parse_expression(text)

    def test_invalid_expressions(self) -> None:
        for text in INVALID_EXPRESSIONS:
            with self.subTest(expression=text):
                with self.assertRaises(HQLError):
                    parse_expression(text)

    def test_more_invalid_expressions(self) -> None:
        invalid = (
            "(w1)",
            "()",
            "(&& w1",
            "w1 )",
            "w1 10",
            "> 10",
            "> w1 10 w2",
            "(> w1 10 w2)",
            "!",
            "! && w1",
            "w1 (! w2)",
            "(! w1)",
        )
        for text in invalid:
            with self.subTest(expression=text):
                with self.assertRaises(QuerySyntaxError):
                    parse_expression(text)


class TestParserTrees(unittest.TestCase):
    def test_single_value(self) -> None:
        self.assertEqual(parse_expression("w1"), Value("w1"))

    def test_bare_sequence_is_and(self) -> None:
        self.assertEqual(parse_expression("w1 w2"), And((Value("w1"), Value("w2"))))

    def test_top_level_operator_applies_to_all(self) -> None:
        self.assertEqual(
            parse_expression("|| w1 (&& w2 w3)"),
            Or((Value("w1"), And((Value("w2"), Value("w3"))))),
        )

    def test_phrases_lose_quotes(self) -> None:
        self.assertEqual(
            parse_expression("&& 'a b' \"c d\""),
            And((Value("a b"), Value("c d"))),
        )

    def test_greater_than_holds_raw_terms(self) -> None:
        self.assertEqual(
            parse_expression("> w1 'a b' 3"),
            GreaterThan(("w1", "a b"), 3),
        )
        self.assertEqual(
            parse_expression("(> w1 0)"),
            GreaterThan(("w1",), 0),
        )

    def test_double_negation(self) -> None:
        self.assertEqual(parse_expression("!!w1"), Not(Not(Value("w1"))))

    def test_negated_group(self) -> None:
        self.assertEqual(
            parse_expression("!(|| w1 w2)"),
            Not(Or((Value("w1"), Value("w2")))),
        )

    def test_iter_terms(self) -> None:
        node = parse_expression("&& a (|| !b 'c d') (> e a 2)")
        self.assertEqual(list(iter_terms(node)), ["a", "b", "c d", "e", "a"])

    def test_syntax_error_names_expression(self) -> None:
        with self.assertRaises(QuerySyntaxError) as ctx:
            parse_expression("|| w3 && w4")
        self.assertIn("|| w3 && w4", str(ctx.exception))
        self.assertEqual(ctx.exception.text, "|| w3 && w4")


if __name__ == "__main__":
    unittest.main()
