"""HQL lexer: turns preprocessed query text into tokens."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

from HiScore.hql.errors import LexError


class TokenType(enum.Enum):
    AND = "&&"
    OR = "||"
    NOT = "!"
    GT = ">"
    LPAREN = "("
    RPAREN = ")"
    WORD = "WORD"
    SQ_PHRASE = "SQ_PHRASE"
    DQ_PHRASE = "DQ_PHRASE"
    INT = "INT"


# Tokens that name a term.
VALUE_TOKENS = frozenset({TokenType.WORD, TokenType.SQ_PHRASE, TokenType.DQ_PHRASE})


@dataclass(frozen=True, slots=True)
class Token:
    type: TokenType
    text: str
    pos: int


# Order matters only for overlapping prefixes; none of these overlap.
_TOKEN_RE = re.compile(
    r"""
    (?P<WS>[ \t\r\n]+)
  | (?P<AND>&&)
  | (?P<OR>\|\|)
  | (?P<NOT>!)
  | (?P<GT>>)
  | (?P<LPAREN>\()
  | (?P<RPAREN>\))
  | (?P<SQ_PHRASE>'[^']*')
  | (?P<DQ_PHRASE>"[^"]*")
  | (?P<INT>[0-9]+)
  | (?P<WORD>[A-Za-z_\-]+[A-Za-z0-9]*)
    """,
    re.VERBOSE,
)

_QUOTES_RE = re.compile(r"[\"']")


def tokenize(text: str) -> list[Token]:
    """Tokenize an HQL expression.

    Args:
        text: Expression text (already preprocessed).

    Returns:
        Tokens in source order, whitespace discarded.

    Raises:
        LexError: If any character does not start a valid token.
    """
    tokens: list[Token] = []
    pos = 0
    end = len(text)
    while pos < end:
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise LexError(f"unexpected character {text[pos]!r} at {pos}: {text!r}", text, pos)
        kind = match.lastgroup
        if kind != "WS":
            tokens.append(Token(TokenType[kind], match.group(), pos))
        pos = match.end()
    return tokens


def strip_quotes(text: str) -> str:
    """Remove all single and double quote characters from a term."""
    return _QUOTES_RE.sub("", text)
