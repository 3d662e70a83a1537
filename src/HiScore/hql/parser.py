"""Recursive-descent parser for the Histogram Query Language.

Grammar (prefix notation)::

    prog  := '&&' expr+ | '||' expr+ | '>' value+ INT | expr+
    expr  := '(' '&&' expr+ ')' | '(' '||' expr+ ')' | '(' '>' value+ INT ')'
           | '!' expr | value
    value := WORD | SQ_PHRASE | DQ_PHRASE

Operators other than `!` appear unparenthesized only as the first token of a
line, where they apply to everything that follows. The grammar is LL(1); any
token that does not fit is a syntax error.
"""

from __future__ import annotations

from typing import NoReturn, Sequence

from HiScore.hql.errors import QuerySyntaxError
from HiScore.hql.lexer import VALUE_TOKENS, Token, TokenType, strip_quotes, tokenize
from HiScore.hql.nodes import And, GreaterThan, Node, Not, Or, Value

_EXPR_START = VALUE_TOKENS | {TokenType.NOT, TokenType.LPAREN}


class _Parser:
    def __init__(self, tokens: Sequence[Token], text: str) -> None:
        self.tokens = tokens
        self.text = text
        self.index = 0

    def peek(self) -> Token | None:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def advance(self) -> Token:
        token = self.peek()
        if token is None:
            self.fail("unexpected end of expression")
        self.index += 1
        return token

    def expect(self, kind: TokenType) -> Token:
        token = self.advance()
        if token.type is not kind:
            self.fail(f"expected {kind.value!r}, got {token.text!r} at {token.pos}")
        return token

    def at_end(self) -> bool:
        return self.index >= len(self.tokens)

    def fail(self, reason: str) -> NoReturn:
        raise QuerySyntaxError(f"invalid syntax: {reason}: {self.text!r}", self.text)

    def prog(self) -> Node:
        token = self.peek()
        if token is None:
            self.fail("empty expression")
        if token.type is TokenType.AND:
            self.advance()
            node: Node = And(self.exprs(until=None))
        elif token.type is TokenType.OR:
            self.advance()
            node = Or(self.exprs(until=None))
        elif token.type is TokenType.GT:
            self.advance()
            node = self.greater_than(until=None)
        else:
            children = self.exprs(until=None)
            node = children[0] if len(children) == 1 else And(children)
        if not self.at_end():
            token = self.peek()
            self.fail(f"unexpected {token.text!r} at {token.pos}")
        return node

    def exprs(self, *, until: TokenType | None) -> tuple[Node, ...]:
        """Parse one or more expressions, stopping at `until` (or end of input)."""
        children: list[Node] = []
        while True:
            token = self.peek()
            if token is None or token.type is until:
                break
            children.append(self.expr())
        if not children:
            self.fail("operator requires at least one operand")
        return tuple(children)

    def expr(self) -> Node:
        token = self.advance()
        negations = 0
        while token.type is TokenType.NOT:
            following = self.peek()
            if following is None or following.type not in _EXPR_START:
                self.fail("'!' requires one expression")
            negations += 1
            token = self.advance()
        node = self.operand(token)
        for _ in range(negations):
            node = Not(node)
        return node

    def operand(self, token: Token) -> Node:
        """Parse a value or a parenthesized operator starting at `token`."""
        if token.type in VALUE_TOKENS:
            return Value(strip_quotes(token.text))
        if token.type is TokenType.LPAREN:
            op = self.advance()
            if op.type is TokenType.AND:
                node: Node = And(self.exprs(until=TokenType.RPAREN))
            elif op.type is TokenType.OR:
                node = Or(self.exprs(until=TokenType.RPAREN))
            elif op.type is TokenType.GT:
                node = self.greater_than(until=TokenType.RPAREN)
            else:
                self.fail(f"expected operator after '(', got {op.text!r} at {op.pos}")
            self.expect(TokenType.RPAREN)
            return node
        self.fail(f"unexpected {token.text!r} at {token.pos}")

    def greater_than(self, *, until: TokenType | None) -> GreaterThan:
        """Parse `value+ INT` of a `>` operator."""
        terms: list[str] = []
        while True:
            token = self.peek()
            if token is None or token.type not in VALUE_TOKENS:
                break
            terms.append(strip_quotes(self.advance().text))
        if not terms:
            self.fail("'>' requires at least one value")
        threshold = self.peek()
        if threshold is None or threshold.type is not TokenType.INT:
            self.fail("'>' requires a trailing integer threshold")
        self.advance()
        following = self.peek()
        if (following.type if following is not None else None) is not until:
            self.fail("'>' threshold must close the operator")
        return GreaterThan(tuple(terms), int(threshold.text))


def parse_tokens(tokens: Sequence[Token], text: str = "") -> Node:
    """Parse a token sequence into an expression tree.

    Raises:
        QuerySyntaxError: If the tokens do not form a valid program, or nest
            too deeply to parse.
    """
    try:
        return _Parser(tokens, text).prog()
    except RecursionError as e:
        raise QuerySyntaxError(f"invalid syntax: expression nested too deeply: {text!r}", text) from e


def parse_expression(text: str) -> Node:
    """Lex and parse one HQL expression.

    Raises:
        LexError: If the text contains an invalid character.
        QuerySyntaxError: If the tokens do not form a valid program.
    """
    return parse_tokens(tokenize(text), text)
