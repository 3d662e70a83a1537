"""Compiled query sets.

A query set is an ordered list of HQL expressions, each with a weight,
compiled from query source lines (usually a query file). It is immutable once
built and can be evaluated against any number of documents concurrently.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, Union

from HiScore.core.histogram import FrequencyModels
from HiScore.hql.errors import CompilationError, HQLError
from HiScore.hql.evaluator import evaluate
from HiScore.hql.lexer import VALUE_TOKENS, strip_quotes, tokenize
from HiScore.hql.nodes import Node
from HiScore.hql.parser import parse_expression, parse_tokens
from HiScore.hql.preprocessor import SourceExpression, parse_options, preprocess
from HiScore.hql.scoring import ScoreRecord, realize_scores, score_bounds
from HiScore.utils.log import log


@dataclass(frozen=True, slots=True)
class CompiledQuery:
    """One compiled HQL expression.

    Attributes:
        expression: Expression tree.
        weight: Score contributed when the expression is satisfied.
        source: Expression text as written (after preprocessing).
    """

    expression: Node
    weight: float
    source: str


@dataclass(frozen=True, slots=True)
class QuerySet:
    """Ordered collection of compiled queries.

    Attributes:
        queries: Compiled queries in source order.
        words: All distinct terms referenced by any expression, single and
            compound, quotes stripped.
        min_score: Sum of all negative weights.
        max_score: Sum of all positive weights.
    """

    queries: tuple[CompiledQuery, ...]
    words: frozenset[str]
    min_score: float = field(init=False)
    max_score: float = field(init=False)

    def __post_init__(self) -> None:
        # Bounds are a property of the weights alone; derive them once.
        min_score, max_score = score_bounds(self.weights)
        object.__setattr__(self, "min_score", min_score)
        object.__setattr__(self, "max_score", max_score)

    @classmethod
    def from_file(cls, path: Path) -> QuerySet:
        """Compile a query file (one expression per logical line)."""
        return compile_query_set(path.read_text(encoding="utf-8").splitlines())

    @classmethod
    def from_expressions(cls, *expressions: str) -> QuerySet:
        """Compile expressions given as separate source lines."""
        return compile_query_set(expressions)

    @property
    def expressions(self) -> tuple[str, ...]:
        """Source text of each expression."""
        return tuple(query.source for query in self.queries)

    @property
    def weights(self) -> tuple[float, ...]:
        """Weight of each expression."""
        return tuple(query.weight for query in self.queries)

    def evaluate(self, models: FrequencyModels) -> ScoreRecord:
        """Score one document. See `evaluate_query_set`."""
        return evaluate_query_set(self, models)

    def __len__(self) -> int:
        return len(self.queries)

    def __iter__(self) -> Iterator[CompiledQuery]:
        return iter(self.queries)


def compile_query_set(lines: Iterable[str]) -> QuerySet:
    """Compile query source lines into a query set.

    Compilation is all or nothing: the first malformed expression aborts the
    whole set.

    Args:
        lines: Raw query source lines.

    Returns:
        The compiled query set.

    Raises:
        CompilationError: If any logical line fails to lex or parse.
    """
    queries: list[CompiledQuery] = []
    words: set[str] = set()
    for item in preprocess(lines):
        query, terms = _compile_one(item)
        queries.append(query)
        words.update(terms)
    log.debug("Compiled %d expressions referencing %d terms", len(queries), len(words))
    return QuerySet(queries=tuple(queries), words=frozenset(words))


def _compile_one(item: SourceExpression) -> tuple[CompiledQuery, set[str]]:
    try:
        tokens = tokenize(item.text)
        expression = parse_tokens(tokens, item.text)
    except HQLError as e:
        raise CompilationError(f'invalid expression "{item.source}": {e}', item.source) from e
    terms = {strip_quotes(token.text) for token in tokens if token.type in VALUE_TOKENS}
    return CompiledQuery(expression=expression, weight=item.weight, source=item.text), terms


def evaluate_query_set(query_set: QuerySet, models: FrequencyModels) -> ScoreRecord:
    """Evaluate every expression of a query set against one document.

    Args:
        query_set: Compiled query set.
        models: The document's frequency models.

    Returns:
        The document's score record.
    """
    outcomes = [evaluate(query.expression, models.single, models.compound) for query in query_set.queries]
    return ScoreRecord(
        scores=realize_scores(query_set.weights, outcomes),
        min_score=query_set.min_score,
        max_score=query_set.max_score,
    )


def compile_expression(text: str) -> Node:
    """Compile a single ad hoc expression.

    The text is lowercased and trimmed like query source, and a leading
    options block is accepted and ignored.

    Raises:
        LexError: If the text contains an invalid character.
        QuerySyntaxError: If the text is not a valid expression.
    """
    return parse_expression(parse_options(text.lower().strip()).text)


def matches(expression: Union[str, Node], models: FrequencyModels) -> bool:
    """Check a single expression against a document.

    Args:
        expression: Expression text or an already compiled expression tree.
            Text is compiled with `compile_expression`.
        models: The document's frequency models.

    Raises:
        LexError: If expression text contains an invalid character.
        QuerySyntaxError: If expression text is not a valid expression.
    """
    if isinstance(expression, str):
        expression = compile_expression(expression)
    return evaluate(expression, models.single, models.compound)
