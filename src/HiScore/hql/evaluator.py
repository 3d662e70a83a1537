"""Tree-walking HQL evaluator."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from HiScore.core.histogram import is_compound_term
from HiScore.hql.nodes import And, GreaterThan, Node, Not, Or, Value


def evaluate(
    node: Node,
    single: Mapping[str, int],
    compound: Optional[Mapping[str, int]] = None,
) -> bool:
    """Evaluate an expression tree against a document's frequency models.

    Args:
        node: Compiled expression.
        single: Single word histogram.
        compound: Compound word histogram. When None, compound terms are
            looked up in `single`.

    Returns:
        Whether the document satisfies the expression.
    """
    if isinstance(node, Value):
        return count(node.term, single, compound) > 0
    if isinstance(node, GreaterThan):
        return total_count(node.terms, single, compound) > node.threshold
    if isinstance(node, Not):
        negated = False
        while isinstance(node, Not):
            node = node.child
            negated = not negated
        return evaluate(node, single, compound) != negated
    if isinstance(node, And):
        return all(evaluate(child, single, compound) for child in node.children)
    if isinstance(node, Or):
        return any(evaluate(child, single, compound) for child in node.children)
    raise TypeError(f"Unknown HQL node: {node!r}")


def count(
    term: str,
    single: Mapping[str, int],
    compound: Optional[Mapping[str, int]] = None,
) -> int:
    """Return the occurrence count of `term`, 0 if absent."""
    if compound is not None and is_compound_term(term):
        return compound.get(term, 0)
    return single.get(term, 0)


def total_count(
    terms: Iterable[str],
    single: Mapping[str, int],
    compound: Optional[Mapping[str, int]] = None,
) -> int:
    """Sum the occurrence counts of `terms`."""
    return sum(count(term, single, compound) for term in terms)
