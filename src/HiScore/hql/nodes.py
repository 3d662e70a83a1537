"""HQL expression tree.

A compiled expression is a tree of the frozen dataclasses below. The set of
node kinds is closed: code dispatching on nodes handles each kind explicitly
and treats anything else as a programming error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class And:
    """True iff every child is true."""

    children: tuple[Node, ...]


@dataclass(frozen=True, slots=True)
class Or:
    """True iff at least one child is true."""

    children: tuple[Node, ...]


@dataclass(frozen=True, slots=True)
class Not:
    """Logical negation of exactly one child."""

    child: Node


@dataclass(frozen=True, slots=True)
class GreaterThan:
    """True iff the summed counts of `terms` exceed `threshold`.

    `terms` holds raw terms (quotes stripped), never `Value` nodes.
    """

    terms: tuple[str, ...]
    threshold: int


@dataclass(frozen=True, slots=True)
class Value:
    """True iff `term` occurs in the document."""

    term: str


Node = Union[And, Or, Not, GreaterThan, Value]


def iter_terms(node: Node):
    """Yield every term referenced by `node`, depth first."""
    while isinstance(node, Not):
        node = node.child
    if isinstance(node, Value):
        yield node.term
    elif isinstance(node, GreaterThan):
        yield from node.terms
    elif isinstance(node, (And, Or)):
        for child in node.children:
            yield from iter_terms(child)
    else:
        raise TypeError(f"Unknown HQL node: {node!r}")
