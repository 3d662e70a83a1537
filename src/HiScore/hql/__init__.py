"""Histogram Query Language (HQL).

Compiles weighted boolean expressions over word counts and scores documents
against them.

Example::

    query_set = compile_query_set(["[weight=2] && neural network", "! survey"])
    record = query_set.evaluate(FrequencyModels(single={"neural": 3, "network": 1}))
    record.total_score  # 3.0
"""

from __future__ import annotations

from HiScore.core.histogram import FrequencyModels
from HiScore.hql.errors import (
    CompilationError,
    DegenerateScoreError,
    HQLError,
    LexError,
    QuerySyntaxError,
)
from HiScore.hql.evaluator import evaluate
from HiScore.hql.nodes import And, GreaterThan, Node, Not, Or, Value
from HiScore.hql.parser import parse_expression
from HiScore.hql.query import (
    CompiledQuery,
    QuerySet,
    compile_expression,
    compile_query_set,
    evaluate_query_set,
    matches,
)
from HiScore.hql.scoring import ScoreRecord

__all__ = [
    "And",
    "CompilationError",
    "CompiledQuery",
    "DegenerateScoreError",
    "FrequencyModels",
    "GreaterThan",
    "HQLError",
    "LexError",
    "Node",
    "Not",
    "Or",
    "QuerySet",
    "QuerySyntaxError",
    "ScoreRecord",
    "Value",
    "compile_expression",
    "compile_query_set",
    "evaluate",
    "evaluate_query_set",
    "matches",
    "parse_expression",
]
