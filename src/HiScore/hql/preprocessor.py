"""Query source preprocessing.

Turns raw query source lines into logical expressions:

- lines are lowercased and trimmed, empty lines are skipped
- lines starting with `#` are comments
- a trailing `\\` continues the logical line on the next line
- a logical line may start with an options block, e.g. `[weight=2.5]`
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Iterable, Iterator

from HiScore.hql.errors import CompilationError
from HiScore.utils.log import log

DEFAULT_WEIGHT = 1.0
COMMENT_CHAR = "#"
SPLIT_LINE_CHAR = "\\"

_OPTIONS_RE = re.compile(r"^\[(?P<options>[^\]]*)\](?P<expression>.*)$", re.DOTALL)
_REAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


class QueryOption(str, enum.Enum):
    """Option names recognized in an options block."""

    WEIGHT = "weight"


@dataclass(frozen=True, slots=True)
class SourceExpression:
    """One logical query line after preprocessing.

    Attributes:
        text: Expression text handed to the lexer.
        weight: Expression weight.
        source: The complete logical line, options block included.
    """

    text: str
    weight: float
    source: str


def preprocess(lines: Iterable[str]) -> Iterator[SourceExpression]:
    """Yield logical expressions from raw query source lines.

    Raises:
        CompilationError: If the input ends inside a line continuation.
    """
    buffer: list[str] = []
    for raw in lines:
        line = raw.lower().strip()
        if not line or line.startswith(COMMENT_CHAR):
            continue
        if line.endswith(SPLIT_LINE_CHAR):
            buffer.append(line[:-1])
            continue
        buffer.append(line)
        logical = "".join(buffer)
        buffer.clear()
        yield parse_options(logical)

    if buffer:
        pending = "".join(buffer)
        raise CompilationError(f"unterminated line continuation: {pending!r}", pending)


def parse_options(line: str) -> SourceExpression:
    """Split an optional leading options block off a logical line."""
    match = _OPTIONS_RE.match(line)
    if match is None:
        return SourceExpression(text=line, weight=DEFAULT_WEIGHT, source=line)

    options = _scan_options(match.group("options"))
    weight = DEFAULT_WEIGHT
    raw_weight = options.get(QueryOption.WEIGHT)
    if raw_weight is not None:
        if _REAL_RE.fullmatch(raw_weight):
            weight = float(raw_weight)
        else:
            log.debug("Ignoring malformed weight %r in %r", raw_weight, line)
    return SourceExpression(text=match.group("expression").strip(), weight=weight, source=line)


def _scan_options(block: str) -> dict[QueryOption, str]:
    """Parse `opt, var=val, ...` into recognized option values.

    Flags without a value and unknown option names are ignored.
    """
    options: dict[QueryOption, str] = {}
    for item in block.split(","):
        name, sep, value = item.partition("=")
        if not sep:
            continue
        try:
            option = QueryOption(name.strip())
        except ValueError:
            log.debug("Ignoring unknown query option %r", name.strip())
            continue
        options[option] = value.split("=", 1)[0].strip()
    return options
