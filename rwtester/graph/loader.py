"""Line-oriented text format for graphs.

Each line is one of::

    # comment
    [A]                 lone vertex
    [A] -- [B] 5        undirected edge, optional integer weight
    [A] -> [B]          directed edge from A to B
    [A] <- [B]          directed edge from B to A

Lines are decoded by a character-level state machine driven by an explicit
transition table, so every malformed line is rejected the same way. The
first edge in a file fixes whether the graph is directed and weighted.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path

from rwtester.errors import MalformedInputError
from rwtester.graph.builder import GraphBuilder
from rwtester.graph.types import Graph

log = logging.getLogger(__name__)

SYNTAX_MISMATCH = "Syntax mismatch"
WEIGHT_MISMATCH = "Graph weight"
GRAPH_IS_DIRECTED = "Graph is directed"
GRAPH_IS_UNDIRECTED = "Graph is undirected"

UNDIRECTED = "--"
FORWARD = "->"
BACKWARD = "<-"

_INTEGER = re.compile(r"[+-]?\d+")


class ParserState(Enum):
    """States of the line decoder, in the order a full edge line visits them."""

    LEADING = auto()  # whitespace before "[" or "#"
    VERTEX_A = auto()  # inside the first brackets
    AFTER_A = auto()  # whitespace before the operator
    OPERATOR = auto()  # second operator character
    BEFORE_B = auto()  # whitespace before the second "["
    VERTEX_B = auto()  # inside the second brackets
    AFTER_B = auto()  # whitespace before the weight
    WEIGHT = auto()  # weight token
    TRAILING = auto()  # whitespace after the weight


class CharClass(Enum):
    SPACE = auto()
    HASH = auto()
    OPEN = auto()
    CLOSE = auto()
    DASH = auto()
    LESS = auto()
    GREATER = auto()
    OTHER = auto()


_SPECIAL = {
    "#": CharClass.HASH,
    "[": CharClass.OPEN,
    "]": CharClass.CLOSE,
    "-": CharClass.DASH,
    "<": CharClass.LESS,
    ">": CharClass.GREATER,
}


def classify(c: str) -> CharClass:
    if c.isspace():
        return CharClass.SPACE
    return _SPECIAL.get(c, CharClass.OTHER)


# Buffers a consumed character can be appended to.
_A, _B, _OP, _WEIGHT = "a", "b", "op", "weight"
# Pseudo-state: the rest of the line is a comment.
_COMMENT = "comment"

S = ParserState
C = CharClass

# state -> {char class (None = any other) -> (next state, buffer)}
# A character with no matching entry makes the line an error.
TRANSITIONS: dict[ParserState, dict[CharClass | None, tuple[ParserState | str, str | None]]] = {
    S.LEADING: {
        C.SPACE: (S.LEADING, None),
        C.HASH: (_COMMENT, None),
        C.OPEN: (S.VERTEX_A, None),
    },
    S.VERTEX_A: {
        C.CLOSE: (S.AFTER_A, None),
        None: (S.VERTEX_A, _A),
    },
    S.AFTER_A: {
        C.SPACE: (S.AFTER_A, None),
        C.DASH: (S.OPERATOR, _OP),
        C.LESS: (S.OPERATOR, _OP),
    },
    S.OPERATOR: {
        C.DASH: (S.BEFORE_B, _OP),
        C.GREATER: (S.BEFORE_B, _OP),
    },
    S.BEFORE_B: {
        C.SPACE: (S.BEFORE_B, None),
        C.OPEN: (S.VERTEX_B, None),
    },
    S.VERTEX_B: {
        C.CLOSE: (S.AFTER_B, None),
        None: (S.VERTEX_B, _B),
    },
    S.AFTER_B: {
        C.SPACE: (S.AFTER_B, None),
        None: (S.WEIGHT, _WEIGHT),
    },
    S.WEIGHT: {
        C.SPACE: (S.TRAILING, None),
        None: (S.WEIGHT, _WEIGHT),
    },
    S.TRAILING: {
        C.SPACE: (S.TRAILING, None),
    },
}

del S, C


@dataclass(frozen=True, slots=True)
class EmptyLine:
    """Blank line or comment."""


@dataclass(frozen=True, slots=True)
class VertexLine:
    name: str


@dataclass(frozen=True, slots=True)
class EdgeLine:
    """Edge declaration as written; operator is "--", "->" or "<-"."""

    source: str
    target: str
    operator: str
    weight: int | None = None

    @property
    def directed(self) -> bool:
        return self.operator != UNDIRECTED

    @property
    def weighted(self) -> bool:
        return self.weight is not None

    def oriented(self) -> tuple[str, str]:
        """(from, to) with "<-" edges flipped."""
        if self.operator == BACKWARD:
            return self.target, self.source
        return self.source, self.target


@dataclass(frozen=True, slots=True)
class ErrorLine:
    reason: str = SYNTAX_MISMATCH


ParsedLine = EmptyLine | VertexLine | EdgeLine | ErrorLine


def parse_line(text: str) -> ParsedLine:
    """Decode one line of the graph format.

    Args:
        text: Line contents without the line terminator.

    Returns:
        EmptyLine, VertexLine, EdgeLine, or ErrorLine if the line is malformed.
    """
    buffers = {_A: [], _B: [], _OP: [], _WEIGHT: []}
    state: ParserState = ParserState.LEADING
    for c in text:
        row = TRANSITIONS[state]
        step = row.get(classify(c)) or row.get(None)
        if step is None:
            return ErrorLine()
        target, buffer = step
        if target == _COMMENT:
            return EmptyLine()
        if buffer is not None:
            buffers[buffer].append(c)
        state = target

    a = "".join(buffers[_A])
    b = "".join(buffers[_B])
    op = "".join(buffers[_OP])
    weight = "".join(buffers[_WEIGHT])

    if state is ParserState.LEADING:
        return EmptyLine()
    if state is ParserState.AFTER_A:
        return VertexLine(a) if a else ErrorLine()
    if state not in (ParserState.AFTER_B, ParserState.WEIGHT, ParserState.TRAILING):
        return ErrorLine()
    if not a or not b or op not in (UNDIRECTED, FORWARD, BACKWARD):
        return ErrorLine()
    if state is ParserState.AFTER_B:
        return EdgeLine(a, b, op)
    if not _INTEGER.fullmatch(weight):
        return ErrorLine()
    return EdgeLine(a, b, op, int(weight))


def parse_graph(lines: Iterable[str]) -> Graph:
    """Build a graph from lines of the text format.

    Lone vertex declarations are added after all edges so that isolated
    vertices survive. A file without edges yields an undirected, unweighted
    graph.

    Args:
        lines: Iterable of lines; trailing newlines are ignored.

    Returns:
        The populated Graph.

    Raises:
        MalformedInputError: On the first malformed or inconsistent line.
    """
    builder: GraphBuilder | None = None
    lone: dict[str, None] = {}

    for line_no, raw in enumerate(lines, start=1):
        parsed = parse_line(raw.rstrip("\r\n"))
        if isinstance(parsed, ErrorLine):
            raise MalformedInputError(line_no, parsed.reason)
        if isinstance(parsed, VertexLine):
            lone[parsed.name] = None
            continue
        if isinstance(parsed, EmptyLine):
            continue

        if builder is None:
            builder = GraphBuilder(directed=parsed.directed, weighted=parsed.weighted)
        if not parsed.directed and builder.directed:
            raise MalformedInputError(line_no, GRAPH_IS_DIRECTED)
        if parsed.directed and not builder.directed:
            raise MalformedInputError(line_no, GRAPH_IS_UNDIRECTED)
        if parsed.weighted != builder.weighted:
            raise MalformedInputError(line_no, WEIGHT_MISMATCH)

        source, target = parsed.oriented()
        builder.add_edge(source, target, parsed.weight)

    if builder is None:
        builder = GraphBuilder(directed=False, weighted=False)
    for name in lone:
        builder.add_vertex(name)
    return builder.build()


def load_graph(path: str | Path) -> Graph:
    """Read a graph text file (UTF-8).

    Raises:
        OSError: If the file cannot be read.
        MalformedInputError: If the contents are malformed.
    """
    path = Path(path)
    with path.open(encoding="utf-8") as f:
        graph = parse_graph(f)
    log.info(
        "Loaded %s: %s, %d vertices, %d edges",
        path, "directed" if graph.is_directed() else "undirected",
        graph.vertex_count, graph.edge_count,
    )
    return graph
