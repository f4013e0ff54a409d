"""
Position Resolver

Normalizes the different "where did this happen" shapes into a Span:

- (start, end) scanner positions
- AST nodes resolved through a FileSet
- free-text positions from external tools, grammar: path[:line[:col]]
- explicit (filename, line, column) triples

Resolution never raises; when no usable location exists the result is None
and the diagnostic simply carries no location for it.
"""

import logging
import re
from typing import Any, Optional, Tuple

from lark import Token

from .fileset import FileSet
from .source_location import Position, Span
from ..utils.config import NO_FILENAME_SENTINEL, UNKNOWN_COLUMN, UNKNOWN_LINE

logger = logging.getLogger(__name__)

# path[:line[:col]] -- at most three fields, split from the left. Anything after
# the second separator belongs to the column field (and usually fails to parse).
_TEXT_POSITION = re.compile(
    r"^(?P<path>[^:]*)(?::(?P<line>[^:]*)(?::(?P<column>.*))?)?$",
    re.DOTALL,
)
_UNSIGNED_INT = re.compile(r"^\+?[0-9]+$")


def _parse_segment(segment: Optional[str]) -> int:
    """Best-effort integer parse; invalid or missing segments are 0."""
    if segment is None or not _UNSIGNED_INT.match(segment):
        return 0
    return int(segment)


def _as_offset(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def node_offsets(node: Any) -> Optional[Tuple[int, int]]:
    """
    (start, end) offsets of an AST node.

    Accepts lark Trees (positions on .meta) and anything exposing
    start_pos/end_pos, such as lark Tokens.
    """
    if node is None:
        return None
    carrier = node
    meta = getattr(node, "meta", None)
    if meta is not None:
        if getattr(meta, "empty", True):
            return None
        carrier = meta
    start = _as_offset(getattr(carrier, "start_pos", None))
    end = _as_offset(getattr(carrier, "end_pos", None))
    if start is None:
        return None
    if end is None or end < start:
        end = start
    return start, end


def from_token_positions(start: Position, end: Position) -> Optional[Span]:
    """Span from a scanner (start, end) pair; None when start has no filename."""
    if not start.filename:
        return None
    return Span(
        file=start.filename,
        line=max(start.line, 0),
        column=max(start.column, 0),
        end_line=max(end.line, 0),
        end_column=max(end.column, 0),
    )


def from_ast_node(fileset: FileSet, node: Any) -> Optional[Span]:
    """Span covering node; None when its offsets do not resolve."""
    offsets = node_offsets(node)
    if offsets is None:
        logger.debug(f"No offsets on {type(node).__name__}, no span")
        return None
    start_pos, end_pos = offsets
    start = fileset.position(start_pos)
    if not start.is_valid():
        logger.debug(f"Offset {start_pos} is outside every known file, no span")
        return None
    end = fileset.position(end_pos)
    if not end.is_valid() or end.filename != start.filename:
        end = start
    return Span(
        file=start.filename,
        line=start.line,
        column=start.column,
        end_line=end.line,
        end_column=end.column,
        start=start.offset,
        end=end.offset,
    )


def parse_text_position(text: str) -> Optional[Span]:
    """
    Parse path[:line[:col]].

    Returns None when the path is empty or "-"; a bare path gives an unknown
    span (line 0, column 0).
    """
    m = _TEXT_POSITION.match(text) if isinstance(text, str) else None
    if m is None:
        return None
    path = m.group("path")
    if path == "" or path == NO_FILENAME_SENTINEL:
        return None
    line = _parse_segment(m.group("line"))
    column = _parse_segment(m.group("column"))
    if line == UNKNOWN_LINE:
        # a column without a line means nothing
        column = UNKNOWN_COLUMN
    return Span(file=path, line=line, column=column, end_line=line, end_column=column)


def from_text_position(text: str) -> Optional[Span]:
    """Like parse_text_position, but only concrete spans (file and line > 0)."""
    span = parse_text_position(text)
    if span is None or not span.is_known:
        logger.debug(f"Text position {text!r} has no usable location")
        return None
    return span


def from_position(filename: str, line: int, column: int) -> Span:
    """Span from structured (filename, line, column) data; offsets unknown."""
    line = max(line, 0)
    column = max(column, 0)
    return Span(file=filename, line=line, column=column, end_line=line, end_column=column)


def from_lark_error(err: Any, filename: str) -> Optional[Span]:
    """Span for a lark UnexpectedInput (line/column are -1 at end of input)."""
    line = _as_offset(getattr(err, "line", None))
    column = _as_offset(getattr(err, "column", None))
    if not filename or line is None or line <= 0:
        return None
    column = column if column is not None and column > 0 else 0
    return from_token_positions(
        Position(filename, _as_offset(getattr(err, "pos_in_stream", None)) or 0, line, column),
        Position(filename, 0, line, column),
    )


def from_lark_token(token: Token, filename: str) -> Optional[Span]:
    """Span for a lark Token, using its line/column bookkeeping."""
    line = getattr(token, "line", None)
    if not filename or not line:
        return None
    column = token.column or 0
    return from_token_positions(
        Position(filename, token.start_pos or 0, line, column),
        Position(filename, token.end_pos or 0, token.end_line or line, token.end_column or column),
    )
