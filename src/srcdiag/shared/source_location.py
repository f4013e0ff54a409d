"""
Source Location (Span)

Positions as reported by scanners and spans as consumed by diagnostics.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Position:
    """
    A single scanner position.

    offset is 0-based within the file; line and column are 1-based,
    0 meaning unknown. A position is valid iff line > 0.
    """
    filename: str = ""
    offset: int = 0
    line: int = 0
    column: int = 0

    def is_valid(self) -> bool:
        return self.line > 0


@dataclass(frozen=True)
class Span:
    """
    Resolved source location.

    - file may be empty when the producer did not know it
    - line/column are 1-based, 0 = unknown; a span with line 0 is "unknown"
      and must never be rendered as a concrete location
    - start/end are 0-based character offsets within the file, only set when
      the span was resolved from an AST node
    """
    file: str
    line: int
    column: int = 0
    end_line: int = 0
    end_column: int = 0
    start: Optional[int] = None
    end: Optional[int] = None

    def __post_init__(self) -> None:
        if self.line < 0 or self.column < 0:
            raise ValueError(f"Span line/column cannot be negative: {self.line}:{self.column}")
        if self.end_line < 0 or self.end_column < 0:
            raise ValueError(f"Span end line/column cannot be negative: {self.end_line}:{self.end_column}")
        if (self.start is None) != (self.end is None):
            raise ValueError("Span offsets must be given as a (start, end) pair")
        if self.start is not None and not 0 <= self.start <= self.end:
            raise ValueError(f"Span offset range invalid: {self.start}..{self.end}")

    @property
    def is_known(self) -> bool:
        return self.line > 0

    @property
    def has_offsets(self) -> bool:
        return self.start is not None

    def __str__(self) -> str:
        """Format as file:line:column (unknown parts omitted)"""
        if not self.is_known:
            return self.file or "<unknown location>"
        s = f"{self.file}:{self.line}" if self.file else str(self.line)
        if self.column:
            s += f":{self.column}"
        return s
