"""
File Set

Maps global character offsets to (file, line, column). Every registered file
owns the offset range [base, base + size]; ranges never overlap, so an offset
alone identifies its file.
"""

import bisect
import logging
import threading
from pathlib import Path
from typing import List, Optional, Union

from .source_location import Position
from ..utils.config import FILESET_BASE
from ..utils.io_utils import read_source_file

logger = logging.getLogger(__name__)


class SourceFile:
    """A registered file with its line-start table."""

    def __init__(self, name: str, base: int, source: str):
        self.name = name
        self.base = base
        self.size = len(source)
        self.source = source
        self._line_starts: List[int] = [0]
        for i, ch in enumerate(source):
            if ch == "\n":
                self._line_starts.append(i + 1)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def contains(self, pos: int) -> bool:
        # End-of-file is addressable (node ends point one past the last char)
        return self.base <= pos <= self.base + self.size

    def pos(self, offset: int) -> int:
        """Global position for a file-local offset."""
        if not 0 <= offset <= self.size:
            raise ValueError(f"offset {offset} out of range for {self.name} (size {self.size})")
        return self.base + offset

    def offset(self, pos: int) -> int:
        """File-local offset for a global position."""
        if not self.contains(pos):
            raise ValueError(f"position {pos} not in {self.name}")
        return pos - self.base

    def position(self, pos: int) -> Position:
        offset = self.offset(pos)
        line_idx = bisect.bisect_right(self._line_starts, offset) - 1
        return Position(
            filename=self.name,
            offset=offset,
            line=line_idx + 1,
            column=offset - self._line_starts[line_idx] + 1,
        )

    def __repr__(self) -> str:
        return f"SourceFile({self.name!r}, base={self.base}, size={self.size})"


class FileSet:
    """
    Set of source files sharing one offset space.

    Registration is serialized; lookups only read the per-file tables and are
    safe from any number of threads.
    """

    def __init__(self, base: int = FILESET_BASE):
        if base < 1:
            raise ValueError("FileSet base must be >= 1 (0 means no position)")
        self._base = base
        self._files: List[SourceFile] = []
        self._bases: List[int] = []
        self._lock = threading.Lock()

    def add_file(self, name: str, source: str) -> SourceFile:
        with self._lock:
            f = SourceFile(name, self._base, source)
            self._files.append(f)
            self._bases.append(f.base)
            # +1 so that the end-of-file position of one file is not the start of the next
            self._base += f.size + 1
        logger.debug(f"Registered {name} at base {f.base} ({f.size} chars, {f.line_count} lines)")
        return f

    def read_file(self, path: Union[Path, str], name: Optional[str] = None) -> SourceFile:
        return self.add_file(name if name is not None else str(path), read_source_file(path))

    def file(self, pos: int) -> Optional[SourceFile]:
        """The file containing pos, or None."""
        files = self._files
        idx = bisect.bisect_right(self._bases[:len(files)], pos) - 1
        if idx < 0:
            return None
        f = files[idx]
        return f if f.contains(pos) else None

    def position(self, pos: int) -> Position:
        """Resolve pos; an invalid Position (line 0) when pos is unknown."""
        f = self.file(pos)
        if f is None:
            return Position()
        return f.position(pos)

    def files(self) -> List[SourceFile]:
        return list(self._files)

    def __len__(self) -> int:
        return len(self._files)
