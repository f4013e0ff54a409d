"""
Source parser adapter

Parses source files with a caller-supplied Lark grammar into a shared
FileSet. Node positions are rebased into the file set's offset space so that
from_ast_node() can resolve any node without knowing its file. Lark
scanner/parser failures come back as DiagnosticError.
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedInput

from ..compiler.srcerrors import generic_parser_error
from ..shared.fileset import FileSet, SourceFile
from ..utils.io_utils import display_path, read_source_file

logger = logging.getLogger(__name__)


class SourceParser:
    """
    Lark front end bound to one FileSet.

    Position tracking is always on (propagate_positions) since every node
    must be resolvable for error reporting.
    """

    def __init__(self, grammar: str, start: str = "start", fileset: Optional[FileSet] = None, **options: Any):
        self.fileset = fileset if fileset is not None else FileSet()
        self.parser = Lark(
            grammar,
            start=start,
            parser=options.pop("parser", "lalr"),
            propagate_positions=True,
            maybe_placeholders=False,
            **options,
        )

    @classmethod
    def open(cls, grammar_path: Union[Path, str], start: str = "start",
             fileset: Optional[FileSet] = None, **options: Any) -> "SourceParser":
        return cls(read_source_file(grammar_path), start=start, fileset=fileset, **options)

    def parse(self, source: str, filename: str) -> Union[Tree, Token]:
        """
        Parse source registered as filename.

        The file is registered even when parsing fails, so positions inside it
        stay resolvable for follow-up diagnostics.
        """
        source_file = self.fileset.add_file(filename, source)
        try:
            tree = self.parser.parse(source)
        except UnexpectedInput as e:
            logger.debug(f"Parse of {filename} failed at {e.line}:{e.column}")
            raise generic_parser_error(e, filename).to_exception() from e
        rebase_positions(tree, source_file)
        return tree

    def parse_file(self, path: Union[Path, str], root: Union[Path, str, None] = None) -> Union[Tree, Token]:
        return self.parse(read_source_file(path), display_path(path, root))


def rebase_positions(tree: Union[Tree, Token], source_file: SourceFile) -> None:
    """Shift file-local start_pos/end_pos of every node and token to global offsets."""
    if isinstance(tree, Token):
        # An inlined start rule (?start) parses to a bare token
        _rebase_token(tree, source_file)
        return
    for subtree in tree.iter_subtrees():
        meta = subtree.meta
        if getattr(meta, "empty", True):
            continue
        meta.start_pos = source_file.pos(meta.start_pos)
        meta.end_pos = source_file.pos(meta.end_pos)
    for token in tree.scan_values(lambda v: isinstance(v, Token)):
        _rebase_token(token, source_file)


def _rebase_token(token: Token, source_file: SourceFile) -> None:
    if token.start_pos is not None:
        token.start_pos = source_file.pos(token.start_pos)
    if token.end_pos is not None:
        token.end_pos = source_file.pos(token.end_pos)
