#!/usr/bin/env python3
"""
Tests for position resolution: token positions, AST nodes, free text, triples.
"""

import pytest
from lark import Token
from types import SimpleNamespace

from srcdiag.shared.fileset import FileSet
from srcdiag.shared.positions import (
    from_ast_node,
    from_lark_error,
    from_lark_token,
    from_position,
    from_text_position,
    from_token_positions,
    node_offsets,
    parse_text_position,
)
from srcdiag.shared.source_location import Position, Span


class TestTokenPositions:
    def test_copies_start_and_end(self):
        start = Position("main.go", 10, 3, 5)
        end = Position("main.go", 14, 3, 9)
        span = from_token_positions(start, end)
        assert span == Span(file="main.go", line=3, column=5, end_line=3, end_column=9)
        assert span.start is None and span.end is None

    @pytest.mark.parametrize("line,column", [(1, 1), (7, 0), (120, 44)])
    def test_matching_fields(self, line, column):
        pos = Position("x.src", 0, line, column)
        span = from_token_positions(pos, pos)
        assert (span.file, span.line, span.column) == ("x.src", line, column)

    def test_empty_filename_is_no_span(self):
        pos = Position("", 0, 3, 5)
        assert from_token_positions(pos, pos) is None


class TestTextPositions:
    def test_path_line_column(self):
        span = parse_text_position("main.go:42:7")
        assert (span.file, span.line, span.column) == ("main.go", 42, 7)
        assert from_text_position("main.go:42:7") == span

    def test_path_line(self):
        span = parse_text_position("pkg/a.go:12")
        assert (span.file, span.line, span.column) == ("pkg/a.go", 12, 0)

    def test_bare_path_is_unknown_span(self):
        span = parse_text_position("pkg/a.go")
        assert span is not None
        assert (span.file, span.line, span.column) == ("pkg/a.go", 0, 0)
        assert not span.is_known
        # Not a usable location on its own
        assert from_text_position("pkg/a.go") is None

    @pytest.mark.parametrize("text", ["", "-", "-:3:4", ":3:4"])
    def test_no_filename(self, text):
        assert parse_text_position(text) is None
        assert from_text_position(text) is None

    def test_non_numeric_column_is_absent(self):
        span = from_text_position("a.go:3:x")
        assert (span.line, span.column) == (3, 0)

    def test_non_numeric_line_degrades_to_no_span(self):
        assert from_text_position("a.go:x:3") is None
        span = parse_text_position("a.go:x:3")
        assert (span.line, span.column) == (0, 0)

    def test_trailing_message_does_not_break_line(self):
        # Everything after the second separator lands in the column field
        span = from_text_position("a.go:3:4: undefined: x")
        assert (span.file, span.line, span.column) == ("a.go", 3, 0)

    def test_negative_segments_are_absent(self):
        assert from_text_position("a.go:-3:4") is None

    def test_never_raises_on_garbage(self):
        for text in ["::::", "a:b:c:d", "\n", ":", "a.go:99999999999999999999"]:
            parse_text_position(text)
            from_text_position(text)


class TestExplicitPosition:
    def test_copies_triple(self):
        span = from_position("main.go", 5, 2)
        assert (span.file, span.line, span.column) == ("main.go", 5, 2)
        assert not span.has_offsets

    def test_negative_values_clamp(self):
        span = from_position("main.go", -1, -1)
        assert (span.line, span.column) == (0, 0)
        assert not span.is_known


class TestAstNodes:
    def test_token_node(self, fileset):
        f = fileset.add_file("a.src", "def abc = 1;\n")
        node = SimpleNamespace(start_pos=f.pos(4), end_pos=f.pos(7))
        span = from_ast_node(fileset, node)
        assert (span.file, span.line, span.column) == ("a.src", 1, 5)
        assert (span.end_line, span.end_column) == (1, 8)
        assert (span.start, span.end) == (4, 7)

    def test_second_file(self, fileset):
        fileset.add_file("a.src", "one\n")
        g = fileset.add_file("b.src", "x\ny\n")
        node = SimpleNamespace(start_pos=g.pos(2), end_pos=g.pos(3))
        span = from_ast_node(fileset, node)
        assert (span.file, span.line, span.column) == ("b.src", 2, 1)

    def test_offset_outside_files_is_no_span(self, fileset):
        fileset.add_file("a.src", "abc")
        assert from_ast_node(fileset, SimpleNamespace(start_pos=10_000, end_pos=10_001)) is None
        assert from_ast_node(fileset, SimpleNamespace(start_pos=0, end_pos=1)) is None

    def test_node_without_offsets_is_no_span(self, fileset):
        fileset.add_file("a.src", "abc")
        assert from_ast_node(fileset, object()) is None
        assert from_ast_node(fileset, None) is None
        assert from_ast_node(fileset, SimpleNamespace(start_pos="1", end_pos=2)) is None

    def test_empty_fileset(self):
        assert from_ast_node(FileSet(), SimpleNamespace(start_pos=1, end_pos=2)) is None

    def test_end_outside_file_collapses_to_start(self, fileset):
        f = fileset.add_file("a.src", "abc")
        span = from_ast_node(fileset, SimpleNamespace(start_pos=f.pos(1), end_pos=10_000))
        assert (span.end_line, span.end_column) == (span.line, span.column)

    def test_lines_monotonic_in_document_order(self, sample_tree, fileset):
        lines = [from_ast_node(fileset, item).line for item in sample_tree.children]
        assert lines == sorted(lines)
        assert lines == [1, 2, 3]

    def test_lark_tree_meta(self, sample_tree, fileset):
        second = sample_tree.children[1]
        span = from_ast_node(fileset, second)
        assert (span.file, span.line, span.column) == ("sample.src", 2, 1)
        assert span.end > span.start

    def test_empty_meta(self, fileset):
        from lark import Tree
        fileset.add_file("a.src", "")
        assert node_offsets(Tree("start", [])) is None
        assert from_ast_node(fileset, Tree("start", [])) is None


class TestLarkAdapters:
    def test_error_position(self):
        err = SimpleNamespace(line=4, column=2, pos_in_stream=30)
        span = from_lark_error(err, "x.src")
        assert (span.file, span.line, span.column) == ("x.src", 4, 2)

    def test_end_of_input_error_has_no_line(self):
        err = SimpleNamespace(line=-1, column=-1)
        assert from_lark_error(err, "x.src") is None

    def test_error_without_filename(self):
        assert from_lark_error(SimpleNamespace(line=1, column=1), "") is None

    def test_token(self):
        tok = Token("NAME", "abc", start_pos=4, line=2, column=3, end_line=2, end_column=6, end_pos=7)
        span = from_lark_token(tok, "t.src")
        assert (span.line, span.column, span.end_line, span.end_column) == (2, 3, 2, 6)

    def test_token_without_line(self):
        assert from_lark_token(Token("NAME", "abc"), "t.src") is None
