"""
Error catalog

Constructors for the diagnostics reported by the tool. Each one picks its
code, formats the user-facing text and gathers locations; the model and
resolution rules live in srcdiag.shared.
"""

from typing import Any, Optional

from lark.exceptions import UnexpectedInput

from ..shared.codes import ErrorCode
from ..shared.diagnostic import Diagnostic, new_diagnostic
from ..shared.fileset import FileSet
from ..shared.locations import (
    LocationType, annotate, collect_locations, location_from_node,
)
from ..shared.positions import (
    from_lark_error, from_position, from_text_position, from_token_positions,
)
from ..shared.recovery import unhandled_panic
from ..shared.source_location import Position
from ..utils.config import INTERNAL_ERR_REPORT, INTERNAL_ERROR_TITLE
from .help import (
    combine, cross_scope_help, duplicate_definition_help,
    external_tool_help, nothing_found_help,
)

__all__ = [
    "PackageError",
    "unhandled_panic",
    "generic_parser_error",
    "generic_package_error",
    "generic_compiler_error",
    "standard_library_error",
    "generic_error",
    "internal_invariant_violated",
    "duplicate_definition",
    "cross_scope_reference",
    "nothing_found",
]


class PackageError(Exception):
    """
    Error reported by an external package loader.

    pos is free text in the loader's path[:line[:col]] format ("" or "-" when
    the loader had no position).
    """

    def __init__(self, pos: str, msg: str):
        super().__init__(f"{pos}: {msg}" if pos else msg)
        self.pos = pos
        self.msg = msg


def _first_line(text: str) -> str:
    lines = text.strip().splitlines()
    return lines[0].strip() if lines else ""


def generic_parser_error(err: UnexpectedInput, filename: str) -> Diagnostic:
    """An error reported by the parser itself, not one of our own checks."""
    span = from_lark_error(err, filename)
    return new_diagnostic(
        code=ErrorCode.PARSER_ERROR,
        title="Parse Error in Source",
        summary=_first_line(str(err)) or type(err).__name__,
        cause=err,
        locations=collect_locations(annotate(span) if span is not None else None),
    )


def generic_package_error(err: PackageError) -> Diagnostic:
    span = from_text_position(err.pos)
    return new_diagnostic(
        code=ErrorCode.PACKAGE_ERROR,
        title="Package Error",
        summary=err.msg,
        detail=external_tool_help,
        cause=err,
        locations=collect_locations(annotate(span) if span is not None else None),
    )


def generic_compiler_error(filename: str, line: int, column: int, error: str) -> Diagnostic:
    """An error line from an external compiler that already gave us structured data."""
    return new_diagnostic(
        code=ErrorCode.COMPILER_ERROR,
        title="Compilation Error",
        summary=error.strip(),
        detail=external_tool_help,
        locations=[annotate(from_position(filename, line, column))],
    )


def standard_library_error(err: BaseException) -> Diagnostic:
    """A failure from library code we called, not from the user's source."""
    return new_diagnostic(
        code=ErrorCode.STANDARD_LIBRARY_ERROR,
        title="Error",
        summary=str(err) or type(err).__name__,
        detail=INTERNAL_ERR_REPORT,
        cause=err,
        is_internal=True,
    )


def generic_error(pos: Position, msg: str) -> Diagnostic:
    """Placeholder for ad hoc positioned errors without a dedicated kind."""
    span = from_token_positions(pos, pos)
    return new_diagnostic(
        code=ErrorCode.GENERIC_ERROR,
        title="Error",
        summary=msg,
        locations=collect_locations(annotate(span) if span is not None else None),
    )


def internal_invariant_violated(fileset: FileSet, node: Any, summary: str) -> Diagnostic:
    """A required invariant was broken by the tool itself at node."""
    return new_diagnostic(
        code=ErrorCode.INTERNAL_INVARIANT,
        title=INTERNAL_ERROR_TITLE,
        summary=summary,
        detail=INTERNAL_ERR_REPORT,
        locations=collect_locations(location_from_node(fileset, node)),
        is_internal=True,
    )


def duplicate_definition(fileset: FileSet, kind: str, name: str, first: Any, second: Any) -> Diagnostic:
    first_loc = location_from_node(fileset, first)
    second_loc = location_from_node(fileset, second)
    if first_loc is not None:
        first_loc = first_loc.relabel(LocationType.HELP, "originally defined here")
    if second_loc is not None:
        second_loc = second_loc.relabel(text="redefined here")

    return new_diagnostic(
        code=ErrorCode.DUPLICATE_DEFINITION,
        title=f"Duplicate {kind} name",
        summary=f"The {kind} name \"{name}\" must be unique, but it is defined more than once.",
        detail=duplicate_definition_help,
        locations=collect_locations(first_loc, second_loc),
    )


def cross_scope_reference(
    fileset: FileSet,
    kind: str,
    reference: Any,
    defined: Any,
    scope: Optional[str] = None,
) -> Diagnostic:
    ref_loc = location_from_node(fileset, reference, text="referenced here")
    defined_loc = location_from_node(fileset, defined, LocationType.HELP, "defined here")
    where = f"the {scope} scope" if scope else "the scope that defines it"

    return new_diagnostic(
        code=ErrorCode.CROSS_SCOPE_REFERENCE,
        title=f"Cross scope {kind} reference",
        summary=f"A {kind} can only be referenced from within {where}.",
        detail=cross_scope_help,
        locations=collect_locations(ref_loc, defined_loc),
    )


def nothing_found(kind: str, extra_help: str = "") -> Diagnostic:
    """Application-wide failure: there is no single location to point at."""
    return new_diagnostic(
        code=ErrorCode.NOTHING_FOUND,
        title=f"No {kind}s found",
        summary=f"No {kind}s were found in the application.",
        detail=combine(nothing_found_help, extra_help),
    )
