"""
srcdiag: source-annotated diagnostics for compilers and static analysers.
"""

from .shared import (
    Position, Span, FileSet, SourceFile,
    from_token_positions, from_ast_node, from_position,
    parse_text_position, from_text_position,
    LocationType, Location, annotate, location_from_node, location_from_positions, collect_locations,
    ErrorCode, Diagnostic, DiagnosticError, new_diagnostic,
    RecoveredTag, RecoveredFailure, extract_from_panic, unhandled_panic,
)

__version__ = "0.1.0"
