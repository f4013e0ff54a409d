"""
Shared components: the diagnostic model and position resolution.
"""

from .source_location import Position, Span
from .fileset import FileSet, SourceFile
from .positions import (
    node_offsets,
    from_token_positions, from_ast_node, from_position,
    parse_text_position, from_text_position,
    from_lark_error, from_lark_token,
)
from .locations import (
    LocationType, Location, annotate,
    location_from_node, location_from_positions, collect_locations,
)
from .codes import ErrorCode, format_code
from .diagnostic import Diagnostic, DiagnosticError, new_diagnostic
from .recovery import (
    RecoveredTag, RecoveredFailure,
    extract_from_panic, unhandled_panic, describe_payload,
)
