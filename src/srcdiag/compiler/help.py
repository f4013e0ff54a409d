"""
Reusable detail fragments for diagnostics.
"""

from ..utils.config import DETAIL_SEPARATOR

duplicate_definition_help = (
    "Names must be unique within their scope. Rename one of the definitions, "
    "or reuse the original definition by referencing it instead of redefining it."
)

cross_scope_help = (
    "A resource can only be referenced from within the scope that defines it. "
    "Move the reference into that scope or expose the resource through its public API."
)

nothing_found_help = (
    "Make sure the analysed root contains at least one source file with a definition, "
    "and that the files are not excluded by the configured patterns."
)

external_tool_help = (
    "This error was reported by an external tool while processing your sources. "
    "The location shown is the one reported by that tool."
)


def combine(*fragments: str) -> str:
    """Join non-empty fragments into one multi-paragraph detail text."""
    return DETAIL_SEPARATOR.join(f.strip() for f in fragments if f and f.strip())
