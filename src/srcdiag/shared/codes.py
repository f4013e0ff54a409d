"""
Diagnostic codes.

One code per diagnostic kind. @unique makes a duplicated value fail at
import time instead of relying on review.
"""

from enum import IntEnum, unique

from ..utils.config import ERROR_CODE_PREFIX, ERROR_CODE_WIDTH


@unique
class ErrorCode(IntEnum):
    UNHANDLED_PANIC = 1
    PARSER_ERROR = 2
    PACKAGE_ERROR = 3
    COMPILER_ERROR = 4
    STANDARD_LIBRARY_ERROR = 5
    GENERIC_ERROR = 6
    INTERNAL_INVARIANT = 7
    DUPLICATE_DEFINITION = 8
    CROSS_SCOPE_REFERENCE = 9
    NOTHING_FOUND = 10

    @property
    def label(self) -> str:
        """E0001-style display label"""
        return format_code(self.value)


def format_code(code: int) -> str:
    return f"{ERROR_CODE_PREFIX}{code:0{ERROR_CODE_WIDTH}d}"
