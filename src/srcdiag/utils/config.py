"""
Configuration constants to replace magic values throughout srcdiag
"""

# File encoding constants
DEFAULT_FILE_ENCODING = "utf-8"

# Position parsing constants
NO_FILENAME_SENTINEL = "-"  # Used by external tools for "no file"
UNKNOWN_LINE = 0
UNKNOWN_COLUMN = 0

# File set constants
FILESET_BASE = 1  # Offset 0 is reserved for "no position"

# Diagnostic code display
ERROR_CODE_PREFIX = "E"
ERROR_CODE_WIDTH = 4

# Detail text separator used when combining help fragments
DETAIL_SEPARATOR = "\n\n"

# Internal error reporting
UNHANDLED_PANIC_TITLE = "Unhandled Panic"
UNHANDLED_PANIC_SUMMARY = "An unhandled panic occurred: {}"
INTERNAL_ERROR_TITLE = "Internal Error"
INTERNAL_ERR_REPORT = (
    "This is a bug in srcdiag and should not have happened. "
    "Please report this issue to the maintainers, including the command you ran "
    "and the full output, so that it can be fixed."
)

# Driver configuration (environment variables are read at call time)
MAX_WORKERS_ENV = "SRCDIAG_MAX_WORKERS"
DEFAULT_MAX_WORKERS = 4
