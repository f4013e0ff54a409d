"""
srcdiag utilities package
"""

from .io_utils import read_source_file, display_path
from .base import Result, ResultTag

__all__ = ["read_source_file", "display_path", "Result", "ResultTag"]
