"""
Error catalog and driver boundary.
"""

from .driver import AnalysisDriver, DiagnosticReporter, guard
from . import srcerrors
