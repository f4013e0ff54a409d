"""
Panic Recovery Adapter

Turns whatever escaped a pass into a Diagnostic. The recovered value is
classified exactly once into one of three tagged cases:

- DIAGNOSTIC: a Diagnostic (or DiagnosticError) built by an earlier layer,
  returned unchanged
- ERROR: an exception, wrapped as the cause of an internal diagnostic
- VALUE: anything else, rendered into the summary of an internal diagnostic
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .codes import ErrorCode
from .diagnostic import Diagnostic, DiagnosticError, new_diagnostic
from ..utils.config import INTERNAL_ERR_REPORT, UNHANDLED_PANIC_SUMMARY, UNHANDLED_PANIC_TITLE

logger = logging.getLogger(__name__)


class RecoveredTag(Enum):
    DIAGNOSTIC = "diagnostic"
    ERROR = "error"
    VALUE = "value"


@dataclass(frozen=True)
class RecoveredFailure:
    """Recovered failure, tagged by shape. value is the Diagnostic for DIAGNOSTIC."""
    tag: RecoveredTag
    value: Any

    @classmethod
    def classify(cls, recovered: Any) -> "RecoveredFailure":
        if isinstance(recovered, Diagnostic):
            return cls(RecoveredTag.DIAGNOSTIC, recovered)
        if isinstance(recovered, DiagnosticError):
            return cls(RecoveredTag.DIAGNOSTIC, recovered.diagnostic)
        if isinstance(recovered, BaseException):
            return cls(RecoveredTag.ERROR, recovered)
        return cls(RecoveredTag.VALUE, recovered)

    def is_diagnostic(self) -> bool:
        return self.tag == RecoveredTag.DIAGNOSTIC


def describe_payload(value: Any) -> str:
    """str(value), falling back to a type/identity description if str() fails."""
    try:
        text = str(value)
    except Exception:
        return f"<unprintable {type(value).__name__} object at {id(value):#x}>"
    if not text and isinstance(value, BaseException):
        return type(value).__name__
    return text


def extract_from_panic(recovered: Any) -> Optional[Diagnostic]:
    """The Diagnostic carried by recovered, if it already is one."""
    failure = RecoveredFailure.classify(recovered)
    if failure.is_diagnostic():
        return failure.value
    return None


def unhandled_panic(recovered: Any) -> Diagnostic:
    """
    Diagnostic for a recovered failure. Never raises.

    A payload that already carries a Diagnostic passes through untouched, so
    running this twice over the same failure is a no-op.
    """
    failure = RecoveredFailure.classify(recovered)
    if failure.tag == RecoveredTag.DIAGNOSTIC:
        logger.debug(f"Recovered diagnostic passed through: code {failure.value.code}")
        return failure.value

    # ERROR keeps the exception as cause; VALUE has nothing to chain
    cause = failure.value if failure.tag == RecoveredTag.ERROR else None

    return new_diagnostic(
        code=ErrorCode.UNHANDLED_PANIC,
        title=UNHANDLED_PANIC_TITLE,
        summary=UNHANDLED_PANIC_SUMMARY.format(describe_payload(failure.value)),
        detail=INTERNAL_ERR_REPORT,
        cause=cause,
        is_internal=True,
    )
