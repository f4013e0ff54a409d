"""
Diagnostic Assembler

The Diagnostic is the terminal artifact of error reporting: constructed once
at the failure site, immutable afterwards, and handed upwards to a reporter.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple

from .codes import format_code
from .locations import Location


@dataclass(frozen=True)
class Diagnostic:
    """
    A reportable failure.

    code identifies the diagnostic kind (not the instance). summary is fully
    formatted; detail is optional longer remediation text. cause is the
    lower-level exception this wraps, kept for display and chaining only.
    is_internal marks a bug in the tool rather than in the user's source.
    """
    code: int
    title: str
    summary: str
    detail: str = ""
    cause: Optional[BaseException] = field(default=None, compare=False)
    locations: Tuple[Location, ...] = ()
    is_internal: bool = False

    def __post_init__(self) -> None:
        # Detach from whatever mutable sequence the caller built
        object.__setattr__(self, "locations", tuple(self.locations))

    @property
    def primary_location(self) -> Optional[Location]:
        return self.locations[0] if self.locations else None

    @property
    def label(self) -> str:
        return format_code(self.code)

    def to_exception(self) -> "DiagnosticError":
        return DiagnosticError(self)

    def __str__(self) -> str:
        head = f"error[{self.label}] {self.title}: {self.summary}"
        primary = self.primary_location
        if primary is not None and primary.span.is_known:
            head += f"\n --> {primary.span}"
        return head


class DiagnosticError(Exception):
    """
    Carries a Diagnostic through raise/except.

    Raised by library code that wants to report a failure from deep inside a
    pass; the driver boundary unwraps it without re-wrapping.
    """

    def __init__(self, diagnostic: Diagnostic):
        super().__init__(str(diagnostic))
        self.diagnostic = diagnostic
        if diagnostic.cause is not None:
            self.__cause__ = diagnostic.cause


def new_diagnostic(
    code: int,
    title: str,
    summary: str,
    detail: str = "",
    cause: Optional[BaseException] = None,
    locations: Iterable[Location] = (),
    is_internal: bool = False,
) -> Diagnostic:
    """Assemble a Diagnostic. Pure construction; never fails on valid types."""
    return Diagnostic(
        code=code,
        title=title,
        summary=summary,
        detail=detail,
        cause=cause,
        locations=tuple(locations),
        is_internal=is_internal,
    )
