"""
Driver boundary

Runs analysis passes and makes sure nothing but Diagnostics leaves the tool:
every failure escaping a pass goes through the panic recovery adapter once
and comes back as Result.err(diagnostic). Diagnostics from all passes are
aggregated by a DiagnosticReporter.
"""

import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Iterable, List, Optional, Sequence, TypeVar

from ..shared.diagnostic import Diagnostic
from ..shared.fileset import FileSet
from ..shared.recovery import unhandled_panic
from ..utils.base import Result
from ..utils.config import DEFAULT_MAX_WORKERS, MAX_WORKERS_ENV

logger = logging.getLogger(__name__)

T = TypeVar('T')

# A pass inspects the file set and returns the diagnostics it found
AnalysisPass = Callable[[FileSet], Iterable[Diagnostic]]


def guard(func: Callable[..., T], *args: Any, **kwargs: Any) -> Result[T, Diagnostic]:
    """
    Call func, converting any escaping exception into a Diagnostic.

    KeyboardInterrupt and SystemExit are not intercepted.
    """
    try:
        return Result.ok(func(*args, **kwargs))
    except Exception as e:
        diagnostic = unhandled_panic(e)
        if diagnostic.is_internal:
            logger.warning(f"Recovered internal failure: {diagnostic.summary}")
        return Result.err(diagnostic)


class DiagnosticReporter:
    """
    Aggregation point for diagnostics produced by concurrent passes.

    Diagnostics are kept in arrival order.
    """

    def __init__(self):
        self._diagnostics: List[Diagnostic] = []
        self._lock = threading.Lock()

    def report(self, diagnostic: Diagnostic) -> None:
        with self._lock:
            self._diagnostics.append(diagnostic)

    def extend(self, diagnostics: Iterable[Diagnostic]) -> None:
        items = list(diagnostics)
        with self._lock:
            self._diagnostics.extend(items)

    @property
    def diagnostics(self) -> List[Diagnostic]:
        with self._lock:
            return list(self._diagnostics)

    def has_errors(self) -> bool:
        with self._lock:
            return len(self._diagnostics) > 0

    def internal_errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.is_internal]

    def user_errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if not d.is_internal]


def _max_workers() -> int:
    raw = os.environ.get(MAX_WORKERS_ENV, "")
    try:
        value = int(raw) if raw else DEFAULT_MAX_WORKERS
    except ValueError:
        logger.warning(f"Ignoring invalid {MAX_WORKERS_ENV}={raw!r}")
        value = DEFAULT_MAX_WORKERS
    return max(1, value)


class AnalysisDriver:
    """
    Top-level driver.

    Passes run independently over the same FileSet. A pass that raises
    contributes exactly one diagnostic, its recovered failure; partial results
    are lost with the exception.
    """

    def __init__(self, fileset: Optional[FileSet] = None, reporter: Optional[DiagnosticReporter] = None):
        self.fileset = fileset if fileset is not None else FileSet()
        self.reporter = reporter if reporter is not None else DiagnosticReporter()

    def run_pass(self, analysis_pass: AnalysisPass) -> List[Diagnostic]:
        result = guard(lambda: list(analysis_pass(self.fileset)))
        found = result.unwrap() if result.is_ok() else [result.unwrap_err()]
        self.reporter.extend(found)
        return found

    def run(self, passes: Sequence[AnalysisPass], max_workers: Optional[int] = None) -> List[Diagnostic]:
        """
        Run passes, concurrently when more than one worker is allowed.

        Returns all diagnostics, grouped per pass in the order passes were given.
        """
        workers = max_workers if max_workers is not None else _max_workers()
        logger.debug(f"Running {len(passes)} pass(es) with {workers} worker(s)")
        if workers <= 1 or len(passes) <= 1:
            per_pass = [self.run_pass(p) for p in passes]
        else:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                per_pass = list(pool.map(self.run_pass, passes))
        return [d for found in per_pass for d in found]
