"""CLI entry point: `srcdiag FILE --grammar GRAMMAR.lark` or `python -m srcdiag ...`."""

import logging
import sys
from pathlib import Path


def main(argv=None) -> int:
    import argparse
    from .compiler.driver import AnalysisDriver, guard
    from .frontend.parser import SourceParser

    parser = argparse.ArgumentParser(prog="srcdiag", description="Parse files and report diagnostics.")
    parser.add_argument("files", type=Path, nargs="+", help="Source files to check")
    parser.add_argument("--grammar", type=Path, required=True, help="Lark grammar for the source files")
    parser.add_argument("--start", default="start", help="Grammar start rule (default: start)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    for path in [args.grammar, *args.files]:
        if not path.is_file():
            sys.stderr.write(f"srcdiag: error: file not found: {path}\n")
            return 2

    driver = AnalysisDriver()
    loaded = guard(SourceParser.open, args.grammar, start=args.start, fileset=driver.fileset)
    if loaded.is_err():
        driver.reporter.report(loaded.unwrap_err())
    else:
        source_parser = loaded.unwrap()
        for path in args.files:
            result = guard(source_parser.parse_file, path, Path.cwd())
            if result.is_err():
                driver.reporter.report(result.unwrap_err())

    diagnostics = driver.reporter.diagnostics
    for d in diagnostics:
        sys.stderr.write(f"{d}\n")
    if diagnostics:
        count = len(diagnostics)
        sys.stderr.write(f"srcdiag: {count} diagnostic{'s' if count != 1 else ''}\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
