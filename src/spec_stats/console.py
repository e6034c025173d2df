"""Console diagnostics: report lines go to stdout, everything else to stderr."""

import sys


def warn(message: str) -> None:
    print(f"⚠️  {message}", file=sys.stderr)


def debug(message: str, enabled: bool = True) -> None:
    if enabled:
        print(message, file=sys.stderr)
