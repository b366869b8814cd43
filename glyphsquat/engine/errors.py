from __future__ import annotations

"""Exception types raised by the glyphsquat engine."""

from typing import Optional


class GlyphsquatError(Exception):
    """Base class for every error raised on purpose by glyphsquat."""


class TableBuildError(GlyphsquatError):
    """Confusable tables could not be built from their sources.

    Always a configuration problem (missing file, malformed data), never
    transient: callers must not continue with partial tables.
    """

    def __init__(self, message: str, source: Optional[str] = None, line: Optional[int] = None):
        self.source = source
        self.line = line
        where = ""
        if source:
            where = f" ({source}" + (f":{line}" if line is not None else "") + ")"
        super().__init__(f"{message}{where}")


class StreamClosedError(GlyphsquatError):
    """A write reached a stream or queue after it was closed."""
