"""Public package surface for glyphsquat.

Importing `glyphsquat` exposes the decoder, the mutation generator, the
homograph labeler and the package version, keeping internals hidden by default.
"""

from .core import (
    ConfusableTables,
    DomainLabel,
    GlyphsquatError,
    HomographLabeler,
    StreamClosedError,
    TableBuildError,
    build_tables,
    generate_ascii_homographs,
    get_ascii_homographs,
    label_names,
    load_default_tables,
    mutate,
)
from .version import __version__

__all__ = [
    "ConfusableTables",
    "DomainLabel",
    "GlyphsquatError",
    "HomographLabeler",
    "StreamClosedError",
    "TableBuildError",
    "build_tables",
    "generate_ascii_homographs",
    "get_ascii_homographs",
    "label_names",
    "load_default_tables",
    "mutate",
    "__version__",
]
