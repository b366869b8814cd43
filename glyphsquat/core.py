from __future__ import annotations

"""Compatibility facade for the glyphsquat engine.

Public imports remain stable while implementation lives in `glyphsquat.engine`.
"""

from .engine.decoder import get_ascii_homographs, iter_ascii_homographs, substitution_sites
from .engine.errors import GlyphsquatError, StreamClosedError, TableBuildError
from .engine.labelers import DomainLabel, DomainLabeler, HomographLabeler, normalize_base_domains
from .engine.mutator import MutationReport, generate_ascii_homographs, mutate, to_ace, to_unicode
from .engine.pipeline import label_name, label_names, read_names
from .engine.runtime import (
    DATA_DIR,
    DEFAULT_BASE_DOMAINS,
    ROOT,
    Settings,
    _run_coro_sync,
    configure_logging,
    fmt_td,
    load_settings,
    logger,
)
from .engine.tables import ConfusableTables, TableBuilder, build_tables, is_domain_char, load_default_tables

__all__ = [
    "ROOT",
    "DATA_DIR",
    "DEFAULT_BASE_DOMAINS",
    "ConfusableTables",
    "TableBuilder",
    "build_tables",
    "load_default_tables",
    "is_domain_char",
    "substitution_sites",
    "iter_ascii_homographs",
    "get_ascii_homographs",
    "MutationReport",
    "generate_ascii_homographs",
    "mutate",
    "to_ace",
    "to_unicode",
    "DomainLabel",
    "DomainLabeler",
    "HomographLabeler",
    "normalize_base_domains",
    "label_name",
    "label_names",
    "read_names",
    "GlyphsquatError",
    "TableBuildError",
    "StreamClosedError",
    "Settings",
    "load_settings",
    "configure_logging",
    "fmt_td",
    "logger",
    "_run_coro_sync",
]
