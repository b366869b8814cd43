from __future__ import annotations

"""Confusable glyph tables.

Three heterogeneous sources feed one builder:
- the curated literal table in `glyphsquat.engine.mimic`
- a JSON object mapping single ASCII characters to arrays of confusable strings
- a grouped text file where every line lists characters that look alike

The builder produces an immutable `ConfusableTables` value holding a forward
table (glyph -> ASCII characters it can pass for) and a reverse table (ASCII
character -> glyphs that can impersonate it). Readers share the value freely;
nothing mutates it after `TableBuilder.build()` returns.
"""

import json
import threading
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

import idna

from .errors import TableBuildError
from .mimic import MIMIC_HOMOGLYPHS
from .runtime import DATA_DIR, logger

JSON_SOURCE_NAME = "homoglyphs.json"
TEXT_SOURCE_NAME = "homoglyphs.txt"

PathLike = Union[str, Path]


def is_domain_char(ch: str) -> bool:
    """True for a single digit, hyphen, period or ASCII letter."""
    if len(ch) != 1:
        return False
    if ch == "." or ch == "-":
        return True
    return "0" <= ch <= "9" or "a" <= ch <= "z" or "A" <= ch <= "Z"


def is_label_glyph(glyph: str) -> bool:
    """True when `glyph` on its own is a valid IDNA 2008 label character."""
    if glyph == "-":
        return True
    try:
        idna.check_label(glyph)
    except idna.IDNAError:
        return False
    return True


@dataclass(frozen=True)
class ConfusableTables:
    forward: Mapping[str, Tuple[str, ...]]
    reverse: Mapping[str, Tuple[str, ...]]

    def ascii_for(self, glyph: str) -> Tuple[str, ...]:
        return self.forward.get(glyph, ())

    def glyphs_for(self, ch: str) -> Tuple[str, ...]:
        return self.reverse.get(ch, ())

    def summary(self) -> Dict[str, int]:
        return {
            "forward_keys": len(self.forward),
            "forward_pairs": sum(len(v) for v in self.forward.values()),
            "reverse_keys": len(self.reverse),
            "reverse_pairs": sum(len(v) for v in self.reverse.values()),
        }


class TableBuilder:
    """Accumulates (glyph, ascii) pairs and freezes them into `ConfusableTables`.

    Lists keep insertion order and never hold duplicates: a glyph may pass for
    several ASCII characters and an ASCII character has many impersonators, so
    later sources append instead of overwriting.
    """

    def __init__(self) -> None:
        self._forward: Dict[str, List[str]] = {}
        self._reverse: Dict[str, List[str]] = {}

    def add_pair(self, glyph: str, ascii_char: str) -> bool:
        """Register `glyph` as confusable with `ascii_char`.

        Returns False when the target is not a domain character (the pair is
        dropped). Multi-character glyphs only ever reach the forward table, and
        so do glyphs IDNA 2008 never accepts in a label, such as capitals and
        ASCII punctuation.
        """
        if not glyph:
            raise TableBuildError(f"empty glyph for target {ascii_char!r}")
        if len(ascii_char) != 1 or ord(ascii_char) > 0x7F:
            raise TableBuildError(f"invalid ascii target {ascii_char!r} for glyph {glyph!r}")

        target = ascii_char.lower()
        if not is_domain_char(target):
            return False

        targets = self._forward.setdefault(glyph, [])
        if target not in targets:
            targets.append(target)

        if len(glyph) == 1 and is_label_glyph(glyph):
            glyphs = self._reverse.setdefault(target, [])
            if glyph not in glyphs:
                glyphs.append(glyph)
        return True

    def add_literal(self, table: Mapping[str, Tuple[str, str]] = MIMIC_HOMOGLYPHS) -> "TableBuilder":
        for ascii_char, (close_glyphs, _loose_glyphs) in table.items():
            for glyph in close_glyphs:
                self.add_pair(glyph, ascii_char)
        return self

    def add_json_mapping(self, mapping: Any, source: Optional[str] = None) -> "TableBuilder":
        if not isinstance(mapping, dict):
            raise TableBuildError("confusables JSON must be an object", source)

        for key, values in mapping.items():
            # multi-character and non-ASCII keys have no single ASCII target
            if len(key) != 1 or ord(key) > 0x7F:
                continue
            if not isinstance(values, list):
                raise TableBuildError(f"confusables for key {key!r} must be an array", source)
            for value in values:
                if not isinstance(value, str):
                    raise TableBuildError(f"non-string confusable for key {key!r}: {value!r}", source)
                if not value:
                    raise TableBuildError(f"empty confusable string for key {key!r}", source)
                self.add_pair(value, key)
        return self

    def add_json(self, path: PathLike) -> "TableBuilder":
        path = Path(path)
        try:
            with path.open("r", encoding="utf-8") as fh:
                mapping = json.load(fh)
        except FileNotFoundError:
            raise TableBuildError("confusables JSON not found", str(path)) from None
        except json.JSONDecodeError as exc:
            raise TableBuildError(f"malformed confusables JSON: {exc.msg}", str(path), exc.lineno) from None
        except (OSError, UnicodeDecodeError) as exc:
            raise TableBuildError(f"cannot read confusables JSON: {exc}", str(path)) from None
        logger.debug("Loaded %d confusable keys from %s", len(mapping) if isinstance(mapping, dict) else 0, path)
        return self.add_json_mapping(mapping, source=str(path))

    def add_grouped_lines(self, lines: Iterable[str], source: Optional[str] = None) -> "TableBuilder":
        for lineno, raw in enumerate(lines, start=1):
            line = raw.rstrip("\r\n")
            if not line.strip() or line.startswith("#"):
                continue

            anchors = [ch for ch in line if is_domain_char(ch)]
            if not anchors:
                raise TableBuildError("group has no domain character anchor", source, lineno)

            for ch in line:
                if is_domain_char(ch) or ch.isspace():
                    continue
                for anchor in anchors:
                    self.add_pair(ch, anchor)
        return self

    def add_grouped_text(self, path: PathLike) -> "TableBuilder":
        path = Path(path)
        try:
            with path.open("r", encoding="utf-8") as fh:
                lines = fh.readlines()
        except FileNotFoundError:
            raise TableBuildError("grouped homoglyph file not found", str(path)) from None
        except (OSError, UnicodeDecodeError) as exc:
            raise TableBuildError(f"cannot read grouped homoglyph file: {exc}", str(path)) from None
        logger.debug("Loaded %d lines from %s", len(lines), path)
        return self.add_grouped_lines(lines, source=str(path))

    def build(self) -> ConfusableTables:
        forward = {glyph: tuple(targets) for glyph, targets in self._forward.items()}
        reverse = {ch: tuple(glyphs) for ch, glyphs in self._reverse.items()}
        return ConfusableTables(forward=MappingProxyType(forward), reverse=MappingProxyType(reverse))


def build_tables(
    json_path: Optional[PathLike] = None,
    text_path: Optional[PathLike] = None,
    data_dir: Optional[PathLike] = None,
    literal: Optional[Mapping[str, Tuple[str, str]]] = MIMIC_HOMOGLYPHS,
) -> ConfusableTables:
    """Build tables from all three sources.

    Paths default to `homoglyphs.json` / `homoglyphs.txt` inside `data_dir`
    (the bundled data directory when omitted). Any source problem raises
    `TableBuildError` and no table is returned.
    """
    base = Path(data_dir) if data_dir else DATA_DIR
    builder = TableBuilder()
    if literal:
        builder.add_literal(literal)
    builder.add_json(json_path or base / JSON_SOURCE_NAME)
    builder.add_grouped_text(text_path or base / TEXT_SOURCE_NAME)
    return builder.build()


_TABLE_CACHE: Dict[str, ConfusableTables] = {}
_TABLE_LOCK = threading.Lock()


def load_default_tables(data_dir: Optional[PathLike] = None) -> ConfusableTables:
    """Build the tables for `data_dir` once per process and reuse them."""
    key = str(Path(data_dir).expanduser().resolve()) if data_dir else str(DATA_DIR)
    with _TABLE_LOCK:
        cached = _TABLE_CACHE.get(key)
        if cached is not None:
            return cached
        tables = build_tables(data_dir=key)
        _TABLE_CACHE[key] = tables
    summary = tables.summary()
    logger.info(
        "Confusable tables ready: %d glyph keys, %d ascii keys",
        summary["forward_keys"],
        summary["reverse_keys"],
    )
    return tables
