from __future__ import annotations

import json
from pathlib import Path

import idna

from glyphsquat.engine.mutator import MutationReport
from glyphsquat.output import display_unicode, output_mutations, output_tables_summary, print_json_output


def test_display_unicode_decodes_ace_and_keeps_invalid_input():
    ace = idna.encode("аpple.com").decode("ascii")
    assert display_unicode(ace) == "аpple.com"
    assert display_unicode("a..b") == "a..b"


def test_print_json_output_keeps_unicode(capsys):
    print_json_output({"domain": "аpple.com", "candidates": ["apple.com"]})
    out = capsys.readouterr().out
    assert "аpple.com" in out
    assert json.loads(out)["candidates"] == ["apple.com"]


def test_renderers_print_summaries(capsys):
    report = MutationReport(domain="apple.com", emitted=1, truncated=True)
    ace = idna.encode("аpple.com").decode("ascii")
    output_mutations("apple.com", [ace], report, show_unicode=True)
    output_tables_summary({"forward_keys": 3, "reverse_keys": 2}, Path("/tmp/data"))
    out = capsys.readouterr().out
    assert ace in out
    assert "Truncated" in out
    assert "Glyph keys" in out
