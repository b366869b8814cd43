from __future__ import annotations

"""Terminal rendering helpers for glyphsquat.

This module contains presentation-only logic. It never builds tables or runs
mutations itself; callers hand it finished results.
"""

import json
import sys
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from .core import MutationReport, fmt_td, to_unicode

console = Console()
err_console = Console(stderr=True)

KV_FIELD_WIDTH = 22


def _table_width() -> int:
    try:
        return max(80, int(console.size.width) - 2)
    except Exception:
        return 100


def _new_table(
    *,
    title: Optional[str] = None,
    box_style: Any = box.SIMPLE,
    show_header: bool = True,
    header_style: Optional[str] = None,
) -> Table:
    return Table(
        title=title,
        box=box_style,
        show_header=show_header,
        header_style=header_style,
        title_justify="left",
        width=_table_width(),
        expand=False,
        pad_edge=False,
    )


def _add_kv_columns(table: Table) -> None:
    table.add_column("Field", style="cyan", width=KV_FIELD_WIDTH, no_wrap=True)
    table.add_column("Value", overflow="fold")


def display_unicode(ace: str) -> str:
    try:
        return to_unicode(ace)
    except UnicodeError:
        return ace


def print_json_output(results: Any) -> None:
    try:
        sys.stdout.write(json.dumps(results, ensure_ascii=False, indent=2))
        sys.stdout.write("\n")
    except BrokenPipeError:
        # `| head` closes stdout early
        return


def output_decode(domain: str, candidates: List[str]) -> None:
    table = _new_table(title=f"ASCII homographs of {domain}", header_style="bold cyan")
    table.add_column("#", justify="right", width=6)
    table.add_column("Candidate", overflow="fold")
    for idx, candidate in enumerate(candidates, start=1):
        style = "dim" if candidate == domain else None
        table.add_row(str(idx), candidate, style=style)
    console.print(table)
    console.print(f"[green]{len(candidates)}[/green] candidates")


def output_mutations(
    domain: str,
    mutations: List[str],
    report: MutationReport,
    show_unicode: bool = False,
    elapsed: Optional[timedelta] = None,
) -> None:
    table = _new_table(title=f"Homoglyph mutations of {domain}", header_style="bold cyan")
    table.add_column("#", justify="right", width=8)
    table.add_column("ACE", overflow="fold")
    if show_unicode:
        table.add_column("Unicode", overflow="fold")
    for idx, mutation in enumerate(mutations, start=1):
        row = [str(idx), mutation]
        if show_unicode:
            row.append(display_unicode(mutation))
        table.add_row(*row)
    console.print(table)

    summary = _new_table(box_style=box.MINIMAL, show_header=False)
    _add_kv_columns(summary)
    summary.add_row("Emitted", str(report.emitted))
    summary.add_row("Skipped (encoding)", str(len(report.skipped)))
    summary.add_row("Truncated", "[yellow]yes[/yellow]" if report.truncated else "no")
    if elapsed is not None:
        summary.add_row("Elapsed", fmt_td(elapsed))
    console.print(summary)


def output_tables_summary(summary: Dict[str, int], data_dir: Path) -> None:
    table = _new_table(title="Confusable tables", box_style=box.SIMPLE_HEAVY, show_header=False)
    _add_kv_columns(table)
    table.add_row("Data dir", str(data_dir))
    table.add_row("Glyph keys", str(summary.get("forward_keys", 0)))
    table.add_row("Glyph -> ascii pairs", str(summary.get("forward_pairs", 0)))
    table.add_row("Ascii keys", str(summary.get("reverse_keys", 0)))
    table.add_row("Ascii -> glyph pairs", str(summary.get("reverse_pairs", 0)))
    console.print(table)


def output_label_summary(stats: Dict[str, int], elapsed: Optional[timedelta] = None) -> None:
    table = _new_table(title="Labeling", box_style=box.SIMPLE_HEAVY, show_header=False)
    _add_kv_columns(table)
    table.add_row("Names read", str(stats.get("read", 0)))
    table.add_row("Labeled", f"[green]{stats.get('labeled', 0)}[/green]")
    table.add_row("Protected (skipped)", str(stats.get("skipped", 0)))
    errors = int(stats.get("errors", 0))
    table.add_row("Errors", f"[red]{errors}[/red]" if errors else "0")
    if elapsed is not None:
        table.add_row("Elapsed", fmt_td(elapsed))
    err_console.print(table)
