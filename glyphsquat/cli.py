from __future__ import annotations

"""Command-line interface for glyphsquat.

This module translates CLI flags into runtime settings and runs the decoder,
the mutation generator or the labeling pipeline through `glyphsquat.core`.
"""

import argparse
import json
import os
import sys
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, TextIO
from urllib.parse import urlparse

from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from .cli_parts.status import render_runtime_status_panel as _render_runtime_status_panel
from .core import (
    DEFAULT_BASE_DOMAINS,
    ConfusableTables,
    GlyphsquatError,
    HomographLabeler,
    MutationReport,
    Settings,
    _run_coro_sync,
    build_tables,
    configure_logging,
    generate_ascii_homographs,
    iter_ascii_homographs,
    label_names,
    load_default_tables,
    load_settings,
    normalize_base_domains,
    read_names,
)
from .output import (
    display_unicode,
    err_console,
    output_decode,
    output_label_summary,
    output_mutations,
    output_tables_summary,
    print_json_output,
)
from .version import __version__


def _load_domains_from_file(file_path: str) -> List[str]:
    with Path(file_path).open("r", encoding="utf-8") as fh:
        return [line.strip() for line in fh if line.strip()]


def _normalize_domain_input(value: str) -> Optional[str]:
    raw = (value or "").strip()
    if "://" in raw:
        raw = urlparse(raw).hostname or ""
    host = raw.strip().strip(".").lower()
    if not host or any(ch.isspace() or ch in "/@:" for ch in host):
        return None
    return host


def _effective_settings(args: argparse.Namespace) -> Settings:
    settings = load_settings()
    overrides: Dict[str, Any] = {}
    if getattr(args, "data_dir", None):
        overrides["data_dir"] = Path(args.data_dir).expanduser()
    if getattr(args, "depth", None) is not None:
        overrides["max_depth"] = max(0, args.depth)
    if getattr(args, "limit", None) is not None:
        overrides["max_candidates"] = max(0, args.limit)
    if getattr(args, "workers", None) is not None:
        overrides["workers"] = max(1, args.workers)
    if getattr(args, "log_level", None):
        overrides["log_level"] = str(args.log_level).upper()
    return replace(settings, **overrides) if overrides else settings


def _collect_mutations(
    domain: str,
    settings: Settings,
    tables: ConfusableTables,
    report: MutationReport,
    progress_callback: Optional[Callable[[int], None]] = None,
) -> List[str]:
    async def collect() -> List[str]:
        found: List[str] = []
        async for mutation in generate_ascii_homographs(
            domain,
            settings.max_depth,
            tables,
            concurrency=settings.concurrency,
            queue_size=settings.queue_size,
            max_candidates=settings.max_candidates,
            report=report,
        ):
            found.append(mutation)
            if progress_callback:
                progress_callback(len(found))
        return found

    return _run_coro_sync(collect())


def _collect_with_rich_progress(domain: str, settings: Settings, tables: ConfusableTables, report: MutationReport) -> List[str]:
    """Generate mutations with a Rich spinner bound to the emitted count."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[bold cyan]{task.description}"),
        TextColumn("{task.completed} found"),
        TimeElapsedColumn(),
        console=err_console,
        transient=True,
    ) as progress:
        task_id = progress.add_task(f"Mutating {domain}", total=None)

        def cb(done: int) -> None:
            progress.update(task_id, completed=done)

        return _collect_mutations(domain, settings, tables, report, progress_callback=cb)


def _open_sink(target: Optional[str]) -> TextIO:
    if not target or target == "-":
        return sys.stdout
    return Path(target).open("w", encoding="utf-8")


def _json_line_writer(fh: TextIO) -> Callable[[Dict[str, Any]], None]:
    def write(record: Dict[str, Any]) -> None:
        try:
            fh.write(json.dumps(record, ensure_ascii=False))
            fh.write("\n")
        except BrokenPipeError:
            return

    return write


def _iter_stdin_names(stream: TextIO) -> Iterator[str]:
    for line in stream:
        name = line.strip()
        if name:
            yield name


def _run_label_pipeline(
    names: Iterable[str],
    labeler: HomographLabeler,
    sink: Callable[[Dict[str, Any]], None],
    settings: Settings,
    silent: bool,
) -> Dict[str, int]:
    if silent:
        return _run_coro_sync(
            label_names(
                names,
                [labeler],
                sink,
                workers=settings.workers,
                queue_size=settings.queue_size,
                base_domains=labeler.base_domains,
            )
        )

    with Progress(
        SpinnerColumn(),
        TextColumn("[bold cyan]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed} names"),
        TimeElapsedColumn(),
        console=err_console,
        transient=True,
    ) as progress:
        task_id = progress.add_task("Labeling names", total=None)

        def cb(done: int) -> None:
            progress.update(task_id, completed=done)

        return _run_coro_sync(
            label_names(
                names,
                [labeler],
                sink,
                workers=settings.workers,
                queue_size=settings.queue_size,
                base_domains=labeler.base_domains,
                progress_callback=cb,
            )
        )


def _cmd_decode(args: argparse.Namespace, settings: Settings) -> int:
    domain = _normalize_domain_input(args.domain)
    if not domain:
        err_console.print(f"[red]Invalid domain input:[/red] {args.domain}")
        return 1
    tables = load_default_tables(settings.data_dir)
    # baseline first, duplicates collapsed in first-seen order
    candidates = list(dict.fromkeys(iter_ascii_homographs(domain, tables)))
    if args.json:
        print_json_output({"domain": domain, "candidates": candidates})
    else:
        output_decode(domain, candidates)
    return 0


def _cmd_mutate(args: argparse.Namespace, settings: Settings) -> int:
    domain = _normalize_domain_input(args.domain)
    if not domain:
        err_console.print(f"[red]Invalid domain input:[/red] {args.domain}")
        return 1
    tables = load_default_tables(settings.data_dir)
    report = MutationReport()
    start_time = datetime.now()
    if args.json:
        mutations = _collect_mutations(domain, settings, tables, report)
    else:
        mutations = _collect_with_rich_progress(domain, settings, tables, report)
    elapsed = datetime.now() - start_time

    if args.json:
        rows: List[Any] = mutations
        if args.unicode:
            rows = [{"ace": m, "unicode": display_unicode(m)} for m in mutations]
        print_json_output(
            {
                "domain": domain,
                "depth": settings.max_depth,
                "mutations": rows,
                "skipped": len(report.skipped),
                "truncated": report.truncated,
            }
        )
    else:
        output_mutations(domain, mutations, report, show_unicode=args.unicode, elapsed=elapsed)
    return 0


def _cmd_label(args: argparse.Namespace, settings: Settings) -> int:
    if args.domains:
        if not Path(args.domains).is_file():
            err_console.print(f"[red]File not found:[/red] {args.domains}")
            return 1
        base_domains = normalize_base_domains(_load_domains_from_file(args.domains))
        if not base_domains:
            err_console.print(f"[yellow]No domains found in file:[/yellow] {args.domains}")
            return 1
    else:
        base_domains = list(DEFAULT_BASE_DOMAINS)

    if args.file:
        names: Iterable[str] = read_names(args.file)
    elif not sys.stdin.isatty():
        names = _iter_stdin_names(sys.stdin)
    else:
        err_console.print("[red]No input:[/red] pass -f FILE or pipe names on stdin.")
        return 1

    tables = load_default_tables(settings.data_dir)
    depth = args.depth if args.depth is not None else 1
    labeler = HomographLabeler(base_domains, tables=tables, max_depth=depth, max_candidates=settings.max_candidates)

    silent = args.json
    start_time = datetime.now()
    fh = _open_sink(args.output)
    try:
        stats = _run_label_pipeline(names, labeler, _json_line_writer(fh), settings, silent=silent)
    finally:
        if fh is not sys.stdout:
            fh.close()
    elapsed = datetime.now() - start_time

    if args.json:
        err_console.print_json(data=stats)
    else:
        output_label_summary(stats, elapsed)
    return 0


def _cmd_tables(args: argparse.Namespace, settings: Settings) -> int:
    tables = build_tables(data_dir=settings.data_dir)
    summary = tables.summary()
    if args.json:
        print_json_output({"data_dir": str(settings.data_dir), **summary})
    else:
        output_tables_summary(summary, settings.data_dir)
    return 0


COMMANDS: Dict[str, Callable[[argparse.Namespace, Settings], int]] = {
    "decode": _cmd_decode,
    "mutate": _cmd_mutate,
    "label": _cmd_label,
    "tables": _cmd_tables,
}


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--data-dir", help="Directory with homoglyphs.json and homoglyphs.txt.", dest="data_dir")
    common.add_argument("--log-level", help="Logger level (overrides GLYPHSQUAT_LOG_LEVEL).", dest="log_level")
    common.add_argument("--status", help="Print effective runtime configuration and continue.", action="store_true")
    common.add_argument("--json", help="JSON-only output.", action="store_true")

    parser = argparse.ArgumentParser(
        prog="glyphsquat",
        description=(
            f"glyphsquat v.{__version__} - Homoglyph domain decoder and mutation generator\n"
            "CLI options > environment (.env) > built-in defaults."
        ),
    )
    parser.add_argument("--version", action="version", version=f"glyphsquat {__version__}")
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    decode = sub.add_parser("decode", parents=[common], help="List ASCII strings a Unicode domain may imitate.")
    decode.add_argument("domain", help="Domain or URL (Unicode or ASCII).")

    mutate = sub.add_parser("mutate", parents=[common], help="Generate punycode homoglyph mutations of a domain.")
    mutate.add_argument("domain", help="Domain or URL.")
    mutate.add_argument("--depth", type=int, help="Max substituted characters (overrides GLYPHSQUAT_MAX_DEPTH).")
    mutate.add_argument("--limit", type=int, help="Max mutations to emit, 0 = unlimited.")
    mutate.add_argument("--unicode", help="Also show each mutation decoded to Unicode.", action="store_true")

    label = sub.add_parser("label", parents=[common], help="Label names that impersonate protected domains.")
    label.add_argument("-f", "--file", action="append", help="File or directory of names, one per line. Repeatable.")
    label.add_argument("--domains", help="File with protected base domains, one per line.")
    label.add_argument("--depth", type=int, help="Mutation depth for protected domains (default 1).")
    label.add_argument("--workers", type=int, help="Concurrent labeling workers.")
    label.add_argument("-o", "--output", help="Write JSON lines to FILE ('-' for stdout).")

    sub.add_parser("tables", parents=[common], help="Build the confusable tables and print a summary.")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entrypoint.

    This function is responsible for argument parsing, config layering
    (CLI > environment > built-in defaults), command dispatch and exit status.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help(sys.stderr)
        sys.exit(2)

    settings = _effective_settings(args)
    configure_logging(settings.log_level)
    if args.status:
        if args.json:
            err_console.print_json(data={"command": args.command, **settings.as_dict()})
        else:
            _render_runtime_status_panel(settings, command=args.command)

    try:
        code = COMMANDS[args.command](args, settings)
    except GlyphsquatError as exc:
        err_console.print(f"[red]{exc.__class__.__name__}:[/red] {exc}")
        sys.exit(1)
    except OSError as exc:
        err_console.print(f"[red]I/O error:[/red] {exc}")
        sys.exit(1)
    if code:
        sys.exit(code)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted[/yellow]")
        try:
            sys.exit(0)
        except SystemExit:
            os._exit(0)
