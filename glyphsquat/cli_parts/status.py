from __future__ import annotations

from pathlib import Path
from typing import Optional

from rich import box
from rich.panel import Panel
from rich.table import Table

from ..core import Settings
from ..output import err_console
from ..version import __version__


def _compact_home(path: Path) -> str:
    home = Path.home().resolve()
    resolved = path.expanduser().resolve()
    try:
        rel = resolved.relative_to(home)
        return f"~/{rel.as_posix()}" if str(rel) != "." else "~"
    except ValueError:
        return str(resolved)


def render_runtime_status_panel(settings: Settings, command: Optional[str] = None) -> None:
    """Render the effective configuration (CLI > environment > defaults)."""
    key_col_width = 16
    runtime_width = 80

    status = Table(box=box.MINIMAL, show_header=False, pad_edge=False, expand=False)
    status.add_column("Key", width=key_col_width, no_wrap=True, style="cyan")
    status.add_column("Value", width=runtime_width - key_col_width - 6, no_wrap=True, overflow="ellipsis")
    status.add_row("Command", command or "-")
    status.add_row("Data dir", _compact_home(settings.data_dir))
    status.add_row("Max depth", str(settings.max_depth))
    status.add_row("Max candidates", "unlimited" if settings.max_candidates == 0 else str(settings.max_candidates))
    status.add_row("Concurrency", str(settings.concurrency))
    status.add_row("Queue size", str(settings.queue_size))
    status.add_row("Workers", str(settings.workers))
    status.add_row("Log level", settings.log_level)

    err_console.print(
        Panel(status, title=f"glyphsquat v{__version__}", border_style="blue", width=runtime_width + 4, expand=False)
    )
