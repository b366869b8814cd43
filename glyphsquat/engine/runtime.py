from __future__ import annotations

"""Shared runtime plumbing for glyphsquat.

This module holds the pieces every other engine module leans on:
- the package logger
- environment-driven settings (`Settings`, `load_settings`)
- helpers to drive async code from sync callers (`_run_coro_sync`)

It must stay free of table or mutation logic so it can be imported first.
"""

import asyncio
import logging
import os
import sys
import threading
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

load_dotenv()

ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = ROOT / "data"

DEFAULT_BASE_DOMAINS = (
    "www.google.com",
    "www.youtube.com",
    "www.tmall.com",
    "www.facebook.com",
    "www.baidu.com",
    "www.apple.com",
)

logger = logging.getLogger("glyphsquat")
logger.setLevel(logging.INFO)
if not logger.handlers:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s", "%H:%M:%S"))
    logger.addHandler(handler)

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def configure_logging(level: str) -> None:
    name = str(level or "").upper()
    logger.setLevel(getattr(logging, name) if name in _LOG_LEVELS else logging.INFO)


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    max_depth: int
    max_candidates: int
    concurrency: int
    queue_size: int
    workers: int
    log_level: str

    def as_dict(self) -> Dict[str, Any]:
        return {
            "data_dir": str(self.data_dir),
            "max_depth": self.max_depth,
            "max_candidates": self.max_candidates,
            "concurrency": self.concurrency,
            "queue_size": self.queue_size,
            "workers": self.workers,
            "log_level": self.log_level,
        }


def _env(name: str, typ: Any, default: Any, environ: Optional[Dict[str, str]] = None) -> Any:
    source = os.environ if environ is None else environ
    raw = source.get(name)
    if raw is None or str(raw).strip() == "":
        return default
    try:
        return typ(str(raw).strip())
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %r", name, raw, default)
        return default


def load_settings(environ: Optional[Dict[str, str]] = None) -> Settings:
    """Read settings from the environment (and `.env`), falling back to defaults.

    Integer knobs must be positive, except `GLYPHSQUAT_MAX_CANDIDATES` where
    0 disables the cap.
    """
    data_dir = _env("GLYPHSQUAT_DATA_DIR", str, str(DATA_DIR), environ)
    max_depth = _env("GLYPHSQUAT_MAX_DEPTH", int, 2, environ)
    max_candidates = _env("GLYPHSQUAT_MAX_CANDIDATES", int, 100000, environ)
    concurrency = _env("GLYPHSQUAT_CONCURRENCY", int, 64, environ)
    queue_size = _env("GLYPHSQUAT_QUEUE_SIZE", int, 1024, environ)
    workers = _env("GLYPHSQUAT_WORKERS", int, os.cpu_count() or 4, environ)
    log_level = str(_env("GLYPHSQUAT_LOG_LEVEL", str, "INFO", environ)).upper()
    if log_level not in _LOG_LEVELS:
        log_level = "INFO"
    return Settings(
        data_dir=Path(data_dir).expanduser(),
        max_depth=max(0, max_depth),
        max_candidates=max(0, max_candidates),
        concurrency=max(1, concurrency),
        queue_size=max(1, queue_size),
        workers=max(1, workers),
        log_level=log_level,
    )


def fmt_td(td: Optional[timedelta]) -> str:
    if td is None:
        return "-"
    total_seconds = int(td.total_seconds())
    hours, rem = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rem, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def _run_coro_sync(coro: Any) -> Any:
    """Run async code from sync callers (CLI and public API).

    If already inside an event loop, execute in a helper thread to avoid
    `RuntimeError: asyncio.run() cannot be called from a running event loop`.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    outcome: Dict[str, Any] = {}

    def target() -> None:
        try:
            outcome["result"] = asyncio.run(coro)
        except Exception as exc:  # pragma: no cover - fallback path
            outcome["error"] = exc

    thread = threading.Thread(target=target, daemon=True)
    thread.start()
    thread.join()

    if "error" in outcome:
        raise outcome["error"]
    return outcome.get("result")
