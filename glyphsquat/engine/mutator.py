from __future__ import annotations

"""Homoglyph mutation generator.

Given a protected ASCII domain, enumerate the Unicode look-alikes reachable by
swapping up to `max_depth` characters for reverse-table glyphs, and stream them
in ASCII-Compatible Encoding (punycode, `xn--...`).

Shape of a run:
- every expansion task scans the string from its start position, emits each
  single-site substitution and, while depth allows, spawns one child task per
  emitted candidate that only scans positions after the substituted one
- a task appends a child to its own `children` list in the same step that
  creates it, before the child can run, and returns only after every child
  has returned, so the root finishing means the whole tree is finished
- the output queue is closed by a single sentinel written after the root task
  completes; any emit after that raises `StreamClosedError`
- a semaphore bounds concurrently expanding tasks and the bounded queue
  applies back-pressure from a slow consumer
"""

import asyncio
from dataclasses import dataclass, field
from typing import AsyncIterator, List, Optional, Tuple

import idna

from .errors import StreamClosedError
from .runtime import _run_coro_sync, load_settings, logger
from .tables import ConfusableTables, load_default_tables

_CLOSED = object()


@dataclass
class MutationReport:
    """Per-run bookkeeping filled in while a mutation stream is consumed."""

    domain: str = ""
    emitted: int = 0
    skipped: List[Tuple[str, str]] = field(default_factory=list)
    truncated: bool = False
    cancelled: bool = False


def to_ace(candidate: str) -> str:
    """IDNA 2008 ASCII-Compatible Encoding; raises `idna.IDNAError` when invalid."""
    return idna.encode(candidate, strict=True).decode("ascii")


def to_unicode(ace: str) -> str:
    return idna.decode(ace)


class MutationRun:
    def __init__(
        self,
        domain: str,
        max_depth: int,
        tables: ConfusableTables,
        concurrency: int,
        queue_size: int,
        max_candidates: int = 0,
        cancel_event: Optional[asyncio.Event] = None,
        report: Optional[MutationReport] = None,
    ):
        self.domain = (domain or "").strip().lower()
        self.max_depth = max_depth
        self.tables = tables
        self.concurrency = max(1, concurrency)
        self.queue_size = max(1, queue_size)
        self.max_candidates = max(0, max_candidates)
        self.cancel_event = cancel_event
        self.report = report if report is not None else MutationReport()
        self.report.domain = self.domain
        self._queue: Optional[asyncio.Queue] = None
        self._limiter: Optional[asyncio.Semaphore] = None
        self._closed = False
        self._failure: Optional[BaseException] = None

    def _should_stop(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def _encode(self, candidate: str) -> Optional[str]:
        try:
            return to_ace(candidate)
        except UnicodeError as exc:
            self.report.skipped.append((candidate, str(exc)))
            logger.debug("Skipping unencodable mutation %r: %s", candidate, exc)
            return None

    async def _emit(self, mutation: str) -> None:
        if self._closed:
            raise StreamClosedError(f"mutation {mutation!r} written after stream close")
        await self._queue.put(mutation)

    async def _expand(self, current: str, start: int, depth: int) -> None:
        children: List["asyncio.Task[None]"] = []
        try:
            async with self._limiter:
                for idx in range(start, len(current)):
                    if self._should_stop():
                        break
                    for glyph in self.tables.glyphs_for(current[idx]):
                        if self._should_stop():
                            break
                        candidate = current[:idx] + glyph + current[idx + 1:]
                        encoded = self._encode(candidate)
                        if encoded is None:
                            # every descendant would keep the offending glyph
                            continue
                        await self._emit(encoded)
                        if depth + 1 < self.max_depth:
                            children.append(asyncio.create_task(self._expand(candidate, idx + 1, depth + 1)))
            if children:
                await asyncio.gather(*children)
        except BaseException:
            for child in children:
                child.cancel()
            if children:
                await asyncio.gather(*children, return_exceptions=True)
            raise

    async def _produce(self) -> None:
        try:
            await self._expand(self.domain, 0, 0)
        except Exception as exc:
            self._failure = exc
        finally:
            self._closed = True
        await self._queue.put(_CLOSED)

    async def stream(self) -> AsyncIterator[str]:
        if self.max_depth <= 0 or not self.domain:
            return

        self._queue = asyncio.Queue(maxsize=self.queue_size)
        self._limiter = asyncio.Semaphore(self.concurrency)
        producer = asyncio.create_task(self._produce())
        try:
            while True:
                item = await self._queue.get()
                if item is _CLOSED:
                    break
                self.report.emitted += 1
                yield item
                if self.max_candidates and self.report.emitted >= self.max_candidates:
                    self.report.truncated = True
                    logger.info("Mutation cap of %d reached for %s", self.max_candidates, self.domain)
                    break
            if self._failure is not None:
                raise self._failure
        finally:
            if not producer.done():
                producer.cancel()
                await asyncio.gather(producer, return_exceptions=True)
            self.report.cancelled = self._should_stop()
            logger.debug(
                "Mutations for %s: emitted=%d skipped=%d truncated=%s",
                self.domain,
                self.report.emitted,
                len(self.report.skipped),
                self.report.truncated,
            )


def generate_ascii_homographs(
    domain: str,
    max_depth: int,
    tables: Optional[ConfusableTables] = None,
    *,
    concurrency: Optional[int] = None,
    queue_size: Optional[int] = None,
    max_candidates: Optional[int] = None,
    cancel_event: Optional[asyncio.Event] = None,
    report: Optional[MutationReport] = None,
) -> AsyncIterator[str]:
    """Stream ACE-encoded homoglyph mutations of `domain`.

    Each candidate uses between 1 and `max_depth` substitution sites, chosen
    left to right without revisiting a site. Order is not meaningful.
    Unset options come from `load_settings()`. `max_candidates=0` disables
    the cap. Closing the returned iterator early (`aclose()`) cancels the
    remaining task tree.
    """
    settings = load_settings()
    run = MutationRun(
        domain,
        max_depth,
        tables or load_default_tables(settings.data_dir),
        concurrency=concurrency if concurrency is not None else settings.concurrency,
        queue_size=queue_size if queue_size is not None else settings.queue_size,
        max_candidates=max_candidates if max_candidates is not None else settings.max_candidates,
        cancel_event=cancel_event,
        report=report,
    )
    return run.stream()


def mutate(
    domain: str,
    max_depth: int,
    tables: Optional[ConfusableTables] = None,
    **options,
) -> List[str]:
    """Synchronous wrapper collecting `generate_ascii_homographs` into a list."""

    async def collect() -> List[str]:
        return [m async for m in generate_ascii_homographs(domain, max_depth, tables, **options)]

    return _run_coro_sync(collect())
