from __future__ import annotations

"""Bounded labeling pipeline.

One producer feeds names into a bounded queue, N workers label them and push
result records into a closeable result queue, one consumer drains the results
into a sink. Shutdown runs strictly in this order:

1. producer finishes and enqueues one stop sentinel per worker
2. all workers return
3. the result queue is closed
4. the consumer drains what is left and returns
"""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, AsyncIterator, Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Set, Union

from .errors import StreamClosedError
from .labelers import DomainLabeler
from .runtime import load_settings, logger

_CLOSED = object()
_EXHAUSTED = object()


class ResultQueue:
    """Unbounded queue with an explicit close; a put after close is a bug."""

    def __init__(self) -> None:
        self._queue: "asyncio.Queue[Any]" = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def put(self, item: Any) -> None:
        if self._closed:
            raise StreamClosedError("result written after queue close")
        await self._queue.put(item)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._queue.put(_CLOSED)

    async def drain(self) -> AsyncIterator[Any]:
        while True:
            item = await self._queue.get()
            if item is _CLOSED:
                return
            yield item


def read_names(paths: Iterable[Union[str, Path]]) -> Iterator[str]:
    """Yield stripped, non-empty lines from files (directories are expanded one level)."""
    for raw_path in paths:
        path = Path(raw_path)
        files = sorted(p for p in path.iterdir() if p.is_file()) if path.is_dir() else [path]
        for file_path in files:
            logger.info("reading file %s", file_path)
            try:
                with file_path.open("r", encoding="utf-8", errors="replace") as fh:
                    for line in fh:
                        name = line.strip()
                        if name:
                            yield name
            except OSError as exc:
                logger.error("cannot read %s: %s", file_path, exc)


def label_name(name: str, labelers: Sequence[DomainLabeler]) -> Set[str]:
    labels: Set[str] = set()
    for labeler in labelers:
        for label in labeler.label_domain(name):
            labels.add(str(label))
    return labels


async def label_names(
    names: Iterable[str],
    labelers: Sequence[DomainLabeler],
    sink: Callable[[Dict[str, Any]], None],
    workers: Optional[int] = None,
    queue_size: Optional[int] = None,
    base_domains: Optional[Iterable[str]] = None,
    progress_callback: Optional[Callable[[int], None]] = None,
) -> Dict[str, int]:
    """Label every name and hand `{"domain", "labels"}` records to `sink`.

    Only names with at least one label produce a record. Names listed in
    `base_domains` are not labeled. Returns counters: read, processed, labeled,
    skipped, errors. `progress_callback` receives the processed count.
    """
    settings = load_settings()
    worker_count = max(1, workers or settings.workers)
    rows: "asyncio.Queue[Optional[str]]" = asyncio.Queue(maxsize=max(1, queue_size or worker_count))
    results = ResultQueue()
    skip_set = {s.strip().lower() for s in (base_domains or ())}
    stats = {"read": 0, "processed": 0, "labeled": 0, "skipped": 0, "errors": 0}
    loop = asyncio.get_running_loop()

    async def produce() -> None:
        # names may block on file or stdin reads
        source = iter(names)
        while True:
            name = await loop.run_in_executor(None, next, source, _EXHAUSTED)
            if name is _EXHAUSTED:
                break
            await rows.put(name)
            stats["read"] += 1
        for _ in range(worker_count):
            await rows.put(None)

    async def label_one(name: str, executor: ThreadPoolExecutor) -> None:
        if name.strip().lower() in skip_set:
            stats["skipped"] += 1
            return
        try:
            labels = await loop.run_in_executor(executor, label_name, name, labelers)
        except Exception as exc:
            stats["errors"] += 1
            logger.error("labeling %s failed: %s: %s", name, exc.__class__.__name__, exc)
            return
        if labels:
            stats["labeled"] += 1
            await results.put({"domain": name, "labels": sorted(labels)})

    async def work(executor: ThreadPoolExecutor) -> None:
        while True:
            name = await rows.get()
            if name is None:
                return
            await label_one(name, executor)
            stats["processed"] += 1
            if progress_callback:
                progress_callback(stats["processed"])

    async def consume() -> None:
        async for record in results.drain():
            sink(record)

    logger.info("labeling with %d workers", worker_count)
    consumer = asyncio.create_task(consume())
    with ThreadPoolExecutor(max_workers=worker_count) as executor:
        worker_tasks: List["asyncio.Task[None]"] = [asyncio.create_task(work(executor)) for _ in range(worker_count)]
        try:
            await produce()
            await asyncio.gather(*worker_tasks)
        except BaseException:
            for task in worker_tasks:
                task.cancel()
            await asyncio.gather(*worker_tasks, return_exceptions=True)
            raise
        finally:
            await results.close()
            await consumer
    return stats
