from __future__ import annotations

import asyncio
import logging
import threading
import time
from pathlib import Path

import pytest

from glyphsquat.engine.errors import StreamClosedError
from glyphsquat.engine.labelers import DomainLabel
from glyphsquat.engine.pipeline import ResultQueue, label_name, label_names, read_names


class _SetLabeler:
    def __init__(self, flagged, label=DomainLabel.HOMOGRAPH_MUTATION):
        self.flagged = set(flagged)
        self.label = label
        self.seen = []

    def label_domain(self, name):
        self.seen.append(name)
        return {self.label} if name in self.flagged else set()


class _ExplodingLabeler:
    def label_domain(self, name):
        if name == "boom.example":
            raise ValueError("bad record")
        return set()


def test_label_name_merges_all_labelers():
    labelers = [
        _SetLabeler({"xn--pple-43d.com"}),
        _SetLabeler({"xn--pple-43d.com"}, DomainLabel.HOMOGRAPH_DECODE),
    ]
    assert label_name("xn--pple-43d.com", labelers) == {"homograph.mutation", "homograph.decode"}
    assert label_name("example.com", labelers) == set()


def test_label_names_emits_records_only_for_labeled_names():
    records = []
    labeler = _SetLabeler({"a.example", "c.example"})
    names = ["a.example", "b.example", "c.example", "d.example"]

    stats = asyncio.run(label_names(names, [labeler], records.append, workers=3, queue_size=2))

    assert sorted(records, key=lambda r: r["domain"]) == [
        {"domain": "a.example", "labels": ["homograph.mutation"]},
        {"domain": "c.example", "labels": ["homograph.mutation"]},
    ]
    assert stats == {"read": 4, "processed": 4, "labeled": 2, "skipped": 0, "errors": 0}
    assert sorted(labeler.seen) == names


def test_label_names_skips_protected_domains():
    records = []
    labeler = _SetLabeler({"apple.com", "xn--pple-43d.com"})
    stats = asyncio.run(
        label_names(
            ["Apple.com", "xn--pple-43d.com"],
            [labeler],
            records.append,
            workers=2,
            base_domains=["apple.com"],
        )
    )
    assert records == [{"domain": "xn--pple-43d.com", "labels": ["homograph.mutation"]}]
    assert stats["skipped"] == 1
    assert labeler.seen == ["xn--pple-43d.com"]


def test_labeler_failure_is_logged_and_name_skipped(caplog):
    records = []
    labelers = [_ExplodingLabeler(), _SetLabeler({"ok.example"})]
    with caplog.at_level(logging.ERROR, logger="glyphsquat"):
        stats = asyncio.run(label_names(["boom.example", "ok.example"], labelers, records.append, workers=1))
    assert records == [{"domain": "ok.example", "labels": ["homograph.mutation"]}]
    assert stats["errors"] == 1
    assert "labeling boom.example failed" in caplog.text


def test_progress_callback_counts_processed_names():
    seen = []
    asyncio.run(
        label_names(
            ["a", "b", "c"],
            [_SetLabeler(set())],
            lambda record: None,
            workers=1,
            progress_callback=seen.append,
        )
    )
    assert seen == [1, 2, 3]


def test_result_queue_rejects_writes_after_close():
    async def run():
        queue = ResultQueue()
        await queue.put("first")
        await queue.close()
        await queue.close()
        drained = [item async for item in queue.drain()]
        with pytest.raises(StreamClosedError):
            await queue.put("late")
        return drained, queue.closed

    drained, closed = asyncio.run(run())
    assert drained == ["first"]
    assert closed is True


def test_read_names_reads_files_and_directories(tmp_path: Path):
    first = tmp_path / "one.txt"
    first.write_text("a.example\n\n  b.example  \n", encoding="utf-8")
    folder = tmp_path / "batch"
    folder.mkdir()
    (folder / "2.txt").write_text("d.example\n", encoding="utf-8")
    (folder / "1.txt").write_text("c.example\n", encoding="utf-8")

    names = list(read_names([first, folder, tmp_path / "missing.txt"]))
    assert names == ["a.example", "b.example", "c.example", "d.example"]


def test_slow_name_source_does_not_hold_back_finished_records():
    delivered = threading.Event()
    waited = []
    records = []

    def names():
        yield "a.example"
        waited.append(delivered.wait(timeout=2))
        yield "b.example"

    def sink(record):
        records.append(record)
        delivered.set()

    start = time.monotonic()
    stats = asyncio.run(label_names(names(), [_SetLabeler({"a.example"})], sink, workers=1))

    assert waited == [True]
    assert time.monotonic() - start < 1.5
    assert records == [{"domain": "a.example", "labels": ["homograph.mutation"]}]
    assert stats["read"] == 2
