from __future__ import annotations

import asyncio

import idna
import pytest

from glyphsquat.engine.decoder import get_ascii_homographs
from glyphsquat.engine.errors import StreamClosedError
from glyphsquat.engine.mutator import MutationReport, MutationRun, generate_ascii_homographs, mutate, to_ace, to_unicode
from glyphsquat.engine.tables import TableBuilder


def _ace(name: str) -> str:
    return idna.encode(name).decode("ascii")


def _tables(*pairs):
    builder = TableBuilder()
    for glyph, ascii_char in pairs or (("а", "a"),):
        builder.add_pair(glyph, ascii_char)
    return builder.build()


def test_to_ace_and_back():
    assert to_ace("аpple.com") == _ace("аpple.com")
    assert to_unicode(to_ace("аpple.com")) == "аpple.com"
    with pytest.raises(UnicodeError):
        to_ace("ａpple.com")


def test_apple_depth_one_substitutes_a_single_site():
    tables = _tables()
    mutations = mutate("apple", 1, tables, max_candidates=0)
    assert mutations == [_ace("аpple")]
    assert "apple" in get_ascii_homographs("аpple", tables)
    assert "аpple" in get_ascii_homographs("аpple", tables)


def test_input_is_lowercased_before_generation():
    assert mutate("APPLE", 1, _tables(), max_candidates=0) == [_ace("аpple")]


def test_depth_zero_and_empty_input_yield_nothing():
    tables = _tables()
    assert mutate("apple", 0, tables) == []
    assert mutate("", 2, tables) == []


def test_every_subset_of_sites_is_emitted_up_to_depth():
    tables = _tables(("а", "a"), ("ɑ", "a"), ("е", "e"))
    mutations = mutate("ae", 2, tables, max_candidates=0)
    expected = {_ace(name) for name in ("аe", "ɑe", "aе", "ае", "ɑе")}
    assert sorted(mutations) == sorted(expected)


def test_no_candidate_exceeds_max_depth_substitutions():
    tables = _tables()
    mutations = mutate("aaa", 2, tables, max_candidates=0)
    # C(3,1) + C(3,2) combinations, never permutations
    assert len(mutations) == 6
    assert len(set(mutations)) == 6
    for mutation in mutations:
        assert 1 <= to_unicode(mutation).count("а") <= 2


def test_single_substitution_maps_back_to_replaced_character():
    tables = _tables(("а", "a"), ("е", "e"), ("о", "o"), ("ɩ", "l"))
    domain = "apple.com"
    mutations = mutate(domain, 1, tables, max_candidates=0)
    assert len(mutations) == 4
    for mutation in mutations:
        decoded = to_unicode(mutation)
        diffs = [idx for idx, (a, b) in enumerate(zip(domain, decoded)) if a != b]
        assert len(diffs) == 1
        assert domain[diffs[0]] in tables.ascii_for(decoded[diffs[0]])


def test_unencodable_candidates_are_skipped_and_reported():
    # a right-to-left letter is a valid label on its own but breaks the bidi rule next to Latin
    tables = _tables(("а", "a"), ("ס", "b"))
    report = MutationReport()
    mutations = mutate("ab", 2, tables, max_candidates=0, report=report)
    assert mutations == [_ace("аb")]
    assert sorted(candidate for candidate, _reason in report.skipped) == sorted(["aס", "аס"])
    assert report.emitted == 1
    assert report.domain == "ab"


def test_candidate_cap_truncates_the_stream():
    report = MutationReport()
    mutations = mutate("aaa", 2, _tables(), max_candidates=2, report=report)
    assert len(mutations) == 2
    assert report.truncated is True
    assert report.emitted == 2


def test_small_pool_and_queue_still_complete():
    mutations = mutate("aaaa", 4, _tables(), concurrency=1, queue_size=1, max_candidates=0)
    assert len(mutations) == 15
    assert len(set(mutations)) == 15


def test_cancel_event_stops_generation():
    async def run():
        event = asyncio.Event()
        event.set()
        report = MutationReport()
        found = [m async for m in generate_ascii_homographs("aaa", 2, _tables(), cancel_event=event, report=report)]
        return found, report

    found, report = asyncio.run(run())
    assert found == []
    assert report.cancelled is True


def test_closing_stream_early_cancels_task_tree():
    async def run():
        report = MutationReport()
        stream = generate_ascii_homographs(
            "aaaaaa",
            3,
            _tables(),
            concurrency=2,
            queue_size=1,
            max_candidates=0,
            report=report,
        )
        first = await stream.__anext__()
        await stream.aclose()
        pending = [task for task in asyncio.all_tasks() if task is not asyncio.current_task()]
        return first, pending, report

    first, pending, report = asyncio.run(run())
    assert first.startswith("xn--")
    assert pending == []
    assert report.emitted == 1


def test_emit_after_close_is_an_error():
    async def run():
        mutation_run = MutationRun("ab", 1, _tables(), concurrency=1, queue_size=1)
        mutation_run._queue = asyncio.Queue(maxsize=1)
        mutation_run._closed = True
        await mutation_run._emit(_ace("аb"))

    with pytest.raises(StreamClosedError):
        asyncio.run(run())


def test_mutate_works_inside_running_loop():
    async def run():
        return mutate("apple", 1, _tables(), max_candidates=0)

    assert asyncio.run(run()) == [_ace("аpple")]
