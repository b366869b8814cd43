from __future__ import annotations

"""Homograph decoder: Unicode domain -> ASCII strings it could be imitating."""

from itertools import product
from typing import Iterator, List, Optional, Set, Tuple

from .runtime import load_settings
from .tables import ConfusableTables, load_default_tables


def substitution_sites(domain: str, tables: ConfusableTables) -> List[Tuple[int, Tuple[str, ...]]]:
    """Positions of `domain` whose single character is a forward-table key."""
    sites: List[Tuple[int, Tuple[str, ...]]] = []
    for idx, ch in enumerate(domain):
        alternatives = tables.ascii_for(ch)
        if alternatives:
            sites.append((idx, alternatives))
    return sites


def iter_ascii_homographs(domain: str, tables: Optional[ConfusableTables] = None) -> Iterator[str]:
    """Yield the unmodified input, then every full substitution of its sites.

    For sites with k1..kn alternatives exactly k1*...*kn substituted strings
    follow the baseline; unmapped characters stay as they are, even when they
    are not ASCII. Duplicates are possible (a substitution can reproduce the
    input), callers wanting a set should use `get_ascii_homographs`.
    """
    tables = tables or load_default_tables(load_settings().data_dir)
    yield domain

    sites = substitution_sites(domain, tables)
    if not sites:
        return

    chars = list(domain)
    positions = [idx for idx, _ in sites]
    for choice in product(*(alternatives for _, alternatives in sites)):
        for idx, ascii_char in zip(positions, choice):
            chars[idx] = ascii_char
        yield "".join(chars)


def get_ascii_homographs(domain: str, tables: Optional[ConfusableTables] = None) -> Set[str]:
    return set(iter_ascii_homographs(domain, tables))
