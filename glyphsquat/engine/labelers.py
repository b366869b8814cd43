from __future__ import annotations

"""Domain labelers built on the homoglyph engine."""

import enum
from typing import Dict, Iterable, List, Optional, Protocol, Set

from .mutator import mutate, to_ace, to_unicode
from .runtime import DEFAULT_BASE_DOMAINS, load_settings, logger
from .tables import ConfusableTables, load_default_tables


class DomainLabel(str, enum.Enum):
    HOMOGRAPH_MUTATION = "homograph.mutation"
    HOMOGRAPH_DECODE = "homograph.decode"

    def __str__(self) -> str:
        return self.value


class DomainLabeler(Protocol):
    def label_domain(self, name: str) -> Set[DomainLabel]:
        ...


def normalize_base_domains(values: Iterable[str]) -> List[str]:
    """Strip and lower-case protected domains, keeping first-seen order."""
    domains: List[str] = []
    seen: Set[str] = set()
    for raw in values:
        stripped = str(raw or "").strip()
        if not stripped or stripped.startswith("#"):
            continue
        sanitized = stripped.lower()
        if sanitized != stripped:
            logger.warning("domain %s was sanitized to %s", stripped, sanitized)
        if sanitized in seen:
            continue
        seen.add(sanitized)
        domains.append(sanitized)
    return domains


def _unicode_form(name: str) -> str:
    try:
        return to_unicode(name)
    except UnicodeError:
        return name


def _ace_form(name: str) -> str:
    try:
        return to_ace(name)
    except UnicodeError:
        return name


class HomographLabeler:
    """Label names that impersonate a protected domain through homoglyphs.

    Two independent checks:
    - the ACE form of the name is one of the precomputed mutations of a
      protected domain (`HOMOGRAPH_MUTATION`)
    - decoding the Unicode form of the name back to ASCII reaches a protected
      domain the name is not itself equal to (`HOMOGRAPH_DECODE`)
    """

    def __init__(
        self,
        base_domains: Optional[Iterable[str]] = None,
        tables: Optional[ConfusableTables] = None,
        max_depth: int = 1,
        max_candidates: Optional[int] = None,
    ):
        settings = load_settings()
        self.tables = tables or load_default_tables(settings.data_dir)
        self.base_domains = normalize_base_domains(base_domains if base_domains is not None else DEFAULT_BASE_DOMAINS)
        self._protected: Set[str] = set(self.base_domains)
        self._by_length: Dict[int, List[str]] = {}
        for domain in self.base_domains:
            self._by_length.setdefault(len(domain), []).append(domain)
        self._mutations: Dict[str, str] = {}
        for domain in self.base_domains:
            for mutation in mutate(domain, max_depth, self.tables, max_candidates=max_candidates):
                self._mutations.setdefault(mutation, domain)
        logger.debug("Homograph labeler indexed %d mutations for %d domains", len(self._mutations), len(self.base_domains))

    def target_of(self, name: str) -> Optional[str]:
        """Protected domain whose mutation index contains `name`, if any."""
        return self._mutations.get(_ace_form(str(name or "").strip().lower()))

    def _decodes_to_protected(self, name: str) -> bool:
        """True when one decoding of `name` is a protected domain other than itself.

        Decoding never changes length, so only protected domains of the same
        length are compared, one position at a time: a mapped character has
        to decode to the protected character, an unmapped one has to equal it.
        """
        for domain in self._by_length.get(len(name), ()):
            if domain == name:
                continue
            for ch, want in zip(name, domain):
                alternatives = self.tables.ascii_for(ch)
                if alternatives:
                    if want not in alternatives:
                        break
                elif ch != want:
                    break
            else:
                return True
        return False

    def label_domain(self, name: str) -> Set[DomainLabel]:
        labels: Set[DomainLabel] = set()
        raw = str(name or "").strip().lower()
        if not raw:
            return labels
        ace = _ace_form(raw)
        if ace in self._protected:
            return labels

        if ace in self._mutations:
            labels.add(DomainLabel.HOMOGRAPH_MUTATION)

        unicode_name = _unicode_form(ace)
        if unicode_name in self._protected:
            return labels
        if self._decodes_to_protected(unicode_name):
            labels.add(DomainLabel.HOMOGRAPH_DECODE)
        return labels
