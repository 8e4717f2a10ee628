"""
Lexical catalog: name -> term correspondences with weights and provenance.

A name may label several terms and a term may carry several names.
Each (name, term) pair has a weight in (0,1], a type tag and a source tag.

Lexicons are immutable views. New lexicons, including extensions of an
existing one, are produced through LexiconBuilder.
"""
from __future__ import annotations

from typing import Iterable, Optional

from pydantic import BaseModel, Field

from .text import normalize_name

# Weight discount per additional term sharing a name
AMBIGUITY_STEP = 0.01

DEFAULT_TYPE = "label"
# Type of entries generated by external sources (thesaurus expansion)
EXTERNAL_TYPE = "externalMatch"


class LexicalEntry(BaseModel):
    """One (name, term) pair of a lexicon."""
    name: str
    term: int
    weight: float = Field(gt=0.0, le=1.0)
    type: str = DEFAULT_TYPE
    source: str = ""

    model_config = {"frozen": True}


class Lexicon:
    """Read-only lexical catalog."""

    def __init__(self, entries: Optional[dict[str, dict[int, LexicalEntry]]] = None):
        self._entries: dict[str, dict[int, LexicalEntry]] = entries or {}
        self._names_by_term: dict[int, set[str]] = {}
        for name, by_term in self._entries.items():
            for term in by_term:
                self._names_by_term.setdefault(term, set()).add(name)

    @classmethod
    def from_entries(cls, entries: Iterable[LexicalEntry]) -> Lexicon:
        builder = LexiconBuilder()
        for e in entries:
            builder.add(e.term, e.name, e.type, e.source, e.weight)
        return builder.build()

    def get_names(self) -> set[str]:
        return set(self._entries)

    def get_terms(self, name: str) -> Optional[set[int]]:
        """Terms carrying the name, or None if the name is absent."""
        by_term = self._entries.get(name)
        if by_term is None:
            return None
        return set(by_term)

    def get_internal_terms(self, name: str) -> set[int]:
        """Terms of the owning ontology carrying the name (empty if absent)."""
        return set(self._entries.get(name, ()))

    def get_names_for(self, term: int) -> set[str]:
        return set(self._names_by_term.get(term, ()))

    def get_entry(self, name: str, term: int) -> Optional[LexicalEntry]:
        return self._entries.get(name, {}).get(term)

    def get_entries(self) -> list[LexicalEntry]:
        return [e for by_term in self._entries.values() for e in by_term.values()]

    def get_weight(self, name: str, term: int) -> float:
        entry = self.get_entry(name, term)
        return entry.weight if entry else 0.0

    def get_corrected_weight(self, name: str, term: int) -> float:
        """
        Weight discounted by the number of other terms sharing the name.

        Only the ontology's own entries count as sharing; external
        entries never discount another term. An unambiguous name keeps
        its weight.
        """
        entry = self.get_entry(name, term)
        if entry is None:
            return 0.0
        shared = sum(
            1 for t, e in self._entries[name].items()
            if t != term and e.type != EXTERNAL_TYPE
        )
        return max(0.0, entry.weight - AMBIGUITY_STEP * shared)

    def get_source(self, name: str, term: int) -> str:
        entry = self.get_entry(name, term)
        return entry.source if entry else ""

    def get_type(self, name: str, term: int) -> str:
        entry = self.get_entry(name, term)
        return entry.type if entry else ""

    def name_count(self) -> int:
        return len(self._entries)

    def term_count(self) -> int:
        return len(self._names_by_term)

    def get_all_terms(self) -> set[int]:
        return set(self._names_by_term)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return sum(len(by_term) for by_term in self._entries.values())

    def __repr__(self) -> str:
        return f"Lexicon({self.name_count()} names, {self.term_count()} terms)"


class LexiconBuilder:
    """
    Copy-then-extend builder for lexicons.

    Starts empty or from a copy of an existing lexicon and yields a new,
    independent Lexicon. The base lexicon is never mutated, and entries
    already present are never overwritten.
    """

    def __init__(self, base: Optional[Lexicon] = None):
        self._entries: dict[str, dict[int, LexicalEntry]] = {}
        if base is not None:
            for e in base.get_entries():
                self._entries.setdefault(e.name, {})[e.term] = e

    def add(
        self,
        term: int,
        name: str,
        type: str = DEFAULT_TYPE,
        source: str = "",
        weight: float = 1.0,
    ) -> bool:
        """
        Insert a (name, term) entry.

        Returns False when the name is blank or the entry already exists.

        Raises:
            ValueError: If weight is outside (0, 1]
        """
        if not 0.0 < weight <= 1.0:
            raise ValueError(f"Lexicon weight must be in (0, 1], got {weight}")
        normalized = normalize_name(name)
        if not normalized:
            return False
        by_term = self._entries.setdefault(normalized, {})
        if term in by_term:
            return False
        by_term[term] = LexicalEntry(
            name=normalized, term=term, weight=weight, type=type, source=source
        )
        return True

    def build(self) -> Lexicon:
        return Lexicon({name: dict(by_term) for name, by_term in self._entries.items()})
