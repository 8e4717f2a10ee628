"""
Ontology: a term space identified by URI, with its Lexicon.
"""
from __future__ import annotations

from typing import Iterable

from .lexicon import DEFAULT_TYPE, Lexicon, LexiconBuilder


class Ontology:
    """A catalog of term ids being aligned."""

    def __init__(self, uri: str, lexicon: Lexicon):
        self.uri = uri
        self._lexicon = lexicon

    @classmethod
    def from_names(
        cls,
        uri: str,
        names: dict[int, Iterable[str]],
        type: str = DEFAULT_TYPE,
        weight: float = 1.0,
    ) -> Ontology:
        """Build an ontology from {term: [names]} with uniform weight."""
        builder = LexiconBuilder()
        for term, term_names in names.items():
            for name in term_names:
                builder.add(term, name, type, "", weight)
        return cls(uri, builder.build())

    def get_lexicon(self) -> Lexicon:
        return self._lexicon

    def get_terms(self) -> set[int]:
        return self._lexicon.get_all_terms()

    def __str__(self) -> str:
        return self.uri

    def __repr__(self) -> str:
        return f"Ontology({self.uri!r}, {self._lexicon!r})"
