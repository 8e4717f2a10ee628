"""
Thesaurus lookup used by the synonym matcher.

The matcher depends only on the Thesaurus protocol, so tests can inject
an in-memory fake. WordNetThesaurus is the production implementation,
backed by the NLTK WordNet corpus (``python -m nltk.downloader wordnet``).
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class Thesaurus(Protocol):
    """Protocol for a synonym source."""

    def lookup_synonym_forms(self, name: str) -> set[str]:
        """
        Find every synonym word form of a name.

        Returns:
            Set of non-empty, trimmed strings (may be empty)
        """
        ...


class WordNetThesaurus:
    """
    Synonym forms from WordNet: every lemma of every synset of the name.

    A missing corpus raises nltk's LookupError on first use.
    """

    def __init__(self, data_path: Optional[Path] = None):
        from nltk import data as nltk_data
        from nltk.corpus import wordnet

        if data_path is not None and str(data_path) not in nltk_data.path:
            nltk_data.path.append(str(data_path))
        self._wordnet = wordnet

    def lookup_synonym_forms(self, name: str) -> set[str]:
        query = "_".join(name.split())
        if not query:
            return set()
        forms: set[str] = set()
        for synset in self._wordnet.synsets(query):
            for lemma in synset.lemma_names():
                form = lemma.replace("_", " ").strip()
                if form:
                    forms.add(form)
        return forms


class CachedThesaurus:
    """
    Memoizes lookups of another thesaurus, one query per distinct name.

    Lookups are idempotent, so the cache never needs invalidation while
    the underlying corpus is unchanged.
    """

    def __init__(self, inner: Thesaurus):
        self._inner = inner
        self._cache: dict[str, frozenset[str]] = {}

    def lookup_synonym_forms(self, name: str) -> set[str]:
        cached = self._cache.get(name)
        if cached is None:
            cached = frozenset(self._inner.lookup_synonym_forms(name))
            self._cache[name] = cached
        return set(cached)

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def clear(self) -> None:
        logger.debug(f"Clearing thesaurus cache ({len(self._cache)} names)")
        self._cache.clear()
