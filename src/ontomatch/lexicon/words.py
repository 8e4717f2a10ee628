"""
Word catalog: word-level decomposition of a Lexicon.

For every word it records the terms whose names contain it, a per
(word, term) weight and an informativeness coefficient EC:

    EC(word) = 1 - ln(#terms with word) / ln(#terms)
    EC(term) = sum of EC(word) * weight(word, term) over the term's words

Rare words are discriminative (EC close to 1); a word shared by every
term carries no information (EC = 0). EC(term) acts as the fuzzy-set
cardinality in the weighted Jaccard computed by WordMatcher.
"""
from __future__ import annotations

import math
from typing import Iterable, Optional, Union

from .lexicon import Lexicon
from .text import is_formula, tokenize


class WordLexicon:
    """Word catalog derived from a Lexicon, optionally excluding terms."""

    def __init__(self, lexicon: Lexicon, exclude: Iterable[int] = ()):
        excluded = set(exclude)
        self._weights: dict[str, dict[int, float]] = {}

        for name in lexicon.get_names():
            if is_formula(name):
                continue
            words = tokenize(name)
            if not words:
                continue
            for term in lexicon.get_internal_terms(name):
                if term in excluded:
                    continue
                weight = lexicon.get_weight(name, term)
                for word in words:
                    by_term = self._weights.setdefault(word, {})
                    if weight > by_term.get(term, 0.0):
                        by_term[term] = weight

        terms = {t for by_term in self._weights.values() for t in by_term}
        self._term_count = len(terms)
        self._word_ec = {w: self._compute_word_ec(len(by_term))
                         for w, by_term in self._weights.items()}

        self._term_ec: dict[int, float] = {}
        for word, by_term in self._weights.items():
            ec = self._word_ec[word]
            for term, weight in by_term.items():
                self._term_ec[term] = self._term_ec.get(term, 0.0) + ec * weight

    def _compute_word_ec(self, frequency: int) -> float:
        if self._term_count <= 1:
            return 1.0
        return 1.0 - math.log(frequency) / math.log(self._term_count)

    def get_words(self) -> set[str]:
        return set(self._weights)

    def get_terms(self, word: str) -> Optional[set[int]]:
        """Terms whose names contain the word, or None if absent."""
        by_term = self._weights.get(word)
        if by_term is None:
            return None
        return set(by_term)

    def get_weight(self, word: str, term: int) -> float:
        return self._weights.get(word, {}).get(term, 0.0)

    def get_word_ec(self, word: str) -> float:
        return self._word_ec.get(word, 0.0)

    def get_term_ec(self, term: int) -> float:
        return self._term_ec.get(term, 0.0)

    def get_ec(self, key: Union[str, int]) -> float:
        """EC of a word (str) or of a term (int)."""
        if isinstance(key, str):
            return self.get_word_ec(key)
        return self.get_term_ec(key)

    def word_count(self) -> int:
        return len(self._weights)

    def term_count(self) -> int:
        return self._term_count

    def __repr__(self) -> str:
        return f"WordLexicon({self.word_count()} words, {self.term_count()} terms)"
