"""
Word-overlap matching with a weighted Jaccard index.

Each word shared by a source and a target term contributes the geometric
mean of its one-sided weighted EC values. Summed evidence E for a pair
(i, j) is normalized as E / (EC(i) + EC(j) - E): weighted intersection
over weighted union.

Memory is bounded by the number of term pairs sharing at least one word,
quadratic in the worst case.
"""
from __future__ import annotations

import logging
import math
from typing import Optional

from ..kernel.types import Alignment, Mapping
from ..lexicon.ontology import Ontology
from ..lexicon.words import WordLexicon
from .base import Matcher

logger = logging.getLogger(__name__)


class WordMatcher(Matcher):
    """Matches ontologies by global word similarity between their terms."""

    def match(
        self,
        source: Ontology,
        target: Ontology,
        threshold: Optional[float] = None,
    ) -> Alignment:
        threshold = self.resolve_threshold(threshold)
        alignment = Alignment(source, target)
        alignment.add_all(self.match_word_lexicons(
            WordLexicon(source.get_lexicon()),
            WordLexicon(target.get_lexicon()),
            threshold,
        ))
        logger.info(f"{self.name}: {len(alignment)} mappings between {source} and {target}")
        return alignment

    def extend_alignment(
        self,
        alignment: Alignment,
        threshold: Optional[float] = None,
    ) -> Alignment:
        threshold = self.resolve_threshold(threshold)
        source = alignment.get_source()
        target = alignment.get_target()
        extension = Alignment(source, target)
        extension.add_all(self.match_word_lexicons(
            WordLexicon(source.get_lexicon(), exclude=alignment.get_sources()),
            WordLexicon(target.get_lexicon(), exclude=alignment.get_targets()),
            threshold,
        ))
        logger.info(f"{self.name}: {len(extension)} new mappings extending {alignment!r}")
        return extension

    def match_word_lexicons(
        self,
        source: WordLexicon,
        target: WordLexicon,
        threshold: float,
    ) -> list[Mapping]:
        """
        Score every source/target term pair sharing at least one word.

        Iterates the smaller vocabulary; the result does not depend on
        which side is probed.
        """
        source_is_probe = source.word_count() <= target.word_count()
        probe, reference = (source, target) if source_is_probe else (target, source)
        logger.debug(
            f"Probing {probe.word_count()} words against {reference.word_count()}"
        )

        # source term -> target term -> accumulated evidence
        evidence: dict[int, dict[int, float]] = {}
        for word in probe.get_words():
            reference_terms = reference.get_terms(word)
            if reference_terms is None:
                continue
            probe_ec = probe.get_word_ec(word)
            reference_ec = reference.get_word_ec(word)
            for i in probe.get_terms(word):
                probe_sim = probe_ec * probe.get_weight(word, i)
                for j in reference_terms:
                    reference_sim = reference_ec * reference.get_weight(word, j)
                    s, t = (i, j) if source_is_probe else (j, i)
                    row = evidence.setdefault(s, {})
                    row[t] = row.get(t, 0.0) + math.sqrt(probe_sim * reference_sim)

        mappings = []
        for s, row in evidence.items():
            source_ec = source.get_term_ec(s)
            if source_ec <= 0.0:
                continue
            for t, shared in row.items():
                if shared <= 0.0:
                    continue
                target_ec = target.get_term_ec(t)
                union = source_ec + target_ec - shared
                if target_ec <= 0.0 or union <= 0.0:
                    continue
                score = min(1.0, max(0.0, shared / union))
                if score >= threshold:
                    mappings.append(Mapping(source=s, target=t, score=score))
        return mappings
