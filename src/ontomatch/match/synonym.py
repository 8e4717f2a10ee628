"""
Synonym-expansion matching.

Both lexicons are first extended with synonym forms from a thesaurus,
then matched on exact names. Only matches backed by at least one
thesaurus-derived entry are kept; matches between names both lexicons
already had verbatim belong to plain name matching.

Expansion confidence for a name with n synonym forms:

    confidence = C0 - p * n

so highly ambiguous names (many senses) are trusted less.
"""
from __future__ import annotations

import logging
from typing import Optional

from ..config import MatchConfig
from ..kernel.types import Alignment, Mapping
from ..lexicon.lexicon import EXTERNAL_TYPE, Lexicon, LexiconBuilder
from ..lexicon.ontology import Ontology
from ..lexicon.text import is_formula, normalize_name
from .base import Matcher
from .thesaurus import CachedThesaurus, Thesaurus, WordNetThesaurus

logger = logging.getLogger(__name__)

# Type tag of entries generated by thesaurus expansion
SYNONYM_TYPE = EXTERNAL_TYPE
# Provenance tag of entries generated by thesaurus expansion
SYNONYM_SOURCE = "WordNet"


class SynonymMatcher(Matcher):
    """Matches ontologies by exact names after thesaurus expansion."""

    def __init__(
        self,
        thesaurus: Optional[Thesaurus] = None,
        config: Optional[MatchConfig] = None,
    ):
        super().__init__(config)
        if thesaurus is None:
            thesaurus = WordNetThesaurus(self.config.wordnet_data_path)
        if not isinstance(thesaurus, CachedThesaurus):
            thesaurus = CachedThesaurus(thesaurus)
        self.thesaurus = thesaurus
        self.confidence = self.config.synonym_confidence
        self.penalty = self.config.synonym_penalty

    def match(
        self,
        source: Ontology,
        target: Ontology,
        threshold: Optional[float] = None,
    ) -> Alignment:
        threshold = self.resolve_threshold(threshold)
        source_ext = self.extend(source.get_lexicon(), threshold)
        target_ext = self.extend(target.get_lexicon(), threshold)
        alignment = Alignment(source, target)
        alignment.add_all(self.match_lexicons(source_ext, target_ext, threshold))
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
        # Every term is eligible for expansion; conflicts are filtered afterwards
        source_ext = self.extend(source.get_lexicon(), threshold)
        target_ext = self.extend(target.get_lexicon(), threshold)
        extension = Alignment(source, target)
        discarded = 0
        for mapping in self.match_lexicons(source_ext, target_ext, threshold):
            if alignment.contains_conflict(mapping):
                discarded += 1
                continue
            extension.add(mapping)
        logger.info(
            f"{self.name}: {len(extension)} new mappings extending {alignment!r} "
            f"({discarded} conflicting discarded)"
        )
        return extension

    def expansion_confidence(self, form_count: int) -> float:
        """Confidence of expanding a name that has form_count synonym forms."""
        return self.confidence - self.penalty * form_count

    def extend(self, lexicon: Lexicon, threshold: float) -> Lexicon:
        """
        Return a copy of the lexicon extended with synonym entries.

        Formula names are never looked up. Names whose expansion
        confidence, or whose per-term weight, falls below threshold
        are skipped. Original entries are kept unmodified; a form reached
        from several names of a term keeps the highest weight.
        """
        # (form, term) -> weight
        expansions: dict[tuple[str, int], float] = {}
        for name in lexicon.get_names():
            if is_formula(name):
                continue
            forms = {normalize_name(f) for f in self.thesaurus.lookup_synonym_forms(name)}
            forms.discard("")
            if not forms:
                continue
            confidence = self.expansion_confidence(len(forms))
            if confidence < threshold:
                continue
            for term in lexicon.get_internal_terms(name):
                weight = min(1.0, confidence * lexicon.get_weight(name, term))
                if weight < threshold or weight <= 0.0:
                    continue
                for form in forms:
                    if weight > expansions.get((form, term), 0.0):
                        expansions[(form, term)] = weight

        builder = LexiconBuilder(lexicon)
        added = 0
        for (form, term), weight in expansions.items():
            if builder.add(term, form, SYNONYM_TYPE, SYNONYM_SOURCE, weight):
                added += 1
        logger.debug(f"Extended {lexicon!r} with {added} synonym entries")
        return builder.build()

    def match_lexicons(
        self,
        source: Lexicon,
        target: Lexicon,
        threshold: float,
    ) -> list[Mapping]:
        """
        Exact-name matches backed by at least one synonym-derived entry.

        Score is the product of the two corrected weights.
        """
        source_is_probe = source.name_count() <= target.name_count()
        probe, reference = (source, target) if source_is_probe else (target, source)

        mappings = []
        for name in probe.get_names():
            reference_terms = reference.get_terms(name)
            if reference_terms is None:
                continue
            for i in probe.get_terms(name):
                probe_weight = probe.get_corrected_weight(name, i)
                probe_is_synonym = probe.get_source(name, i) == SYNONYM_SOURCE
                for j in reference_terms:
                    if not (probe_is_synonym
                            or reference.get_source(name, j) == SYNONYM_SOURCE):
                        continue
                    score = probe_weight * reference.get_corrected_weight(name, j)
                    if score < threshold:
                        continue
                    s, t = (i, j) if source_is_probe else (j, i)
                    mappings.append(Mapping(source=s, target=t, score=min(1.0, score)))
        return mappings
