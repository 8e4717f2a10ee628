"""
Tests for the synonym-expansion matcher.

Tests contracts for:
- Expansion confidence and its ambiguity penalty
- Lexicon extension (thresholds, formula exclusion, originals retained)
- Exact-name matching restricted to synonym-backed evidence
- Threshold monotonicity with names shared across terms
- extend_alignment conflict filtering
- Thesaurus caching
"""
import pytest

from ontomatch.config import MatchConfig
from ontomatch.kernel import Alignment, Mapping
from ontomatch.lexicon import LexiconBuilder, Ontology
from ontomatch.match import (
    SYNONYM_SOURCE,
    SYNONYM_TYPE,
    CachedThesaurus,
    Matcher,
    SynonymMatcher,
)


class FakeThesaurus:
    """In-memory thesaurus recording every lookup."""

    def __init__(self, synonyms: dict[str, set[str]]):
        self.synonyms = synonyms
        self.calls: list[str] = []

    def lookup_synonym_forms(self, name: str) -> set[str]:
        self.calls.append(name)
        return set(self.synonyms.get(name, set()))


def scores(alignment: Alignment) -> dict[tuple[int, int], float]:
    return {m.key: m.score for m in alignment}


def ontology(uri: str, entries: list[tuple[int, str, float]]) -> Ontology:
    builder = LexiconBuilder()
    for term, name, weight in entries:
        builder.add(term, name, weight=weight)
    return Ontology(uri, builder.build())


@pytest.fixture
def vehicles():
    source = Ontology.from_names("a", {1: ["car"], 2: ["truck"]})
    target = Ontology.from_names("b", {10: ["automobile"], 11: ["lorry"]})
    thesaurus = FakeThesaurus({"car": {"automobile"}, "truck": {"lorry"}})
    return source, target, thesaurus


@pytest.fixture
def shared_synonym():
    """Two target names expand to the name a third target term already has."""
    source = Ontology.from_names("a", {1: ["car"]})
    target = ontology("b", [(10, "auto", 0.997), (11, "automobile", 1.0)])
    thesaurus = FakeThesaurus({"car": {"automobile"}, "auto": {"automobile"}})
    return source, target, thesaurus


class TestExpansionConfidence:
    """Test the ambiguity penalty."""

    def test_default_constants(self):
        """One synonym form costs one penalty step off the ceiling."""
        matcher = SynonymMatcher(FakeThesaurus({}))
        assert matcher.expansion_confidence(1) == pytest.approx(0.89)

    def test_strictly_decreasing(self):
        """More synonym forms always mean lower confidence."""
        matcher = SynonymMatcher(FakeThesaurus({}))
        values = [matcher.expansion_confidence(n) for n in range(1, 20)]
        assert all(a > b for a, b in zip(values, values[1:]))

    def test_never_exceeds_ceiling(self):
        """Confidence never exceeds the configured ceiling."""
        matcher = SynonymMatcher(FakeThesaurus({}))
        assert all(matcher.expansion_confidence(n) <= 0.9 for n in range(0, 50))

    def test_configured_constants(self):
        """Ceiling and penalty come from MatchConfig."""
        config = MatchConfig(synonym_confidence=0.8, synonym_penalty=0.05)
        matcher = SynonymMatcher(FakeThesaurus({}), config=config)
        assert matcher.expansion_confidence(2) == pytest.approx(0.7)


class TestLexiconExtension:
    """Test lexicon extension with thesaurus forms."""

    def test_synonym_entries_added(self):
        """Each synonym form is added with penalized weight and synonym tags."""
        lexicon = Ontology.from_names("a", {1: ["Car"]}).get_lexicon()
        matcher = SynonymMatcher(FakeThesaurus({"car": {"Automobile", "auto"}}))
        extended = matcher.extend(lexicon, 0.5)
        assert extended.get_terms("automobile") == {1}
        assert extended.get_weight("automobile", 1) == pytest.approx(0.88)
        assert extended.get_source("auto", 1) == SYNONYM_SOURCE
        assert extended.get_type("auto", 1) == SYNONYM_TYPE

    def test_original_lexicon_untouched(self):
        """Extension works on a copy."""
        lexicon = Ontology.from_names("a", {1: ["car"]}).get_lexicon()
        matcher = SynonymMatcher(FakeThesaurus({"car": {"automobile"}}))
        matcher.extend(lexicon, 0.5)
        assert lexicon.get_names() == {"car"}

    def test_original_entries_retained(self):
        """A thesaurus returning the name itself does not overwrite it."""
        lexicon = Ontology.from_names("a", {1: ["car"]}).get_lexicon()
        matcher = SynonymMatcher(FakeThesaurus({"car": {"car", "automobile"}}))
        extended = matcher.extend(lexicon, 0.5)
        assert extended.get_source("car", 1) == ""
        assert extended.get_weight("car", 1) == 1.0

    def test_form_from_several_names_keeps_best_weight(self):
        """A form reached from two names of a term keeps the higher weight."""
        lexicon = ontology("a", [(1, "car", 0.5), (1, "auto", 1.0)]).get_lexicon()
        matcher = SynonymMatcher(FakeThesaurus({"car": {"automobile"}, "auto": {"automobile"}}))
        extended = matcher.extend(lexicon, 0.0)
        assert extended.get_weight("automobile", 1) == pytest.approx(0.89)

    def test_low_confidence_name_skipped(self):
        """Names whose confidence is below threshold are not expanded."""
        lexicon = Ontology.from_names("a", {1: ["car"]}).get_lexicon()
        matcher = SynonymMatcher(FakeThesaurus({"car": {"automobile", "auto"}}))
        extended = matcher.extend(lexicon, 0.89)
        assert extended.get_names() == {"car"}

    def test_low_weight_term_skipped(self):
        """Terms whose expansion weight is below threshold are skipped."""
        lexicon = Ontology.from_names("a", {1: ["car"]}, weight=0.5).get_lexicon()
        matcher = SynonymMatcher(FakeThesaurus({"car": {"automobile"}}))
        extended = matcher.extend(lexicon, 0.6)
        assert "automobile" not in extended

    def test_name_without_synonyms_skipped(self):
        """An empty thesaurus answer leaves the lexicon as it was."""
        lexicon = Ontology.from_names("a", {1: ["zzyzx"]}).get_lexicon()
        extended = SynonymMatcher(FakeThesaurus({})).extend(lexicon, 0.0)
        assert extended.get_names() == {"zzyzx"}

    def test_formulas_never_expanded(self):
        """Formula names are never looked up nor expanded."""
        lexicon = Ontology.from_names("a", {1: ["C6H12O6"]}).get_lexicon()
        thesaurus = FakeThesaurus({"c6h12o6": {"glucose"}})
        extended = SynonymMatcher(thesaurus).extend(lexicon, 0.0)
        assert "glucose" not in extended
        assert thesaurus.calls == []


class TestSynonymMatching:
    """Test exact-name matching over extended lexicons."""

    def test_is_a_matcher(self):
        """SynonymMatcher implements the matching contract."""
        assert isinstance(SynonymMatcher(FakeThesaurus({})), Matcher)

    def test_synonym_backed_match(self, vehicles):
        """A synonym entry meeting a verbatim name scores the weight product."""
        source, target, thesaurus = vehicles
        alignment = SynonymMatcher(thesaurus).match(source, target, 0.5)
        assert scores(alignment) == {
            (1, 10): pytest.approx(0.89),
            (2, 11): pytest.approx(0.89),
        }

    def test_synonym_source_required(self):
        """
        Catalog A names term 1 "Car"; catalog B names term 10 "Car" and
        term 11 "Automobile". Only the synonym path (1, 11) is emitted;
        (1, 10) is a verbatim name match and belongs to plain name matching.

        Clarification: an older form of this rule listed two further
        clauses (synonym on one side, empty source on the other), both
        subsumed by "at least one side is synonym-sourced". This test pins
        that single-clause rule.
        """
        source = Ontology.from_names("a", {1: ["Car"]})
        target = Ontology.from_names("b", {10: ["Car"], 11: ["Automobile"]})
        thesaurus = FakeThesaurus({"car": {"automobile"}})
        alignment = SynonymMatcher(thesaurus).match(source, target, 0.8)
        assert scores(alignment) == {(1, 11): pytest.approx(0.89)}
        assert (1, 10) not in alignment

    def test_verbatim_names_alone_never_match(self):
        """Names both ontologies already have are not matched here."""
        source = Ontology.from_names("a", {1: ["car"]})
        target = Ontology.from_names("b", {10: ["car"]})
        alignment = SynonymMatcher(FakeThesaurus({})).match(source, target, 0.0)
        assert len(alignment) == 0

    def test_orientation_when_target_is_smaller(self):
        """Mappings stay (source, target) when the target lexicon is smaller."""
        source = Ontology.from_names("a", {1: ["car"], 2: ["truck"], 3: ["bus"]})
        target = Ontology.from_names("b", {10: ["automobile"]})
        thesaurus = FakeThesaurus({"car": {"automobile"}})
        alignment = SynonymMatcher(thesaurus).match(source, target, 0.5)
        assert scores(alignment) == {(1, 10): pytest.approx(0.89)}

    def test_threshold_above_one_yields_nothing(self, vehicles):
        """Thresholds above 1 are taken literally."""
        source, target, thesaurus = vehicles
        assert len(SynonymMatcher(thesaurus).match(source, target, 1.01)) == 0

    def test_default_threshold_from_config(self, vehicles):
        """An omitted threshold falls back to the configured one."""
        source, target, thesaurus = vehicles
        assert len(SynonymMatcher(thesaurus, MatchConfig(threshold=0.95)).match(source, target)) == 0
        assert len(SynonymMatcher(thesaurus, MatchConfig(threshold=0.5)).match(source, target)) == 2

    @pytest.mark.parametrize("low,high", [(0.0, 0.5), (0.5, 0.88), (0.88, 0.95)])
    def test_threshold_monotonicity(self, vehicles, low, high):
        """Raising the threshold never adds mappings."""
        source, target, thesaurus = vehicles
        matcher = SynonymMatcher(thesaurus)
        loose = set(scores(matcher.match(source, target, low)))
        strict = set(scores(matcher.match(source, target, high)))
        assert strict <= loose


class TestSharedSynonymNames:
    """Test names shared by verbatim and synonym entries."""

    def test_synonym_entry_does_not_discount_verbatim_name(self, shared_synonym):
        """A name gained by expansion leaves the verbatim term's weight intact."""
        source, target, thesaurus = shared_synonym
        alignment = SynonymMatcher(thesaurus).match(source, target, 0.885)
        assert scores(alignment) == {(1, 11): pytest.approx(0.89)}

    @pytest.mark.parametrize("low,high", [
        (0.0, 0.5), (0.5, 0.8), (0.8, 0.885), (0.885, 0.889), (0.889, 0.95),
    ])
    def test_threshold_monotonicity(self, shared_synonym, low, high):
        """Raising the threshold never adds mappings, even for shared names."""
        source, target, thesaurus = shared_synonym
        matcher = SynonymMatcher(thesaurus)
        loose = set(scores(matcher.match(source, target, low)))
        strict = set(scores(matcher.match(source, target, high)))
        assert strict <= loose


class TestSynonymExtension:
    """Test extend_alignment."""

    def test_conflicting_mappings_discarded(self, vehicles):
        """Mappings on an already-mapped source are dropped."""
        source, target, thesaurus = vehicles
        existing = Alignment(source, target)
        existing.add(Mapping(source=1, target=10, score=1.0))
        extension = SynonymMatcher(thesaurus).extend_alignment(existing, 0.5)
        assert scores(extension) == {(2, 11): pytest.approx(0.89)}

    def test_target_conflict_discarded(self, vehicles):
        """Mappings on an already-mapped target are dropped."""
        source, target, thesaurus = vehicles
        existing = Alignment(source, target)
        existing.add(Mapping(source=7, target=11, score=1.0))
        extension = SynonymMatcher(thesaurus).extend_alignment(existing, 0.5)
        assert set(scores(extension)) == {(1, 10)}

    def test_no_self_conflict(self, vehicles):
        """New mappings never touch terms of the existing alignment."""
        source, target, thesaurus = vehicles
        existing = Alignment(source, target)
        existing.add(Mapping(source=2, target=10, score=0.7))
        extension = SynonymMatcher(thesaurus).extend_alignment(existing, 0.0)
        for mapping in extension:
            assert mapping.source not in existing.get_sources()
            assert mapping.target not in existing.get_targets()
        assert len(existing) == 1


class TestCachedThesaurus:
    """Test lookup memoization."""

    def test_repeated_names_query_once(self):
        """A name is sent to the inner thesaurus once."""
        inner = FakeThesaurus({"car": {"automobile"}})
        cached = CachedThesaurus(inner)
        assert cached.lookup_synonym_forms("car") == {"automobile"}
        assert cached.lookup_synonym_forms("car") == {"automobile"}
        assert inner.calls == ["car"]
        assert cached.cache_size == 1

    def test_empty_results_cached(self):
        """Names without synonyms are cached too."""
        inner = FakeThesaurus({})
        cached = CachedThesaurus(inner)
        cached.lookup_synonym_forms("zzyzx")
        cached.lookup_synonym_forms("zzyzx")
        assert inner.calls == ["zzyzx"]

    def test_returned_sets_are_copies(self):
        """Callers cannot mutate cached results."""
        cached = CachedThesaurus(FakeThesaurus({"car": {"automobile"}}))
        cached.lookup_synonym_forms("car").add("auto")
        assert cached.lookup_synonym_forms("car") == {"automobile"}

    def test_clear(self):
        """Clearing forces a fresh lookup."""
        inner = FakeThesaurus({"car": {"automobile"}})
        cached = CachedThesaurus(inner)
        cached.lookup_synonym_forms("car")
        cached.clear()
        cached.lookup_synonym_forms("car")
        assert inner.calls == ["car", "car"]

    def test_shared_across_match_sides(self):
        """A name present on both sides is looked up once per match."""
        inner = FakeThesaurus({"car": {"automobile"}})
        matcher = SynonymMatcher(CachedThesaurus(inner))
        source = Ontology.from_names("a", {1: ["car"]})
        target = Ontology.from_names("b", {10: ["car"], 11: ["automobile"]})
        matcher.match(source, target, 0.5)
        assert inner.calls.count("car") == 1

    def test_plain_thesaurus_is_wrapped(self):
        """An injected thesaurus without a cache still queries each name once."""
        inner = FakeThesaurus({"car": {"automobile"}})
        matcher = SynonymMatcher(inner)
        source = Ontology.from_names("a", {1: ["car"]})
        target = Ontology.from_names("b", {10: ["car"], 11: ["automobile"]})
        matcher.match(source, target, 0.5)
        assert isinstance(matcher.thesaurus, CachedThesaurus)
        assert inner.calls.count("car") == 1

    def test_cached_thesaurus_not_rewrapped(self):
        """An injected CachedThesaurus is used as given."""
        cached = CachedThesaurus(FakeThesaurus({}))
        assert SynonymMatcher(cached).thesaurus is cached
