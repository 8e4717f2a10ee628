"""
ontomatch: lexical ontology matching.

Computes scored term-to-term correspondences between two ontologies
from the names of their terms.
"""
from .kernel import Alignment, Mapping
from .lexicon import Lexicon, LexiconBuilder, Ontology, WordLexicon
from .match import Matcher, SynonymMatcher, WordMatcher

__version__ = "0.1.0"

__all__ = [
    "Alignment",
    "Lexicon",
    "LexiconBuilder",
    "Mapping",
    "Matcher",
    "Ontology",
    "SynonymMatcher",
    "WordLexicon",
    "WordMatcher",
]
