"""
Lexical collaborators of the matchers.

Provides:
- Lexicon, LexiconBuilder, LexicalEntry: name -> term catalog
- WordLexicon: word catalog with EC weights
- Ontology: term space owning a Lexicon
- normalize_name, tokenize, is_formula: text utilities
"""
from .text import (
    is_formula,
    normalize_name,
    tokenize,
)
from .lexicon import (
    AMBIGUITY_STEP,
    EXTERNAL_TYPE,
    LexicalEntry,
    Lexicon,
    LexiconBuilder,
)
from .words import WordLexicon
from .ontology import Ontology

__all__ = [
    "AMBIGUITY_STEP",
    "EXTERNAL_TYPE",
    "LexicalEntry",
    "Lexicon",
    "LexiconBuilder",
    "Ontology",
    "WordLexicon",
    "is_formula",
    "normalize_name",
    "tokenize",
]
