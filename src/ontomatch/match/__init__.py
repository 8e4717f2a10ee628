"""
Matching strategies.

Provides:
- Matcher: contract every strategy implements
- WordMatcher: weighted Jaccard over shared words
- SynonymMatcher: exact names after thesaurus expansion
- Thesaurus, WordNetThesaurus, CachedThesaurus: synonym sources
"""
from .base import Matcher
from .thesaurus import (
    CachedThesaurus,
    Thesaurus,
    WordNetThesaurus,
)
from .word import WordMatcher
from .synonym import (
    SYNONYM_SOURCE,
    SYNONYM_TYPE,
    SynonymMatcher,
)

__all__ = [
    "CachedThesaurus",
    "Matcher",
    "SYNONYM_SOURCE",
    "SYNONYM_TYPE",
    "SynonymMatcher",
    "Thesaurus",
    "WordMatcher",
    "WordNetThesaurus",
]
