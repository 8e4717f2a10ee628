"""
Name normalization, tokenization and formula detection.
"""
import re

_WHITESPACE = re.compile(r"\s+")
_TOKEN_SPLIT = re.compile(r"[^0-9a-z]+")
# Logical and relational operators never appear in natural-language labels
_OPERATORS = re.compile(r"[()=<>∧∨¬→↔∀∃&|]")
_ALNUM_MIX = re.compile(r"^(?=.*[a-z])(?=.*[0-9])[0-9a-z+\-]+$")


def normalize_name(name: str) -> str:
    """Lower-case, turn underscores into spaces and collapse whitespace."""
    return _WHITESPACE.sub(" ", name.replace("_", " ")).strip().lower()


def tokenize(name: str) -> list[str]:
    """Split a name into its constituent words."""
    return [t for t in _TOKEN_SPLIT.split(normalize_name(name)) if t]


def is_formula(name: str) -> bool:
    """
    Check whether a name is a structured expression rather than a phrase.

    Formulas are names with logical/relational operators, or single
    tokens that mix letters and digits (chemical formulas such as "c6h12o6").
    """
    normalized = normalize_name(name)
    if not normalized:
        return False
    if _OPERATORS.search(normalized):
        return True
    return " " not in normalized and bool(_ALNUM_MIX.match(normalized))
