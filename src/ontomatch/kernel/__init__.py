"""
Correspondence model.

Provides:
- Mapping: scored source/target term pair
- Alignment: conflict-aware collection of Mappings
"""
from .types import (
    Alignment,
    Mapping,
)

__all__ = [
    "Alignment",
    "Mapping",
]
