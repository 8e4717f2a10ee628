"""
Correspondence model: scored mappings and alignments.

A Mapping pairs one source term with one target term.
An Alignment is an ordered, conflict-aware collection of Mappings
between a fixed (source, target) ontology pair.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Iterator, Optional

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from ..lexicon.ontology import Ontology


class Mapping(BaseModel):
    """
    Scored correspondence between a source term and a target term.

    Immutable once created. Score is a similarity in [0,1].
    """
    source: int
    target: int
    score: float = Field(ge=0.0, le=1.0)

    model_config = {"frozen": True}

    @property
    def key(self) -> tuple[int, int]:
        return (self.source, self.target)

    def __str__(self) -> str:
        return f"{self.source} = {self.target} ({self.score:.3f})"


class Alignment:
    """
    Ordered collection of Mappings for one ontology pair.

    Tracks the sets of source and target terms already mapped,
    so conflicts can be answered without scanning.
    """

    def __init__(self, source: Ontology, target: Ontology):
        self._source = source
        self._target = target
        self._mappings: list[Mapping] = []
        # (source, target) -> position in _mappings
        self._index: dict[tuple[int, int], int] = {}
        # dicts keep first-seen order
        self._sources: dict[int, None] = {}
        self._targets: dict[int, None] = {}

    def get_source(self) -> Ontology:
        return self._source

    def get_target(self) -> Ontology:
        return self._target

    def add(self, mapping: Mapping) -> None:
        """
        Append a mapping.

        A repeated (source, target) pair keeps its position and the
        higher of the two scores.
        """
        position = self._index.get(mapping.key)
        if position is not None:
            if mapping.score > self._mappings[position].score:
                self._mappings[position] = mapping
            return
        self._index[mapping.key] = len(self._mappings)
        self._mappings.append(mapping)
        self._sources.setdefault(mapping.source, None)
        self._targets.setdefault(mapping.target, None)

    def add_all(self, mappings: Iterable[Mapping]) -> None:
        for mapping in mappings:
            self.add(mapping)

    def get_sources(self) -> list[int]:
        """Source term ids participating in this alignment."""
        return list(self._sources)

    def get_targets(self) -> list[int]:
        """Target term ids participating in this alignment."""
        return list(self._targets)

    def contains_conflict(self, mapping: Mapping) -> bool:
        """
        Check whether the mapping's source or target is already mapped.

        Used when extending an alignment to avoid redundant correspondences.
        """
        return mapping.source in self._sources or mapping.target in self._targets

    def get(self, source: int, target: int) -> Optional[Mapping]:
        position = self._index.get((source, target))
        return None if position is None else self._mappings[position]

    @property
    def mappings(self) -> tuple[Mapping, ...]:
        return tuple(self._mappings)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Mapping):
            return item.key in self._index
        return item in self._index

    def __iter__(self) -> Iterator[Mapping]:
        return iter(self._mappings)

    def __len__(self) -> int:
        return len(self._mappings)

    def __repr__(self) -> str:
        return f"Alignment({self._source} -> {self._target}, {len(self)} mappings)"
