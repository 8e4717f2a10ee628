"""
Matching contract shared by every strategy.

A strategy turns two ontologies into an Alignment of scored Mappings
(match), or finds new Mappings for the terms an existing Alignment
leaves unmapped (extend_alignment).
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..config import MatchConfig
from ..kernel.types import Alignment
from ..lexicon.ontology import Ontology


class Matcher(ABC):
    """
    Base class for matching strategies.

    Each strategy must:
    1. Match full term spaces, with no pre-existing state
    2. Extend an alignment, returning only the new Mappings
    3. Never mutate or return the input Alignment

    A threshold left as None falls back to the configured default.
    """

    def __init__(self, config: Optional[MatchConfig] = None):
        self.config = config or MatchConfig()

    @abstractmethod
    def match(
        self,
        source: Ontology,
        target: Ontology,
        threshold: Optional[float] = None,
    ) -> Alignment:
        """
        Compute all Mappings between source and target scoring >= threshold.

        Args:
            source: Source ontology
            target: Target ontology
            threshold: Minimum score; taken literally (> 1 yields nothing)

        Returns:
            New Alignment between source and target
        """
        pass

    @abstractmethod
    def extend_alignment(
        self,
        alignment: Alignment,
        threshold: Optional[float] = None,
    ) -> Alignment:
        """
        Compute Mappings for terms not yet mapped in the given alignment.

        Returns:
            New Alignment holding only the newly found Mappings
        """
        pass

    def resolve_threshold(self, threshold: Optional[float]) -> float:
        return self.config.threshold if threshold is None else threshold

    @property
    def name(self) -> str:
        return type(self).__name__
