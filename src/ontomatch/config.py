"""
Configuration management for ontomatch.

Loads from environment variables and .env file.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from dotenv import load_dotenv


@dataclass
class MatchConfig:
    """Matcher defaults"""
    threshold: float = 0.6
    # Confidence of a perfect, unambiguous thesaurus hit
    synonym_confidence: float = 0.9
    # Subtracted once per synonym form found for a name
    synonym_penalty: float = 0.01
    wordnet_data_path: Path | None = None


@dataclass
class Config:
    """Application configuration"""
    match: MatchConfig = field(default_factory=MatchConfig)
    log_level: str = "WARNING"


def load_config() -> Config:
    """Load configuration from environment."""
    load_dotenv()

    wordnet_path = os.getenv("ONTOMATCH_WORDNET_PATH")

    match = MatchConfig(
        threshold=float(os.getenv("ONTOMATCH_THRESHOLD", "0.6")),
        synonym_confidence=float(os.getenv("ONTOMATCH_SYNONYM_CONFIDENCE", "0.9")),
        synonym_penalty=float(os.getenv("ONTOMATCH_SYNONYM_PENALTY", "0.01")),
        wordnet_data_path=Path(wordnet_path) if wordnet_path else None,
    )

    return Config(
        match=match,
        log_level=os.getenv("ONTOMATCH_LOG_LEVEL", "WARNING").upper(),
    )


def validate_config(config: Config) -> list[str]:
    """
    Validate matcher configuration.
    Returns list of warning messages (empty if all OK).
    """
    warnings = []
    match = config.match

    if not 0.0 <= match.threshold <= 1.0:
        warnings.append(
            f"Threshold {match.threshold} is outside [0, 1]. "
            "Values above 1 yield no mappings; values at or below 0 keep every pair."
        )

    if match.synonym_confidence <= 0.0:
        warnings.append(
            f"Synonym confidence {match.synonym_confidence} is not positive. "
            "The synonym matcher will never extend a lexicon."
        )
    elif match.synonym_confidence > 1.0:
        warnings.append(f"Synonym confidence {match.synonym_confidence} exceeds 1.")

    if match.synonym_penalty < 0.0:
        warnings.append(
            f"Synonym penalty {match.synonym_penalty} is negative; "
            "ambiguous names would gain confidence."
        )

    if match.wordnet_data_path is not None and not match.wordnet_data_path.exists():
        warnings.append(f"WordNet data path does not exist: {match.wordnet_data_path}")

    return warnings


def configure_logging(level: str = "WARNING") -> None:
    """Apply a basic logging setup for command-line callers."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
