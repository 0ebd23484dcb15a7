"""
Run configuration assembled from the command line.
"""
from dataclasses import dataclass
from typing import FrozenSet, Optional

DEFAULT_DELIMITER = '\t'


@dataclass(frozen=True)
class Configuration:
    """Immutable settings shared by every stage of a run."""
    candidate_languages: FrozenSet[str] = frozenset()
    line_mode: bool = False
    inline_text: Optional[str] = None
    confidence_threshold: Optional[float] = None
    min_length: Optional[int] = None
    parallel: bool = False
    workers: Optional[int] = None
    delimiter: str = DEFAULT_DELIMITER
