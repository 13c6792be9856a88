"""
Core package for locating distinct template matches in a scene.
"""

from .config import MatchConfig, Region
from .errors import InvalidInputError, TmatchError
from .matching import (
    BoundingBox,
    Candidate,
    MatchResult,
    TemplateMatcher,
    deduplicate,
    extract_topk,
    find_best,
)
from .methods import MatchMethod

__all__ = [
    "BoundingBox",
    "Candidate",
    "InvalidInputError",
    "MatchConfig",
    "MatchMethod",
    "MatchResult",
    "Region",
    "TemplateMatcher",
    "TmatchError",
    "deduplicate",
    "extract_topk",
    "find_best",
]
