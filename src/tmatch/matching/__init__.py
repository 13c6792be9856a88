"""
Matching subpackage exposes candidate extraction, deduplication and the
high-level template matcher.
"""

from .candidates import BoundingBox, Candidate, translate_candidates
from .confidence import ConfidenceModel, MatchMethod, best_is_minimum, confidence, get_model
from .extract import extract_topk, find_best
from .nms import deduplicate, iou
from .engine import MatchResult, TemplateMatcher

__all__ = [
    "BoundingBox",
    "Candidate",
    "ConfidenceModel",
    "MatchMethod",
    "MatchResult",
    "TemplateMatcher",
    "best_is_minimum",
    "confidence",
    "deduplicate",
    "extract_topk",
    "find_best",
    "get_model",
    "iou",
    "translate_candidates",
]
