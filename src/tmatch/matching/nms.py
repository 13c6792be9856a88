from __future__ import annotations

import logging
from typing import List, Sequence

from ..errors import InvalidInputError
from .candidates import BoundingBox, Candidate

logger = logging.getLogger(__name__)


def iou(a: BoundingBox, b: BoundingBox) -> float:
    """
    Intersection-over-union of two rectangles, 0.0 when they are disjoint.
    """
    inter = a.intersection(b)
    if inter == 0:
        return 0.0
    union = a.area + b.area - inter
    return inter / union if union > 0 else 0.0


def deduplicate(candidates: Sequence[Candidate], iou_threshold: float, max_keep: int) -> List[Candidate]:
    """
    Greedy non-maximum suppression by confidence.

    Candidates are visited by descending confidence (ties keep their input
    order) and kept only while their IoU with every kept candidate stays
    strictly below ``iou_threshold``. The input sequence is not reordered.
    """
    if not 0.0 <= iou_threshold <= 1.0:
        raise InvalidInputError(f"iou_threshold must be in [0, 1]: {iou_threshold}")
    if max_keep < 1:
        raise InvalidInputError(f"max_keep must be >= 1: {max_keep}")

    order = sorted(range(len(candidates)), key=lambda index: -candidates[index].confidence)

    kept: List[Candidate] = []
    for index in order:
        candidate = candidates[index]
        overlapping = next((other for other in kept if iou(candidate.bbox, other.bbox) >= iou_threshold), None)
        if overlapping is not None:
            logger.debug(
                "dropping candidate at %s (conf=%.4f), overlaps kept candidate at %s",
                candidate.bbox.origin,
                candidate.confidence,
                overlapping.bbox.origin,
            )
            continue
        kept.append(candidate)
        if len(kept) == max_keep:
            break

    return kept


__all__ = ["deduplicate", "iou"]
