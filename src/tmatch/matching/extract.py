"""
Extremum search over a dense score field.

``find_best`` reports the single global optimum. ``extract_topk`` repeatedly
takes the optimum of a private working copy and overwrites its neighbourhood
with the method's worst value so the same peak is never reported twice.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

import cv2
import numpy as np

from ..config import DEFAULT_SUPPRESSION_DIVISOR
from ..errors import InvalidInputError
from .candidates import BoundingBox, Candidate
from .confidence import MethodLike, get_model

logger = logging.getLogger(__name__)


TemplateSize = Tuple[int, int]


def validate_field(field: np.ndarray) -> np.ndarray:
    """
    Return ``field`` as a float array accepted by ``cv2.minMaxLoc``.

    Raises InvalidInputError for empty, non 2-D or non-finite input.
    """
    array = np.asarray(field)
    if array.ndim != 2:
        raise InvalidInputError(f"score field must be 2-D, got shape {array.shape}")
    if array.size == 0:
        raise InvalidInputError("score field is empty")
    if not np.issubdtype(array.dtype, np.number):
        raise InvalidInputError(f"score field must be numeric, got dtype {array.dtype}")
    if array.dtype not in (np.float32, np.float64):
        array = array.astype(np.float64)
    if not np.all(np.isfinite(array)):
        raise InvalidInputError("score field contains NaN or infinite values")
    return np.ascontiguousarray(array)


def validate_template_size(template_size: TemplateSize) -> TemplateSize:
    width, height = (int(value) for value in template_size)
    if width <= 0 or height <= 0:
        raise InvalidInputError(f"template dimensions must be positive: {width}x{height}")
    return width, height


def suppression_radius(template_size: TemplateSize, divisor: int = DEFAULT_SUPPRESSION_DIVISOR) -> Tuple[int, int]:
    """
    Half-extent of the square erased around each accepted peak.
    """
    if divisor < 1:
        raise InvalidInputError(f"suppression divisor must be >= 1: {divisor}")
    width, height = template_size
    return max(1, width // divisor), max(1, height // divisor)


def _locate(array: np.ndarray, minimum: bool) -> Tuple[float, Tuple[int, int]]:
    min_val, max_val, min_loc, max_loc = cv2.minMaxLoc(array)
    if minimum:
        return float(min_val), (int(min_loc[0]), int(min_loc[1]))
    return float(max_val), (int(max_loc[0]), int(max_loc[1]))


def find_best(field: np.ndarray, method: MethodLike, template_size: TemplateSize) -> Candidate:
    """
    Locate the single best position on ``field`` without modifying it.
    """
    array = validate_field(field)
    width, height = validate_template_size(template_size)
    model = get_model(method)

    raw, (x, y) = _locate(array, model.best_is_minimum())
    return Candidate(bbox=BoundingBox(x, y, width, height), raw_score=raw, confidence=model.confidence(raw))


def extract_topk(
    field: np.ndarray,
    method: MethodLike,
    template_size: TemplateSize,
    k: int,
    min_confidence: float,
    suppression_divisor: int = DEFAULT_SUPPRESSION_DIVISOR,
) -> List[Candidate]:
    """
    Collect up to ``k`` candidates in descending order of goodness.

    Extraction stops at the first optimum whose confidence falls below
    ``min_confidence``, or once only suppressed positions remain. ``field``
    itself is left untouched.
    """
    if k < 1:
        raise InvalidInputError(f"k must be >= 1: {k}")
    if not 0.0 <= min_confidence <= 1.0:
        raise InvalidInputError(f"min_confidence must be in [0, 1]: {min_confidence}")
    array = validate_field(field)
    width, height = validate_template_size(template_size)
    rx, ry = suppression_radius((width, height), suppression_divisor)
    model = get_model(method)
    minimum = model.best_is_minimum()
    sentinel = model.worst_sentinel()

    work = array.copy()
    suppressed = np.zeros(work.shape, dtype=bool)
    rows, cols = work.shape
    hits: List[Candidate] = []

    for round_index in range(k):
        raw, (x, y) = _locate(work, minimum)
        if suppressed[y, x]:
            logger.debug("score field exhausted after %d candidates", len(hits))
            break

        score = model.confidence(raw)
        if score < min_confidence:
            logger.debug(
                "round %d: best confidence %.4f below threshold %.4f, stopping",
                round_index,
                score,
                min_confidence,
            )
            break

        hits.append(Candidate(bbox=BoundingBox(x, y, width, height), raw_score=raw, confidence=score))
        logger.debug("round %d: candidate at (%d, %d) raw=%.6f conf=%.4f", round_index, x, y, raw, score)

        x0, x1 = max(0, x - rx), min(cols, x + rx + 1)
        y0, y1 = max(0, y - ry), min(rows, y + ry + 1)
        work[y0:y1, x0:x1] = sentinel
        suppressed[y0:y1, x0:x1] = True

    return hits


__all__ = [
    "extract_topk",
    "find_best",
    "suppression_radius",
    "validate_field",
    "validate_template_size",
]
