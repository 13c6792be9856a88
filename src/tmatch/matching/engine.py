from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import cv2
import numpy as np

from ..config import MatchConfig, Region
from ..errors import InvalidInputError
from .candidates import Candidate, translate_candidates
from .extract import extract_topk, find_best
from .nms import deduplicate

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MatchResult:
    """
    Final candidates in scene coordinates plus the score field they came from.

    ``heatmap`` is the unmodified field over the searched region, so its origin
    is the ROI origin when one was used.
    """

    candidates: List[Candidate]
    heatmap: np.ndarray
    template_size: Tuple[int, int]
    scene_size: Tuple[int, int]
    roi: Optional[Region] = None

    @property
    def best(self) -> Optional[Candidate]:
        return self.candidates[0] if self.candidates else None


@dataclass(slots=True)
class TemplateMatcher:
    """
    Runs OpenCV's matchTemplate and turns the score field into distinct matches.
    """

    config: MatchConfig = field(default_factory=MatchConfig)

    def score_field(self, image: np.ndarray, template: np.ndarray) -> np.ndarray:
        """
        Compute the raw similarity surface of ``template`` over ``image``.
        """
        if image.ndim != template.ndim:
            raise InvalidInputError("image and template dimensionality must match")
        if image.ndim == 3 and image.shape[2] != template.shape[2]:
            raise InvalidInputError("image and template channel counts must match")
        if image.dtype != template.dtype:
            raise InvalidInputError(f"image and template dtypes must match: {image.dtype} vs {template.dtype}")
        if image.dtype not in (np.uint8, np.float32):
            raise InvalidInputError(f"unsupported pixel type {image.dtype} (must be uint8 or float32)")
        if template.shape[0] == 0 or template.shape[1] == 0:
            raise InvalidInputError("template is empty")
        if template.shape[0] > image.shape[0] or template.shape[1] > image.shape[1]:
            raise InvalidInputError(
                f"template larger than scene (templ: {template.shape[1]}x{template.shape[0]}, "
                f"scene: {image.shape[1]}x{image.shape[0]})"
            )
        return cv2.matchTemplate(image, template, self.config.method.cv_flag)

    def match_best(self, image: np.ndarray, template: np.ndarray) -> Candidate:
        """
        Single best location in scene coordinates.
        """
        search, origin = self._search_area(image)
        result = self.score_field(search, template)
        best = find_best(result, self.config.method, _size_of(template))
        return translate_candidates([best], origin)[0]

    def match(self, image: np.ndarray, template: np.ndarray) -> MatchResult:
        """
        Locate up to ``config.max_results`` distinct matches.
        """
        config = self.config
        search, origin = self._search_area(image)
        result = self.score_field(search, template)
        template_size = _size_of(template)

        raw = extract_topk(
            result,
            config.method,
            template_size,
            k=config.candidate_pool,
            min_confidence=config.min_confidence,
            suppression_divisor=config.suppression_divisor,
        )
        kept = deduplicate(raw, iou_threshold=config.iou_threshold, max_keep=config.max_results)
        candidates = translate_candidates(kept, origin)

        logger.info(
            "%s: %d raw candidates, %d kept after NMS (min_conf=%.2f, iou=%.2f)",
            config.method.value,
            len(raw),
            len(candidates),
            config.min_confidence,
            config.iou_threshold,
        )
        return MatchResult(
            candidates=candidates,
            heatmap=result,
            template_size=template_size,
            scene_size=_size_of(image),
            roi=config.roi,
        )

    def _search_area(self, image: np.ndarray) -> Tuple[np.ndarray, Tuple[int, int]]:
        roi = self.config.roi
        if roi is None:
            return image, (0, 0)
        height, width = image.shape[:2]
        if not roi.contains_within(width, height):
            raise InvalidInputError(f"roi out of bounds: {roi.as_dict()} for scene {width}x{height}")
        return image[roi.y : roi.y + roi.height, roi.x : roi.x + roi.width], roi.origin


def _size_of(image: np.ndarray) -> Tuple[int, int]:
    return int(image.shape[1]), int(image.shape[0])


__all__ = ["MatchResult", "TemplateMatcher"]
