"""
Drawing helpers for match visualizations.
"""

from __future__ import annotations

from typing import Sequence

import cv2
import numpy as np

from .errors import InvalidInputError
from .io.image_loader import to_bgr
from .matching.candidates import Candidate
from .matching.confidence import MethodLike, best_is_minimum

DRAW_MODES = ("bbox", "bbox+label", "bbox+label+score")

_MATCH_COLOR = (0, 255, 0)


def draw_matches(
    scene: np.ndarray,
    candidates: Sequence[Candidate],
    draw: str = "bbox+label+score",
    thickness: int = 2,
    font_scale: float = 0.5,
) -> np.ndarray:
    """
    Return a BGR copy of ``scene`` with every candidate outlined and labelled.
    """
    if draw not in DRAW_MODES:
        raise InvalidInputError(f"invalid draw mode (must be {'|'.join(DRAW_MODES)}): {draw!r}")
    if thickness < 1:
        raise InvalidInputError(f"thickness must be >= 1: {thickness}")
    if font_scale <= 0:
        raise InvalidInputError(f"font_scale must be > 0: {font_scale}")

    annotated = to_bgr(scene)
    for index, candidate in enumerate(candidates):
        box = candidate.bbox
        cv2.rectangle(annotated, (box.x, box.y), (box.x + box.width, box.y + box.height), _MATCH_COLOR, thickness)
        if draw == "bbox":
            continue
        label = f"#{index}"
        if draw == "bbox+label+score":
            label = f"{label} conf:{candidate.confidence:.2f}"
        text_y = box.y - 5 if box.y > 5 else 0
        cv2.putText(annotated, label, (box.x, text_y), cv2.FONT_HERSHEY_SIMPLEX, font_scale, _MATCH_COLOR, 1)
    return annotated


def render_heatmap(field: np.ndarray, method: MethodLike) -> np.ndarray:
    """
    Colour-map a score field so that better scores are always hotter.
    """
    heat = np.asarray(field, dtype=np.float32)
    if heat.ndim != 2 or heat.size == 0:
        raise InvalidInputError("heatmap requested but score field is empty")
    if best_is_minimum(method):
        heat = 1.0 - heat
    heat_u8 = cv2.normalize(heat, None, 0, 255, cv2.NORM_MINMAX).astype(np.uint8)
    return cv2.applyColorMap(heat_u8, cv2.COLORMAP_JET)


__all__ = ["DRAW_MODES", "draw_matches", "render_heatmap"]
