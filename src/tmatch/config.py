from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .errors import InvalidInputError
from .methods import MatchMethod

DEFAULT_CANDIDATE_MULTIPLIER = 10
DEFAULT_SUPPRESSION_DIVISOR = 4


@dataclass(frozen=True, slots=True)
class Region:
    """
    Axis-aligned rectangle in scene coordinates used to restrict the search.
    """

    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise InvalidInputError(f"roi origin must be non-negative: ({self.x}, {self.y})")
        if self.width <= 0 or self.height <= 0:
            raise InvalidInputError(f"roi size must be positive: {self.width}x{self.height}")

    @classmethod
    def parse(cls, text: str) -> "Region":
        """
        Parse an ``x,y,w,h`` string.
        """
        parts = [part.strip() for part in text.split(",")]
        if len(parts) != 4:
            raise InvalidInputError(f"invalid roi (expected x,y,w,h): {text!r}")
        try:
            x, y, width, height = (int(part) for part in parts)
        except ValueError as exc:
            raise InvalidInputError(f"invalid roi (expected integers): {text!r}") from exc
        return cls(x=x, y=y, width=width, height=height)

    @property
    def origin(self) -> Tuple[int, int]:
        return self.x, self.y

    def contains_within(self, width: int, height: int) -> bool:
        return self.x + self.width <= width and self.y + self.height <= height

    def as_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "w": self.width, "h": self.height}


@dataclass(slots=True)
class MatchConfig:
    """
    Parameters controlling candidate extraction and deduplication.

    ``candidate_multiplier`` sizes the raw candidate pool handed to NMS
    (``max_results * candidate_multiplier``). ``suppression_divisor`` sets the
    suppression half-extent to ``template_dimension // suppression_divisor``.
    """

    method: MatchMethod = MatchMethod.CCOEFF_NORMED
    max_results: int = 5
    min_confidence: float = 0.80
    iou_threshold: float = 0.30
    candidate_multiplier: int = DEFAULT_CANDIDATE_MULTIPLIER
    suppression_divisor: int = DEFAULT_SUPPRESSION_DIVISOR
    roi: Region | None = None

    def __post_init__(self) -> None:
        if isinstance(self.method, str):
            self.method = MatchMethod.parse(self.method)
        if isinstance(self.roi, str):
            self.roi = Region.parse(self.roi)
        if self.max_results < 1:
            raise InvalidInputError(f"max_results must be >= 1: {self.max_results}")
        if not 0.0 <= self.min_confidence <= 1.0:
            raise InvalidInputError(f"min_confidence must be in [0, 1]: {self.min_confidence}")
        if not 0.0 <= self.iou_threshold <= 1.0:
            raise InvalidInputError(f"iou_threshold must be in [0, 1]: {self.iou_threshold}")
        if self.candidate_multiplier < 1:
            raise InvalidInputError(f"candidate_multiplier must be >= 1: {self.candidate_multiplier}")
        if self.suppression_divisor < 1:
            raise InvalidInputError(f"suppression_divisor must be >= 1: {self.suppression_divisor}")

    @property
    def candidate_pool(self) -> int:
        return self.max_results * self.candidate_multiplier


__all__ = [
    "DEFAULT_CANDIDATE_MULTIPLIER",
    "DEFAULT_SUPPRESSION_DIVISOR",
    "MatchConfig",
    "Region",
]
