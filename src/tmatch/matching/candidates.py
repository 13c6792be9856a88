from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """
    Pixel rectangle anchored at its top-left corner.
    """

    x: int
    y: int
    width: int
    height: int

    @property
    def origin(self) -> Tuple[int, int]:
        return self.x, self.y

    @property
    def area(self) -> int:
        return self.width * self.height

    def intersection(self, other: BoundingBox) -> int:
        """
        Area shared with ``other``; 0 when the rectangles do not overlap.
        """
        left = max(self.x, other.x)
        top = max(self.y, other.y)
        right = min(self.x + self.width, other.x + other.width)
        bottom = min(self.y + self.height, other.y + other.height)
        if right <= left or bottom <= top:
            return 0
        return (right - left) * (bottom - top)

    def translated(self, dx: int, dy: int) -> BoundingBox:
        return BoundingBox(self.x + dx, self.y + dy, self.width, self.height)

    def as_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "w": self.width, "h": self.height}


@dataclass(frozen=True, slots=True)
class Candidate:
    """
    A single match location with its method-native score and confidence.
    """

    bbox: BoundingBox
    raw_score: float
    confidence: float


def translate_candidates(candidates: Iterable[Candidate], offset: Tuple[int, int]) -> List[Candidate]:
    """
    Shift every candidate origin by ``offset`` (the search region's origin).
    """
    dx, dy = offset
    return [
        Candidate(bbox=candidate.bbox.translated(dx, dy), raw_score=candidate.raw_score, confidence=candidate.confidence)
        for candidate in candidates
    ]


__all__ = ["BoundingBox", "Candidate", "translate_candidates"]
