from __future__ import annotations

from enum import Enum
from typing import Dict

import cv2

from .errors import InvalidInputError


class MatchMethod(Enum):
    """
    Normalized OpenCV template matching methods understood by the core.
    """

    CCOEFF_NORMED = "ccoeff_normed"
    CCORR_NORMED = "ccorr_normed"
    SQDIFF_NORMED = "sqdiff_normed"

    @property
    def cv_flag(self) -> int:
        return _CV_FLAGS[self]

    @classmethod
    def parse(cls, name: str) -> "MatchMethod":
        try:
            return cls(name.strip().lower())
        except ValueError as exc:
            choices = "|".join(method.value for method in cls)
            raise InvalidInputError(f"invalid method (must be {choices}): {name!r}") from exc


_CV_FLAGS: Dict[MatchMethod, int] = {
    MatchMethod.CCOEFF_NORMED: cv2.TM_CCOEFF_NORMED,
    MatchMethod.CCORR_NORMED: cv2.TM_CCORR_NORMED,
    MatchMethod.SQDIFF_NORMED: cv2.TM_SQDIFF_NORMED,
}


__all__ = ["MatchMethod"]
