"""
Per-method score semantics: which extremum is best, how raw scores map onto a
[0, 1] confidence, and which value marks a location as exhausted.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Dict, Union

from ..methods import MatchMethod

MethodLike = Union[MatchMethod, str]


def _clamp01(value: float) -> float:
    if math.isnan(value):
        return 0.0
    return min(1.0, max(0.0, value))


class ConfidenceModel(ABC):
    """
    Score semantics of a single matching method.
    """

    method: MatchMethod

    @abstractmethod
    def best_is_minimum(self) -> bool:
        ...

    @abstractmethod
    def worst_sentinel(self) -> float:
        ...

    @abstractmethod
    def _normalize(self, raw: float) -> float:
        ...

    def confidence(self, raw: float) -> float:
        return _clamp01(self._normalize(float(raw)))


class SquaredDifferenceModel(ConfidenceModel):
    method = MatchMethod.SQDIFF_NORMED

    def best_is_minimum(self) -> bool:
        return True

    def worst_sentinel(self) -> float:
        return 1.0

    def _normalize(self, raw: float) -> float:
        return 1.0 - raw


class CrossCorrelationModel(ConfidenceModel):
    method = MatchMethod.CCORR_NORMED

    def best_is_minimum(self) -> bool:
        return False

    def worst_sentinel(self) -> float:
        return -1.0

    def _normalize(self, raw: float) -> float:
        return raw


class CorrelationCoefficientModel(ConfidenceModel):
    method = MatchMethod.CCOEFF_NORMED

    def best_is_minimum(self) -> bool:
        return False

    def worst_sentinel(self) -> float:
        return -1.0

    def _normalize(self, raw: float) -> float:
        # raw lives in [-1, 1]
        return (raw + 1.0) / 2.0


_MODELS: Dict[MatchMethod, ConfidenceModel] = {
    model.method: model
    for model in (SquaredDifferenceModel(), CrossCorrelationModel(), CorrelationCoefficientModel())
}


def get_model(method: MethodLike) -> ConfidenceModel:
    """
    Return the stateless confidence model for ``method`` (enum or CLI name).
    """
    if isinstance(method, str):
        method = MatchMethod.parse(method)
    return _MODELS[method]


def confidence(method: MethodLike, raw: float) -> float:
    return get_model(method).confidence(raw)


def best_is_minimum(method: MethodLike) -> bool:
    return get_model(method).best_is_minimum()


__all__ = [
    "ConfidenceModel",
    "CorrelationCoefficientModel",
    "CrossCorrelationModel",
    "MatchMethod",
    "MethodLike",
    "SquaredDifferenceModel",
    "best_is_minimum",
    "confidence",
    "get_model",
]
