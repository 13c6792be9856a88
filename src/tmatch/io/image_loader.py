from __future__ import annotations

from pathlib import Path
from typing import Union

import cv2
import numpy as np

from ..errors import InvalidInputError

PathLike = Union[str, Path]

MATCH_MODES = ("gray", "color")


def load_image(path: PathLike) -> np.ndarray:
    """
    Load an image keeping its channel count (gray, BGR or BGRA).
    """
    if not Path(path).is_file():
        raise FileNotFoundError(f"Input file not found: {path}")
    image = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if image is None:
        raise OSError(f"Unable to read image at {path}")
    return image


def _channels(image: np.ndarray) -> int:
    return 1 if image.ndim == 2 else int(image.shape[2])


def to_gray(image: np.ndarray) -> np.ndarray:
    channels = _channels(image)
    if channels == 1:
        return image if image.ndim == 2 else image[:, :, 0]
    if channels == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
    if channels == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    raise InvalidInputError(f"unsupported channels: {channels}")


def to_bgr(image: np.ndarray) -> np.ndarray:
    channels = _channels(image)
    if channels == 1:
        return cv2.cvtColor(image if image.ndim == 2 else image[:, :, 0], cv2.COLOR_GRAY2BGR)
    if channels == 3:
        return image.copy()
    if channels == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)
    raise InvalidInputError(f"unsupported channels: {channels}")


def prepare_for_match(image: np.ndarray, mode: str) -> np.ndarray:
    """
    Convert ``image`` to the layout used for matching in ``mode``.
    """
    if mode == "gray":
        return to_gray(image)
    if mode == "color":
        return to_bgr(image)
    raise InvalidInputError(f"invalid mode (must be gray|color): {mode!r}")


def write_image(path: PathLike, image: np.ndarray) -> Path:
    """
    Write ``image`` to ``path``; the parent directory must already exist.
    """
    output = Path(path)
    if not output.parent.is_dir():
        raise OSError(f"Output directory does not exist: {output.parent}")
    try:
        written = cv2.imwrite(str(output), image)
    except cv2.error as exc:
        raise OSError(f"Unable to write image to {output}: {exc}") from exc
    if not written:
        raise OSError(f"Unable to write image to {output}")
    return output
