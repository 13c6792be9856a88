from __future__ import annotations

from pathlib import Path

import cv2
import numpy as np
import pytest

from tmatch.errors import InvalidInputError
from tmatch.io import load_image, prepare_for_match, write_image


def test_write_then_load_keeps_channel_layout(tmp_path: Path) -> None:
    image = np.zeros((12, 16, 3), dtype=np.uint8)
    cv2.rectangle(image, (2, 2), (9, 9), (0, 0, 255), thickness=-1)

    path = write_image(tmp_path / "scene.png", image)

    assert load_image(path).shape == (12, 16, 3)
    assert prepare_for_match(load_image(path), "gray").shape == (12, 16)


def test_write_image_requires_existing_directory(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        write_image(tmp_path / "missing" / "scene.png", np.zeros((4, 4), dtype=np.uint8))

    assert not (tmp_path / "missing").exists()


def test_missing_file_raises_file_not_found(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_image(tmp_path / "missing.png")


def test_unreadable_file_raises_os_error(tmp_path: Path) -> None:
    path = tmp_path / "broken.png"
    path.write_bytes(b"not an image")

    with pytest.raises(OSError):
        load_image(path)


def test_prepare_for_match_converts_between_layouts() -> None:
    bgra = np.zeros((6, 8, 4), dtype=np.uint8)
    gray = np.zeros((6, 8), dtype=np.uint8)

    assert prepare_for_match(bgra, "gray").shape == (6, 8)
    assert prepare_for_match(bgra, "color").shape == (6, 8, 3)
    assert prepare_for_match(gray, "color").shape == (6, 8, 3)
    assert prepare_for_match(gray, "gray") is gray


def test_prepare_for_match_rejects_unknown_mode_and_channels() -> None:
    with pytest.raises(InvalidInputError):
        prepare_for_match(np.zeros((4, 4), dtype=np.uint8), "hsv")
    with pytest.raises(InvalidInputError):
        prepare_for_match(np.zeros((4, 4, 2), dtype=np.uint8), "gray")
