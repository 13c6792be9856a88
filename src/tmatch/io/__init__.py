"""
IO helpers for loading and writing image assets consumed by matching routines.
"""

from .image_loader import load_image, prepare_for_match, to_bgr, to_gray, write_image

__all__ = ["load_image", "prepare_for_match", "to_bgr", "to_gray", "write_image"]
