"""
Exception types raised by the matching core and the command-line tool.
"""

from __future__ import annotations


class TmatchError(Exception):
    """
    Base class for all errors raised by tmatch.
    """


class InvalidInputError(TmatchError, ValueError):
    """
    Raised when a score field, template size or parameter is unusable.
    """


__all__ = ["InvalidInputError", "TmatchError"]
