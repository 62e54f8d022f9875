"""Entities for tournament domain."""

from .contender import ATTRIBUTE_NAMES, Contender, ContenderAttributes

__all__ = [
    "ATTRIBUTE_NAMES",
    "Contender",
    "ContenderAttributes",
]
