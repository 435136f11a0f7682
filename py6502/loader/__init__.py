"""Loaders for 6502 program images."""

from __future__ import annotations

from .binary import (
    DEFAULT_LOAD_ADDRESS,
    BinaryFormatError,
    load_binary,
    load_binary_from_path,
)
from .program import ProgramImage

__all__ = [
    "DEFAULT_LOAD_ADDRESS",
    "BinaryFormatError",
    "ProgramImage",
    "load_binary",
    "load_binary_from_path",
]
