"""Raw binary loader for 6502 program images."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

from py6502.bus import ADDRESS_SPACE, SimpleBus
from py6502.utils import debug_log

from .program import ProgramImage

DEFAULT_LOAD_ADDRESS = 0x8000


class BinaryFormatError(RuntimeError):
    """Raised when a binary image cannot be placed in the address space."""


def load_binary(
    stream: BinaryIO,
    bus: SimpleBus,
    start: int = DEFAULT_LOAD_ADDRESS,
    *,
    name: str = "",
) -> ProgramImage:
    """Copy the contents of ``stream`` into ``bus`` starting at ``start``."""

    if not 0 <= start < ADDRESS_SPACE:
        raise BinaryFormatError(f"load address out of range: {start:#x}")

    payload = stream.read()
    if not payload:
        raise BinaryFormatError("binary image is empty")
    if start + len(payload) > ADDRESS_SPACE:
        raise BinaryFormatError(
            f"binary image of {len(payload)} bytes does not fit at {start:#06x}")

    bus.load_image(payload, start)
    image = ProgramImage(name=name, start=start, end=start + len(payload) - 1)
    debug_log("loader", "loaded %s %04x-%04x", name or "<stream>", image.start, image.end)
    return image


def load_binary_from_path(
    path: Path,
    bus: SimpleBus,
    start: int = DEFAULT_LOAD_ADDRESS,
) -> ProgramImage:
    """Load a binary image from the filesystem."""

    with path.open("rb") as handle:
        return load_binary(handle, bus, start, name=path.name)
