"""Bus-related helpers for the 6502 emulator."""

from .memory import ADDRESS_SPACE, Bus, BusError, SimpleBus

__all__ = [
    "ADDRESS_SPACE",
    "Bus",
    "BusError",
    "SimpleBus",
]
