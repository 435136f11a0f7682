"""Instruction level MOS 6502 emulator.

The ``cpu`` package holds the processor core, opcode table, addressing modes
and disassembler. ``bus``, ``loader``, ``system`` and ``ui`` wrap it into a
runnable machine with a monitor front end.
"""

from __future__ import annotations

from . import bus, cpu, loader, system, ui, utils

__version__ = "0.1.0"

__all__: list[str] = [
    "cpu",
    "bus",
    "loader",
    "system",
    "ui",
    "utils",
]
