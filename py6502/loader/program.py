"""Program metadata structures for 6502 loaders."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ProgramImage:
    """Describes a binary image after it has been written to memory."""

    name: str
    start: int
    end: int

    def length(self) -> int:
        return self.end - self.start + 1
