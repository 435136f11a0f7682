"""Opcode metadata for the MOS 6502 CPU.

The table is indexed directly by the opcode byte. The 105 opcodes without a
documented behaviour share a single ``???`` descriptor that executes as a
one byte, one cycle no-op.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Iterable, List, Sequence


class AddressingMode(Enum):
    """6502 addressing modes, valued by their short disassembly label."""

    ACCUMULATOR = "ACC"
    IMMEDIATE = "IMM"
    ABSOLUTE = "ABS"
    ABSOLUTE_X = "ABX"
    ABSOLUTE_Y = "ABY"
    ZERO_PAGE = "ZP0"
    ZERO_PAGE_X = "ZPX"
    ZERO_PAGE_Y = "ZPY"
    IMPLIED = "IMP"
    RELATIVE = "REL"
    INDIRECT = "IND"
    INDEXED_INDIRECT = "INDX"
    INDIRECT_INDEXED = "INDY"

    @property
    def label(self) -> str:
        return self.value


ILLEGAL_MNEMONIC: Final[str] = "???"


@dataclass(frozen=True)
class Operation:
    """Static descriptor for a single 6502 opcode."""

    opcode: int
    mnemonic: str
    mode: AddressingMode
    size: int
    cycles: int

    def __post_init__(self) -> None:
        if not 0 <= self.opcode <= 0xFF:
            raise ValueError(f"opcode out of range: {self.opcode}")
        if not 1 <= self.size <= 3:
            raise ValueError(f"size must be between 1 and 3: {self.size}")
        if self.cycles <= 0:
            raise ValueError("cycles must be positive")

    @property
    def is_illegal(self) -> bool:
        return self.mnemonic == ILLEGAL_MNEMONIC


def illegal_operation(opcode: int) -> Operation:
    return Operation(opcode, ILLEGAL_MNEMONIC, AddressingMode.IMPLIED, 1, 1)


class OpcodeTable:
    """Mutable builder for the 256-entry operation table."""

    _TABLE_SIZE: Final[int] = 0x100

    def __init__(self) -> None:
        self._table: List[Operation | None] = [None] * self._TABLE_SIZE

    def register(self, operation: Operation) -> None:
        opcode = operation.opcode
        existing = self._table[opcode]
        if existing is not None:
            raise ValueError(
                f"opcode {opcode:#04x} already registered as {existing.mnemonic}")
        self._table[opcode] = operation

    def register_all(self, operations: Iterable[Operation]) -> None:
        for operation in operations:
            self.register(operation)

    def freeze(self) -> Sequence[Operation]:
        return tuple(
            operation if operation is not None else illegal_operation(opcode)
            for opcode, operation in enumerate(self._table)
        )


def build_operation_table(operations: Iterable[Operation]) -> Sequence[Operation]:
    """Build a 256-entry operation lookup table."""

    table = OpcodeTable()
    table.register_all(operations)
    return table.freeze()


DEFAULT_OPERATIONS: Sequence[Operation] = (
    # Access
    Operation(0xA9, "LDA", AddressingMode.IMMEDIATE, 2, 2),
    Operation(0xA5, "LDA", AddressingMode.ZERO_PAGE, 2, 3),
    Operation(0xB5, "LDA", AddressingMode.ZERO_PAGE_X, 2, 4),
    Operation(0xAD, "LDA", AddressingMode.ABSOLUTE, 3, 4),
    Operation(0xBD, "LDA", AddressingMode.ABSOLUTE_X, 3, 4),
    Operation(0xB9, "LDA", AddressingMode.ABSOLUTE_Y, 3, 4),
    Operation(0xA1, "LDA", AddressingMode.INDEXED_INDIRECT, 2, 6),
    Operation(0xB1, "LDA", AddressingMode.INDIRECT_INDEXED, 2, 5),
    Operation(0xA2, "LDX", AddressingMode.IMMEDIATE, 2, 2),
    Operation(0xA6, "LDX", AddressingMode.ZERO_PAGE, 2, 3),
    Operation(0xB6, "LDX", AddressingMode.ZERO_PAGE_Y, 2, 4),
    Operation(0xAE, "LDX", AddressingMode.ABSOLUTE, 3, 4),
    Operation(0xBE, "LDX", AddressingMode.ABSOLUTE_Y, 3, 4),
    Operation(0xA0, "LDY", AddressingMode.IMMEDIATE, 2, 2),
    Operation(0xA4, "LDY", AddressingMode.ZERO_PAGE, 2, 3),
    Operation(0xB4, "LDY", AddressingMode.ZERO_PAGE_X, 2, 4),
    Operation(0xAC, "LDY", AddressingMode.ABSOLUTE, 3, 4),
    Operation(0xBC, "LDY", AddressingMode.ABSOLUTE_X, 3, 4),
    Operation(0x85, "STA", AddressingMode.ZERO_PAGE, 2, 3),
    Operation(0x95, "STA", AddressingMode.ZERO_PAGE_X, 2, 4),
    Operation(0x8D, "STA", AddressingMode.ABSOLUTE, 3, 4),
    Operation(0x9D, "STA", AddressingMode.ABSOLUTE_X, 3, 5),
    Operation(0x99, "STA", AddressingMode.ABSOLUTE_Y, 3, 5),
    Operation(0x81, "STA", AddressingMode.INDEXED_INDIRECT, 2, 6),
    Operation(0x91, "STA", AddressingMode.INDIRECT_INDEXED, 2, 6),
    Operation(0x86, "STX", AddressingMode.ZERO_PAGE, 2, 3),
    Operation(0x96, "STX", AddressingMode.ZERO_PAGE_Y, 2, 4),
    Operation(0x8E, "STX", AddressingMode.ABSOLUTE, 3, 4),
    Operation(0x84, "STY", AddressingMode.ZERO_PAGE, 2, 3),
    Operation(0x94, "STY", AddressingMode.ZERO_PAGE_X, 2, 4),
    Operation(0x8C, "STY", AddressingMode.ABSOLUTE, 3, 4),
    # Transfer
    Operation(0xAA, "TAX", AddressingMode.IMPLIED, 1, 2),
    Operation(0x8A, "TXA", AddressingMode.IMPLIED, 1, 2),
    Operation(0xA8, "TAY", AddressingMode.IMPLIED, 1, 2),
    Operation(0x98, "TYA", AddressingMode.IMPLIED, 1, 2),
    # Arithmetic
    Operation(0x69, "ADC", AddressingMode.IMMEDIATE, 2, 2),
    Operation(0x65, "ADC", AddressingMode.ZERO_PAGE, 2, 3),
    Operation(0x75, "ADC", AddressingMode.ZERO_PAGE_X, 2, 4),
    Operation(0x6D, "ADC", AddressingMode.ABSOLUTE, 3, 4),
    Operation(0x7D, "ADC", AddressingMode.ABSOLUTE_X, 3, 4),
    Operation(0x79, "ADC", AddressingMode.ABSOLUTE_Y, 3, 4),
    Operation(0x61, "ADC", AddressingMode.INDEXED_INDIRECT, 2, 6),
    Operation(0x71, "ADC", AddressingMode.INDIRECT_INDEXED, 2, 5),
    Operation(0xE9, "SBC", AddressingMode.IMMEDIATE, 2, 2),
    Operation(0xE5, "SBC", AddressingMode.ZERO_PAGE, 2, 3),
    Operation(0xF5, "SBC", AddressingMode.ZERO_PAGE_X, 2, 4),
    Operation(0xED, "SBC", AddressingMode.ABSOLUTE, 3, 4),
    Operation(0xFD, "SBC", AddressingMode.ABSOLUTE_X, 3, 4),
    Operation(0xF9, "SBC", AddressingMode.ABSOLUTE_Y, 3, 4),
    Operation(0xE1, "SBC", AddressingMode.INDEXED_INDIRECT, 2, 6),
    Operation(0xF1, "SBC", AddressingMode.INDIRECT_INDEXED, 2, 5),
    Operation(0xE6, "INC", AddressingMode.ZERO_PAGE, 2, 5),
    Operation(0xF6, "INC", AddressingMode.ZERO_PAGE_X, 2, 6),
    Operation(0xEE, "INC", AddressingMode.ABSOLUTE, 3, 6),
    Operation(0xFE, "INC", AddressingMode.ABSOLUTE_X, 3, 7),
    Operation(0xC6, "DEC", AddressingMode.ZERO_PAGE, 2, 5),
    Operation(0xD6, "DEC", AddressingMode.ZERO_PAGE_X, 2, 6),
    Operation(0xCE, "DEC", AddressingMode.ABSOLUTE, 3, 6),
    Operation(0xDE, "DEC", AddressingMode.ABSOLUTE_X, 3, 7),
    Operation(0xE8, "INX", AddressingMode.IMPLIED, 1, 2),
    Operation(0xCA, "DEX", AddressingMode.IMPLIED, 1, 2),
    Operation(0xC8, "INY", AddressingMode.IMPLIED, 1, 2),
    Operation(0x88, "DEY", AddressingMode.IMPLIED, 1, 2),
    # Shift
    Operation(0x0A, "ASL", AddressingMode.ACCUMULATOR, 1, 2),
    Operation(0x06, "ASL", AddressingMode.ZERO_PAGE, 2, 5),
    Operation(0x16, "ASL", AddressingMode.ZERO_PAGE_X, 2, 6),
    Operation(0x0E, "ASL", AddressingMode.ABSOLUTE, 3, 6),
    Operation(0x1E, "ASL", AddressingMode.ABSOLUTE_X, 3, 7),
    Operation(0x4A, "LSR", AddressingMode.ACCUMULATOR, 1, 2),
    Operation(0x46, "LSR", AddressingMode.ZERO_PAGE, 2, 5),
    Operation(0x56, "LSR", AddressingMode.ZERO_PAGE_X, 2, 6),
    Operation(0x4E, "LSR", AddressingMode.ABSOLUTE, 3, 6),
    Operation(0x5E, "LSR", AddressingMode.ABSOLUTE_X, 3, 7),
    Operation(0x2A, "ROL", AddressingMode.ACCUMULATOR, 1, 2),
    Operation(0x26, "ROL", AddressingMode.ZERO_PAGE, 2, 5),
    Operation(0x36, "ROL", AddressingMode.ZERO_PAGE_X, 2, 6),
    Operation(0x2E, "ROL", AddressingMode.ABSOLUTE, 3, 6),
    Operation(0x3E, "ROL", AddressingMode.ABSOLUTE_X, 3, 7),
    Operation(0x6A, "ROR", AddressingMode.ACCUMULATOR, 1, 2),
    Operation(0x66, "ROR", AddressingMode.ZERO_PAGE, 2, 5),
    Operation(0x76, "ROR", AddressingMode.ZERO_PAGE_X, 2, 6),
    Operation(0x6E, "ROR", AddressingMode.ABSOLUTE, 3, 6),
    Operation(0x7E, "ROR", AddressingMode.ABSOLUTE_X, 3, 7),
    # Bitwise
    Operation(0x29, "AND", AddressingMode.IMMEDIATE, 2, 2),
    Operation(0x25, "AND", AddressingMode.ZERO_PAGE, 2, 3),
    Operation(0x35, "AND", AddressingMode.ZERO_PAGE_X, 2, 4),
    Operation(0x2D, "AND", AddressingMode.ABSOLUTE, 3, 4),
    Operation(0x3D, "AND", AddressingMode.ABSOLUTE_X, 3, 4),
    Operation(0x39, "AND", AddressingMode.ABSOLUTE_Y, 3, 4),
    Operation(0x21, "AND", AddressingMode.INDEXED_INDIRECT, 2, 6),
    Operation(0x31, "AND", AddressingMode.INDIRECT_INDEXED, 2, 5),
    Operation(0x09, "ORA", AddressingMode.IMMEDIATE, 2, 2),
    Operation(0x05, "ORA", AddressingMode.ZERO_PAGE, 2, 3),
    Operation(0x15, "ORA", AddressingMode.ZERO_PAGE_X, 2, 4),
    Operation(0x0D, "ORA", AddressingMode.ABSOLUTE, 3, 4),
    Operation(0x1D, "ORA", AddressingMode.ABSOLUTE_X, 3, 4),
    Operation(0x19, "ORA", AddressingMode.ABSOLUTE_Y, 3, 4),
    Operation(0x01, "ORA", AddressingMode.INDEXED_INDIRECT, 2, 6),
    Operation(0x11, "ORA", AddressingMode.INDIRECT_INDEXED, 2, 5),
    Operation(0x49, "EOR", AddressingMode.IMMEDIATE, 2, 2),
    Operation(0x45, "EOR", AddressingMode.ZERO_PAGE, 2, 3),
    Operation(0x55, "EOR", AddressingMode.ZERO_PAGE_X, 2, 4),
    Operation(0x4D, "EOR", AddressingMode.ABSOLUTE, 3, 4),
    Operation(0x5D, "EOR", AddressingMode.ABSOLUTE_X, 3, 4),
    Operation(0x59, "EOR", AddressingMode.ABSOLUTE_Y, 3, 4),
    Operation(0x41, "EOR", AddressingMode.INDEXED_INDIRECT, 2, 6),
    Operation(0x51, "EOR", AddressingMode.INDIRECT_INDEXED, 2, 5),
    Operation(0x24, "BIT", AddressingMode.ZERO_PAGE, 2, 3),
    Operation(0x2C, "BIT", AddressingMode.ABSOLUTE, 3, 4),
    # Compare
    Operation(0xC9, "CMP", AddressingMode.IMMEDIATE, 2, 2),
    Operation(0xC5, "CMP", AddressingMode.ZERO_PAGE, 2, 3),
    Operation(0xD5, "CMP", AddressingMode.ZERO_PAGE_X, 2, 4),
    Operation(0xCD, "CMP", AddressingMode.ABSOLUTE, 3, 4),
    Operation(0xDD, "CMP", AddressingMode.ABSOLUTE_X, 3, 4),
    Operation(0xD9, "CMP", AddressingMode.ABSOLUTE_Y, 3, 4),
    Operation(0xC1, "CMP", AddressingMode.INDEXED_INDIRECT, 2, 6),
    Operation(0xD1, "CMP", AddressingMode.INDIRECT_INDEXED, 2, 5),
    Operation(0xE0, "CPX", AddressingMode.IMMEDIATE, 2, 2),
    Operation(0xE4, "CPX", AddressingMode.ZERO_PAGE, 2, 3),
    Operation(0xEC, "CPX", AddressingMode.ABSOLUTE, 3, 4),
    Operation(0xC0, "CPY", AddressingMode.IMMEDIATE, 2, 2),
    Operation(0xC4, "CPY", AddressingMode.ZERO_PAGE, 2, 3),
    Operation(0xCC, "CPY", AddressingMode.ABSOLUTE, 3, 4),
    # Branch
    Operation(0x90, "BCC", AddressingMode.RELATIVE, 2, 2),
    Operation(0xB0, "BCS", AddressingMode.RELATIVE, 2, 2),
    Operation(0xF0, "BEQ", AddressingMode.RELATIVE, 2, 2),
    Operation(0xD0, "BNE", AddressingMode.RELATIVE, 2, 2),
    Operation(0x10, "BPL", AddressingMode.RELATIVE, 2, 2),
    Operation(0x30, "BMI", AddressingMode.RELATIVE, 2, 2),
    Operation(0x50, "BVC", AddressingMode.RELATIVE, 2, 2),
    Operation(0x70, "BVS", AddressingMode.RELATIVE, 2, 2),
    # Jump
    Operation(0x4C, "JMP", AddressingMode.ABSOLUTE, 3, 3),
    Operation(0x6C, "JMP", AddressingMode.INDIRECT, 3, 5),
    Operation(0x20, "JSR", AddressingMode.ABSOLUTE, 3, 6),
    Operation(0x60, "RTS", AddressingMode.IMPLIED, 1, 6),
    # BRK reads as a one byte immediate so the padding byte shows in listings.
    Operation(0x00, "BRK", AddressingMode.IMMEDIATE, 1, 7),
    Operation(0x40, "RTI", AddressingMode.IMPLIED, 1, 6),
    # Stack
    Operation(0x48, "PHA", AddressingMode.IMPLIED, 1, 3),
    Operation(0x68, "PLA", AddressingMode.IMPLIED, 1, 4),
    Operation(0x08, "PHP", AddressingMode.IMPLIED, 1, 3),
    Operation(0x28, "PLP", AddressingMode.IMPLIED, 1, 4),
    Operation(0x9A, "TXS", AddressingMode.IMPLIED, 1, 2),
    Operation(0xBA, "TSX", AddressingMode.IMPLIED, 1, 2),
    # Flags
    Operation(0x18, "CLC", AddressingMode.IMPLIED, 1, 2),
    Operation(0x38, "SEC", AddressingMode.IMPLIED, 1, 2),
    Operation(0x58, "CLI", AddressingMode.IMPLIED, 1, 2),
    Operation(0x78, "SEI", AddressingMode.IMPLIED, 1, 2),
    Operation(0xD8, "CLD", AddressingMode.IMPLIED, 1, 2),
    Operation(0xF8, "SED", AddressingMode.IMPLIED, 1, 2),
    Operation(0xB8, "CLV", AddressingMode.IMPLIED, 1, 2),
    # Other
    Operation(0xEA, "NOP", AddressingMode.IMPLIED, 1, 2),
)


OPERATION_TABLE: Sequence[Operation] = build_operation_table(DEFAULT_OPERATIONS)


def lookup(opcode: int) -> Operation:
    return OPERATION_TABLE[opcode & 0xFF]
