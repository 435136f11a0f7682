"""Single instruction disassembly.

Decoding never changes CPU state. Any address may be decoded, including one
in the middle of an instruction, in which case the bytes are simply read as
whatever opcode they happen to form.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator

from .opcodes import AddressingMode, Operation

if TYPE_CHECKING:
    from .core import CPU


@dataclass(frozen=True)
class DisassembledOperation:
    address: int
    data: bytes
    operand: int
    operation: Operation
    text: str

    @property
    def size(self) -> int:
        return self.operation.size

    @property
    def next_address(self) -> int:
        return (self.address + self.operation.size) & 0xFFFF

    def hex_bytes(self) -> str:
        return " ".join(f"{value:02X}" for value in self.data)


def _format(operation: Operation, operand: int, address: int) -> str:
    name = operation.mnemonic
    mode = operation.mode
    label = mode.label
    if mode == AddressingMode.ACCUMULATOR:
        return f"{name} A {{{label}}}"
    if mode == AddressingMode.IMMEDIATE:
        return f"{name} #${operand & 0xFF:02X} {{{label}}}"
    if mode == AddressingMode.ABSOLUTE:
        return f"{name} ${operand:04X} {{{label}}}"
    if mode == AddressingMode.ABSOLUTE_X:
        return f"{name} ${operand:04X},X {{{label}}}"
    if mode == AddressingMode.ABSOLUTE_Y:
        return f"{name} ${operand:04X},Y {{{label}}}"
    if mode == AddressingMode.ZERO_PAGE:
        return f"{name} ${operand & 0xFF:02X} {{{label}}}"
    if mode == AddressingMode.ZERO_PAGE_X:
        return f"{name} ${operand & 0xFF:02X},X {{{label}}}"
    if mode == AddressingMode.ZERO_PAGE_Y:
        return f"{name} ${operand & 0xFF:02X},Y {{{label}}}"
    if mode == AddressingMode.RELATIVE:
        offset = operand & 0xFF
        displacement = offset - 0x100 if offset & 0x80 else offset
        target = (address + operation.size + displacement) & 0xFFFF
        return f"{name} ${offset:02X} [${target:04X}] {{{label}}}"
    if mode == AddressingMode.INDIRECT:
        return f"{name} (${operand:04X}) {{{label}}}"
    if mode == AddressingMode.INDEXED_INDIRECT:
        return f"{name} (${operand & 0xFF:02X},X) {{{label}}}"
    if mode == AddressingMode.INDIRECT_INDEXED:
        return f"{name} (${operand & 0xFF:02X}),Y {{{label}}}"
    return f"{name} {{{label}}}"


def disassemble(cpu: "CPU", address: int) -> DisassembledOperation:
    """Decode the instruction whose opcode sits at ``address``."""

    address &= 0xFFFF
    operation = cpu.operation_table[cpu.read(address)]
    data = bytes(cpu.read((address + offset) & 0xFFFF) for offset in range(operation.size))

    operand = 0
    for index, value in enumerate(data[1:]):
        operand |= value << (8 * index)

    return DisassembledOperation(
        address=address,
        data=data,
        operand=operand,
        operation=operation,
        text=_format(operation, operand, address),
    )


def disassemble_range(cpu: "CPU", start: int, count: int) -> Iterator[DisassembledOperation]:
    """Decode ``count`` consecutive instructions starting at ``start``."""

    address = start & 0xFFFF
    for _ in range(count):
        decoded = disassemble(cpu, address)
        yield decoded
        address = decoded.next_address
