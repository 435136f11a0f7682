"""Effective address calculation for the eleven 6502 addressing modes.

Every mode is evaluated before the program counter is advanced, so the
opcode sits at ``pc`` and its operand bytes at ``pc + 1`` and ``pc + 2``.

The upper byte of an address is its page. Indexed modes report whether the
index moved the address onto another page; instructions that read memory
pay one extra cycle when that happens.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict

from .opcodes import AddressingMode

if TYPE_CHECKING:
    from .core import CPU


@dataclass(frozen=True)
class AddressInfo:
    """Result of resolving an operand for a single instruction."""

    address: int = 0x0000
    page_changed: bool = False
    is_accumulator: bool = False


AddressModeFunc = Callable[["CPU"], AddressInfo]


def pages_differ(a: int, b: int) -> bool:
    return (a & 0xFF00) != (b & 0xFF00)


def accumulator(cpu: "CPU") -> AddressInfo:
    return AddressInfo(is_accumulator=True)


def immediate(cpu: "CPU") -> AddressInfo:
    return AddressInfo((cpu.state.pc + 1) & 0xFFFF)


def absolute(cpu: "CPU") -> AddressInfo:
    return AddressInfo(cpu.read16(cpu.state.pc + 1))


def absolute_x(cpu: "CPU") -> AddressInfo:
    base = cpu.read16(cpu.state.pc + 1)
    address = (base + cpu.state.x) & 0xFFFF
    return AddressInfo(address, pages_differ(base, address))


def absolute_y(cpu: "CPU") -> AddressInfo:
    base = cpu.read16(cpu.state.pc + 1)
    address = (base + cpu.state.y) & 0xFFFF
    return AddressInfo(address, pages_differ(base, address))


def zero_page(cpu: "CPU") -> AddressInfo:
    return AddressInfo(cpu.read(cpu.state.pc + 1))


def zero_page_x(cpu: "CPU") -> AddressInfo:
    return AddressInfo((cpu.read(cpu.state.pc + 1) + cpu.state.x) & 0xFF)


def zero_page_y(cpu: "CPU") -> AddressInfo:
    return AddressInfo((cpu.read(cpu.state.pc + 1) + cpu.state.y) & 0xFF)


def implied(cpu: "CPU") -> AddressInfo:
    return AddressInfo()


def relative(cpu: "CPU") -> AddressInfo:
    """Branch target relative to the instruction that follows the branch."""

    offset = cpu.read(cpu.state.pc + 1)
    if offset & 0x80:
        offset -= 0x100
    base = (cpu.state.pc + 2) & 0xFFFF
    address = (base + offset) & 0xFFFF
    return AddressInfo(address, pages_differ(base, address))


def indirect(cpu: "CPU") -> AddressInfo:
    """Absolute indirect, reproducing the page wrap bug of the NMOS part.

    A pointer ending in ``0xFF`` fetches its high byte from the start of the
    same page instead of the next one.
    """

    pointer = cpu.read16(cpu.state.pc + 1)
    low = cpu.read(pointer)
    if pointer & 0x00FF == 0x00FF:
        high = cpu.read(pointer & 0xFF00)
    else:
        high = cpu.read(pointer + 1)
    return AddressInfo((high << 8) | low)


def indexed_indirect(cpu: "CPU") -> AddressInfo:
    pointer = (cpu.read(cpu.state.pc + 1) + cpu.state.x) & 0xFF
    low = cpu.read(pointer)
    high = cpu.read((pointer + 1) & 0xFF)
    return AddressInfo((high << 8) | low)


def indirect_indexed(cpu: "CPU") -> AddressInfo:
    pointer = cpu.read(cpu.state.pc + 1)
    low = cpu.read(pointer)
    high = cpu.read((pointer + 1) & 0xFF)
    base = (high << 8) | low
    address = (base + cpu.state.y) & 0xFFFF
    return AddressInfo(address, pages_differ(base, address))


ADDRESS_MODES: Dict[AddressingMode, AddressModeFunc] = {
    AddressingMode.ACCUMULATOR: accumulator,
    AddressingMode.IMMEDIATE: immediate,
    AddressingMode.ABSOLUTE: absolute,
    AddressingMode.ABSOLUTE_X: absolute_x,
    AddressingMode.ABSOLUTE_Y: absolute_y,
    AddressingMode.ZERO_PAGE: zero_page,
    AddressingMode.ZERO_PAGE_X: zero_page_x,
    AddressingMode.ZERO_PAGE_Y: zero_page_y,
    AddressingMode.IMPLIED: implied,
    AddressingMode.RELATIVE: relative,
    AddressingMode.INDIRECT: indirect,
    AddressingMode.INDEXED_INDIRECT: indexed_indirect,
    AddressingMode.INDIRECT_INDEXED: indirect_indexed,
}


def resolve(mode: AddressingMode, cpu: "CPU") -> AddressInfo:
    return ADDRESS_MODES[mode](cpu)
