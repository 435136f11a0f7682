"""Text renderers for the monitor panels.

These functions only read CPU and memory state, so the front end can draw
them with any backend and tests can inspect them without a display.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from py6502.cpu import CPU, disassemble_range
from py6502.cpu.status import FLAG_NAMES

PAGE_ROWS = 16
ROW_WIDTH = 16
KEY_SEPARATOR = " • "


@dataclass(frozen=True)
class MemoryCell:
    address: int
    value: int
    changed: bool = False
    current: bool = False


@dataclass(frozen=True)
class InstructionLine:
    address: int
    text: str
    current: bool


def memory_page(cpu: CPU, start: int, previous: bytes | None = None) -> List[Tuple[int, List[MemoryCell]]]:
    """Return the 256 bytes of the page containing ``start`` as 16 rows.

    Cells differing from ``previous`` (a full 64 KiB snapshot) are marked as
    changed; bytes of the instruction at PC are marked as current.
    """

    base = start & 0xFF00
    pc = cpu.state.pc
    size = cpu.current_operation().size
    rows: List[Tuple[int, List[MemoryCell]]] = []
    for row in range(PAGE_ROWS):
        row_address = base + row * ROW_WIDTH
        cells: List[MemoryCell] = []
        for column in range(ROW_WIDTH):
            address = row_address + column
            value = cpu.read(address)
            changed = previous is not None and previous[address] != value
            current = pc <= address < pc + size
            cells.append(MemoryCell(address, value, changed, current))
        rows.append((row_address, cells))
    return rows


def memory_page_lines(cpu: CPU, start: int, previous: bytes | None = None) -> List[str]:
    return [
        f"${row_address:04X}: " + " ".join(f"{cell.value:02X}" for cell in cells)
        for row_address, cells in memory_page(cpu, start, previous)
    ]


def flag_states(cpu: CPU) -> List[Tuple[str, bool]]:
    return [(name, cpu.get_flag(mask)) for name, mask in FLAG_NAMES]


def status_lines(cpu: CPU) -> List[str]:
    state = cpu.state
    names = " ".join(name for name, _ in FLAG_NAMES)
    bits = " ".join("1" if (state.status & mask) else "0" for _, mask in FLAG_NAMES)
    return [
        f"Status:  {names}",
        f"         {bits}  ${state.status:02X}",
        "",
        f"PC:  ${state.pc:04X}",
        f"A:   ${state.a:02X}  [{state.a}]",
        f"X:   ${state.x:02X}  [{state.x}]",
        f"Y:   ${state.y:02X}  [{state.y}]",
        f"SP:  ${state.sp:02X}",
        "",
        f"Reset Vector:  ${cpu.reset_vector():04X}",
        f"NMI Vector:    ${cpu.nmi_vector():04X}",
        f"IRQ Vector:    ${cpu.irq_vector():04X}",
    ]


def instruction_listing(cpu: CPU, count: int) -> List[InstructionLine]:
    """Disassemble ``count`` instructions from the program start or PC.

    The listing starts at whichever of the reset vector and PC is lower, so
    the current instruction stays visible while the program runs forward.
    """

    start = min(cpu.reset_vector(), cpu.state.pc)
    return [
        InstructionLine(
            decoded.address,
            f"${decoded.address:04X}: {decoded.hex_bytes():<9} {decoded.text}",
            decoded.address == cpu.state.pc,
        )
        for decoded in disassemble_range(cpu, start, count)
    ]


def instruction_lines(cpu: CPU, count: int) -> List[str]:
    return [
        ("> " if line.current else "  ") + line.text
        for line in instruction_listing(cpu, count)
    ]


def help_line(bindings: Sequence[Tuple[str, str]]) -> str:
    return KEY_SEPARATOR.join(f"{keys} {action}" for keys, action in bindings)

