"""Core MOS 6502 CPU implementation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Sequence

from py6502.bus import Bus
from py6502.utils import debug_enabled, debug_log

from .addressing import AddressInfo, resolve
from .disassembler import DisassembledOperation, disassemble
from .instructions import INSTRUCTIONS
from .opcodes import OPERATION_TABLE, Operation
from .status import FLAG_B, FLAG_C, FLAG_D, FLAG_I, FLAG_N, FLAG_U, FLAG_V, FLAG_Z

__all__ = [
    "CPU",
    "CPUState",
    "FLAG_B",
    "FLAG_C",
    "FLAG_D",
    "FLAG_I",
    "FLAG_N",
    "FLAG_U",
    "FLAG_V",
    "FLAG_Z",
]

STACK_PAGE = 0x0100
INTERRUPT_CYCLES = 7


@dataclass
class CPUState:
    """Snapshot of the 6502 register file."""

    a: int = 0x00
    x: int = 0x00
    y: int = 0x00
    sp: int = 0xFD
    pc: int = 0x0000
    status: int = FLAG_U | FLAG_I

    def clone(self) -> "CPUState":
        return CPUState(self.a, self.x, self.y, self.sp, self.pc, self.status)


@dataclass
class CPU:
    """Instruction level 6502 with cycle counting.

    Each instruction takes full effect on the tick that fetches it. The
    remaining ticks of that instruction only count ``cycles`` down, so an
    instruction is complete once ``cycles`` is back to zero.
    """

    bus: Bus
    operation_table: Sequence[Operation] = field(default=OPERATION_TABLE)

    RESET_VECTOR: ClassVar[int] = 0xFFFC
    NMI_VECTOR: ClassVar[int] = 0xFFFA
    IRQ_VECTOR: ClassVar[int] = 0xFFFE

    state: CPUState = field(default_factory=CPUState)
    cycles: int = 0
    cycle_count: int = 0

    def __post_init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Reset CPU state and load the reset vector."""

        self.state = CPUState()
        self.cycles = 0
        self.cycle_count = 0
        self.state.pc = self.reset_vector()

    def clock(self) -> None:
        """Advance the CPU by a single clock tick."""

        self.cycle_count += 1
        if self.cycles > 0:
            self.cycles -= 1
            return

        pc_before = self.state.pc
        opcode = self.read(pc_before)
        operation = self.operation_table[opcode]
        info = resolve(operation.mode, self)

        # Branches and jumps overwrite PC, so it moves past the operands first.
        self.state.pc = (self.state.pc + operation.size) & 0xFFFF
        self.cycles = operation.cycles

        extra_cycle = INSTRUCTIONS[operation.mnemonic](self, info)
        if extra_cycle and info.page_changed:
            self.cycles += 1

        if debug_enabled("cpu"):
            debug_log(
                "cpu",
                "pc=%04x opcode=%02x %s cycles=%d",
                pc_before,
                opcode,
                operation.mnemonic,
                self.cycles,
            )

        self.cycles -= 1

    def step(self) -> int:
        """Clock until the current instruction completes; return the ticks used."""

        ticks = 0
        while True:
            self.clock()
            ticks += 1
            if self.cycles == 0:
                return ticks

    def irq(self) -> None:
        """Service a maskable interrupt unless interrupts are disabled."""

        if self.get_flag(FLAG_I):
            return
        self._interrupt(self.irq_vector(), "irq")

    def nmi(self) -> None:
        """Service a non-maskable interrupt."""

        self._interrupt(self.nmi_vector(), "nmi")

    def disassemble(self, address: int) -> DisassembledOperation:
        return disassemble(self, address)

    def current_operation(self) -> Operation:
        return self.operation_table[self.read(self.state.pc)]

    # ------------------------------------------------------------------
    # Vectors

    def reset_vector(self) -> int:
        return self.read16(self.RESET_VECTOR)

    def nmi_vector(self) -> int:
        return self.read16(self.NMI_VECTOR)

    def irq_vector(self) -> int:
        return self.read16(self.IRQ_VECTOR)

    # ------------------------------------------------------------------
    # Memory helpers

    def read(self, address: int) -> int:
        return self.bus.read(address & 0xFFFF) & 0xFF

    def read16(self, address: int) -> int:
        """Read a little endian word."""

        low = self.read(address)
        high = self.read((address + 1) & 0xFFFF)
        return (high << 8) | low

    def write(self, address: int, value: int) -> None:
        self.bus.write(address & 0xFFFF, value & 0xFF)

    def write16(self, address: int, value: int) -> None:
        """Write a little endian word."""

        self.write(address, value & 0xFF)
        self.write((address + 1) & 0xFFFF, (value >> 8) & 0xFF)

    # ------------------------------------------------------------------
    # Stack helpers

    def push(self, value: int) -> None:
        self.write(STACK_PAGE | self.state.sp, value)
        self.state.sp = (self.state.sp - 1) & 0xFF

    def push16(self, value: int) -> None:
        # High byte first so the word sits little endian in memory.
        self.push((value >> 8) & 0xFF)
        self.push(value & 0xFF)

    def pop(self) -> int:
        self.state.sp = (self.state.sp + 1) & 0xFF
        return self.read(STACK_PAGE | self.state.sp)

    def pop16(self) -> int:
        low = self.pop()
        high = self.pop()
        return (high << 8) | low

    # ------------------------------------------------------------------
    # Flag helpers

    def get_flag(self, flag: int) -> bool:
        return (self.state.status & flag) != 0

    def set_flag(self, flag: int, enabled: bool) -> None:
        if enabled:
            self.state.status |= flag
        else:
            self.state.status &= ~flag & 0xFF

    def set_zn(self, value: int) -> None:
        value &= 0xFF
        self.set_flag(FLAG_Z, value == 0)
        self.set_flag(FLAG_N, (value & 0x80) != 0)

    def add_branch_cycles(self, info: AddressInfo) -> None:
        self.cycles += 1
        if info.page_changed:
            self.cycles += 1

    def _interrupt(self, vector: int, category: str) -> None:
        if debug_enabled("irq"):
            debug_log("irq", "%s pc=%04x vector=%04x", category, self.state.pc, vector)
        self.push16(self.state.pc)
        self.push((self.state.status & ~FLAG_B & 0xFF) | FLAG_U)
        self.set_flag(FLAG_I, True)
        self.state.pc = vector
        self.cycles += INTERRUPT_CYCLES
