"""6502 machine assembly and run loop."""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from py6502.bus import SimpleBus
from py6502.cpu import CPU
from py6502.loader import DEFAULT_LOAD_ADDRESS, ProgramImage, load_binary, load_binary_from_path
from py6502.utils import TraceRecorder, debug_enabled, debug_log

STOP_PC = "stop_pc"
CYCLE_LIMIT = "cycle_limit"
TRAPPED = "trapped"


@dataclass
class MachineConfig:
    """Runtime configuration for a flat-memory 6502 machine."""

    load_address: int = DEFAULT_LOAD_ADDRESS
    program_image: Optional[bytes] = None
    reset_vector: Optional[int] = None

    def entry_point(self) -> int:
        if self.reset_vector is not None:
            return self.reset_vector & 0xFFFF
        return self.load_address & 0xFFFF


@dataclass
class RunResult:
    """Summary of a :meth:`Machine.run` call."""

    cycles: int
    instructions: int
    pc: int
    reason: str


@dataclass
class Machine:
    """Aggregates the bus and CPU of a bare 6502 system."""

    bus: SimpleBus
    cpu: CPU
    config: MachineConfig
    program: ProgramImage | None = None

    def reset(self) -> None:
        self.cpu.reset()

    def load_program(self, path: Path) -> ProgramImage:
        """Load a binary at the configured address and restart the CPU."""

        self.program = load_binary_from_path(path, self.bus, self.config.load_address)
        self.cpu.reset()
        return self.program

    def step(self, trace: TraceRecorder | None = None) -> int:
        """Execute one whole instruction and return the ticks it took.

        Cycles still owed to an interrupt entry make up a step of their own,
        so the step after ``irq()`` or ``nmi()`` stops with PC on the vector
        target, before the handler's first instruction.
        """

        cpu = self.cpu
        if cpu.cycles > 0:
            return self._finish_pending()

        state_before = cpu.state.clone() if trace is not None else None
        decoded = cpu.disassemble(cpu.state.pc) if trace is not None else None
        ticks = cpu.step()
        if trace is not None and state_before is not None and decoded is not None:
            trace.record_step(
                state_before,
                decoded.data[0],
                ticks,
                mnemonic=decoded.text,
            )
        return ticks

    def run(
        self,
        max_cycles: int,
        *,
        stop_pc: int | None = None,
        trace: TraceRecorder | None = None,
    ) -> RunResult:
        """Step instructions until ``stop_pc``, a self jump, or ``max_cycles``."""

        if max_cycles <= 0:
            raise ValueError("max_cycles must be positive")

        # Cycles owed to an interrupt entry are not an instruction.
        cycles = self._finish_pending()
        instructions = 0
        reason = CYCLE_LIMIT
        while cycles < max_cycles:
            pc_before = self.cpu.state.pc
            cycles += self.step(trace)
            instructions += 1
            pc = self.cpu.state.pc
            if stop_pc is not None and pc == stop_pc:
                reason = STOP_PC
                break
            if pc == pc_before:
                reason = TRAPPED
                break

        if debug_enabled("machine"):
            debug_log(
                "machine",
                "run stopped reason=%s pc=%04x cycles=%d instructions=%d",
                reason,
                self.cpu.state.pc,
                cycles,
                instructions,
            )
        return RunResult(cycles=cycles, instructions=instructions, pc=self.cpu.state.pc, reason=reason)

    def _finish_pending(self) -> int:
        ticks = 0
        while self.cpu.cycles > 0:
            self.cpu.clock()
            ticks += 1
        return ticks


def create_machine(config: MachineConfig) -> Machine:
    """Instantiate a machine with the reset vector and program in place."""

    bus = SimpleBus()
    entry = config.entry_point()
    bus.write(CPU.RESET_VECTOR, entry & 0xFF)
    bus.write(CPU.RESET_VECTOR + 1, (entry >> 8) & 0xFF)

    program = None
    if config.program_image:
        program = load_binary(io.BytesIO(config.program_image), bus, config.load_address)

    cpu = CPU(bus)
    return Machine(bus=bus, cpu=cpu, config=config, program=program)
