"""System assembly helpers for the 6502 emulator."""

from .machine import CYCLE_LIMIT, STOP_PC, TRAPPED, Machine, MachineConfig, RunResult, create_machine

__all__ = [
    "CYCLE_LIMIT",
    "STOP_PC",
    "TRAPPED",
    "Machine",
    "MachineConfig",
    "RunResult",
    "create_machine",
]
