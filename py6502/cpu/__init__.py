"""CPU package for the 6502 emulator."""

from .addressing import AddressInfo
from .core import CPU, CPUState
from .disassembler import DisassembledOperation, disassemble, disassemble_range
from .opcodes import OPERATION_TABLE, AddressingMode, Operation
from . import status

__all__ = [
    "CPU",
    "CPUState",
    "AddressInfo",
    "AddressingMode",
    "DisassembledOperation",
    "Operation",
    "OPERATION_TABLE",
    "disassemble",
    "disassemble_range",
    "status",
]
