"""Tests for the 256-entry operation table."""

from __future__ import annotations

import pytest

from py6502.cpu.opcodes import (
    DEFAULT_OPERATIONS,
    ILLEGAL_MNEMONIC,
    OPERATION_TABLE,
    AddressingMode,
    OpcodeTable,
    Operation,
    build_operation_table,
    lookup,
)


def test_table_covers_every_opcode() -> None:
    assert len(OPERATION_TABLE) == 256
    for opcode, operation in enumerate(OPERATION_TABLE):
        assert operation.opcode == opcode


def test_documented_and_illegal_counts() -> None:
    legal = [operation for operation in OPERATION_TABLE if not operation.is_illegal]
    illegal = [operation for operation in OPERATION_TABLE if operation.is_illegal]

    assert len(legal) == 151
    assert len(illegal) == 105
    assert len({operation.mnemonic for operation in legal}) == 56


def test_illegal_opcodes_are_single_byte_single_cycle() -> None:
    for operation in OPERATION_TABLE:
        if operation.is_illegal:
            assert operation.mnemonic == ILLEGAL_MNEMONIC
            assert operation.mode == AddressingMode.IMPLIED
            assert (operation.size, operation.cycles) == (1, 1)


@pytest.mark.parametrize(
    "opcode, mnemonic, mode, size, cycles",
    [
        (0x00, "BRK", AddressingMode.IMMEDIATE, 1, 7),
        (0x0A, "ASL", AddressingMode.ACCUMULATOR, 1, 2),
        (0x6C, "JMP", AddressingMode.INDIRECT, 3, 5),
        (0x91, "STA", AddressingMode.INDIRECT_INDEXED, 2, 6),
        (0xA1, "LDA", AddressingMode.INDEXED_INDIRECT, 2, 6),
        (0xB6, "LDX", AddressingMode.ZERO_PAGE_Y, 2, 4),
        (0xD0, "BNE", AddressingMode.RELATIVE, 2, 2),
        (0xFE, "INC", AddressingMode.ABSOLUTE_X, 3, 7),
    ],
)
def test_known_entries(opcode: int, mnemonic: str, mode: AddressingMode, size: int, cycles: int) -> None:
    assert lookup(opcode) == Operation(opcode, mnemonic, mode, size, cycles)


def test_size_follows_addressing_mode() -> None:
    sizes = {
        AddressingMode.ACCUMULATOR: 1,
        AddressingMode.IMPLIED: 1,
        AddressingMode.IMMEDIATE: 2,
        AddressingMode.ZERO_PAGE: 2,
        AddressingMode.ZERO_PAGE_X: 2,
        AddressingMode.ZERO_PAGE_Y: 2,
        AddressingMode.RELATIVE: 2,
        AddressingMode.INDEXED_INDIRECT: 2,
        AddressingMode.INDIRECT_INDEXED: 2,
        AddressingMode.ABSOLUTE: 3,
        AddressingMode.ABSOLUTE_X: 3,
        AddressingMode.ABSOLUTE_Y: 3,
        AddressingMode.INDIRECT: 3,
    }
    for operation in DEFAULT_OPERATIONS:
        if operation.mnemonic == "BRK":
            continue
        assert operation.size == sizes[operation.mode], operation


def test_lookup_masks_opcode() -> None:
    assert lookup(0x1EA).mnemonic == "NOP"


def test_builder_rejects_duplicate_opcode() -> None:
    table = OpcodeTable()
    table.register(Operation(0xEA, "NOP", AddressingMode.IMPLIED, 1, 2))

    with pytest.raises(ValueError):
        table.register(Operation(0xEA, "NOP", AddressingMode.IMPLIED, 1, 2))


def test_builder_fills_gaps_with_illegal_operations() -> None:
    table = build_operation_table([Operation(0xEA, "NOP", AddressingMode.IMPLIED, 1, 2)])

    assert table[0xEA].mnemonic == "NOP"
    assert table[0x00].is_illegal
    assert sum(1 for operation in table if operation.is_illegal) == 255


@pytest.mark.parametrize(
    "kwargs",
    [
        {"opcode": 0x100, "size": 1, "cycles": 1},
        {"opcode": 0x00, "size": 4, "cycles": 1},
        {"opcode": 0x00, "size": 1, "cycles": 0},
    ],
)
def test_operation_validation(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        Operation(mnemonic="NOP", mode=AddressingMode.IMPLIED, **kwargs)


def test_mode_labels() -> None:
    assert AddressingMode.ZERO_PAGE.label == "ZP0"
    assert AddressingMode.INDIRECT_INDEXED.label == "INDY"
