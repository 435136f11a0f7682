"""Instruction semantics exercised through small programs."""

from __future__ import annotations

import pytest

from py6502.bus import SimpleBus
from py6502.cpu import CPU
from py6502.cpu.addressing import AddressInfo
from py6502.cpu.instructions import INSTRUCTIONS
from py6502.cpu.opcodes import ILLEGAL_MNEMONIC, OPERATION_TABLE
from py6502.cpu.status import FLAG_B, FLAG_C, FLAG_D, FLAG_I, FLAG_N, FLAG_U, FLAG_V, FLAG_Z

ORIGIN = 0x0200


def make_cpu(program: bytes) -> tuple[CPU, SimpleBus]:
    bus = SimpleBus()
    bus.write(0xFFFC, ORIGIN & 0xFF)
    bus.write(0xFFFD, ORIGIN >> 8)
    bus.load_image(program, ORIGIN)
    return CPU(bus), bus


def run(cpu: CPU, instructions: int) -> int:
    return sum(cpu.step() for _ in range(instructions))


def flags(cpu: CPU) -> dict[str, bool]:
    return {
        "C": cpu.get_flag(FLAG_C),
        "Z": cpu.get_flag(FLAG_Z),
        "V": cpu.get_flag(FLAG_V),
        "N": cpu.get_flag(FLAG_N),
    }


# ----------------------------------------------------------------------
# Arithmetic


def test_adc_signed_overflow_into_negative() -> None:
    cpu, _ = make_cpu(bytes([0xA9, 0x7F, 0x18, 0x69, 0x01]))  # LDA #$7F; CLC; ADC #$01

    run(cpu, 3)

    assert cpu.state.a == 0x80
    assert flags(cpu) == {"C": False, "Z": False, "V": True, "N": True}


def test_adc_carry_and_overflow_to_zero() -> None:
    cpu, _ = make_cpu(bytes([0xA9, 0x80, 0x18, 0x69, 0x80]))  # LDA #$80; CLC; ADC #$80

    run(cpu, 3)

    assert cpu.state.a == 0x00
    assert flags(cpu) == {"C": True, "Z": True, "V": True, "N": False}


def test_adc_adds_carry_in() -> None:
    cpu, _ = make_cpu(bytes([0xA9, 0x01, 0x38, 0x69, 0x01]))  # LDA #$01; SEC; ADC #$01

    run(cpu, 3)

    assert cpu.state.a == 0x03
    assert not cpu.get_flag(FLAG_C)


@pytest.mark.parametrize(
    "a, operand, expected, carry, overflow, negative",
    [
        (0x05, 0x03, 0x02, True, False, False),
        (0x03, 0x05, 0xFE, False, False, True),
        (0x80, 0x01, 0x7F, True, True, False),
    ],
)
def test_sbc_with_carry_set(
    a: int, operand: int, expected: int, carry: bool, overflow: bool, negative: bool
) -> None:
    cpu, _ = make_cpu(bytes([0xA9, a, 0x38, 0xE9, operand]))  # LDA; SEC; SBC

    run(cpu, 3)

    assert cpu.state.a == expected
    assert cpu.get_flag(FLAG_C) is carry
    assert cpu.get_flag(FLAG_V) is overflow
    assert cpu.get_flag(FLAG_N) is negative


def test_sbc_borrows_when_carry_clear() -> None:
    cpu, _ = make_cpu(bytes([0xA9, 0x05, 0x18, 0xE9, 0x03]))  # LDA #$05; CLC; SBC #$03

    run(cpu, 3)

    assert cpu.state.a == 0x01


def test_inc_and_dec_memory_wrap() -> None:
    cpu, bus = make_cpu(bytes([0xE6, 0x10, 0xC6, 0x11]))  # INC $10; DEC $11
    bus.write(0x0010, 0xFF)
    bus.write(0x0011, 0x00)

    cpu.step()
    assert bus.read(0x0010) == 0x00
    assert cpu.get_flag(FLAG_Z)

    cpu.step()
    assert bus.read(0x0011) == 0xFF
    assert cpu.get_flag(FLAG_N)


def test_register_increments_wrap() -> None:
    cpu, _ = make_cpu(bytes([0xCA, 0x88, 0xE8, 0xC8, 0xC8]))  # DEX; DEY; INX; INY; INY

    run(cpu, 2)
    assert (cpu.state.x, cpu.state.y) == (0xFF, 0xFF)
    assert cpu.get_flag(FLAG_N)

    run(cpu, 3)
    assert (cpu.state.x, cpu.state.y) == (0x00, 0x01)
    assert not cpu.get_flag(FLAG_Z)


# ----------------------------------------------------------------------
# Access and transfer


def test_lda_zero_sets_zero_flag() -> None:
    cpu, _ = make_cpu(bytes([0xA9, 0x00]))

    cpu.step()

    assert cpu.get_flag(FLAG_Z)
    assert not cpu.get_flag(FLAG_N)


def test_stores_write_registers() -> None:
    # LDA #$11; LDX #$22; LDY #$33; STA $40; STX $41; STY $42
    program = bytes([0xA9, 0x11, 0xA2, 0x22, 0xA0, 0x33, 0x85, 0x40, 0x86, 0x41, 0x84, 0x42])
    cpu, bus = make_cpu(program)

    run(cpu, 6)

    assert bus.snapshot(0x40, 3) == bytes([0x11, 0x22, 0x33])


def test_ldx_zero_page_y_wraps() -> None:
    cpu, bus = make_cpu(bytes([0xA0, 0x02, 0xB6, 0xFF]))  # LDY #$02; LDX $FF,Y
    bus.write(0x0001, 0x5A)

    run(cpu, 2)

    assert cpu.state.x == 0x5A


def test_transfers_set_flags() -> None:
    cpu, _ = make_cpu(bytes([0xA9, 0x80, 0xAA, 0xA8, 0xA9, 0x00, 0x8A]))  # LDA; TAX; TAY; LDA; TXA

    run(cpu, 3)
    assert (cpu.state.x, cpu.state.y) == (0x80, 0x80)
    assert cpu.get_flag(FLAG_N)

    run(cpu, 2)
    assert cpu.state.a == 0x80


def test_txs_leaves_flags_and_tsx_sets_them() -> None:
    cpu, _ = make_cpu(bytes([0xA2, 0x00, 0x9A, 0xA2, 0x01, 0xBA]))  # LDX #0; TXS; LDX #1; TSX
    run(cpu, 2)

    assert cpu.state.sp == 0x00
    assert cpu.get_flag(FLAG_Z)

    run(cpu, 2)
    assert cpu.state.x == 0x00
    assert cpu.get_flag(FLAG_Z)


# ----------------------------------------------------------------------
# Shifts


def test_asl_accumulator() -> None:
    cpu, _ = make_cpu(bytes([0xA9, 0x81, 0x0A]))  # LDA #$81; ASL A

    run(cpu, 2)

    assert cpu.state.a == 0x02
    assert cpu.get_flag(FLAG_C)


def test_lsr_memory() -> None:
    cpu, bus = make_cpu(bytes([0x46, 0x10]))  # LSR $10
    bus.write(0x0010, 0x01)

    cpu.step()

    assert bus.read(0x0010) == 0x00
    assert cpu.get_flag(FLAG_C)
    assert cpu.get_flag(FLAG_Z)


def test_rol_accumulator_with_carry() -> None:
    cpu, _ = make_cpu(bytes([0xA9, 0x80, 0x38, 0x2A]))  # LDA #$80; SEC; ROL A

    run(cpu, 3)

    assert cpu.state.a == 0x01
    assert cpu.get_flag(FLAG_C)


def test_ror_memory_with_carry() -> None:
    cpu, bus = make_cpu(bytes([0x38, 0x66, 0x10]))  # SEC; ROR $10
    bus.write(0x0010, 0x02)

    run(cpu, 2)

    assert bus.read(0x0010) == 0x81
    assert not cpu.get_flag(FLAG_C)
    assert cpu.get_flag(FLAG_N)


# ----------------------------------------------------------------------
# Bitwise and compare


def test_logical_operations() -> None:
    # LDA #$F0; AND #$3C; ORA #$01; EOR #$FF
    cpu, _ = make_cpu(bytes([0xA9, 0xF0, 0x29, 0x3C, 0x09, 0x01, 0x49, 0xFF]))

    run(cpu, 2)
    assert cpu.state.a == 0x30
    run(cpu, 1)
    assert cpu.state.a == 0x31
    run(cpu, 1)
    assert cpu.state.a == 0xCE
    assert cpu.get_flag(FLAG_N)


def test_bit_copies_memory_bits() -> None:
    cpu, bus = make_cpu(bytes([0xA9, 0x01, 0x24, 0x10]))  # LDA #$01; BIT $10
    bus.write(0x0010, 0xC0)

    run(cpu, 2)

    assert cpu.get_flag(FLAG_Z)
    assert cpu.get_flag(FLAG_N)
    assert cpu.get_flag(FLAG_V)
    assert cpu.state.a == 0x01


@pytest.mark.parametrize(
    "register, operand, carry, zero, negative",
    [
        (0x10, 0x10, True, True, False),
        (0x10, 0x20, False, False, True),
        (0x20, 0x10, True, False, False),
    ],
)
def test_compare_flags(register: int, operand: int, carry: bool, zero: bool, negative: bool) -> None:
    for load, compare in ((0xA9, 0xC9), (0xA2, 0xE0), (0xA0, 0xC0)):
        cpu, _ = make_cpu(bytes([load, register, compare, operand]))

        run(cpu, 2)

        assert cpu.get_flag(FLAG_C) is carry
        assert cpu.get_flag(FLAG_Z) is zero
        assert cpu.get_flag(FLAG_N) is negative


def test_read_instructions_allow_page_penalty() -> None:
    info = AddressInfo(0x0010)
    cpu, _ = make_cpu(b"")

    for mnemonic in ("LDA", "ADC", "CMP", "CPX", "CPY", "AND"):
        assert INSTRUCTIONS[mnemonic](cpu, info) is True
    for mnemonic in ("STA", "BIT", "INC", "NOP", "BNE", ILLEGAL_MNEMONIC):
        assert INSTRUCTIONS[mnemonic](cpu, info) is False


def test_every_table_mnemonic_has_a_handler() -> None:
    assert {operation.mnemonic for operation in OPERATION_TABLE} <= set(INSTRUCTIONS)


# ----------------------------------------------------------------------
# Jumps, subroutines and interrupts


def test_jmp_absolute() -> None:
    cpu, _ = make_cpu(bytes([0x4C, 0x00, 0x30]))

    assert cpu.step() == 3
    assert cpu.state.pc == 0x3000


def test_jmp_indirect_page_boundary_bug() -> None:
    cpu, bus = make_cpu(bytes([0x6C, 0xFF, 0x12]))
    bus.write(0x12FF, 0x00)
    bus.write(0x1200, 0x40)
    bus.write(0x1300, 0x50)

    assert cpu.step() == 5
    assert cpu.state.pc == 0x4000


def test_jsr_and_rts() -> None:
    cpu, bus = make_cpu(bytes([0x20, 0x00, 0x03]))  # JSR $0300
    bus.write(0x0300, 0x60)  # RTS

    assert cpu.step() == 6
    assert cpu.state.pc == 0x0300
    assert bus.read(0x01FD) == 0x02
    assert bus.read(0x01FC) == 0x02
    assert cpu.state.sp == 0xFB

    assert cpu.step() == 6
    assert cpu.state.pc == 0x0203
    assert cpu.state.sp == 0xFD


def test_brk_and_rti() -> None:
    cpu, bus = make_cpu(bytes([0x00, 0xEA]))
    bus.write(0xFFFE, 0x00)
    bus.write(0xFFFF, 0x04)
    bus.write(0x0400, 0x40)  # RTI
    cpu.set_flag(FLAG_C, True)

    assert cpu.step() == 7
    assert cpu.state.pc == 0x0400
    assert bus.read(0x01FD) == 0x02
    assert bus.read(0x01FC) == 0x02
    assert bus.read(0x01FB) == FLAG_C | FLAG_I | FLAG_B | FLAG_U
    assert not cpu.get_flag(FLAG_B)
    assert cpu.get_flag(FLAG_I)

    assert cpu.step() == 6
    assert cpu.state.pc == 0x0202
    assert cpu.state.sp == 0xFD
    assert cpu.state.status == FLAG_C | FLAG_I | FLAG_U


# ----------------------------------------------------------------------
# Stack and flag instructions


def test_pha_pla() -> None:
    cpu, bus = make_cpu(bytes([0xA9, 0x00, 0x48, 0xA9, 0x7F, 0x68]))  # LDA #0; PHA; LDA #$7F; PLA

    run(cpu, 2)
    assert bus.read(0x01FD) == 0x00

    run(cpu, 2)
    assert cpu.state.a == 0x00
    assert cpu.get_flag(FLAG_Z)


def test_php_pushes_break_and_unused() -> None:
    cpu, bus = make_cpu(bytes([0x08]))

    assert cpu.step() == 3
    assert bus.read(0x01FD) == 0x24 | FLAG_B
    assert not cpu.get_flag(FLAG_B)


def test_plp_clears_break_and_sets_unused() -> None:
    cpu, bus = make_cpu(bytes([0x28]))
    cpu.push(0xFF & ~FLAG_U)

    assert cpu.step() == 4
    assert cpu.state.status == 0xFF & ~FLAG_B


def test_flag_instructions() -> None:
    # SEC; SED; CLI; CLC; CLD; SEI
    cpu, _ = make_cpu(bytes([0x38, 0xF8, 0x58, 0x18, 0xD8, 0x78]))

    run(cpu, 3)
    assert cpu.get_flag(FLAG_C)
    assert cpu.get_flag(FLAG_D)
    assert not cpu.get_flag(FLAG_I)

    run(cpu, 3)
    assert not cpu.get_flag(FLAG_C)
    assert not cpu.get_flag(FLAG_D)
    assert cpu.get_flag(FLAG_I)


def test_clv_clears_overflow() -> None:
    cpu, _ = make_cpu(bytes([0xB8]))
    cpu.set_flag(FLAG_V, True)

    cpu.step()

    assert not cpu.get_flag(FLAG_V)
