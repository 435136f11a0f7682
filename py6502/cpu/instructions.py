"""Semantics of the 56 documented 6502 instructions.

Access:     LDA, STA, LDX, STX, LDY, STY
Transfer:   TAX, TXA, TAY, TYA
Arithmetic: ADC, SBC, INC, DEC, INX, DEX, INY, DEY
Shift:      ASL, LSR, ROL, ROR
Bitwise:    AND, ORA, EOR, BIT
Compare:    CMP, CPX, CPY
Branch:     BCC, BCS, BEQ, BNE, BPL, BMI, BVC, BVS
Jump:       JMP, JSR, RTS, BRK, RTI
Stack:      PHA, PLA, PHP, PLP, TXS, TSX
Flags:      CLC, SEC, CLI, SEI, CLD, SED, CLV
Other:      NOP

Each handler receives the CPU and the resolved :class:`AddressInfo` and
returns ``True`` when it may take the extra cycle charged for an indexed
read that crosses a page. Branches account for their own extra cycles and
always return ``False``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict

from .addressing import AddressInfo
from .opcodes import ILLEGAL_MNEMONIC
from .status import FLAG_B, FLAG_C, FLAG_D, FLAG_I, FLAG_N, FLAG_U, FLAG_V, FLAG_Z

if TYPE_CHECKING:
    from .core import CPU


InstructionFunc = Callable[["CPU", AddressInfo], bool]


# ----------------------------------------------------------------------
# Operand helpers


def _fetch(cpu: "CPU", info: AddressInfo) -> int:
    if info.is_accumulator:
        return cpu.state.a
    return cpu.read(info.address)


def _store(cpu: "CPU", info: AddressInfo, value: int) -> None:
    if info.is_accumulator:
        cpu.state.a = value & 0xFF
    else:
        cpu.write(info.address, value)


def _add(cpu: "CPU", operand: int) -> None:
    a = cpu.state.a
    total = a + operand + (1 if cpu.get_flag(FLAG_C) else 0)
    result = total & 0xFF
    cpu.set_flag(FLAG_C, total > 0xFF)
    cpu.set_flag(FLAG_V, (~(a ^ operand) & (a ^ result) & 0x80) != 0)
    cpu.set_zn(result)
    cpu.state.a = result


def _compare(cpu: "CPU", register: int, info: AddressInfo) -> bool:
    value = cpu.read(info.address)
    cpu.set_flag(FLAG_C, register >= value)
    cpu.set_zn((register - value) & 0xFF)
    return True


def _branch(cpu: "CPU", info: AddressInfo, taken: bool) -> bool:
    if taken:
        cpu.add_branch_cycles(info)
        cpu.state.pc = info.address
    return False


# ----------------------------------------------------------------------
# Access


def op_lda(cpu: "CPU", info: AddressInfo) -> bool:
    cpu.state.a = cpu.read(info.address)
    cpu.set_zn(cpu.state.a)
    return True


def op_ldx(cpu: "CPU", info: AddressInfo) -> bool:
    cpu.state.x = cpu.read(info.address)
    cpu.set_zn(cpu.state.x)
    return True


def op_ldy(cpu: "CPU", info: AddressInfo) -> bool:
    cpu.state.y = cpu.read(info.address)
    cpu.set_zn(cpu.state.y)
    return True


def op_sta(cpu: "CPU", info: AddressInfo) -> bool:
    cpu.write(info.address, cpu.state.a)
    return False


def op_stx(cpu: "CPU", info: AddressInfo) -> bool:
    cpu.write(info.address, cpu.state.x)
    return False


def op_sty(cpu: "CPU", info: AddressInfo) -> bool:
    cpu.write(info.address, cpu.state.y)
    return False


# ----------------------------------------------------------------------
# Transfer


def op_tax(cpu: "CPU", _: AddressInfo) -> bool:
    cpu.state.x = cpu.state.a
    cpu.set_zn(cpu.state.x)
    return False


def op_txa(cpu: "CPU", _: AddressInfo) -> bool:
    cpu.state.a = cpu.state.x
    cpu.set_zn(cpu.state.a)
    return False


def op_tay(cpu: "CPU", _: AddressInfo) -> bool:
    cpu.state.y = cpu.state.a
    cpu.set_zn(cpu.state.y)
    return False


def op_tya(cpu: "CPU", _: AddressInfo) -> bool:
    cpu.state.a = cpu.state.y
    cpu.set_zn(cpu.state.a)
    return False


# ----------------------------------------------------------------------
# Arithmetic


def op_adc(cpu: "CPU", info: AddressInfo) -> bool:
    """Add with carry. The decimal flag is ignored."""

    _add(cpu, cpu.read(info.address))
    return True


def op_sbc(cpu: "CPU", info: AddressInfo) -> bool:
    """Subtract with borrow, computed as ``A + ~M + C``."""

    _add(cpu, cpu.read(info.address) ^ 0xFF)
    return True


def op_inc(cpu: "CPU", info: AddressInfo) -> bool:
    result = (cpu.read(info.address) + 1) & 0xFF
    cpu.write(info.address, result)
    cpu.set_zn(result)
    return False


def op_dec(cpu: "CPU", info: AddressInfo) -> bool:
    result = (cpu.read(info.address) - 1) & 0xFF
    cpu.write(info.address, result)
    cpu.set_zn(result)
    return False


def op_inx(cpu: "CPU", _: AddressInfo) -> bool:
    cpu.state.x = (cpu.state.x + 1) & 0xFF
    cpu.set_zn(cpu.state.x)
    return False


def op_dex(cpu: "CPU", _: AddressInfo) -> bool:
    cpu.state.x = (cpu.state.x - 1) & 0xFF
    cpu.set_zn(cpu.state.x)
    return False


def op_iny(cpu: "CPU", _: AddressInfo) -> bool:
    cpu.state.y = (cpu.state.y + 1) & 0xFF
    cpu.set_zn(cpu.state.y)
    return False


def op_dey(cpu: "CPU", _: AddressInfo) -> bool:
    cpu.state.y = (cpu.state.y - 1) & 0xFF
    cpu.set_zn(cpu.state.y)
    return False


# ----------------------------------------------------------------------
# Shift


def op_asl(cpu: "CPU", info: AddressInfo) -> bool:
    value = _fetch(cpu, info)
    result = (value << 1) & 0xFF
    cpu.set_flag(FLAG_C, (value & 0x80) != 0)
    cpu.set_zn(result)
    _store(cpu, info, result)
    return False


def op_lsr(cpu: "CPU", info: AddressInfo) -> bool:
    value = _fetch(cpu, info)
    result = value >> 1
    cpu.set_flag(FLAG_C, (value & 0x01) != 0)
    cpu.set_zn(result)
    _store(cpu, info, result)
    return False


def op_rol(cpu: "CPU", info: AddressInfo) -> bool:
    value = _fetch(cpu, info)
    carry_in = 0x01 if cpu.get_flag(FLAG_C) else 0x00
    result = ((value << 1) | carry_in) & 0xFF
    cpu.set_flag(FLAG_C, (value & 0x80) != 0)
    cpu.set_zn(result)
    _store(cpu, info, result)
    return False


def op_ror(cpu: "CPU", info: AddressInfo) -> bool:
    value = _fetch(cpu, info)
    carry_in = 0x80 if cpu.get_flag(FLAG_C) else 0x00
    result = (value >> 1) | carry_in
    cpu.set_flag(FLAG_C, (value & 0x01) != 0)
    cpu.set_zn(result)
    _store(cpu, info, result)
    return False


# ----------------------------------------------------------------------
# Bitwise


def op_and(cpu: "CPU", info: AddressInfo) -> bool:
    cpu.state.a &= cpu.read(info.address)
    cpu.set_zn(cpu.state.a)
    return True


def op_ora(cpu: "CPU", info: AddressInfo) -> bool:
    cpu.state.a |= cpu.read(info.address)
    cpu.set_zn(cpu.state.a)
    return True


def op_eor(cpu: "CPU", info: AddressInfo) -> bool:
    cpu.state.a ^= cpu.read(info.address)
    cpu.set_zn(cpu.state.a)
    return True


def op_bit(cpu: "CPU", info: AddressInfo) -> bool:
    """Test bits: Z from ``A & M``, N and V copied from bits 7 and 6 of M."""

    value = cpu.read(info.address)
    cpu.set_flag(FLAG_Z, (cpu.state.a & value) == 0)
    cpu.set_flag(FLAG_N, (value & 0x80) != 0)
    cpu.set_flag(FLAG_V, (value & 0x40) != 0)
    return False


# ----------------------------------------------------------------------
# Compare


def op_cmp(cpu: "CPU", info: AddressInfo) -> bool:
    return _compare(cpu, cpu.state.a, info)


def op_cpx(cpu: "CPU", info: AddressInfo) -> bool:
    return _compare(cpu, cpu.state.x, info)


def op_cpy(cpu: "CPU", info: AddressInfo) -> bool:
    return _compare(cpu, cpu.state.y, info)


# ----------------------------------------------------------------------
# Branch


def op_bcc(cpu: "CPU", info: AddressInfo) -> bool:
    return _branch(cpu, info, not cpu.get_flag(FLAG_C))


def op_bcs(cpu: "CPU", info: AddressInfo) -> bool:
    return _branch(cpu, info, cpu.get_flag(FLAG_C))


def op_beq(cpu: "CPU", info: AddressInfo) -> bool:
    return _branch(cpu, info, cpu.get_flag(FLAG_Z))


def op_bne(cpu: "CPU", info: AddressInfo) -> bool:
    return _branch(cpu, info, not cpu.get_flag(FLAG_Z))


def op_bpl(cpu: "CPU", info: AddressInfo) -> bool:
    return _branch(cpu, info, not cpu.get_flag(FLAG_N))


def op_bmi(cpu: "CPU", info: AddressInfo) -> bool:
    return _branch(cpu, info, cpu.get_flag(FLAG_N))


def op_bvc(cpu: "CPU", info: AddressInfo) -> bool:
    return _branch(cpu, info, not cpu.get_flag(FLAG_V))


def op_bvs(cpu: "CPU", info: AddressInfo) -> bool:
    return _branch(cpu, info, cpu.get_flag(FLAG_V))


# ----------------------------------------------------------------------
# Jump


def op_jmp(cpu: "CPU", info: AddressInfo) -> bool:
    cpu.state.pc = info.address
    return False


def op_jsr(cpu: "CPU", info: AddressInfo) -> bool:
    """Jump to subroutine.

    The pushed return address is the last byte of the JSR itself; RTS adds
    one when it pulls it back.
    """

    cpu.push16((cpu.state.pc - 1) & 0xFFFF)
    cpu.state.pc = info.address
    return False


def op_rts(cpu: "CPU", _: AddressInfo) -> bool:
    cpu.state.pc = (cpu.pop16() + 1) & 0xFFFF
    return False


def op_brk(cpu: "CPU", _: AddressInfo) -> bool:
    """Software interrupt through the IRQ vector.

    BRK is followed by a padding byte, so the pushed return address skips
    it. Only the pushed copy of the status register carries the B flag.
    """

    cpu.state.pc = (cpu.state.pc + 1) & 0xFFFF
    cpu.push16(cpu.state.pc)
    cpu.push(cpu.state.status | FLAG_B | FLAG_U)
    cpu.set_flag(FLAG_I, True)
    cpu.state.pc = cpu.irq_vector()
    return False


def op_rti(cpu: "CPU", _: AddressInfo) -> bool:
    status = cpu.pop()
    cpu.state.status = (status & ~FLAG_B & 0xFF) | FLAG_U
    cpu.state.pc = cpu.pop16()
    return False


# ----------------------------------------------------------------------
# Stack


def op_pha(cpu: "CPU", _: AddressInfo) -> bool:
    cpu.push(cpu.state.a)
    return False


def op_pla(cpu: "CPU", _: AddressInfo) -> bool:
    cpu.state.a = cpu.pop()
    cpu.set_zn(cpu.state.a)
    return False


def op_php(cpu: "CPU", _: AddressInfo) -> bool:
    cpu.push(cpu.state.status | FLAG_B | FLAG_U)
    return False


def op_plp(cpu: "CPU", _: AddressInfo) -> bool:
    status = cpu.pop()
    cpu.state.status = (status & ~FLAG_B & 0xFF) | FLAG_U
    return False


def op_txs(cpu: "CPU", _: AddressInfo) -> bool:
    cpu.state.sp = cpu.state.x
    return False


def op_tsx(cpu: "CPU", _: AddressInfo) -> bool:
    cpu.state.x = cpu.state.sp
    cpu.set_zn(cpu.state.x)
    return False


# ----------------------------------------------------------------------
# Flags


def op_clc(cpu: "CPU", _: AddressInfo) -> bool:
    cpu.set_flag(FLAG_C, False)
    return False


def op_sec(cpu: "CPU", _: AddressInfo) -> bool:
    cpu.set_flag(FLAG_C, True)
    return False


def op_cli(cpu: "CPU", _: AddressInfo) -> bool:
    cpu.set_flag(FLAG_I, False)
    return False


def op_sei(cpu: "CPU", _: AddressInfo) -> bool:
    cpu.set_flag(FLAG_I, True)
    return False


def op_cld(cpu: "CPU", _: AddressInfo) -> bool:
    cpu.set_flag(FLAG_D, False)
    return False


def op_sed(cpu: "CPU", _: AddressInfo) -> bool:
    cpu.set_flag(FLAG_D, True)
    return False


def op_clv(cpu: "CPU", _: AddressInfo) -> bool:
    cpu.set_flag(FLAG_V, False)
    return False


# ----------------------------------------------------------------------
# Other


def op_nop(cpu: "CPU", _: AddressInfo) -> bool:
    """No operation."""

    return False


def op_illegal(cpu: "CPU", _: AddressInfo) -> bool:
    """Undocumented opcodes behave as a one byte NOP."""

    return False


INSTRUCTIONS: Dict[str, InstructionFunc] = {
    "LDA": op_lda,
    "LDX": op_ldx,
    "LDY": op_ldy,
    "STA": op_sta,
    "STX": op_stx,
    "STY": op_sty,
    "TAX": op_tax,
    "TXA": op_txa,
    "TAY": op_tay,
    "TYA": op_tya,
    "ADC": op_adc,
    "SBC": op_sbc,
    "INC": op_inc,
    "DEC": op_dec,
    "INX": op_inx,
    "DEX": op_dex,
    "INY": op_iny,
    "DEY": op_dey,
    "ASL": op_asl,
    "LSR": op_lsr,
    "ROL": op_rol,
    "ROR": op_ror,
    "AND": op_and,
    "ORA": op_ora,
    "EOR": op_eor,
    "BIT": op_bit,
    "CMP": op_cmp,
    "CPX": op_cpx,
    "CPY": op_cpy,
    "BCC": op_bcc,
    "BCS": op_bcs,
    "BEQ": op_beq,
    "BNE": op_bne,
    "BPL": op_bpl,
    "BMI": op_bmi,
    "BVC": op_bvc,
    "BVS": op_bvs,
    "JMP": op_jmp,
    "JSR": op_jsr,
    "RTS": op_rts,
    "BRK": op_brk,
    "RTI": op_rti,
    "PHA": op_pha,
    "PLA": op_pla,
    "PHP": op_php,
    "PLP": op_plp,
    "TXS": op_txs,
    "TSX": op_tsx,
    "CLC": op_clc,
    "SEC": op_sec,
    "CLI": op_cli,
    "SEI": op_sei,
    "CLD": op_cld,
    "SED": op_sed,
    "CLV": op_clv,
    "NOP": op_nop,
    ILLEGAL_MNEMONIC: op_illegal,
}
