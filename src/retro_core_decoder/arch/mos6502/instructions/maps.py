"""
MOS 6502 命令エンコーディング表。

グループごとにモードフィールド(bbb, bit2-4)とオペレーションフィールド(aaa, bit5-7)の
意味が異なるため、表はグループ別に分けて保持します。
いずれの表もインポート時に一度だけ構築され、以後変更されません。
"""
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Tuple

from retro_core_decoder.arch.mos6502.instructions.base import AddressingMode, Group, OperationType

M = AddressingMode
Op = OperationType

# --- Fixed-encoding instructions ---
# グループ構造に従わない命令。グループ判定より先にオペコードの完全一致で判定する。
# Opcode -> (Mnemonic, Addressing Mode)
FIXED_OPCODE_MAP: Mapping[int, Tuple[OperationType, AddressingMode]] = MappingProxyType({
    # System / Subroutine
    0x00: (Op.BRK, M.IMPLIED),
    0x20: (Op.JSR, M.ABSOLUTE),
    0x40: (Op.RTI, M.STACK),
    0x60: (Op.RTS, M.STACK),

    # Stack
    0x08: (Op.PHP, M.STACK),
    0x28: (Op.PLP, M.STACK),
    0x48: (Op.PHA, M.STACK),
    0x68: (Op.PLA, M.STACK),

    # Index register increment / decrement
    0x88: (Op.DEY, M.IMPLIED),
    0xC8: (Op.INY, M.IMPLIED),
    0xE8: (Op.INX, M.IMPLIED),
    0xCA: (Op.DEX, M.IMPLIED),

    # Transfer
    0xA8: (Op.TAY, M.IMPLIED),
    0x98: (Op.TYA, M.IMPLIED),
    0x8A: (Op.TXA, M.IMPLIED),
    0x9A: (Op.TXS, M.IMPLIED),
    0xAA: (Op.TAX, M.IMPLIED),
    0xBA: (Op.TSX, M.IMPLIED),

    # Flags
    0x18: (Op.CLC, M.IMPLIED),
    0x38: (Op.SEC, M.IMPLIED),
    0x58: (Op.CLI, M.IMPLIED),
    0x78: (Op.SEI, M.IMPLIED),
    0xB8: (Op.CLV, M.IMPLIED),
    0xD8: (Op.CLD, M.IMPLIED),
    0xF8: (Op.SED, M.IMPLIED),

    0xEA: (Op.NOP, M.IMPLIED),
})

# --- Branch ---
# xxy10000: xx = 判定するフラグ (N, V, C, Z)、y = 分岐する極性
BRANCH_MAP: Mapping[int, OperationType] = MappingProxyType({
    0x10: Op.BPL,
    0x30: Op.BMI,
    0x50: Op.BVC,
    0x70: Op.BVS,
    0x90: Op.BCC,
    0xB0: Op.BCS,
    0xD0: Op.BNE,
    0xF0: Op.BEQ,
})

# --- Addressing mode field (bbb) per group ---
# None はインデックスレジスタ選択ポリシーで決まるスロット。
GROUP_MODE_MAP: Mapping[Group, Mapping[int, AddressingMode]] = MappingProxyType({
    Group.ALU: MappingProxyType({
        0b000: M.ZERO_PAGE_INDEXED_INDIRECT_X,
        0b001: M.ZERO_PAGE,
        0b010: M.IMMEDIATE,
        0b011: M.ABSOLUTE,
        0b100: M.ZERO_PAGE_INDIRECT_INDEXED_Y,
        0b101: M.ZERO_PAGE_X,
        0b110: M.ABSOLUTE_Y,
        0b111: M.ABSOLUTE_X,
    }),
    Group.READ_MODIFY_WRITE: MappingProxyType({
        0b000: M.IMMEDIATE,
        0b001: M.ZERO_PAGE,
        0b010: M.ACCUMULATOR,
        0b011: M.ABSOLUTE,
    }),
    Group.CONTROL: MappingProxyType({
        0b000: M.IMMEDIATE,
        0b001: M.ZERO_PAGE,
        0b011: M.ABSOLUTE,
        0b101: M.ZERO_PAGE_X,
        0b111: M.ABSOLUTE_X,
    }),
})

# --- Index register policy (READ_MODIFY_WRITE group) ---
# bbb=101 / 111 のインデックス付きスロットは、オペレーションフィールドで X/Y が決まる。
# STX(100) と LDX(101) は X 自身を転送するため Y を使う。それ以外はスロットの多数派である X。
INDEXED_MODE_SLOTS: Mapping[int, Tuple[AddressingMode, AddressingMode]] = MappingProxyType({
    0b101: (M.ZERO_PAGE_X, M.ZERO_PAGE_Y),
    0b111: (M.ABSOLUTE_X, M.ABSOLUTE_Y),
})
Y_INDEXED_OPERATION_FIELDS: FrozenSet[int] = frozenset({0b100, 0b101})

# JMP ($nnnn): CONTROLグループの aaa=011, bbb=011 (0x6C)
INDIRECT_JUMP_OPERATION_FIELD = 0b011

# --- Operation field (aaa) per group ---
GROUP_OPERATION_MAP: Mapping[Group, Mapping[int, OperationType]] = MappingProxyType({
    Group.ALU: MappingProxyType({
        0b000: Op.ORA,
        0b001: Op.AND,
        0b010: Op.EOR,
        0b011: Op.ADC,
        0b100: Op.STA,
        0b101: Op.LDA,
        0b110: Op.CMP,
        0b111: Op.SBC,
    }),
    Group.READ_MODIFY_WRITE: MappingProxyType({
        0b000: Op.ASL,
        0b001: Op.ROL,
        0b010: Op.LSR,
        0b011: Op.ROR,
        0b100: Op.STX,
        0b101: Op.LDX,
        0b110: Op.DEC,
        0b111: Op.INC,
    }),
    # aaa=000 は未割り当て
    Group.CONTROL: MappingProxyType({
        0b001: Op.BIT,
        0b010: Op.JMP,
        0b011: Op.JMP,
        0b100: Op.STY,
        0b101: Op.LDY,
        0b110: Op.CPY,
        0b111: Op.CPX,
    }),
})

# --- Documented operation / addressing mode combinations ---
# グループ表はビットフィールドの意味だけを与えるため、実在しない組み合わせ
# (例: 0x89 "STA #") もモードとニーモニックに分解できてしまう。公式命令表で絞り込む。
_ALU_READ_MODES = frozenset({
    M.IMMEDIATE, M.ZERO_PAGE, M.ZERO_PAGE_X, M.ABSOLUTE, M.ABSOLUTE_X, M.ABSOLUTE_Y,
    M.ZERO_PAGE_INDEXED_INDIRECT_X, M.ZERO_PAGE_INDIRECT_INDEXED_Y,
})
_SHIFT_MODES = frozenset({M.ACCUMULATOR, M.ZERO_PAGE, M.ZERO_PAGE_X, M.ABSOLUTE, M.ABSOLUTE_X})
_MEMORY_RMW_MODES = frozenset({M.ZERO_PAGE, M.ZERO_PAGE_X, M.ABSOLUTE, M.ABSOLUTE_X})
_COMPARE_INDEX_MODES = frozenset({M.IMMEDIATE, M.ZERO_PAGE, M.ABSOLUTE})

_legal: Dict[OperationType, FrozenSet[AddressingMode]] = {
    Op.ORA: _ALU_READ_MODES,
    Op.AND: _ALU_READ_MODES,
    Op.EOR: _ALU_READ_MODES,
    Op.ADC: _ALU_READ_MODES,
    Op.STA: _ALU_READ_MODES - {M.IMMEDIATE},
    Op.LDA: _ALU_READ_MODES,
    Op.CMP: _ALU_READ_MODES,
    Op.SBC: _ALU_READ_MODES,

    Op.ASL: _SHIFT_MODES,
    Op.ROL: _SHIFT_MODES,
    Op.LSR: _SHIFT_MODES,
    Op.ROR: _SHIFT_MODES,
    Op.STX: frozenset({M.ZERO_PAGE, M.ZERO_PAGE_Y, M.ABSOLUTE}),
    Op.LDX: frozenset({M.IMMEDIATE, M.ZERO_PAGE, M.ZERO_PAGE_Y, M.ABSOLUTE, M.ABSOLUTE_Y}),
    Op.DEC: _MEMORY_RMW_MODES,
    Op.INC: _MEMORY_RMW_MODES,

    Op.BIT: frozenset({M.ZERO_PAGE, M.ABSOLUTE}),
    Op.JMP: frozenset({M.ABSOLUTE, M.ABSOLUTE_INDIRECT}),
    Op.STY: frozenset({M.ZERO_PAGE, M.ZERO_PAGE_X, M.ABSOLUTE}),
    Op.LDY: frozenset({M.IMMEDIATE, M.ZERO_PAGE, M.ZERO_PAGE_X, M.ABSOLUTE, M.ABSOLUTE_X}),
    Op.CPY: _COMPARE_INDEX_MODES,
    Op.CPX: _COMPARE_INDEX_MODES,
}

for _op in BRANCH_MAP.values():
    _legal[_op] = frozenset({M.RELATIVE})
for _op, _mode in FIXED_OPCODE_MAP.values():
    _legal[_op] = frozenset({_mode})

LEGAL_MODES: Mapping[OperationType, FrozenSet[AddressingMode]] = MappingProxyType(_legal)


# @intent:responsibility 公式命令表に含まれる (アドレッシングモード, ニーモニック) の全組み合わせを列挙する。
def documented_pairs() -> FrozenSet[Tuple[AddressingMode, OperationType]]:
    return frozenset((mode, op) for op, modes in LEGAL_MODES.items() for mode in modes)
