"""
MOS 6502 命令グループ判定。

オペコードバイトは aaabbbcc の3フィールドで構成されます。
  cc  (bit0-1): グループ
  bbb (bit2-4): アドレッシングモードフィールド
  aaa (bit5-7): オペレーションフィールド
条件分岐命令 (xxy10000) はこの構造に従わないため、他の判定より先に検出します。
"""
from typing import Union

from retro_core_decoder.common.types import RawOpcode, OPCODE_MASK
from retro_core_decoder.arch.mos6502.instructions.base import DecodeFailure, FailureKind, Group

GROUP_MASK = 0x03
MODE_FIELD_MASK = 0x1C
MODE_FIELD_SHIFT = 2
OPERATION_FIELD_MASK = 0xE0
OPERATION_FIELD_SHIFT = 5

BRANCH_TEMPLATE_MASK = 0x1F
BRANCH_TEMPLATE = 0x10


def opcode_byte(raw: RawOpcode) -> int:
    return raw & OPCODE_MASK


# @intent:responsibility bit2-4 (bbb) を取り出す。
def mode_field(raw: RawOpcode) -> int:
    return (raw & MODE_FIELD_MASK) >> MODE_FIELD_SHIFT


# @intent:responsibility bit5-7 (aaa) を取り出す。
def operation_field(raw: RawOpcode) -> int:
    return (raw & OPERATION_FIELD_MASK) >> OPERATION_FIELD_SHIFT


# @intent:responsibility 下位2bitから命令グループを判定する。
# @intent:note 11 はアーキテクチャ上未割り当てのため UnsupportedGroup を返す。
def group(raw: RawOpcode) -> Union[Group, DecodeFailure]:
    bits = raw & GROUP_MASK
    if bits == GROUP_MASK:
        return DecodeFailure(FailureKind.UNSUPPORTED_GROUP, raw, "group bits 11 are unassigned")
    return Group(bits)


# @intent:responsibility 条件分岐命令のテンプレート (xxy10000) に一致するか判定する。
def is_branch(raw: RawOpcode) -> bool:
    return (raw & BRANCH_TEMPLATE_MASK) == BRANCH_TEMPLATE
