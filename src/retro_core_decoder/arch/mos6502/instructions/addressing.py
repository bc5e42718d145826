"""
MOS 6502 アドレッシングモード解決ロジック。
"""
from typing import Optional, Union

from retro_core_decoder.common.types import RawOpcode
from retro_core_decoder.arch.mos6502.instructions.base import (
    AddressingMode,
    DecodeFailure,
    FailureKind,
    Group,
)
from retro_core_decoder.arch.mos6502.instructions.group import (
    group,
    is_branch,
    mode_field,
    opcode_byte,
    operation_field,
)
from retro_core_decoder.arch.mos6502.instructions.maps import (
    FIXED_OPCODE_MAP,
    GROUP_MODE_MAP,
    INDEXED_MODE_SLOTS,
    INDIRECT_JUMP_OPERATION_FIELD,
    Y_INDEXED_OPERATION_FIELDS,
)


# @intent:responsibility インデックス付きスロットで X/Y のどちらを使うかを決める。
# @intent:note 判定できない場合はスロットの多数派である X を既定とする。
def select_indexed_mode(slot: int, op_field: int) -> AddressingMode:
    x_mode, y_mode = INDEXED_MODE_SLOTS[slot]
    if op_field in Y_INDEXED_OPERATION_FIELDS:
        return y_mode
    return x_mode


# @intent:responsibility 命令ワードからアドレッシングモードを解決する。
# @intent:rationale モードフィールドはグループごとに意味が異なるため、単一の表では解決できない。
#                  必ずグループで分岐してからグループ別の表を引く。
def resolve_mode(raw: RawOpcode, grp: Optional[Group] = None) -> Union[AddressingMode, DecodeFailure]:
    """
    分岐命令 → 固定エンコーディング命令 → グループ別表 の順に判定します。
    未割り当てのビット組み合わせは InvalidOpcode を返します。
    grp は呼び出し側で判定済みのグループ。省略時はここで判定します。
    """
    if is_branch(raw):
        return AddressingMode.RELATIVE

    fixed = FIXED_OPCODE_MAP.get(opcode_byte(raw))
    if fixed is not None:
        return fixed[1]

    if grp is None:
        grp = group(raw)
    if isinstance(grp, DecodeFailure):
        return grp

    bbb = mode_field(raw)
    aaa = operation_field(raw)

    if grp == Group.READ_MODIFY_WRITE and bbb in INDEXED_MODE_SLOTS:
        return select_indexed_mode(bbb, aaa)

    if grp == Group.CONTROL and bbb == 0b011 and aaa == INDIRECT_JUMP_OPERATION_FIELD:
        return AddressingMode.ABSOLUTE_INDIRECT

    mode = GROUP_MODE_MAP[grp].get(bbb)
    if mode is None:
        return DecodeFailure(
            FailureKind.INVALID_OPCODE, raw,
            f"mode field {bbb:03b} is unassigned in group {grp.name}",
        )
    return mode
