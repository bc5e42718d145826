"""
MOS 6502 ニーモニック解決ロジック。
"""
from typing import Optional, Union

from retro_core_decoder.common.types import RawOpcode
from retro_core_decoder.arch.mos6502.instructions.base import DecodeFailure, FailureKind, Group, OperationType
from retro_core_decoder.arch.mos6502.instructions.group import (
    group,
    is_branch,
    opcode_byte,
    operation_field,
)
from retro_core_decoder.arch.mos6502.instructions.maps import (
    BRANCH_MAP,
    FIXED_OPCODE_MAP,
    GROUP_OPERATION_MAP,
)


# @intent:responsibility 命令ワードからニーモニックを解決する。
# @intent:note 判定順序は固定。エンコーディングはきれいな分割になっておらず、先の規則が優先される。
def resolve_operation(raw: RawOpcode, grp: Optional[Group] = None) -> Union[OperationType, DecodeFailure]:
    """
    1. 固定エンコーディング命令（BRK, JSR, RTI, RTS, スタック, 転送, フラグ操作など）の完全一致
    2. 条件分岐命令
    3. グループ別のオペレーションフィールド表

    grp は呼び出し側で判定済みのグループ。省略時はここで判定します。
    """
    byte = opcode_byte(raw)

    fixed = FIXED_OPCODE_MAP.get(byte)
    if fixed is not None:
        return fixed[0]

    if is_branch(raw):
        branch = BRANCH_MAP.get(byte)
        if branch is None:
            # is_branchとBRANCH_MAPが一致していれば到達しない
            return DecodeFailure(FailureKind.INVALID_OPCODE, raw, "branch-shaped opcode has no mnemonic")
        return branch

    if grp is None:
        grp = group(raw)
    if isinstance(grp, DecodeFailure):
        return grp

    aaa = operation_field(raw)
    operation = GROUP_OPERATION_MAP[grp].get(aaa)
    if operation is None:
        return DecodeFailure(
            FailureKind.INVALID_OPCODE, raw,
            f"operation field {aaa:03b} is unassigned in group {grp.name}",
        )
    return operation
