# src/retro_core_decoder/arch/mos6502/decoder.py
"""
MOS 6502 命令デコーダ。

グループ判定、アドレッシングモード解決、ニーモニック解決を合成し、
1つの DecodedInstruction を生成する唯一の公開エントリポイントです。
デコーダは入力ワードと不変の表だけを参照するため、複数スレッドから同時に呼び出せます。
"""
import logging
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping

from retro_core_decoder.common.types import RawOpcode, check_word
from retro_core_decoder.config.loader import ConfigLoader
from retro_core_decoder.config.models import CycleTableConfig, CycleTableError
from retro_core_decoder.arch.mos6502.instructions.base import (
    DecodedInstruction,
    DecodeFailure,
    DecodeResult,
    FailureKind,
    InvalidInstructionError,
)
from retro_core_decoder.arch.mos6502.instructions.group import group
from retro_core_decoder.arch.mos6502.instructions.addressing import resolve_mode
from retro_core_decoder.arch.mos6502.instructions.operation import resolve_operation
from retro_core_decoder.arch.mos6502.instructions.maps import LEGAL_MODES, documented_pairs

logger = logging.getLogger(__name__)


# @intent:responsibility 命令ワードを DecodedInstruction または DecodeFailure に分類する。
class InstructionDecoder:
    """
    基本サイクル表を保持する不変のデコーダ。

    生成時にサイクル表が公式命令の全組み合わせを網羅していることを検証するため、
    decode() の途中でサイクル数が見つからないことはありません。
    """
    # @intent:pre-condition `cycle_table`は公式命令表の全 (モード, ニーモニック) を含む必要があります。
    def __init__(self, cycle_table: CycleTableConfig):
        missing = cycle_table.missing(documented_pairs())
        if missing:
            names = ", ".join(sorted(f"{op.value} {mode.value}" for mode, op in missing))
            raise CycleTableError(f"Cycle table {cycle_table.source or '<unnamed>'} is missing: {names}")
        self._cycle_table = cycle_table
        logger.debug("InstructionDecoder ready with %d cycle entries", len(cycle_table))

    @property
    def cycle_table(self) -> CycleTableConfig:
        return self._cycle_table

    # @intent:responsibility 1つの16bitワードをデコードする。
    # @intent:note 範囲外の値(呼び出し側のバグ)のみ ValueError を送出し、不正オペコードは値として返す。
    def decode(self, raw: RawOpcode) -> DecodeResult:
        raw = check_word(raw)

        # グループ判定は1回だけ行い、両リゾルバに渡す
        grp = group(raw)
        if isinstance(grp, DecodeFailure):
            return grp

        mode = resolve_mode(raw, grp)
        if isinstance(mode, DecodeFailure):
            return mode

        operation = resolve_operation(raw, grp)
        if isinstance(operation, DecodeFailure):
            return operation

        # ビットフィールド上は分解できても、公式命令表に存在しない組み合わせ
        if mode not in LEGAL_MODES[operation]:
            return DecodeFailure(
                FailureKind.INVALID_OPCODE, raw,
                f"{operation.value} has no {mode.value} form",
            )

        return DecodedInstruction(
            raw=raw,
            group=grp,
            mode=mode,
            operation=operation,
            operand_width=mode.operand_width,
            base_cycles=self._cycle_table.lookup(mode, operation),
        )

    # @intent:responsibility 失敗を例外として扱いたい呼び出し側向けのデコード。
    def decode_or_raise(self, raw: RawOpcode) -> DecodedInstruction:
        result = self.decode(raw)
        if isinstance(result, DecodeFailure):
            raise InvalidInstructionError(result)
        return result


# @intent:responsibility 同梱のサイクル表から構築した既定デコーダを返す。
# @intent:note 構築は一度だけ行い、以後は同じ不変インスタンスを共有する。
@lru_cache(maxsize=None)
def default_decoder() -> InstructionDecoder:
    return InstructionDecoder(ConfigLoader().load_default())


def decode(raw: RawOpcode) -> DecodeResult:
    return default_decoder().decode(raw)


def decode_or_raise(raw: RawOpcode) -> DecodedInstruction:
    return default_decoder().decode_or_raise(raw)


# @intent:responsibility 全256オペコードのデコード結果を事前計算した不変の表を返す。
@lru_cache(maxsize=None)
def opcode_table() -> Mapping[int, DecodeResult]:
    decoder = default_decoder()
    return MappingProxyType({opcode: decoder.decode(opcode) for opcode in range(0x100)})
