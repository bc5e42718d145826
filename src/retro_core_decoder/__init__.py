"""
Retro Core Decoder

MOS 6502 命令デコードステージ。生のオペコードワードを、アドレッシングモード・
ニーモニック・オペランド長・基本サイクル数に分類します。
"""
from retro_core_decoder.arch.mos6502.decoder import (
    InstructionDecoder,
    decode,
    decode_or_raise,
    opcode_table,
)
from retro_core_decoder.arch.mos6502.instructions.base import (
    AddressingMode,
    DecodedInstruction,
    DecodeFailure,
    FailureKind,
    Group,
    InvalidInstructionError,
    OperationType,
)

__version__ = "0.1.0"
