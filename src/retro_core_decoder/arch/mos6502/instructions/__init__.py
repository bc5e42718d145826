# src/retro_core_decoder/arch/mos6502/instructions/__init__.py
"""
MOS 6502 命令デコード実装パッケージ。
"""
from .base import (
    AddressingMode,
    OperationType,
    Group,
    FailureKind,
    DecodeFailure,
    DecodedInstruction,
    DecodeResult,
    InvalidInstructionError,
)
from .group import group, is_branch, mode_field, operation_field, opcode_byte
from .addressing import resolve_mode
from .operation import resolve_operation
