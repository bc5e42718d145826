# src/retro_core_decoder/arch/mos6502/disassembler.py
"""
MOS 6502 逆アセンブラ。

与えられたバイト列だけを読み、デコーダの結果（アドレッシングモードとオペランド長）から
オペランド文字列を組み立てます。バスやレジスタ状態には一切触れません。
"""
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from retro_core_decoder.common.types import make_word
from retro_core_decoder.arch.mos6502.decoder import InstructionDecoder, default_decoder
from retro_core_decoder.arch.mos6502.instructions.base import AddressingMode, DecodeFailure

M = AddressingMode


# @intent:responsibility 逆アセンブルされた1行分の情報を記録します。
# @intent:note 不変かつハッシュ可能にするため、可変長フィールドはタプルで保持する。
@dataclass(frozen=True)
class DisassembledLine:
    address: int
    opcode: int  # 例: 0xA9
    mnemonic: str  # 例: "LDA" / 不正オペコードは "DB"
    operands: Tuple[str, ...] = ()  # 例: ("#$55",)
    operand_bytes: Tuple[int, ...] = ()
    cycle_count: int = 0
    length: int = 1

    @property
    def opcode_hex(self) -> str:
        return f"{self.opcode:02X}"

    @property
    def hex_bytes(self) -> str:
        return " ".join(f"{b:02X}" for b in (self.opcode, *self.operand_bytes))

    @property
    def text(self) -> str:
        return f"{self.mnemonic} {', '.join(self.operands)}".strip()


# @intent:responsibility 分岐先の絶対アドレスを計算する。オフセットは符号付き8bit。
def branch_target(address: int, offset: int) -> int:
    if offset >= 0x80:
        offset -= 0x100
    return (address + 2 + offset) & 0xFFFF


# --- Operand formatters ---
# 引数: (命令アドレス, オペランド値(リトルエンディアン結合済み))
_FORMATTERS: Dict[AddressingMode, Callable[[int, int], str]] = {
    M.IMMEDIATE: lambda pc, v: f"#${v:02X}",
    M.ZERO_PAGE: lambda pc, v: f"${v:02X}",
    M.ZERO_PAGE_X: lambda pc, v: f"${v:02X},X",
    M.ZERO_PAGE_Y: lambda pc, v: f"${v:02X},Y",
    M.ZERO_PAGE_INDEXED_INDIRECT_X: lambda pc, v: f"(${v:02X},X)",
    M.ZERO_PAGE_INDIRECT_INDEXED_Y: lambda pc, v: f"(${v:02X}),Y",
    M.ABSOLUTE: lambda pc, v: f"${v:04X}",
    M.ABSOLUTE_X: lambda pc, v: f"${v:04X},X",
    M.ABSOLUTE_Y: lambda pc, v: f"${v:04X},Y",
    M.ABSOLUTE_INDIRECT: lambda pc, v: f"(${v:04X})",
    M.RELATIVE: lambda pc, v: f"${branch_target(pc, v):04X}",
    M.ACCUMULATOR: lambda pc, v: "A",
}


def format_operand(mode: AddressingMode, address: int, operand_bytes: Sequence[int]) -> str:
    formatter = _FORMATTERS.get(mode)
    if formatter is None:
        return ""
    value = 0
    for i, b in enumerate(operand_bytes):
        value |= (b & 0xFF) << (8 * i)
    return formatter(address, value)


# @intent:responsibility 指定されたバイト列を逆アセンブルする。
def disassemble(data: Sequence[int], origin: int = 0,
                decoder: Optional[InstructionDecoder] = None) -> List[DisassembledLine]:
    """
    バイト列を先頭から解析し、DisassembledLine のリストを返す。
    デコードできないバイト、および末尾で途切れた命令は "DB $xx" として1バイトずつ出力する。
    """
    decoder = decoder or default_decoder()
    results = []
    offset = 0

    while offset < len(data):
        addr = (origin + offset) & 0xFFFF
        opcode = data[offset] & 0xFF
        next_byte = data[offset + 1] & 0xFF if offset + 1 < len(data) else 0
        decoded = decoder.decode(make_word(opcode, next_byte))

        if isinstance(decoded, DecodeFailure) or offset + decoded.length > len(data):
            results.append(DisassembledLine(addr, opcode, "DB", (f"${opcode:02X}",)))
            offset += 1
            continue

        op_bytes = tuple(b & 0xFF for b in data[offset + 1:offset + decoded.length])
        op_str = format_operand(decoded.mode, addr, op_bytes)

        results.append(DisassembledLine(
            address=addr,
            opcode=opcode,
            mnemonic=decoded.mnemonic,
            operands=(op_str,) if op_str else (),
            operand_bytes=op_bytes,
            cycle_count=decoded.base_cycles,
            length=decoded.length,
        ))
        offset += decoded.length

    return results
