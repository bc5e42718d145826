"""
共通の型定義を提供するモジュール。
デコーダ、設定ローダ、逆アセンブラで共通して使用される型エイリアスと定数を定義します。
"""
# @intent:data_structure 16bitの生命令ワード。下位8bitがオペコード、上位8bitは呼び出し側が先読みしたオペランド断片。
RawOpcode = int

WORD_MASK = 0xFFFF
OPCODE_MASK = 0x00FF
OPERAND_SHIFT = 8


# @intent:responsibility オペコードと先読みバイトを1つの16bitワードにまとめる。
def make_word(opcode: int, operand: int = 0) -> RawOpcode:
    if not 0 <= opcode <= 0xFF:
        raise ValueError(f"Opcode out of range: {opcode}")
    if not 0 <= operand <= 0xFF:
        raise ValueError(f"Operand byte out of range: {operand}")
    return (operand << OPERAND_SHIFT) | opcode


# @intent:responsibility 入力が16bitワードの範囲内であることを検証する。
# @intent:pre-condition 範囲外の値は呼び出し側のプログラミングエラーとして扱う。
def check_word(raw: RawOpcode) -> RawOpcode:
    if not isinstance(raw, int) or isinstance(raw, bool):
        raise ValueError(f"Raw opcode word must be an int, got {type(raw).__name__}")
    if not 0 <= raw <= WORD_MASK:
        raise ValueError(f"Raw opcode word out of 16-bit range: {raw}")
    return raw
