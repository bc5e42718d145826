"""
MOS 6502 命令デコードの基本型。

アドレッシングモード、ニーモニック、グループの列挙型と、
デコード結果（成功/失敗）を表す不変データ構造を定義します。
"""
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Union

from retro_core_decoder.common.types import RawOpcode, OPCODE_MASK, OPERAND_SHIFT


# @intent:responsibility オペコード下位2bitによる命令グループ。
# @intent:note ビットパターン 11 はこの命令セットでは未割り当てのため、メンバーを持たない。
class Group(IntEnum):
    CONTROL = 0            # 制御/比較系 (BIT, JMP, STY, LDY, CPY, CPX)
    ALU = 1                # アキュムレータ演算系 (ORA ... SBC)
    READ_MODIFY_WRITE = 2  # シフト/ローテート/Xレジスタ系 (ASL ... INC)


# @intent:responsibility 6502の全アドレッシングモード。
class AddressingMode(Enum):
    IMMEDIATE = "Immediate"
    ABSOLUTE = "Absolute"
    ZERO_PAGE = "ZeroPage"
    ACCUMULATOR = "Accumulator"
    IMPLIED = "Implied"
    ZERO_PAGE_INDIRECT_INDEXED_Y = "ZeroPageIndirectIndexedY"
    ZERO_PAGE_INDEXED_INDIRECT_X = "ZeroPageIndexedIndirectX"
    ZERO_PAGE_X = "ZeroPageX"
    ZERO_PAGE_Y = "ZeroPageY"
    ABSOLUTE_X = "AbsoluteX"
    ABSOLUTE_Y = "AbsoluteY"
    RELATIVE = "Relative"
    ABSOLUTE_INDIRECT = "AbsoluteIndirect"
    STACK = "Stack"

    # @intent:responsibility オペコードに続くオペランドのバイト数を返す。
    @property
    def operand_width(self) -> int:
        return _OPERAND_WIDTHS[self]


_OPERAND_WIDTHS = {
    AddressingMode.IMPLIED: 0,
    AddressingMode.ACCUMULATOR: 0,
    AddressingMode.STACK: 0,
    AddressingMode.IMMEDIATE: 1,
    AddressingMode.ZERO_PAGE: 1,
    AddressingMode.ZERO_PAGE_X: 1,
    AddressingMode.ZERO_PAGE_Y: 1,
    AddressingMode.ZERO_PAGE_INDEXED_INDIRECT_X: 1,
    AddressingMode.ZERO_PAGE_INDIRECT_INDEXED_Y: 1,
    AddressingMode.RELATIVE: 1,
    AddressingMode.ABSOLUTE: 2,
    AddressingMode.ABSOLUTE_X: 2,
    AddressingMode.ABSOLUTE_Y: 2,
    AddressingMode.ABSOLUTE_INDIRECT: 2,
}


# @intent:responsibility 6502の公式ニーモニック(56種)。
class OperationType(Enum):
    ADC = "ADC"
    AND = "AND"
    ASL = "ASL"
    BCC = "BCC"
    BCS = "BCS"
    BEQ = "BEQ"
    BIT = "BIT"
    BMI = "BMI"
    BNE = "BNE"
    BPL = "BPL"
    BRK = "BRK"
    BVC = "BVC"
    BVS = "BVS"
    CLC = "CLC"
    CLD = "CLD"
    CLI = "CLI"
    CLV = "CLV"
    CMP = "CMP"
    CPX = "CPX"
    CPY = "CPY"
    DEC = "DEC"
    DEX = "DEX"
    DEY = "DEY"
    EOR = "EOR"
    INC = "INC"
    INX = "INX"
    INY = "INY"
    JMP = "JMP"
    JSR = "JSR"
    LDA = "LDA"
    LDX = "LDX"
    LDY = "LDY"
    LSR = "LSR"
    NOP = "NOP"
    ORA = "ORA"
    PHA = "PHA"
    PHP = "PHP"
    PLA = "PLA"
    PLP = "PLP"
    ROL = "ROL"
    ROR = "ROR"
    RTI = "RTI"
    RTS = "RTS"
    SBC = "SBC"
    SEC = "SEC"
    SED = "SED"
    SEI = "SEI"
    STA = "STA"
    STX = "STX"
    STY = "STY"
    TAX = "TAX"
    TAY = "TAY"
    TSX = "TSX"
    TXA = "TXA"
    TXS = "TXS"
    TYA = "TYA"


# @intent:responsibility デコード失敗の種別。
class FailureKind(Enum):
    UNSUPPORTED_GROUP = "UnsupportedGroup"
    INVALID_OPCODE = "InvalidOpcode"


# @intent:responsibility デコード失敗を表す値。例外ではなく戻り値として扱う。
# @intent:rationale 実行ループは不正オペコードを通常の実行時条件として処理できる必要があるため。
@dataclass(frozen=True)
class DecodeFailure:
    """
    デコードに失敗したことを表す不変データ。
    kind: 失敗の種別
    raw: 入力された16bitワード
    reason: 人間向けの説明
    """
    kind: FailureKind
    raw: RawOpcode
    reason: str = ""

    @property
    def opcode(self) -> int:
        return self.raw & OPCODE_MASK

    def __str__(self) -> str:
        return f"{self.kind.value}: ${self.opcode:02X} ({self.reason})"


# @intent:responsibility 完全にデコードされた命令。生成後は変更されない。
@dataclass(frozen=True)
class DecodedInstruction:
    """
    1つの命令ワードのデコード結果。

    フェッチ/実行ループは mode と operand_width からオペランドの読み出し方を、
    operation から実行内容を、base_cycles からサイクル計上を決定します。
    """
    raw: RawOpcode
    group: Group
    mode: AddressingMode
    operation: OperationType
    operand_width: int
    base_cycles: int

    # @intent:responsibility 下位8bit（真のオペコードバイト）。
    @property
    def opcode(self) -> int:
        return self.raw & OPCODE_MASK

    # @intent:responsibility 上位8bit（呼び出し側が先読みしたバイト）。デコーダ自身は解釈しない。
    @property
    def operand_fragment(self) -> int:
        return (self.raw >> OPERAND_SHIFT) & OPCODE_MASK

    # 命令のバイト長
    @property
    def length(self) -> int:
        return 1 + self.operand_width

    @property
    def mnemonic(self) -> str:
        return self.operation.value


# @intent:data_structure リゾルバおよびデコーダの戻り値型。
DecodeResult = Union[DecodedInstruction, DecodeFailure]


# @intent:responsibility 例外での扱いを望む呼び出し側向けに、DecodeFailureを包む例外。
class InvalidInstructionError(ValueError):
    def __init__(self, failure: DecodeFailure):
        super().__init__(str(failure))
        self.failure = failure
