# tests/arch/mos6502/test_operation.py
"""
retro_core_decoder.arch.mos6502.instructions.operationモジュールの単体テスト。
"""
import pytest

from retro_core_decoder.arch.mos6502.instructions.base import DecodeFailure, FailureKind, Group, OperationType
from retro_core_decoder.arch.mos6502.instructions.operation import resolve_operation
from retro_core_decoder.arch.mos6502.instructions.group import group

Op = OperationType

# @intent:test_suite ニーモニック解決の検証。

class TestFixedEncoding:
    # @intent:test_case 固定エンコーディング命令はグループ判定より先に完全一致で解決されることを検証します。
    @pytest.mark.parametrize("raw, expected", [
        (0x00, Op.BRK),
        (0x20, Op.JSR),   # グループ表では BIT # と衝突する
        (0x40, Op.RTI),   # グループ表では JMP # と衝突する
        (0x60, Op.RTS),
        (0x08, Op.PHP),
        (0x28, Op.PLP),
        (0x48, Op.PHA),
        (0x68, Op.PLA),
        (0x88, Op.DEY),
        (0xA8, Op.TAY),
        (0xC8, Op.INY),
        (0xE8, Op.INX),
        (0x18, Op.CLC),
        (0x38, Op.SEC),
        (0x58, Op.CLI),
        (0x78, Op.SEI),
        (0x98, Op.TYA),
        (0xB8, Op.CLV),
        (0xD8, Op.CLD),
        (0xF8, Op.SED),
        (0x8A, Op.TXA),   # グループ表では STX A と衝突する
        (0x9A, Op.TXS),
        (0xAA, Op.TAX),
        (0xBA, Op.TSX),
        (0xCA, Op.DEX),
        (0xEA, Op.NOP),
    ])
    def test_fixed_opcodes(self, raw, expected):
        assert resolve_operation(raw) == expected


class TestBranch:
    @pytest.mark.parametrize("raw, expected", [
        (0x10, Op.BPL),
        (0x30, Op.BMI),
        (0x50, Op.BVC),
        (0x70, Op.BVS),
        (0x90, Op.BCC),
        (0xB0, Op.BCS),
        (0xD0, Op.BNE),
        (0xF0, Op.BEQ),
    ])
    def test_branch_opcodes(self, raw, expected):
        assert resolve_operation(raw) == expected
        # 上位バイトは無視される
        assert resolve_operation(0x7F00 | raw) == expected


class TestGroupTables:
    @pytest.mark.parametrize("aaa, expected", list(enumerate([
        Op.ORA, Op.AND, Op.EOR, Op.ADC, Op.STA, Op.LDA, Op.CMP, Op.SBC,
    ])))
    def test_alu_group(self, aaa, expected):
        for bbb in range(8):
            assert resolve_operation((aaa << 5) | (bbb << 2) | 0b01) == expected

    @pytest.mark.parametrize("raw, expected", [
        (0x06, Op.ASL),
        (0x26, Op.ROL),
        (0x46, Op.LSR),
        (0x66, Op.ROR),
        (0x86, Op.STX),
        (0xA6, Op.LDX),
        (0xC6, Op.DEC),
        (0xE6, Op.INC),
    ])
    def test_read_modify_write_group(self, raw, expected):
        assert resolve_operation(raw) == expected

    @pytest.mark.parametrize("raw, expected", [
        (0x24, Op.BIT),
        (0x4C, Op.JMP),
        (0x6C, Op.JMP),
        (0x84, Op.STY),
        (0xA4, Op.LDY),
        (0xC4, Op.CPY),
        (0xE4, Op.CPX),
    ])
    def test_control_group(self, raw, expected):
        assert resolve_operation(raw) == expected

    # @intent:test_case_abnormal CONTROLグループの aaa=000 はニーモニックが割り当てられていないことを検証します。
    @pytest.mark.parametrize("raw", [0x04, 0x0C, 0x14, 0x1C])
    def test_control_unassigned_operation_field(self, raw):
        result = resolve_operation(raw)
        assert isinstance(result, DecodeFailure)
        assert result.kind == FailureKind.INVALID_OPCODE
        assert result.opcode == raw

    @pytest.mark.parametrize("raw", [0x03, 0x7F, 0xFF, 0xAB03])
    def test_unsupported_group(self, raw):
        result = resolve_operation(raw)
        assert isinstance(result, DecodeFailure)
        assert result.kind == FailureKind.UNSUPPORTED_GROUP


class TestTotality:
    def test_every_word_resolves_or_fails(self):
        for raw in range(0x10000):
            result = resolve_operation(raw)
            assert isinstance(result, (OperationType, DecodeFailure))

    # @intent:test_case 判定済みグループを渡しても、省略時と同じニーモニックになることを検証します。
    def test_preclassified_group_matches(self):
        assert resolve_operation(0xB6, Group.READ_MODIFY_WRITE) == OperationType.LDX
        for raw in range(0x100):
            grp = group(raw)
            if isinstance(grp, Group):
                assert resolve_operation(raw, grp) == resolve_operation(raw)
