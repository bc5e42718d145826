from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Set, Tuple

from retro_core_decoder.arch.mos6502.instructions.base import AddressingMode, OperationType

CycleKey = Tuple[AddressingMode, OperationType]


# @intent:responsibility 設定ファイル由来の不正・不完全なサイクル表を表す例外。
class CycleTableError(ValueError):
    pass


# @intent:responsibility (アドレッシングモード, ニーモニック) → 基本サイクル数 の静的な表。
# @intent:rationale デコード呼び出しごとにハードコードせず、設定データとして一度だけ読み込む。
@dataclass(frozen=True)
class CycleTableConfig:
    architecture: str
    cycles: Mapping[CycleKey, int] = field(default_factory=lambda: MappingProxyType({}))
    source: str = ""

    def lookup(self, mode: AddressingMode, operation: OperationType) -> Optional[int]:
        return self.cycles.get((mode, operation))

    def __contains__(self, key: CycleKey) -> bool:
        return key in self.cycles

    def __len__(self) -> int:
        return len(self.cycles)

    # @intent:responsibility 指定された組み合わせのうち、表に存在しないものを返す。
    def missing(self, required: Iterable[CycleKey]) -> Set[CycleKey]:
        return {key for key in required if key not in self.cycles}
