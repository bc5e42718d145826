import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict

import yaml

from retro_core_decoder.arch.mos6502.instructions.base import AddressingMode, OperationType
from .models import CycleKey, CycleTableConfig

logger = logging.getLogger(__name__)

DEFAULT_CYCLE_TABLE = Path(__file__).with_name("mos6502_cycles.yaml")


# @intent:responsibility YAMLで記述された基本サイクル表を読み込み、CycleTableConfigに変換します。
class ConfigLoader:
    def load_default(self) -> CycleTableConfig:
        return self.load_from_file(DEFAULT_CYCLE_TABLE)

    def load_from_file(self, path) -> CycleTableConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        config = self._parse_config(data, source=str(path))
        logger.debug("Loaded %d cycle entries for %s from %s", len(config), config.architecture, path)
        return config

    def load_from_string(self, text: str) -> CycleTableConfig:
        return self._parse_config(yaml.safe_load(text), source="<string>")

    def _parse_config(self, data: Any, source: str = "") -> CycleTableConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Cycle table must be a mapping, got {type(data).__name__}")

        arch = data.get("architecture", "MOS6502")
        if arch != "MOS6502":
            raise ValueError(f"Unsupported architecture: {arch}")

        # Parse Cycles
        # mnemonic -> { addressing mode name -> cycles }
        cycles: Dict[CycleKey, int] = {}
        cycles_data = data.get("cycles") or {}
        if not isinstance(cycles_data, dict):
            raise ValueError(f"cycles must be a mapping, got {type(cycles_data).__name__}")
        for mnemonic, modes in cycles_data.items():
            operation = self._parse_operation(mnemonic)
            if not isinstance(modes, dict):
                raise ValueError(f"Cycle entries for {mnemonic} must be a mapping")

            for mode_name, value in modes.items():
                mode = self._parse_mode(mode_name)
                count = self._parse_int(value)
                if count <= 0:
                    raise ValueError(f"Cycle count must be positive: {mnemonic} {mode_name} = {value}")
                key = (mode, operation)
                if key in cycles:
                    logger.warning("Duplicate cycle entry %s %s in %s, keeping %d", mnemonic, mode_name, source, count)
                cycles[key] = count

        return CycleTableConfig(
            architecture=arch,
            cycles=MappingProxyType(cycles),
            source=source,
        )

    def _parse_operation(self, value: Any) -> OperationType:
        try:
            return OperationType(str(value).upper())
        except ValueError:
            raise ValueError(f"Unknown mnemonic: {value}") from None

    def _parse_mode(self, value: Any) -> AddressingMode:
        try:
            return AddressingMode(value)
        except ValueError:
            raise ValueError(f"Unknown addressing mode: {value}") from None

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")
