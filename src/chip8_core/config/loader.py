import yaml
from typing import Dict, Any, Optional
from .models import SystemConfig, CpuInitialState
from chip8_core.arch.chip8.state import FONT_SET

class ConfigLoader:
    def load_from_file(self, path: str) -> SystemConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return self._parse_config(data or {})

    def load_from_string(self, text: str) -> SystemConfig:
        return self._parse_config(yaml.safe_load(text) or {})

    def _parse_config(self, data: Dict[str, Any]) -> SystemConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping, got {type(data).__name__}")
        defaults = SystemConfig()

        initial_state_data = data.get("initial_state") or {}
        registers = {
            str(name).lower(): self._parse_int(value)
            for name, value in (initial_state_data.get("registers") or {}).items()
        }
        initial_state = CpuInitialState(
            pc=self._parse_optional_int(initial_state_data.get("pc")),
            registers=registers
        )

        config = SystemConfig(
            memory_size=self._parse_int(data.get("memory_size", defaults.memory_size)),
            program_start=self._parse_int(data.get("program_start", defaults.program_start)),
            stack_depth=self._parse_int(data.get("stack_depth", defaults.stack_depth)),
            font_address=self._parse_int(data.get("font_address", defaults.font_address)),
            cycles_per_frame=self._parse_int(data.get("cycles_per_frame", defaults.cycles_per_frame)),
            timer_hz=self._parse_int(data.get("timer_hz", defaults.timer_hz)),
            random_seed=self._parse_optional_int(data.get("random_seed")),
            rom_path=data.get("rom_path"),
            initial_state=initial_state
        )
        self._validate(config)
        return config

    def _validate(self, config: SystemConfig) -> None:
        if config.memory_size <= 0:
            raise ValueError(f"memory_size must be positive: {config.memory_size}")
        if not 0 <= config.program_start < config.memory_size:
            raise ValueError(f"program_start {config.program_start:#06x} outside memory")
        if config.font_address < 0 or config.font_address + len(FONT_SET) > config.memory_size:
            raise ValueError(f"font_address {config.font_address:#06x} does not fit the font in memory")
        if config.stack_depth <= 0:
            raise ValueError(f"stack_depth must be positive: {config.stack_depth}")
        if config.cycles_per_frame <= 0:
            raise ValueError(f"cycles_per_frame must be positive: {config.cycles_per_frame}")

    def _parse_optional_int(self, value: Any) -> Optional[int]:
        if value is None:
            return None
        return self._parse_int(value)

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")
