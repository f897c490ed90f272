from dataclasses import dataclass, field
from typing import Optional

from chip8_core.arch.chip8.state import MEMORY_SIZE, PROGRAM_START, STACK_DEPTH, FONT_ADDRESS
from chip8_core.peripherals.timer import TIMER_HZ

@dataclass
class CpuInitialState:
    pc: Optional[int] = None # None の場合は program_start
    registers: dict = field(default_factory=dict) # 例: {"i": 0x300, "v0": 5, "delay_timer": 10}

@dataclass
class SystemConfig:
    memory_size: int = MEMORY_SIZE
    program_start: int = PROGRAM_START
    stack_depth: int = STACK_DEPTH
    font_address: int = FONT_ADDRESS
    cycles_per_frame: int = 10 # 1タイマーティックあたりの命令数
    timer_hz: int = TIMER_HZ
    random_seed: Optional[int] = None
    rom_path: Optional[str] = None
    initial_state: CpuInitialState = field(default_factory=CpuInitialState)
