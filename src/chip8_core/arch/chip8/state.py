# src/chip8_core/arch/chip8/state.py
"""
CHIP-8 固有の状態定義と定数。
"""
from dataclasses import dataclass, field
from typing import List

from chip8_core.core.state import CpuState

# @intent:constant マシン全体の寸法を定義します。
MEMORY_SIZE = 0x1000
PROGRAM_START = 0x200
STACK_DEPTH = 16
NUM_REGISTERS = 16
FLAG_REGISTER = 0xF
NUM_KEYS = 16
DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32

# @intent:constant 組み込みの16進フォント（0-F、各5バイト）。
FONT_ADDRESS = 0x050
FONT_GLYPH_SIZE = 5
FONT_SET = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])

# @intent:responsibility データレジスタ V0-VF、アドレスレジスタ I、戻りスタック、タイマーを保持します。
# @intent:rationale スタックはメモリとは独立した配列とし、spは使用中のスロット数（0=空）を示します。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8 のレジスタ状態を保持するデータクラス。
    VF(v[15]) は汎用レジスタであると同時に、加算・減算・シフト・描画のフラグ出力先です。
    """
    pc: int = PROGRAM_START
    v: List[int] = field(default_factory=lambda: [0] * NUM_REGISTERS)
    i: int = 0x0000
    stack: List[int] = field(default_factory=lambda: [0] * STACK_DEPTH)
    delay_timer: int = 0
    sound_timer: int = 0
    waiting_for_key: bool = False # FX0A によるキー入力待ち

    @property
    def vf(self) -> int:
        return self.v[FLAG_REGISTER]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[FLAG_REGISTER] = value & 0xFF

    @property
    def stack_depth(self) -> int:
        return len(self.stack)
