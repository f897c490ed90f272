# src/chip8_core/arch/chip8/instructions/base.py
"""
CHIP-8 命令実装用の共通ユーティリティ。
"""
from dataclasses import dataclass, field
from typing import NamedTuple

from chip8_core.common.errors import AddressOutOfBounds
from chip8_core.core.snapshot import Operation
from chip8_core.transport.bus import Bus
from chip8_core.arch.chip8.state import Chip8CpuState, FONT_ADDRESS
from chip8_core.peripherals.display import DisplaySink, FrameBuffer
from chip8_core.peripherals.keypad import InputSource, Keypad
from chip8_core.peripherals.random_source import RandomSource, SystemRandomSource

# @intent:data_structure 命令語を4つのニブルと、下位8ビット/12ビットの即値に分解した結果。
class Fields(NamedTuple):
    group: int
    x: int
    y: int
    n: int
    nn: int
    nnn: int

# @intent:utility_function 16ビット命令語をニブルフィールドに分解します。副作用はありません。
def fields(opcode: int) -> Fields:
    return Fields(
        group=(opcode >> 12) & 0xF,
        x=(opcode >> 8) & 0xF,
        y=(opcode >> 4) & 0xF,
        n=opcode & 0xF,
        nn=opcode & 0xFF,
        nnn=opcode & 0xFFF,
    )

def op_fields(op: Operation) -> Fields:
    return fields(op.opcode)

# @intent:responsibility 命令ハンドラから呼び出される外部デバイス群をまとめます。
@dataclass
class ExecutionContext:
    display: DisplaySink = field(default_factory=FrameBuffer)
    keypad: InputSource = field(default_factory=Keypad)
    random: RandomSource = field(default_factory=SystemRandomSource)
    font_address: int = FONT_ADDRESS

# @intent:utility_function バスから16ビットワードをビッグエンディアン形式で読み込みます。
# @intent:pre-condition addrとaddr+1の両方がマップされている必要があります。読み込み前に検証します。
def read_word(bus: Bus, addr: int) -> int:
    """Big-endian 16-bit read."""
    bus.check_range(addr, 2)
    return (bus.read(addr) << 8) | bus.read(addr + 1)

def write_word(bus: Bus, addr: int, val: int) -> None:
    """Big-endian 16-bit write."""
    bus.check_range(addr, 2)
    bus.write(addr, (val >> 8) & 0xFF)
    bus.write(addr + 1, val & 0xFF)

# @intent:utility_function 戻りアドレスをスタックに積みます。満杯なら何も変更せずに失敗します。
def push(state: Chip8CpuState, value: int) -> None:
    if state.sp >= state.stack_depth:
        raise AddressOutOfBounds(f"Stack overflow: depth {state.stack_depth} exhausted.", state.sp)
    state.sp += 1
    state.stack[state.sp - 1] = value & 0xFFFF

def pop(state: Chip8CpuState) -> int:
    if state.sp <= 0:
        raise AddressOutOfBounds("Stack underflow: return with empty stack.", state.sp)
    value = state.stack[state.sp - 1]
    state.sp -= 1
    return value

# @intent:utility_function 条件成立時に次の命令を読み飛ばします（PCは既に次の命令を指しています）。
def skip_if(state: Chip8CpuState, condition: bool) -> None:
    if condition:
        state.pc = (state.pc + 2) & 0xFFFF
