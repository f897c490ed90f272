# src/chip8_core/arch/chip8/cpu.py
"""
CHIP-8 CPUエミュレーションの中心モジュール。
"""
from typing import Dict, List, Optional, Tuple

from chip8_core.core.cpu import AbstractCpu
from chip8_core.core.snapshot import Operation
from chip8_core.transport.bus import Bus
from chip8_core.arch.chip8.state import Chip8CpuState, PROGRAM_START, STACK_DEPTH, FONT_ADDRESS, NUM_REGISTERS
from chip8_core.arch.chip8.instructions import decode_opcode, execute_instruction
from chip8_core.arch.chip8.instructions.base import ExecutionContext, read_word
from chip8_core.arch.chip8 import disassembler
from chip8_core.peripherals.display import DisplaySink
from chip8_core.peripherals.keypad import InputSource
from chip8_core.peripherals.random_source import RandomSource

# @intent:responsibility CHIP-8 の具体的なエミュレーションロジック（フェッチ、デコード、実行）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8 仮想マシンをエミュレートするクラス。

    表示・入力・乱数の各デバイスは省略時にデフォルト実装が生成されます。
    `step()` は1命令を実行し、失敗時は AddressOutOfBounds または InvalidOpcode を送出します。
    """
    def __init__(self,
                 bus: Bus,
                 display: Optional[DisplaySink] = None,
                 keypad: Optional[InputSource] = None,
                 random_source: Optional[RandomSource] = None,
                 program_start: int = PROGRAM_START,
                 stack_depth: int = STACK_DEPTH,
                 font_address: int = FONT_ADDRESS):
        self._program_start = program_start
        self._stack_depth = stack_depth
        self._context = ExecutionContext(font_address=font_address)
        if display is not None:
            self._context.display = display
        if keypad is not None:
            self._context.keypad = keypad
        if random_source is not None:
            self._context.random = random_source
        super().__init__(bus)

    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState(pc=self._program_start, stack=[0] * self._stack_depth)

    @property
    def display(self) -> DisplaySink:
        return self._context.display

    @property
    def keypad(self) -> InputSource:
        return self._context.keypad

    @property
    def context(self) -> ExecutionContext:
        return self._context

    # @intent:responsibility PCから2バイトをビッグエンディアンで読み込みます。範囲外なら状態を変更せずに失敗します。
    def _fetch(self) -> int:
        return read_word(self._bus, self._state.pc)

    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode)

    def _execute(self, operation: Operation) -> None:
        execute_instruction(operation, self._state, self._bus, self._context)

    @property
    def is_waiting_for_key(self) -> bool:
        return self._state.waiting_for_key

    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        registers = {f"V{index:X}": s.v[index] for index in range(NUM_REGISTERS)}
        registers.update({
            "I": s.i, "PC": s.pc, "SP": s.sp, "DT": s.delay_timer, "ST": s.sound_timer
        })
        return registers

    def disassemble(self, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
        return disassembler.disassemble(self._bus, start_addr, length)
