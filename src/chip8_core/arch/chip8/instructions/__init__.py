# src/chip8_core/arch/chip8/instructions/__init__.py
"""
CHIP-8 命令セット実装パッケージ。
"""
from chip8_core.common.errors import InvalidOpcode
from chip8_core.core.snapshot import Operation
from chip8_core.transport.bus import Bus
from chip8_core.arch.chip8.state import Chip8CpuState
from .base import ExecutionContext, fields
from .maps import find_pattern

# @intent:responsibility 命令語をデコードし、Operationオブジェクトを返します。
# @intent:post-condition どのパターンにも一致しない場合は InvalidOpcode を送出します。副作用はありません。
def decode_opcode(opcode: int) -> Operation:
    pattern = find_pattern(opcode)
    if pattern is None:
        raise InvalidOpcode(opcode)
    values = fields(opcode)._asdict()
    operands = [template.format(**values) for template in pattern.operands]
    return Operation(
        opcode_hex=f"{opcode:04X}",
        mnemonic=pattern.mnemonic,
        operands=operands,
        operand_bytes=[(opcode >> 8) & 0xFF, opcode & 0xFF],
    )

# @intent:responsibility デコードされた命令を実行し、CPUの状態を変更します。
def execute_instruction(operation: Operation, state: Chip8CpuState, bus: Bus, ctx: ExecutionContext) -> None:
    opcode = operation.opcode
    pattern = find_pattern(opcode)
    if pattern is None:
        raise InvalidOpcode(opcode)
    pattern.executor(state, bus, operation, ctx)
