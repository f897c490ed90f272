# src/chip8_core/arch/chip8/instructions/display.py
"""
表示命令（CLS, DRW）の実装。実際の描画は DisplaySink に委譲します。
"""
from chip8_core.core.snapshot import Operation
from chip8_core.transport.bus import Bus
from chip8_core.arch.chip8.state import Chip8CpuState
from .base import ExecutionContext, op_fields

# --- CLS (00E0) ---
def execute_cls(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    ctx.display.clear()

# --- DRW Vx, Vy, nibble (DXYN) ---
# @intent:responsibility Iから始まるNバイトのスプライトを (Vx, Vy) に描画し、衝突の有無をVFに設定します。
def execute_drw(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    f = op_fields(op)
    bus.check_range(state.i, f.n)
    rows = [bus.read(state.i + row) for row in range(f.n)]
    collided = ctx.display.draw(state.v[f.x], state.v[f.y], rows)
    state.vf = 1 if collided else 0
