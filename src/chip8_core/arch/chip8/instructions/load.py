# src/chip8_core/arch/chip8/instructions/load.py
"""
ロード/ストア命令（レジスタ、アドレスレジスタ、タイマー、メモリ転送）の実装。

メモリへアクセスする命令は、状態を変更する前に対象範囲全体を検証します。
"""
from chip8_core.core.snapshot import Operation
from chip8_core.transport.bus import Bus
from chip8_core.arch.chip8.state import Chip8CpuState, FONT_GLYPH_SIZE
from .base import ExecutionContext, op_fields

# --- LD Vx, byte (6XNN) ---
def execute_ld_imm(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    f = op_fields(op)
    state.v[f.x] = f.nn

# --- LD I, addr (ANNN) ---
def execute_ld_i(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    state.i = op_fields(op).nnn

# --- LD Vx, DT (FX07) ---
def execute_ld_vx_dt(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    state.v[op_fields(op).x] = state.delay_timer

# --- LD Vx, K (FX0A) ---
# @intent:responsibility 新たなキー押下が観測されるまで同じ命令を繰り返し実行させます。
# @intent:rationale ブロッキング呼び出しではなく、PCを巻き戻すだけの協調的ポーリングとして実装します。
#                  これにより駆動ループはステップ間でタイマー減算や入力ポーリングを行えます。
def execute_ld_vx_k(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    if not state.waiting_for_key:
        ctx.keypad.begin_wait()
        state.waiting_for_key = True

    key = ctx.keypad.take_press()
    if key is None:
        state.pc = (state.pc - op.length) & 0xFFFF
        return

    state.v[op_fields(op).x] = key
    state.waiting_for_key = False

# --- LD DT, Vx (FX15) ---
def execute_ld_dt_vx(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    state.delay_timer = state.v[op_fields(op).x]

# --- LD ST, Vx (FX18) ---
def execute_ld_st_vx(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    state.sound_timer = state.v[op_fields(op).x]

# --- ADD I, Vx (FX1E) ---
def execute_add_i(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    state.i = (state.i + state.v[op_fields(op).x]) & 0xFFFF

# --- LD F, Vx (FX29) ---
# @intent:responsibility Vxの下位4ビットに対応するフォントグリフのアドレスをIに設定します。
def execute_ld_f(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    digit = state.v[op_fields(op).x] & 0xF
    state.i = (ctx.font_address + digit * FONT_GLYPH_SIZE) & 0xFFFF

# --- LD B, Vx (FX33) ---
def execute_ld_b(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    value = state.v[op_fields(op).x]
    bus.check_range(state.i, 3)
    bus.write(state.i, value // 100)
    bus.write(state.i + 1, (value // 10) % 10)
    bus.write(state.i + 2, value % 10)

# --- LD [I], Vx (FX55) ---
# @intent:rationale Iは変更しません。
def execute_store_regs(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    x = op_fields(op).x
    bus.check_range(state.i, x + 1)
    for offset in range(x + 1):
        bus.write(state.i + offset, state.v[offset])

# --- LD Vx, [I] (FX65) ---
def execute_load_regs(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    x = op_fields(op).x
    bus.check_range(state.i, x + 1)
    values = [bus.read(state.i + offset) for offset in range(x + 1)]
    state.v[:x + 1] = values
