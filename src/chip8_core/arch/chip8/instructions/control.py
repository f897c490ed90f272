# src/chip8_core/arch/chip8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ）の実装。

実行時点でPCは既に次の命令（元のPC+2）を指しています。
"""
from chip8_core.core.snapshot import Operation
from chip8_core.transport.bus import Bus
from chip8_core.arch.chip8.state import Chip8CpuState
from .base import ExecutionContext, op_fields, push, pop, skip_if

# --- RET (00EE) ---
def execute_ret(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    state.pc = pop(state)

# --- JP addr (1NNN) ---
def execute_jp(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    state.pc = op_fields(op).nnn

# --- CALL addr (2NNN) ---
# @intent:responsibility 戻りアドレス（元のPC+2）をプッシュしてからジャンプします。
def execute_call(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    push(state, state.pc)
    state.pc = op_fields(op).nnn

# --- JP V0, addr (BNNN) ---
def execute_jp_v0(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    state.pc = (state.v[0] + op_fields(op).nnn) & 0xFFFF

# --- SE Vx, byte (3XNN) ---
def execute_se_imm(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    f = op_fields(op)
    skip_if(state, state.v[f.x] == f.nn)

# --- SNE Vx, byte (4XNN) ---
def execute_sne_imm(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    f = op_fields(op)
    skip_if(state, state.v[f.x] != f.nn)

# --- SE Vx, Vy (5XY0) ---
def execute_se_reg(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    f = op_fields(op)
    skip_if(state, state.v[f.x] == state.v[f.y])

# --- SNE Vx, Vy (9XY0) ---
def execute_sne_reg(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    f = op_fields(op)
    skip_if(state, state.v[f.x] != state.v[f.y])

# --- SKP Vx (EX9E) ---
# @intent:rationale キー番号はVxの下位4ビットを使用します。
def execute_skp(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    f = op_fields(op)
    skip_if(state, ctx.keypad.is_pressed(state.v[f.x] & 0xF))

# --- SKNP Vx (EXA1) ---
def execute_sknp(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    f = op_fields(op)
    skip_if(state, not ctx.keypad.is_pressed(state.v[f.x] & 0xF))
