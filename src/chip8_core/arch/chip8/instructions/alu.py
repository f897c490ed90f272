# src/chip8_core/arch/chip8/instructions/alu.py
"""
算術論理演算命令の実装。

フラグを出力する命令は、実行前の入力値から結果とフラグを計算し、
Vxを書き込んだ後にVFを書き込みます（x == F の場合はフラグが残ります）。
"""
from chip8_core.core.snapshot import Operation
from chip8_core.transport.bus import Bus
from chip8_core.arch.chip8.state import Chip8CpuState
from .base import ExecutionContext, op_fields

def _store_with_flag(state: Chip8CpuState, x: int, result: int, flag: int) -> None:
    state.v[x] = result & 0xFF
    state.vf = flag

# --- ADD Vx, byte (7XNN) ---
# @intent:rationale 8ビットで折り返し、VFは変更しません。
def execute_add_imm(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    f = op_fields(op)
    state.v[f.x] = (state.v[f.x] + f.nn) & 0xFF

# --- LD Vx, Vy (8XY0) ---
def execute_ld_reg(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    f = op_fields(op)
    state.v[f.x] = state.v[f.y]

# --- OR / AND / XOR (8XY1-8XY3) ---
def execute_or(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    f = op_fields(op)
    state.v[f.x] |= state.v[f.y]

def execute_and(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    f = op_fields(op)
    state.v[f.x] &= state.v[f.y]

def execute_xor(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    f = op_fields(op)
    state.v[f.x] ^= state.v[f.y]

# --- ADD Vx, Vy (8XY4) ---
def execute_add_reg(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    f = op_fields(op)
    res = state.v[f.x] + state.v[f.y]
    _store_with_flag(state, f.x, res, 1 if res > 0xFF else 0)

# --- SUB Vx, Vy (8XY5) ---
# @intent:rationale VF = NOT borrow。Vx >= Vy の場合に1となります。
def execute_sub(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    f = op_fields(op)
    vx, vy = state.v[f.x], state.v[f.y]
    _store_with_flag(state, f.x, vx - vy, 1 if vx >= vy else 0)

# --- SHR Vx (8XY6) ---
def execute_shr(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    f = op_fields(op)
    vx = state.v[f.x]
    _store_with_flag(state, f.x, vx >> 1, vx & 1)

# --- SUBN Vx, Vy (8XY7) ---
def execute_subn(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    f = op_fields(op)
    vx, vy = state.v[f.x], state.v[f.y]
    _store_with_flag(state, f.x, vy - vx, 1 if vy >= vx else 0)

# --- SHL Vx (8XYE) ---
def execute_shl(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    f = op_fields(op)
    vx = state.v[f.x]
    _store_with_flag(state, f.x, vx << 1, 1 if vx & 0x80 else 0)

# --- RND Vx, byte (CXNN) ---
def execute_rnd(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    f = op_fields(op)
    state.v[f.x] = ctx.random.next_byte() & f.nn
