# src/chip8_core/arch/chip8/instructions/maps.py
"""
命令語パターンと命令実装のマッピング定義。

各パターンは (mask, match) の組で、`opcode & mask == match` のとき一致します。
"""
from typing import Callable, List, NamedTuple, Optional

from . import alu
from . import control
from . import display
from . import load

# @intent:data_structure 1つの命令パターン。operandsは Fields の値で展開される書式文字列です。
class Pattern(NamedTuple):
    mask: int
    match: int
    mnemonic: str
    operands: List[str]
    executor: Callable

    @property
    def specificity(self) -> int:
        return bin(self.mask).count("1")

    def matches(self, opcode: int) -> bool:
        return (opcode & self.mask) == self.match

# @intent:map 全命令パターンのテーブル。どの2つのパターンも同時に一致しません。
PATTERN_TABLE: List[Pattern] = [
    # Display / Control
    Pattern(0xFFFF, 0x00E0, "CLS", [], display.execute_cls),
    Pattern(0xFFFF, 0x00EE, "RET", [], control.execute_ret),
    Pattern(0xF000, 0x1000, "JP", ["${nnn:03X}"], control.execute_jp),
    Pattern(0xF000, 0x2000, "CALL", ["${nnn:03X}"], control.execute_call),
    Pattern(0xF000, 0x3000, "SE", ["V{x:X}", "#${nn:02X}"], control.execute_se_imm),
    Pattern(0xF000, 0x4000, "SNE", ["V{x:X}", "#${nn:02X}"], control.execute_sne_imm),
    Pattern(0xF00F, 0x5000, "SE", ["V{x:X}", "V{y:X}"], control.execute_se_reg),
    Pattern(0xF00F, 0x9000, "SNE", ["V{x:X}", "V{y:X}"], control.execute_sne_reg),
    Pattern(0xF000, 0xB000, "JP", ["V0", "${nnn:03X}"], control.execute_jp_v0),
    Pattern(0xF0FF, 0xE09E, "SKP", ["V{x:X}"], control.execute_skp),
    Pattern(0xF0FF, 0xE0A1, "SKNP", ["V{x:X}"], control.execute_sknp),

    # Load
    Pattern(0xF000, 0x6000, "LD", ["V{x:X}", "#${nn:02X}"], load.execute_ld_imm),
    Pattern(0xF000, 0xA000, "LD", ["I", "${nnn:03X}"], load.execute_ld_i),
    Pattern(0xF0FF, 0xF007, "LD", ["V{x:X}", "DT"], load.execute_ld_vx_dt),
    Pattern(0xF0FF, 0xF00A, "LD", ["V{x:X}", "K"], load.execute_ld_vx_k),
    Pattern(0xF0FF, 0xF015, "LD", ["DT", "V{x:X}"], load.execute_ld_dt_vx),
    Pattern(0xF0FF, 0xF018, "LD", ["ST", "V{x:X}"], load.execute_ld_st_vx),
    Pattern(0xF0FF, 0xF01E, "ADD", ["I", "V{x:X}"], load.execute_add_i),
    Pattern(0xF0FF, 0xF029, "LD", ["F", "V{x:X}"], load.execute_ld_f),
    Pattern(0xF0FF, 0xF033, "LD", ["B", "V{x:X}"], load.execute_ld_b),
    Pattern(0xF0FF, 0xF055, "LD", ["[I]", "V{x:X}"], load.execute_store_regs),
    Pattern(0xF0FF, 0xF065, "LD", ["V{x:X}", "[I]"], load.execute_load_regs),

    # ALU
    Pattern(0xF000, 0x7000, "ADD", ["V{x:X}", "#${nn:02X}"], alu.execute_add_imm),
    Pattern(0xF00F, 0x8000, "LD", ["V{x:X}", "V{y:X}"], alu.execute_ld_reg),
    Pattern(0xF00F, 0x8001, "OR", ["V{x:X}", "V{y:X}"], alu.execute_or),
    Pattern(0xF00F, 0x8002, "AND", ["V{x:X}", "V{y:X}"], alu.execute_and),
    Pattern(0xF00F, 0x8003, "XOR", ["V{x:X}", "V{y:X}"], alu.execute_xor),
    Pattern(0xF00F, 0x8004, "ADD", ["V{x:X}", "V{y:X}"], alu.execute_add_reg),
    Pattern(0xF00F, 0x8005, "SUB", ["V{x:X}", "V{y:X}"], alu.execute_sub),
    Pattern(0xF00F, 0x8006, "SHR", ["V{x:X}"], alu.execute_shr),
    Pattern(0xF00F, 0x8007, "SUBN", ["V{x:X}", "V{y:X}"], alu.execute_subn),
    Pattern(0xF00F, 0x800E, "SHL", ["V{x:X}"], alu.execute_shl),
    Pattern(0xF000, 0xC000, "RND", ["V{x:X}", "#${nn:02X}"], alu.execute_rnd),

    # Display
    Pattern(0xF000, 0xD000, "DRW", ["V{x:X}", "V{y:X}", "{n}"], display.execute_drw),
]

# @intent:rationale 最も具体的な（マスクのビット数が多い）パターンを優先して照合します。
_LOOKUP_ORDER = sorted(PATTERN_TABLE, key=lambda p: p.specificity, reverse=True)

# 上位ニブルごとの候補リスト
_BY_GROUP = {
    group: [p for p in _LOOKUP_ORDER if (group << 12) & p.mask == p.match & 0xF000]
    for group in range(0x10)
}

# @intent:responsibility 命令語に一致するパターンを返します。一致しなければ None を返します。
def find_pattern(opcode: int) -> Optional[Pattern]:
    for pattern in _BY_GROUP[(opcode >> 12) & 0xF]:
        if pattern.matches(opcode):
            return pattern
    return None

# @intent:utility_function 2つのパターンが同じ命令語に同時に一致し得るかを判定します。
def patterns_overlap(a: Pattern, b: Pattern) -> bool:
    common = a.mask & b.mask
    return (a.match & common) == (b.match & common)
