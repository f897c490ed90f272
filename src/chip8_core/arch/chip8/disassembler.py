# src/chip8_core/arch/chip8/disassembler.py
"""
CHIP-8 Disassembler

メモリ上のバイナリデータを解析し、ニーモニックに変換します。
デコードロジックを再利用しますが、バスアクセスログを汚さないように peek を使用します。
"""
from typing import List, Tuple

from chip8_core.common.errors import InvalidOpcode
from chip8_core.transport.bus import Bus
from chip8_core.arch.chip8.instructions import decode_opcode

# @intent:responsibility 指定されたメモリ範囲を逆アセンブルし、表示用データを生成します。
def disassemble(bus: Bus, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
    """
    指定された範囲のメモリを2バイト単位で逆アセンブルします。
    どの命令にも一致しない語は "DW $XXXX" として出力します。

    Returns:
        List of (address, hex_bytes, mnemonic) tuples.
    """
    result = []
    current_addr = start_addr
    end_addr = start_addr + length

    while current_addr + 1 < end_addr:
        # 末尾の端数バイトやマップ外に到達したら終了
        if not (bus.is_mapped(current_addr) and bus.is_mapped(current_addr + 1)):
            break

        high = bus.peek(current_addr)
        low = bus.peek(current_addr + 1)
        opcode = (high << 8) | low
        hex_bytes = f"{high:02X} {low:02X}"

        try:
            operation = decode_opcode(opcode)
        except InvalidOpcode:
            result.append((current_addr, hex_bytes, f"DW ${opcode:04X}"))
        else:
            mnemonic_str = operation.mnemonic
            if operation.operands:
                mnemonic_str += " " + ", ".join(operation.operands)
            result.append((current_addr, hex_bytes, mnemonic_str))

        current_addr += 2

    return result
