# chip8_core/common/errors.py
"""
エンジン全体で共通の例外定義。

ステップ実行を中断させる失敗は AddressOutOfBounds と InvalidOpcode の2種類のみです。
どちらも状態を変更する前に検出され、駆動ループ側に停止条件として伝えられます。
"""

# @intent:responsibility エンジン固有の例外の基底クラスです。
class Chip8Error(Exception):
    pass

# @intent:responsibility メモリ範囲外（またはスタック範囲外）へのアクセスを表します。
# @intent:rationale 従来のバス実装が IndexError を送出していたため、その互換性を保つ目的で多重継承します。
class AddressOutOfBounds(Chip8Error, IndexError):
    def __init__(self, message: str, address: int = 0):
        super().__init__(message)
        self.address = address

# @intent:responsibility どのパターンにも一致しない命令語を表します。
class InvalidOpcode(Chip8Error, ValueError):
    def __init__(self, opcode: int):
        super().__init__(f"Invalid opcode {opcode:#06x}")
        self.opcode = opcode
