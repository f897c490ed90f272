# chip8_core/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1命令実行後のCPUとバスの状態を記録した不変のデータ構造を定義します。
"""
from dataclasses import dataclass, field
from typing import List, Optional

from chip8_core.core.state import CpuState
from chip8_core.transport.bus import BusAccess


# @intent:responsibility デコードされた命令の詳細を記録します。
@dataclass(frozen=True)
class Operation:
    """
    命令の詳細（HEX、ニーモニック、オペランド）を記録するデータクラス。
    """
    opcode_hex: str # 例: "A2F0"
    mnemonic: str # 例: "LD"
    operands: List[str] = field(default_factory=list) # 例: ["I", "$2F0"]
    operand_bytes: List[int] = field(default_factory=list) # 命令語の生バイト
    cycle_count: int = 1
    length: int = 2 # 命令のバイト長

    @property
    def opcode(self) -> int:
        return int(self.opcode_hex, 16)

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True)
class Metadata:
    cycle_count: int
    symbol_info: Optional[str] = None # 例: "DRW V0, V1, 5"

# @intent:responsibility ある一時点におけるCPUとバスの状態を不変に記録します。
@dataclass(frozen=True)
class Snapshot:
    """
    1命令実行直後の、CPUとバスの状態を記録した不変のデータ構造。
    stateは実行後の状態のコピーであり、以降のステップの影響を受けません。
    """
    state: CpuState
    operation: Operation
    metadata: Metadata
    bus_activity: List[BusAccess] = field(default_factory=list)
