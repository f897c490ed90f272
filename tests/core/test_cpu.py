# tests/core/test_cpu.py
"""
chip8_core.core.cpuモジュールの単体テスト。
"""
import pytest
from typing import Dict, List, Tuple

from chip8_core.common.errors import AddressOutOfBounds, InvalidOpcode
from chip8_core.core.state import CpuState
from chip8_core.core.cpu import AbstractCpu
from chip8_core.core.snapshot import Snapshot, Operation
from chip8_core.transport.bus import Bus, RAM, BusAccessType

# @intent:test_suite 抽象CPUの命令サイクル（Template Method）と失敗時の状態保全を検証します。

class DummyCpu(AbstractCpu):
    """
    1バイト命令のテスト用CPU。
    0x00: 0x20番地に0xFFを書き込む / 0x01: 実行時に範囲外エラー / それ以外: 未定義命令
    """
    def __init__(self, bus: Bus, initial_pc: int = 0x0000):
        self._initial_pc = initial_pc
        super().__init__(bus)

    def _create_initial_state(self) -> CpuState:
        return CpuState(pc=self._initial_pc)

    def _fetch(self) -> int:
        return self._bus.read(self._state.pc)

    def _decode(self, opcode: int) -> Operation:
        if opcode == 0x00:
            return Operation(opcode_hex="00", mnemonic="POKE", operands=["$20"], length=1)
        if opcode == 0x01:
            return Operation(opcode_hex="01", mnemonic="FAIL", length=1)
        raise InvalidOpcode(opcode)

    def _execute(self, operation: Operation) -> None:
        if operation.mnemonic == "FAIL":
            raise AddressOutOfBounds("boom", 0xFFFF)
        self._bus.write(0x0020, 0xFF)

    def get_register_map(self) -> Dict[str, int]:
        return {"PC": self._state.pc, "SP": self._state.sp}

    def disassemble(self, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
        return [(start_addr + i, "00", "POKE $20") for i in range(length)]

class TestCpuState:
    def test_cpu_state_init_default(self):
        state = CpuState()
        assert state.pc == 0x0000
        assert state.sp == 0x0000

    def test_cpu_state_mutability(self):
        state = CpuState()
        state.pc = 0x1000
        assert state.pc == 0x1000

class TestAbstractCpu:
    @pytest.fixture
    def setup_cpu(self):
        bus = Bus()
        ram = RAM(256)
        bus.register_device(0x0000, 0x00FF, ram)
        cpu = DummyCpu(bus, initial_pc=0x0010)
        return cpu, bus, ram

    def test_abstract_cpu_reset(self, setup_cpu):
        cpu, _, _ = setup_cpu
        cpu.get_state().pc = 0x00AA
        cpu.reset()
        assert cpu.get_state().pc == 0x0010

    def test_abstract_cpu_step(self, setup_cpu):
        cpu, bus, ram = setup_cpu
        bus.load(0x0010, 0x00)

        snapshot = cpu.step()

        assert cpu.get_state().pc == 0x0011
        assert isinstance(snapshot, Snapshot)
        assert snapshot.state == cpu.get_state()
        assert snapshot.metadata.cycle_count == 1
        assert snapshot.metadata.symbol_info == "POKE $20"

        assert len(snapshot.bus_activity) == 2
        assert snapshot.bus_activity[0].address == 0x0010
        assert snapshot.bus_activity[0].access_type == BusAccessType.READ
        assert snapshot.bus_activity[1].address == 0x0020
        assert snapshot.bus_activity[1].data == 0xFF
        assert snapshot.bus_activity[1].access_type == BusAccessType.WRITE

    # @intent:test_case_snapshot_copy スナップショットの状態が以降のステップの影響を受けないことを検証します。
    def test_snapshot_state_is_a_copy(self, setup_cpu):
        cpu, bus, _ = setup_cpu
        snapshot = cpu.step()
        cpu.get_state().pc = 0x0080
        assert snapshot.state.pc == 0x0011

    def test_cycle_count_accumulates(self, setup_cpu):
        cpu, _, _ = setup_cpu
        cpu.step()
        snapshot = cpu.step()
        assert snapshot.metadata.cycle_count == 2

    # @intent:test_case_invalid_opcode デコード失敗時にPCが変化しないことを検証します。
    def test_invalid_opcode_leaves_pc(self, setup_cpu):
        cpu, bus, _ = setup_cpu
        bus.load(0x0010, 0x7F)
        with pytest.raises(InvalidOpcode):
            cpu.step()
        assert cpu.get_state().pc == 0x0010

    # @intent:test_case_rollback 実行中の失敗でPCが元に戻ることを検証します。
    def test_execute_failure_restores_pc(self, setup_cpu):
        cpu, bus, _ = setup_cpu
        bus.load(0x0010, 0x01)
        with pytest.raises(AddressOutOfBounds):
            cpu.step()
        assert cpu.get_state().pc == 0x0010

    def test_fetch_failure(self, setup_cpu):
        cpu, _, _ = setup_cpu
        cpu.get_state().pc = 0x0100
        with pytest.raises(AddressOutOfBounds):
            cpu.step()
        assert cpu.get_state().pc == 0x0100
