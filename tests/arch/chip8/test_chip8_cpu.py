# tests/arch/chip8/test_chip8_cpu.py
"""
Chip8Cpu の命令サイクル全体（フェッチ、デコード、ディスパッチ、状態更新）の検証。
"""
import copy
import pytest

from chip8_core.common.errors import AddressOutOfBounds, InvalidOpcode
from chip8_core.transport.bus import Bus, RAM
from chip8_core.arch.chip8.cpu import Chip8Cpu
from chip8_core.arch.chip8.state import MEMORY_SIZE, PROGRAM_START, Chip8CpuState
from chip8_core.arch.chip8.instructions.base import read_word, write_word
from chip8_core.loader.loader import RomLoader

# @intent:test_suite 実行エンジンの外部から観測可能な性質を検証します。

@pytest.fixture
def machine():
    bus = Bus()
    bus.register_device(0x0000, MEMORY_SIZE - 1, RAM(MEMORY_SIZE))
    cpu = Chip8Cpu(bus)
    return cpu, bus

def _memory(bus):
    return bytes(bus.peek(addr) for addr in range(MEMORY_SIZE))

class TestInitialState:
    def test_initial_state(self, machine):
        cpu, _ = machine
        state = cpu.get_state()
        assert isinstance(state, Chip8CpuState)
        assert state.pc == PROGRAM_START
        assert state.v == [0] * 16
        assert state.i == 0
        assert state.sp == 0
        assert state.delay_timer == 0 and state.sound_timer == 0
        assert not state.waiting_for_key

    def test_reset(self, machine):
        cpu, _ = machine
        cpu.get_state().v[3] = 9
        cpu.get_state().pc = 0x400
        cpu.reset()
        assert cpu.get_state().v[3] == 0
        assert cpu.get_state().pc == PROGRAM_START

    def test_register_map(self, machine):
        cpu, _ = machine
        cpu.get_state().v[0xF] = 1
        registers = cpu.get_register_map()
        assert registers["VF"] == 1
        assert registers["PC"] == PROGRAM_START
        assert set(registers) >= {"V0", "VF", "I", "SP", "DT", "ST"}

class TestMemoryAddressing:
    @pytest.mark.parametrize("address", [0x000, 0x200, 0x7FF, MEMORY_SIZE - 2])
    def test_word_round_trip(self, machine, address):
        _, bus = machine
        write_word(bus, address, 0xBEEF)
        assert read_word(bus, address) == 0xBEEF
        assert bus.peek(address) == 0xBE
        assert bus.peek(address + 1) == 0xEF

    def test_word_write_past_end_is_rejected(self, machine):
        _, bus = machine
        with pytest.raises(AddressOutOfBounds):
            write_word(bus, MEMORY_SIZE - 1, 0xBEEF)
        assert bus.peek(MEMORY_SIZE - 1) == 0

    def test_fetch_at_last_byte_fails(self, machine):
        cpu, bus = machine
        cpu.get_state().pc = MEMORY_SIZE - 1
        before = copy.deepcopy(cpu.get_state())
        with pytest.raises(AddressOutOfBounds):
            cpu.step()
        assert cpu.get_state() == before

class TestDispatch:
    # @intent:test_case_invalid_opcode 未定義命令が全ての状態を変更せずに失敗することを検証します。
    def test_invalid_opcode_leaves_state_unchanged(self, machine):
        cpu, bus = machine
        state = cpu.get_state()
        state.v[0] = 1
        state.v[1] = 2
        state.i = 0x345
        write_word(bus, PROGRAM_START, 0x9001)
        state_before = copy.deepcopy(state)
        memory_before = _memory(bus)

        with pytest.raises(InvalidOpcode) as excinfo:
            cpu.step()

        assert excinfo.value.opcode == 0x9001
        assert cpu.get_state() == state_before
        assert _memory(bus) == memory_before

    def test_step_snapshot(self, machine):
        cpu, bus = machine
        write_word(bus, PROGRAM_START, 0x6A12)
        snapshot = cpu.step()
        assert snapshot.operation.opcode_hex == "6A12"
        assert snapshot.metadata.symbol_info == "LD VA, #$12"
        assert snapshot.state.v[0xA] == 0x12
        assert len(snapshot.bus_activity) == 2

    # @intent:test_case_program 小さなループプログラムが最後まで実行されることを検証します。
    def test_counting_loop_program(self, machine):
        cpu, bus = machine
        program = bytes([
            0x60, 0x05,  # 200: LD V0, 5
            0x61, 0x00,  # 202: LD V1, 0
            0x71, 0x01,  # 204: ADD V1, 1
            0x50, 0x10,  # 206: SE V0, V1
            0x12, 0x04,  # 208: JP 204
            0x12, 0x0A,  # 20A: JP 20A
        ])
        RomLoader().load_bytes(program, bus)

        for _ in range(100):
            if cpu.get_state().pc == 0x20A:
                break
            cpu.step()

        assert cpu.get_state().pc == 0x20A
        assert cpu.get_state().v[1] == 5

    def test_nested_calls_respect_stack_depth(self):
        bus = Bus()
        bus.register_device(0x0000, MEMORY_SIZE - 1, RAM(MEMORY_SIZE))
        cpu = Chip8Cpu(bus, stack_depth=2)
        # 200: CALL 300 / 300: CALL 400 / 400: CALL 500
        write_word(bus, 0x200, 0x2300)
        write_word(bus, 0x300, 0x2400)
        write_word(bus, 0x400, 0x2500)

        cpu.step()
        cpu.step()
        with pytest.raises(AddressOutOfBounds):
            cpu.step()
        assert cpu.get_state().pc == 0x400
        assert cpu.get_state().stack == [0x202, 0x302]

    def test_custom_program_start(self):
        bus = Bus()
        bus.register_device(0x0000, MEMORY_SIZE - 1, RAM(MEMORY_SIZE))
        cpu = Chip8Cpu(bus, program_start=0x600)
        assert cpu.get_state().pc == 0x600
