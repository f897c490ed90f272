import unittest
from chip8_core.transport.bus import Bus, RAM
from chip8_core.arch.chip8.cpu import Chip8Cpu
from chip8_core.peripherals.random_source import RandomSource

class FixedRandomSource(RandomSource):
    def __init__(self, value):
        self.value = value

    def next_byte(self) -> int:
        return self.value

class TestChip8AluInstructions(unittest.TestCase):
    def setUp(self):
        self.bus = Bus()
        self.bus.register_device(0x0000, 0x0FFF, RAM(0x1000))
        self.cpu = Chip8Cpu(self.bus, random_source=FixedRandomSource(0xAB))
        self.state = self.cpu.get_state()

    def _execute(self, opcode, current_pc=0x200):
        self.bus.load(current_pc, opcode >> 8)
        self.bus.load(current_pc + 1, opcode & 0xFF)
        self.state.pc = current_pc
        return self.cpu.step()

    def test_ld_imm(self):
        self._execute(0x6A12)
        self.assertEqual(self.state.v[0xA], 0x12)
        self.assertEqual(self.state.pc, 0x202)

    def test_add_imm_wraps_and_keeps_flag(self):
        self.state.v[0xA] = 0x02
        self.state.vf = 7
        self._execute(0x7AFF)
        self.assertEqual(self.state.v[0xA], 0x01)
        self.assertEqual(self.state.vf, 7)
        self.assertEqual(self.state.pc, 0x202)

    def test_ld_reg(self):
        self.state.v[1] = 0x33
        self._execute(0x8010)
        self.assertEqual(self.state.v[0], 0x33)
        self.assertEqual(self.state.pc, 0x202)

    def test_or_and_xor(self):
        self.state.v[0] = 0b1100
        self.state.v[1] = 0b1010
        self._execute(0x8011)
        self.assertEqual(self.state.v[0], 0b1110)

        self.state.v[0] = 0b1100
        self._execute(0x8012)
        self.assertEqual(self.state.v[0], 0b1000)

        self.state.v[0] = 0b1100
        self._execute(0x8013)
        self.assertEqual(self.state.v[0], 0b0110)
        self.assertEqual(self.state.pc, 0x202)

    def test_add_reg_with_carry(self):
        self.state.v[0] = 250
        self.state.v[1] = 10
        self._execute(0x8014)
        self.assertEqual(self.state.v[0], 4)
        self.assertEqual(self.state.vf, 1)

    def test_add_reg_without_carry(self):
        self.state.v[0] = 1
        self.state.v[1] = 2
        self.state.vf = 1
        self._execute(0x8014)
        self.assertEqual(self.state.v[0], 3)
        self.assertEqual(self.state.vf, 0)

    def test_sub_no_borrow(self):
        self.state.v[0] = 10
        self.state.v[1] = 3
        self._execute(0x8015)
        self.assertEqual(self.state.v[0], 7)
        self.assertEqual(self.state.vf, 1)

    def test_sub_with_borrow(self):
        self.state.v[0] = 3
        self.state.v[1] = 10
        self._execute(0x8015)
        self.assertEqual(self.state.v[0], 249)
        self.assertEqual(self.state.vf, 0)

    def test_sub_equal_values(self):
        self.state.v[0] = 9
        self.state.v[1] = 9
        self._execute(0x8015)
        self.assertEqual(self.state.v[0], 0)
        self.assertEqual(self.state.vf, 1)

    def test_subn(self):
        self.state.v[0] = 3
        self.state.v[1] = 10
        self._execute(0x8017)
        self.assertEqual(self.state.v[0], 7)
        self.assertEqual(self.state.vf, 1)

        self.state.v[0] = 10
        self.state.v[1] = 3
        self._execute(0x8017)
        self.assertEqual(self.state.v[0], 249)
        self.assertEqual(self.state.vf, 0)

    def test_shr(self):
        self.state.v[0] = 0b00000011
        self._execute(0x8006)
        self.assertEqual(self.state.v[0], 0b00000001)
        self.assertEqual(self.state.vf, 1)

        self.state.v[0] = 0b00000010
        self._execute(0x8006)
        self.assertEqual(self.state.v[0], 0b00000001)
        self.assertEqual(self.state.vf, 0)

    def test_shl(self):
        self.state.v[0] = 0x81
        self._execute(0x800E)
        self.assertEqual(self.state.v[0], 0x02)
        self.assertEqual(self.state.vf, 1)

        self.state.v[0] = 0x40
        self._execute(0x800E)
        self.assertEqual(self.state.v[0], 0x80)
        self.assertEqual(self.state.vf, 0)

    def test_flag_wins_when_target_is_vf(self):
        self.state.vf = 200
        self.state.v[1] = 100
        self._execute(0x8F14)
        self.assertEqual(self.state.vf, 1)

    def test_rnd_masks_random_byte(self):
        self._execute(0xC00F)
        self.assertEqual(self.state.v[0], 0x0B)
        self._execute(0xC0F0)
        self.assertEqual(self.state.v[0], 0xA0)

if __name__ == '__main__':
    unittest.main()
