from typing import Optional, Tuple

from chip8_core.transport.bus import Bus, RAM
from chip8_core.arch.chip8.cpu import Chip8Cpu
from chip8_core.driver.runner import Runner
from chip8_core.loader.loader import RomLoader
from chip8_core.peripherals.display import DisplaySink
from chip8_core.peripherals.keypad import InputSource
from chip8_core.peripherals.random_source import SystemRandomSource
from chip8_core.peripherals.timer import TimerClock
from .models import SystemConfig, CpuInitialState

# @intent:responsibility システム構成（Config）に基づいて、Bus、RAM、デバイス、CPUを生成・接続し、初期状態を適用します。
class SystemBuilder:
    def build_system(self,
                     config: SystemConfig,
                     display: Optional[DisplaySink] = None,
                     keypad: Optional[InputSource] = None) -> Tuple[Chip8Cpu, Bus]:
        bus = Bus()
        bus.register_device(0x0000, config.memory_size - 1, RAM(config.memory_size))

        loader = RomLoader()
        loader.load_font(bus, config.font_address)
        if config.rom_path:
            loader.load_rom(config.rom_path, bus, config.program_start)

        cpu = Chip8Cpu(
            bus,
            display=display,
            keypad=keypad,
            random_source=SystemRandomSource(config.random_seed),
            program_start=config.program_start,
            stack_depth=config.stack_depth,
            font_address=config.font_address,
        )

        self.apply_initial_state(cpu, config.initial_state)
        return cpu, bus

    def build_runner(self, config: SystemConfig, cpu: Chip8Cpu) -> Runner:
        timer_clock = TimerClock(cpu.get_state, config.timer_hz)
        return Runner(cpu, timer_clock, config.cycles_per_frame)

    # @intent:responsibility Configで定義された初期状態をCPUに適用します。
    # @intent:rationale v0..vf は V レジスタ配列へ、それ以外は同名の属性へ設定します。未知の名前は警告して無視します。
    def apply_initial_state(self, cpu: Chip8Cpu, config_state: CpuInitialState) -> None:
        cpu.reset()
        state = cpu.get_state()

        if config_state.pc is not None:
            state.pc = config_state.pc

        for reg_name, value in config_state.registers.items():
            if len(reg_name) == 2 and reg_name[0] == "v" and reg_name[1] in "0123456789abcdef":
                state.v[int(reg_name[1], 16)] = value & 0xFF
            elif reg_name == "i":
                state.i = value & 0xFFFF
            elif reg_name in ("delay_timer", "sound_timer"):
                setattr(state, reg_name, value & 0xFF)
            else:
                print(f"Warning: Unknown register '{reg_name}' in initial_state, ignored")
