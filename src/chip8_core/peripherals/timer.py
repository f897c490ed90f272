# chip8_core/peripherals/timer.py
"""
遅延タイマー/サウンドタイマーを固定レートで減算する外部クロック。

命令実行のスループットとは独立したスケジュールで駆動されます。
コアはタイマー値の読み書きのみを行い、減算はこのクラスの責務です。
"""
from typing import Callable

from chip8_core.arch.chip8.state import Chip8CpuState

TIMER_HZ = 60

# @intent:responsibility 経過時間をタイマーのティック数に変換し、両タイマーを減算します。
# @intent:rationale CPUのreset()で状態オブジェクトが差し替わるため、状態そのものではなく取得関数を保持します。
class TimerClock:
    def __init__(self, state_provider: Callable[[], Chip8CpuState], rate_hz: int = TIMER_HZ):
        if rate_hz <= 0:
            raise ValueError("Timer rate must be a positive integer.")
        self._state_provider = state_provider
        self._rate_hz = rate_hz
        self._accumulator = 0.0
        self.tick_count = 0

    @property
    def rate_hz(self) -> int:
        return self._rate_hz

    def tick(self) -> None:
        state = self._state_provider()
        if state.delay_timer > 0:
            state.delay_timer -= 1
        if state.sound_timer > 0:
            state.sound_timer -= 1
        self.tick_count += 1

    def advance(self, seconds: float) -> int:
        """
        経過時間（秒）を加算し、その間に発生したティック数だけ減算します。
        端数は次回に持ち越します。実行したティック数を返します。
        """
        if seconds < 0:
            raise ValueError("Elapsed time must not be negative.")
        self._accumulator += seconds * self._rate_hz
        ticks = int(self._accumulator)
        self._accumulator -= ticks
        for _ in range(ticks):
            self.tick()
        return ticks

    @property
    def sound_active(self) -> bool:
        return self._state_provider().sound_timer > 0
