# chip8_core/driver/runner.py
"""
駆動ループモジュール。

CPUの命令ステップとタイマーのティックを交互に進め、ステップが失敗した場合や
PCブレークポイントに到達した場合に実行を停止させる責務を負います。
コア自体はエラーをログ出力も再試行もしないため、報告はこの層で行います。
"""
from typing import List, Optional

from chip8_core.common.errors import Chip8Error
from chip8_core.arch.chip8.cpu import Chip8Cpu
from chip8_core.core.snapshot import Snapshot
from chip8_core.peripherals.timer import TimerClock

# @intent:responsibility 命令実行とタイマー減算のスケジュールを所有し、停止条件を管理します。
class Runner:
    """
    1フレーム = cycles_per_frame 命令 + タイマー1ティック として実行を進めるクラス。
    """
    def __init__(self, cpu: Chip8Cpu, timer_clock: TimerClock, cycles_per_frame: int = 10):
        if cycles_per_frame <= 0:
            raise ValueError("cycles_per_frame must be a positive integer.")
        self._cpu = cpu
        self._timer_clock = timer_clock
        self._cycles_per_frame = cycles_per_frame
        self._breakpoints: List[int] = []
        self._running: bool = False
        self._last_snapshot: Optional[Snapshot] = None
        self.last_error: Optional[Chip8Error] = None
        self.frame_count: int = 0

    def add_breakpoint(self, pc: int) -> None:
        if pc not in self._breakpoints:
            self._breakpoints.append(pc)

    def remove_breakpoint(self, pc: int) -> None:
        if pc in self._breakpoints:
            self._breakpoints.remove(pc)

    def get_breakpoints(self) -> List[int]:
        return list(self._breakpoints)

    def get_last_snapshot(self) -> Optional[Snapshot]:
        return self._last_snapshot

    @property
    def is_running(self) -> bool:
        return self._running

    # @intent:responsibility 1命令を実行します。失敗した場合は例外を呼び出し元にそのまま伝えます。
    def step_instruction(self) -> Snapshot:
        snapshot = self._cpu.step()
        self._last_snapshot = snapshot
        return snapshot

    # @intent:responsibility 1フレーム分の命令を実行し、最後にタイマーを1ティック進めます。
    # @intent:pre-condition resume=True の場合、フレーム先頭のブレークポイント判定を行わず、その命令を実行して先へ進めます。
    # @intent:post-condition 停止条件（エラー、ブレークポイント、stop()）が発生した場合は False を返します。
    def run_frame(self, resume: bool = False) -> bool:
        self._running = True
        for cycle in range(self._cycles_per_frame):
            current_pc = self._cpu.get_state().pc
            skip_breakpoint = resume and cycle == 0
            if current_pc in self._breakpoints and not skip_breakpoint:
                self._running = False
                print(f"Breakpoint hit at PC: {current_pc:#06x}")
                return False
            try:
                self.step_instruction()
            except Chip8Error as e:
                self.last_error = e
                self._running = False
                print(f"Execution stopped at PC: {current_pc:#06x}: {e}")
                return False
            if not self._running:
                return False

        self._timer_clock.tick()
        self.frame_count += 1
        return True

    def run(self, max_frames: Optional[int] = None) -> int:
        """
        停止条件が発生するか、max_frames に達するまでフレームを実行します。
        現在のPCがブレークポイントの場合は、その命令から再開します。
        実行を完了したフレーム数を返します。
        """
        self.last_error = None
        completed = 0
        resume = True

        while max_frames is None or completed < max_frames:
            if not self.run_frame(resume=resume):
                break
            resume = False
            completed += 1
        self._running = False
        return completed

    def stop(self) -> None:
        self._running = False
