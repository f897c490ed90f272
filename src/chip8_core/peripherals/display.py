# chip8_core/peripherals/display.py
"""
表示デバイス（ディスプレイシンク）。

コアはCLS/DRW命令を通じてこのインターフェースを呼び出すだけで、画面への描画そのものは行いません。
FrameBufferはピクセル状態を保持するヘッドレスな実装です。
"""
from abc import ABC, abstractmethod
from typing import List, Sequence

from chip8_core.arch.chip8.state import DISPLAY_WIDTH, DISPLAY_HEIGHT

# @intent:responsibility CLS/DRW命令から呼ばれる表示デバイスのインターフェースを定義します。
class DisplaySink(ABC):
    @abstractmethod
    def clear(self) -> None:
        pass

    @abstractmethod
    def draw(self, x: int, y: int, rows: Sequence[int]) -> bool:
        """
        (x, y) を左上として、1バイト=8ピクセル幅のスプライト行をXOR描画します。
        いずれかのセット済みピクセルが消去された場合に True を返します。
        """
        pass

# @intent:responsibility モノクロ 64x32 のピクセルバッファを保持します。
# @intent:rationale 描画開始座標は画面サイズで折り返し、はみ出したピクセルは折り返さずに切り捨てます。
class FrameBuffer(DisplaySink):
    def __init__(self, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT):
        self._width = width
        self._height = height
        self._pixels = bytearray(width * height)
        self.dirty = False

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def clear(self) -> None:
        self._pixels = bytearray(self._width * self._height)
        self.dirty = True

    def draw(self, x: int, y: int, rows: Sequence[int]) -> bool:
        x %= self._width
        y %= self._height
        collision = False
        for row_index, row in enumerate(rows):
            py = y + row_index
            if py >= self._height:
                break
            for bit in range(8):
                px = x + bit
                if px >= self._width:
                    break
                if row & (0x80 >> bit):
                    offset = py * self._width + px
                    if self._pixels[offset]:
                        collision = True
                    self._pixels[offset] ^= 1
        self.dirty = True
        return collision

    def get_pixel(self, x: int, y: int) -> bool:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self._width}x{self._height} display.")
        return self._pixels[y * self._width + x] == 1

    # @intent:utility_function テストやログ出力用に、各行を '#' と '.' の文字列として返します。
    def to_text_rows(self) -> List[str]:
        return [
            "".join("#" if self._pixels[row * self._width + col] else "." for col in range(self._width))
            for row in range(self._height)
        ]
