# chip8_core/peripherals/keypad.py
"""
16キー入力デバイス。

外部の入力ポーリングがpress/releaseを書き込み、コアはSKP/SKNP/FX0Aで読み取るだけです。
"""
from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, Optional

from chip8_core.arch.chip8.state import NUM_KEYS

# @intent:responsibility コアから参照される入力デバイスのインターフェースを定義します。
class InputSource(ABC):
    @abstractmethod
    def is_pressed(self, key: int) -> bool:
        pass

    @abstractmethod
    def begin_wait(self) -> None:
        """
        キー待ちの開始を通知します。これ以前に記録された押下は待ちを満たしません。
        """
        pass

    @abstractmethod
    def take_press(self) -> Optional[int]:
        """
        新たに押されたキーを1つ取り出して返します。無ければ None を返します。
        """
        pass

# @intent:responsibility 16キーの押下状態と、新規押下イベントのキューを保持します。
class Keypad(InputSource):
    def __init__(self):
        self._pressed = [False] * NUM_KEYS
        self._new_presses: Deque[int] = deque(maxlen=NUM_KEYS)
        self._waiting = False

    @staticmethod
    def _check_key(key: int) -> None:
        if not 0 <= key < NUM_KEYS:
            raise ValueError(f"Key {key} is not in range 0x0-0xF.")

    def press(self, key: int) -> None:
        self._check_key(key)
        # 押しっぱなしの間は新規押下として扱わない。記録はキー待ち中のみ
        if self._waiting and not self._pressed[key]:
            self._new_presses.append(key)
        self._pressed[key] = True

    def release(self, key: int) -> None:
        self._check_key(key)
        self._pressed[key] = False

    def release_all(self) -> None:
        self._pressed = [False] * NUM_KEYS

    def is_pressed(self, key: int) -> bool:
        self._check_key(key)
        return self._pressed[key]

    def begin_wait(self) -> None:
        self._new_presses.clear()
        self._waiting = True

    def take_press(self) -> Optional[int]:
        if self._new_presses:
            key = self._new_presses.popleft()
            self._new_presses.clear()
            self._waiting = False
            return key
        return None
