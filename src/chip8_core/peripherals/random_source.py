# chip8_core/peripherals/random_source.py
"""
RND命令に乱数バイトを供給するデバイス。
"""
import random
from abc import ABC, abstractmethod
from typing import Optional

class RandomSource(ABC):
    @abstractmethod
    def next_byte(self) -> int:
        pass

# @intent:responsibility 一様分布の乱数バイトを返します。seedを与えると再現可能な系列になります。
class SystemRandomSource(RandomSource):
    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def next_byte(self) -> int:
        return self._rng.randrange(0x100)
