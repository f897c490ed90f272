# chip8_core/loader/loader.py
"""
コードローダーモジュール。
生バイナリ形式のプログラムイメージと組み込みフォントをメモリにロードします。
"""
from pathlib import Path
from typing import Union

from chip8_core.transport.bus import Bus
from chip8_core.arch.chip8.state import PROGRAM_START, FONT_ADDRESS, FONT_SET

class RomLoader:
    """
    プログラムイメージをバスにロードするローダー。
    ロードはバスアクセスログに記録されません。
    """
    # @intent:responsibility バイト列を指定アドレスから書き込みます。
    # @intent:pre-condition イメージ全体がメモリに収まる必要があります。収まらなければ何も書き込まずに AddressOutOfBounds を送出します。
    def load_bytes(self, data: bytes, bus: Bus, address: int = PROGRAM_START) -> int:
        bus.check_range(address, len(data))
        for offset, byte_data in enumerate(data):
            bus.load(address + offset, byte_data)
        return len(data)

    def load_rom(self, file_path: Union[str, Path], bus: Bus, address: int = PROGRAM_START) -> int:
        """
        ファイルを読み込み、ロードしたバイト数を返します。
        """
        data = Path(file_path).read_bytes()
        if not data:
            raise ValueError(f"ROM file {file_path} is empty.")
        return self.load_bytes(data, bus, address)

    # @intent:responsibility 16進フォント（80バイト）をロードします。FX29 はこのアドレスを参照します。
    def load_font(self, bus: Bus, address: int = FONT_ADDRESS) -> None:
        self.load_bytes(FONT_SET, bus, address)
