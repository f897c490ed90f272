# tests/peripherals/test_display.py
import pytest
from chip8_core.peripherals.display import FrameBuffer

class TestFrameBuffer:
    def test_initially_blank(self):
        fb = FrameBuffer()
        assert fb.width == 64 and fb.height == 32
        assert all(row == "." * 64 for row in fb.to_text_rows())
        assert not fb.dirty

    def test_draw_xor_and_collision(self):
        fb = FrameBuffer()
        assert fb.draw(0, 0, [0b10100000]) is False
        assert fb.get_pixel(0, 0) and not fb.get_pixel(1, 0) and fb.get_pixel(2, 0)
        assert fb.draw(0, 0, [0b10000000]) is True
        assert not fb.get_pixel(0, 0)
        assert fb.get_pixel(2, 0)

    # @intent:test_case_clip 右端・下端からはみ出したピクセルは折り返さずに切り捨てられることを検証します。
    def test_sprite_clips_at_edges(self):
        fb = FrameBuffer()
        fb.draw(62, 31, [0xFF, 0xFF])
        assert fb.get_pixel(62, 31) and fb.get_pixel(63, 31)
        assert not fb.get_pixel(0, 31)
        assert not fb.get_pixel(62, 0)

    def test_start_coordinates_wrap(self):
        fb = FrameBuffer()
        fb.draw(64 + 1, 32 + 2, [0x80])
        assert fb.get_pixel(1, 2)

    def test_clear(self):
        fb = FrameBuffer()
        fb.draw(5, 5, [0xFF])
        fb.clear()
        assert not fb.get_pixel(5, 5)
        assert fb.draw(5, 5, [0xFF]) is False

    def test_text_rows(self):
        fb = FrameBuffer(width=8, height=2)
        fb.draw(0, 1, [0xF0])
        assert fb.to_text_rows() == ["........", "####...."]

    def test_get_pixel_out_of_range(self):
        with pytest.raises(IndexError):
            FrameBuffer().get_pixel(64, 0)
