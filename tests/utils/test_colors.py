import pytest

from utils.colors import hex_to_rgb, is_css_color, rgb_to_hex


class TestColors:

    @pytest.mark.parametrize("value", [
        "#fff", "#ffff", "#00ff00", "#00ff0080", "rgb(255, 0, 0)", "rgba(0,0,0,0.5)", "hsl(120, 100%, 60%)", "white",
    ])
    def test_accepts(self, value):
        assert is_css_color(value)

    @pytest.mark.parametrize("value", ["", "#12", "#ggg", "not a colour", "rgb(red)", None, 255])
    def test_rejects(self, value):
        assert not is_css_color(value)

    def test_hex_to_rgb(self):
        assert hex_to_rgb("#ff8000") == (255, 128, 0)
        assert hex_to_rgb("#0f0") == (0, 255, 0)
        with pytest.raises(ValueError):
            hex_to_rgb("#abcd")

    def test_rgb_to_hex_clamps(self):
        assert rgb_to_hex(255, 128, 0) == "#ff8000"
        assert rgb_to_hex(300, -5, 16) == "#ff0010"
