"""
Unit tests for RenderConfig validation and derived sizes.
"""

import pytest

from paper_press.layout.config import RenderConfig


class TestRenderConfig:
    """Tests for RenderConfig."""

    def test_defaults_are_a4_millimetres(self):
        config = RenderConfig()
        assert (config.page_width, config.page_height) == (210, 297)
        assert config.content_width == pytest.approx(170)
        assert config.usable_height == pytest.approx(246.2)
        assert config.bottom == pytest.approx(271.6)
        assert config.footer_y == pytest.approx(284.3)

    def test_is_immutable(self):
        config = RenderConfig()
        with pytest.raises(Exception):
            config.page_width = 100

    @pytest.mark.parametrize("kwargs,message", [
        ({"page_width": 0}, "page_width must be positive"),
        ({"page_height": -1}, "page_height must be positive"),
        ({"margin_left": 110, "margin_right": 100}, "Margins exceed page width"),
        ({"margin_top": 150, "margin_bottom": 150}, "Margins exceed page height"),
        ({"watermark_step": 0}, "watermark_step must be positive"),
        ({"watermark_floor": 200}, "watermark_floor"),
        ({"watermark_fit_fraction": 1.5}, "watermark_fit_fraction"),
        ({"watermark_opacity": 2}, "watermark_opacity"),
    ])
    def test_invalid_values_rejected(self, kwargs, message):
        with pytest.raises(ValueError, match=message):
            RenderConfig(**kwargs)
