"""
Unit tests for watermark font size fitting.
"""

import math

import pytest

from paper_press.layout.metrics import FontWeight, TextMetrics
from paper_press.layout.watermark import fit_watermark, rotated_extent, split_watermark_lines

TEMPLATE = "Downloaded From {siteName}"


def _extent(lines, size, angle=-45):
    metrics = TextMetrics()
    width = max(metrics.text_width(line, size, FontWeight.BOLD) for line in lines)
    height = metrics.block_height(len(lines), size)
    return rotated_extent(width, height, angle)


class TestRotatedExtent:
    """Bounding box math."""

    def test_unrotated_is_width(self):
        assert rotated_extent(100, 20, 0) == pytest.approx(100)

    def test_quarter_turn_is_height(self):
        assert rotated_extent(100, 20, 90) == pytest.approx(20)

    def test_minus_45(self):
        assert rotated_extent(100, 20, -45) == pytest.approx(120 * math.sqrt(2) / 2)


class TestSplitLines:
    """Template substitution and line splitting."""

    def test_substitutes_site_name(self):
        assert split_watermark_lines(TEMPLATE, "TKS Prepify") == ("Downloaded From TKS Prepify",)

    def test_splits_explicit_breaks_and_drops_blank_lines(self):
        assert split_watermark_lines("{siteName}\n\nDo not share ", "Acme") == ("Acme", "Do not share")

    def test_blank_template_uses_default(self):
        assert split_watermark_lines("", "") == ("Downloaded From Prepify",)


class TestFitWatermark:
    """Font size search."""

    def test_reference_scenario_is_reproducible(self):
        """210mm page, 0.8 fit fraction, floor 12."""
        first = fit_watermark(TEMPLATE, "TKS Prepify", 210, fit_fraction=0.8, floor=12)
        second = fit_watermark(TEMPLATE, "TKS Prepify", 210, fit_fraction=0.8, floor=12)

        assert first == second
        assert first.lines == ("Downloaded From TKS Prepify",)
        assert first.fits
        assert 12 <= first.font_size < 120

    def test_chosen_size_is_largest_candidate_that_fits(self):
        fit = fit_watermark(TEMPLATE, "TKS Prepify", 210, initial_size=120, step=5, floor=12,
                            fit_fraction=0.8)
        limit = 210 * 0.8

        assert _extent(fit.lines, fit.font_size) <= limit
        assert _extent(fit.lines, fit.font_size + 5) > limit
        # Candidates are 120, 115, 110, ...
        assert (120 - fit.font_size) % 5 == 0

    def test_short_text_keeps_initial_size(self):
        fit = fit_watermark("Hi", "", 210)
        assert fit.font_size == 120
        assert fit.fits

    def test_long_text_stops_at_floor(self):
        fit = fit_watermark("Downloaded " * 40, "Acme", 210, floor=12)
        assert fit.font_size == 12
        assert not fit.fits

    def test_floor_reached_even_when_step_overshoots(self):
        fit = fit_watermark("Downloaded " * 40, "Acme", 210, initial_size=100, step=7, floor=12)
        assert fit.font_size == 12

    @pytest.mark.parametrize("template", [TEMPLATE, "{siteName}\nConfidential copy", "x" * 300])
    def test_size_within_bounds(self, template):
        fit = fit_watermark(template, "TKS Prepify", 210, initial_size=120, floor=12)
        assert 12 <= fit.font_size <= 120

    def test_monotonic_in_page_width(self):
        sizes = [
            fit_watermark(TEMPLATE, "TKS Prepify", width).font_size
            for width in (50, 100, 148, 210, 297, 420, 841)
        ]
        assert sizes == sorted(sizes)

    def test_multi_line_block_fits_larger_than_single_line(self):
        """Splitting text over two lines shortens the widest line."""
        single = fit_watermark("Downloaded From TKS Prepify", "", 210)
        double = fit_watermark("Downloaded From\nTKS Prepify", "", 210)
        assert double.lines == ("Downloaded From", "TKS Prepify")
        assert double.font_size >= single.font_size

    def test_invalid_parameters_rejected(self):
        with pytest.raises(ValueError):
            fit_watermark(TEMPLATE, "x", 210, step=0)
        with pytest.raises(ValueError):
            fit_watermark(TEMPLATE, "x", 210, initial_size=10, floor=12)
