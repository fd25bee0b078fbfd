"""
Module: layout.watermark

Purpose:
    Choose the largest watermark font size whose rotated text block fits
    inside a share of the page width.

Key Functions:
    - fit_watermark(): Size search for a (possibly multi-line) watermark
    - rotated_extent(): Horizontal extent of a rotated box

Algorithm:
    1. Substitute {siteName} and split on explicit line breaks
    2. Starting at the initial size, measure the block (widest line by
       line count) and its rotated horizontal extent |w·cos θ| + |h·sin θ|
    3. Step the size down while the extent exceeds page_width × fit_fraction
    4. Stop at the floor whether or not the block fits

    The extent grows with font size, so the result is non-decreasing in
    page width and always within [floor, initial_size].

Dependencies:
    - layout.metrics: Text measurement

Used By:
    - render.director: Decoration pass
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from ..core.models.paper import resolve_watermark_text
from .metrics import FontWeight, TextMetrics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WatermarkFit:
    """
    Result of a watermark size search.

    Attributes:
        font_size: Chosen font size in points
        lines: Watermark lines, ready for centred rotated drawing
        extent: Rotated horizontal extent at font_size (mm)
        fits: False when the floor was reached without fitting
    """

    font_size: float
    lines: tuple[str, ...]
    extent: float
    fits: bool


def rotated_extent(width: float, height: float, angle_deg: float) -> float:
    """Horizontal extent of a width×height box rotated by angle_deg."""
    theta = math.radians(angle_deg)
    return abs(width * math.cos(theta)) + abs(height * math.sin(theta))


def split_watermark_lines(template: str, site_name: str) -> tuple[str, ...]:
    """Substitute the site name and split on explicit line breaks."""
    text = resolve_watermark_text(template, site_name)
    lines = [line.strip() for line in text.replace("\r\n", "\n").split("\n")]
    return tuple(line for line in lines if line)


def fit_watermark(
    template: str,
    site_name: str,
    page_width: float,
    *,
    initial_size: float = 120,
    step: float = 5,
    floor: float = 12,
    fit_fraction: float = 0.8,
    angle: float = -45,
    weight: FontWeight = FontWeight.BOLD,
    metrics: Optional[TextMetrics] = None,
) -> WatermarkFit:
    """
    Find the watermark font size for a page.

    Args:
        template: Raw watermark template (may contain {siteName}, line breaks)
        site_name: Value substituted for {siteName}
        page_width: Page width in mm
        initial_size: First candidate size (pt)
        step: Decrement between candidates (pt)
        floor: Smallest size returned (pt)
        fit_fraction: Share of page width the rotated block may span
        angle: Rotation in degrees
        weight: Font weight used for measurement
        metrics: TextMetrics instance (a fresh one by default)

    Returns:
        WatermarkFit with the chosen size and split lines

    Raises:
        ValueError: If step is not positive or floor exceeds initial_size

    Example:
        >>> fit = fit_watermark("Downloaded From {siteName}", "TKS Prepify", 210)
        >>> 12 <= fit.font_size <= 120
        True
    """
    if step <= 0:
        raise ValueError(f"step must be positive: {step}")
    if floor > initial_size:
        raise ValueError(f"floor {floor} exceeds initial size {initial_size}")

    metrics = metrics or TextMetrics()
    lines = split_watermark_lines(template, site_name)
    limit = page_width * fit_fraction

    def extent_at(size: float) -> float:
        if not lines:
            return 0.0
        width = max(metrics.text_width(line, size, weight) for line in lines)
        height = metrics.block_height(len(lines), size)
        return rotated_extent(width, height, angle)

    size = initial_size
    extent = extent_at(size)
    while extent > limit and size > floor:
        size = max(size - step, floor)
        extent = extent_at(size)

    fits = extent <= limit
    if not fits:
        logger.debug(
            f"Watermark {lines!r} still {extent:.1f}mm wide at floor {floor}pt "
            f"(limit {limit:.1f}mm)"
        )
    else:
        logger.debug(f"Watermark fitted at {size}pt ({extent:.1f}mm of {limit:.1f}mm)")

    return WatermarkFit(font_size=size, lines=lines, extent=extent, fits=fits)
