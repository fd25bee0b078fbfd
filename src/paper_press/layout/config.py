"""
Module: layout.config

Purpose:
    Configuration for the paper layout engine.
    Defines page dimensions, margins, typography, spacing and watermark
    settings. All lengths are millimetres, font sizes are points.

Key Classes:
    - RenderConfig: Immutable layout configuration

Dependencies:
    - dataclasses (std)

Used By:
    - layout.cursor: Page-break boundaries
    - render.blocks: Block measurement and styling
    - render.director: Header, watermark and footer pass
"""

from __future__ import annotations

from dataclasses import dataclass

# Standard A4 page dimensions in millimetres
A4_WIDTH_MM = 210.0
A4_HEIGHT_MM = 297.0

RGB = tuple[float, float, float]

BLACK: RGB = (0.0, 0.0, 0.0)
ACCENT_GREEN: RGB = (40 / 255, 167 / 255, 69 / 255)  # #28a745
MUTED_TEXT: RGB = (85 / 255, 85 / 255, 85 / 255)  # #555555
EXPLANATION_TEXT: RGB = (68 / 255, 68 / 255, 68 / 255)  # #444444
FOOTER_GREY: RGB = (150 / 255, 150 / 255, 150 / 255)
DIVIDER_GREY: RGB = (204 / 255, 204 / 255, 204 / 255)  # #cccccc
PANEL_GREEN: RGB = (232 / 255, 245 / 255, 235 / 255)
SHADE_GREY: RGB = (240 / 255, 240 / 255, 240 / 255)  # #f0f0f0
BORDER_GREY: RGB = (221 / 255, 221 / 255, 221 / 255)  # #dddddd
WATERMARK_GREY: RGB = (230 / 255, 230 / 255, 230 / 255)


@dataclass(frozen=True)
class RenderConfig:
    """
    Configuration for paper layout (immutable).

    Attributes:
        page_width: Page width in mm
        page_height: Page height in mm
        margin_top / margin_bottom / margin_left / margin_right: Margins in mm
        title_size / description_size / prompt_size / option_size /
        answer_size / explanation_size / footer_size: Font sizes in pt
        header_spacing: Gap after the header divider (mm)
        prompt_spacing: Gap between prompt and options/panels (mm)
        option_spacing: Gap between options (mm)
        panel_spacing: Gap before answer/explanation panels (mm)
        question_spacing: Gap after each question (mm)
        option_indent: Left indent for options and panels (mm)
        panel_padding: Inner padding of answer/explanation panels (mm)
        watermark_initial_size / watermark_step / watermark_floor: Font search (pt)
        watermark_fit_fraction: Share of page width the rotated watermark may use
        watermark_angle: Rotation in degrees (negative is clockwise)
        watermark_opacity: Fill alpha for watermark text

    Example:
        >>> config = RenderConfig()
        >>> round(config.usable_height, 1)
        246.2
    """

    # Page dimensions
    page_width: float = A4_WIDTH_MM
    page_height: float = A4_HEIGHT_MM

    # Margins
    margin_top: float = 25.4
    margin_bottom: float = 25.4
    margin_left: float = 20.0
    margin_right: float = 20.0

    # Typography
    title_size: float = 20
    description_size: float = 11
    prompt_size: float = 12
    option_size: float = 11
    answer_size: float = 11
    explanation_size: float = 11
    footer_size: float = 9

    # Spacing
    header_spacing: float = 8.0
    prompt_spacing: float = 2.0
    option_spacing: float = 1.5
    panel_spacing: float = 3.0
    question_spacing: float = 7.0
    option_indent: float = 5.0
    panel_padding: float = 3.0

    # Watermark
    watermark_initial_size: float = 120
    watermark_step: float = 5
    watermark_floor: float = 12
    watermark_fit_fraction: float = 0.8
    watermark_angle: float = -45
    watermark_opacity: float = 0.15

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.page_width <= 0:
            raise ValueError(f"page_width must be positive: {self.page_width}")
        if self.page_height <= 0:
            raise ValueError(f"page_height must be positive: {self.page_height}")
        if self.content_width <= 0:
            raise ValueError("Margins exceed page width")
        if self.usable_height <= 0:
            raise ValueError("Margins exceed page height")
        if self.watermark_step <= 0:
            raise ValueError(f"watermark_step must be positive: {self.watermark_step}")
        if not (0 < self.watermark_floor <= self.watermark_initial_size):
            raise ValueError("watermark_floor must be in (0, watermark_initial_size]")
        if not (0 < self.watermark_fit_fraction <= 1):
            raise ValueError(f"watermark_fit_fraction must be in (0, 1]: {self.watermark_fit_fraction}")
        if not (0 <= self.watermark_opacity <= 1):
            raise ValueError(f"watermark_opacity must be in [0, 1]: {self.watermark_opacity}")

    @property
    def content_width(self) -> float:
        """Width available for content (excluding margins)."""
        return self.page_width - self.margin_left - self.margin_right

    @property
    def usable_height(self) -> float:
        """Height available for content (excluding margins)."""
        return self.page_height - self.margin_top - self.margin_bottom

    @property
    def bottom(self) -> float:
        """Lowest y (top-down) content may reach."""
        return self.page_height - self.margin_bottom

    @property
    def footer_y(self) -> float:
        """Vertical centre of the footer line, halfway into the bottom margin."""
        return self.page_height - self.margin_bottom / 2
