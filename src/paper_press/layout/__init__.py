"""
Module: layout

Purpose:
    Measurement and placement primitives for paper rendering.

Key Functions:
    - fit_watermark(): Watermark font size search

Key Classes:
    - RenderConfig: Page, typography and watermark configuration
    - TextMetrics: Word wrap and block heights
    - LayoutCursor: Page index and vertical position

Dependencies:
    - reportlab: Font metrics

Used By:
    - paper_press.render: Block renderer and director
"""

from .config import RenderConfig
from .metrics import FontWeight, TextMetrics
from .watermark import WatermarkFit, fit_watermark
from .cursor import LayoutCursor

__all__ = [
    "RenderConfig",
    "FontWeight",
    "TextMetrics",
    "WatermarkFit",
    "fit_watermark",
    "LayoutCursor",
]
