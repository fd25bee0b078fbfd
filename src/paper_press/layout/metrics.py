"""
Module: layout.metrics

Purpose:
    Measure and wrap plain text using the standard PDF font metrics, so
    that every block's height is known before it is placed.

Key Classes:
    - FontWeight: Text weights mapped to the standard Type 1 fonts
    - TextMetrics: Greedy word wrap and block heights

Algorithm:
    Greedy wrap per paragraph (explicit line breaks start a paragraph).
    A word is only ever moved to the next line, never split; a single
    word wider than the limit keeps a line to itself.

Dependencies:
    - reportlab: Font width tables (pdfmetrics.stringWidth)

Used By:
    - layout.watermark: Watermark block measurement
    - render.blocks: Question block measurement
"""

from __future__ import annotations

from enum import Enum

from reportlab.pdfbase.pdfmetrics import stringWidth

# 1pt = 1/72 inch, page units are millimetres
PT_TO_MM = 25.4 / 72.0

# Line height in page units per point of font size
LINE_HEIGHT_FACTOR = 0.5


class FontWeight(str, Enum):
    """Text weights; each maps to one standard PDF font."""

    NORMAL = "normal"
    BOLD = "bold"
    ITALIC = "italic"
    BOLD_ITALIC = "bold-italic"
    SYMBOL = "symbol"

    @property
    def font_name(self) -> str:
        return _FONT_NAMES[self]


_FONT_NAMES = {
    FontWeight.NORMAL: "Helvetica",
    FontWeight.BOLD: "Helvetica-Bold",
    FontWeight.ITALIC: "Helvetica-Oblique",
    FontWeight.BOLD_ITALIC: "Helvetica-BoldOblique",
    FontWeight.SYMBOL: "ZapfDingbats",
}


class TextMetrics:
    """
    Stateless text measurement in page units (mm).

    Example:
        >>> metrics = TextMetrics()
        >>> metrics.wrap("", 100, 12)
        []
        >>> metrics.block_height(2, 12)
        12.0
    """

    def __init__(self, line_height_factor: float = LINE_HEIGHT_FACTOR):
        if line_height_factor <= 0:
            raise ValueError(f"line_height_factor must be positive: {line_height_factor}")
        self.line_height_factor = line_height_factor

    def text_width(self, text: str, font_size: float, weight: FontWeight = FontWeight.NORMAL) -> float:
        """Width of a single line of text in mm."""
        return stringWidth(text, FontWeight(weight).font_name, font_size) * PT_TO_MM

    def line_height(self, font_size: float) -> float:
        """Height of one line in mm."""
        return font_size * self.line_height_factor

    def block_height(self, line_count: int, font_size: float) -> float:
        """
        Height of a block of lines in mm.

        Args:
            line_count: Number of wrapped lines
            font_size: Font size in points

        Returns:
            line_count * line height (0.0 for no lines)
        """
        if line_count <= 0:
            return 0.0
        return line_count * self.line_height(font_size)

    def wrap(
        self,
        text: str,
        max_width: float,
        font_size: float,
        weight: FontWeight = FontWeight.NORMAL,
    ) -> list[str]:
        """
        Wrap text into the fewest lines that fit max_width.

        Args:
            text: Plain text, may contain explicit line breaks
            max_width: Maximum line width in mm
            font_size: Font size in points
            weight: Font weight used for measurement

        Returns:
            Ordered display lines; [] for empty or whitespace-only text
        """
        if not text or not text.strip():
            return []

        weight = FontWeight(weight)
        lines: list[str] = []
        for paragraph in text.replace("\r\n", "\n").split("\n"):
            words = paragraph.split()
            if not words:
                lines.append("")
                continue

            current = words[0]
            for word in words[1:]:
                candidate = f"{current} {word}"
                if self.text_width(candidate, font_size, weight) <= max_width:
                    current = candidate
                else:
                    lines.append(current)
                    current = word
            lines.append(current)

        # Leading/trailing blank paragraphs carry no content
        while lines and lines[0] == "":
            lines.pop(0)
        while lines and lines[-1] == "":
            lines.pop()
        return lines
