"""
Module: output.pdf

Purpose:
    Render recorded pages to PDF using ReportLab.
    ReportLab cannot return to a page once it is finished, so the canvas
    records every command first (content pass and decoration pass alike)
    and replays each page in order when the document is written.

Key Classes:
    - PdfCanvas: RecordingCanvas that writes a PDF

Dependencies:
    - reportlab: PDF generation
    - output.canvas: Recorded command model

Used By:
    - render.director: Default canvas for render_paper()
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Union

from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from .canvas import LineCommand, RecordingCanvas, RectCommand, TextCommand

logger = logging.getLogger(__name__)

# Baseline position inside a line box, as a share of the line height
BASELINE_RATIO = 0.75


class PdfCanvas(RecordingCanvas):
    """
    ReportLab-backed document canvas.

    Example:
        >>> doc = PdfCanvas()
        >>> doc.draw_text(["Hello"], 20, 25, style=TextStyle())
        >>> data = doc.to_bytes()
        >>> data[:5]
        b'%PDF-'
    """

    def to_bytes(self) -> bytes:
        """Render the document and return the PDF bytes."""
        buf = io.BytesIO()
        self._render(buf)
        return buf.getvalue()

    def save(self, target: Union[str, Path]) -> Path:
        """
        Render the document to a PDF file.

        Args:
            target: Output file path

        Returns:
            The written path

        Raises:
            IOError: If the PDF cannot be written
        """
        path = Path(target)
        path.parent.mkdir(parents=True, exist_ok=True)
        self._render(str(path))
        logger.info(f"Rendered {self.page_count()} pages to {path}")
        return path

    def _render(self, target) -> None:
        c = canvas.Canvas(target, pagesize=(self.page_width * mm, self.page_height * mm))
        if self.title:
            c.setTitle(self.title)
        if self.author:
            c.setAuthor(self.author)

        for index in range(self.page_count()):
            for command in self.commands(index):
                if isinstance(command, TextCommand):
                    self._draw_text(c, command)
                elif isinstance(command, RectCommand):
                    self._draw_rect(c, command)
                elif isinstance(command, LineCommand):
                    self._draw_line(c, command)
            c.showPage()

        c.save()

    def _pdf_y(self, y_mm: float) -> float:
        """Convert a top-down mm offset to a bottom-up PDF coordinate."""
        return (self.page_height - y_mm) * mm

    def _draw_text(self, c: canvas.Canvas, cmd: TextCommand) -> None:
        """
        Draw a text block.

        The origin is moved to the anchor point (and rotated if needed),
        then each line is drawn at its baseline below the block top.
        """
        style = cmd.style
        line_height = cmd.line_height

        c.saveState()
        c.setFont(style.weight.font_name, style.font_size)
        c.setFillColorRGB(*style.color)
        if style.opacity < 1.0:
            c.setFillAlpha(style.opacity)

        c.translate(cmd.x * mm, self._pdf_y(cmd.y))
        if cmd.rotation:
            c.rotate(cmd.rotation)

        block_top = 0.0 if cmd.valign == "top" else -len(cmd.lines) * line_height / 2
        for i, line in enumerate(cmd.lines):
            baseline = -(block_top + (i + BASELINE_RATIO) * line_height) * mm
            if cmd.align == "center":
                c.drawCentredString(0, baseline, line)
            elif cmd.align == "right":
                c.drawRightString(0, baseline, line)
            else:
                c.drawString(0, baseline, line)

        c.restoreState()

    def _draw_rect(self, c: canvas.Canvas, cmd: RectCommand) -> None:
        c.saveState()
        if cmd.fill is not None:
            c.setFillColorRGB(*cmd.fill)
        if cmd.stroke is not None:
            c.setStrokeColorRGB(*cmd.stroke)
            c.setLineWidth(cmd.line_width * mm)
        if cmd.opacity < 1.0:
            c.setFillAlpha(cmd.opacity)
            c.setStrokeAlpha(cmd.opacity)
        c.rect(
            cmd.x * mm,
            self._pdf_y(cmd.y + cmd.height),
            cmd.width * mm,
            cmd.height * mm,
            stroke=int(cmd.stroke is not None),
            fill=int(cmd.fill is not None),
        )
        c.restoreState()

    def _draw_line(self, c: canvas.Canvas, cmd: LineCommand) -> None:
        c.saveState()
        c.setStrokeColorRGB(*cmd.color)
        c.setLineWidth(cmd.line_width * mm)
        c.line(cmd.x1 * mm, self._pdf_y(cmd.y1), cmd.x2 * mm, self._pdf_y(cmd.y2))
        c.restoreState()
