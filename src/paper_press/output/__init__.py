"""
Module: output

Purpose:
    Drawing surfaces for rendered papers.

Key Classes:
    - DocumentCanvas: Abstract surface the renderer draws on
    - RecordingCanvas: In-memory command recorder
    - PdfCanvas: ReportLab PDF backend

Dependencies:
    - reportlab: PDF generation

Used By:
    - render.director: Document creation
"""

from .canvas import (
    DocumentCanvas,
    RecordingCanvas,
    TextStyle,
    TextCommand,
    RectCommand,
    LineCommand,
    DrawCommand,
)
from .pdf import PdfCanvas

__all__ = [
    "DocumentCanvas",
    "RecordingCanvas",
    "PdfCanvas",
    "TextStyle",
    "TextCommand",
    "RectCommand",
    "LineCommand",
    "DrawCommand",
]
