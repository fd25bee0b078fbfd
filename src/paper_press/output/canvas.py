"""
Module: output.canvas

Purpose:
    The drawing surface the renderer issues commands to, plus an
    in-memory implementation that records every command per page.

Key Classes:
    - TextStyle: Font size, weight, colour and opacity of drawn text
    - TextCommand / RectCommand / LineCommand: Recorded draw commands
    - DocumentCanvas: Abstract drawing surface
    - RecordingCanvas: Keeps an ordered command list per page

Coordinates:
    Top-down page units (mm): (0, 0) is the top-left corner of the page.
    Text y is the top of the line block for valign="top" and its centre
    for valign="middle"; x is the left edge, centre or right edge
    depending on align.

Dependencies:
    - layout.metrics: Font weights, default line spacing
    - layout.config: Colours

Used By:
    - output.pdf: ReportLab backend (replays recorded pages)
    - render.blocks / render.director: All drawing
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field, replace
from pathlib import Path
from typing import Iterator, Optional, Sequence, Union

from ..core.errors import CanvasError
from ..layout.config import A4_HEIGHT_MM, A4_WIDTH_MM, BLACK, RGB
from ..layout.metrics import FontWeight, TextMetrics

logger = logging.getLogger(__name__)

ALIGNMENTS = ("left", "center", "right")
VERTICAL_ALIGNMENTS = ("top", "middle")

# Line spacing for callers that do not measure text themselves
_DEFAULT_METRICS = TextMetrics()


@dataclass(frozen=True)
class TextStyle:
    """
    Text appearance (immutable).

    Attributes:
        font_size: Size in points
        weight: FontWeight
        color: RGB triple in 0..1
        opacity: Fill alpha in 0..1
    """

    font_size: float = 11
    weight: FontWeight = FontWeight.NORMAL
    color: RGB = BLACK
    opacity: float = 1.0

    def with_changes(self, **changes) -> TextStyle:
        """Copy with some attributes replaced."""
        return replace(self, **changes)


@dataclass(frozen=True)
class TextCommand:
    """Lines of text drawn as one block, line_height mm apart."""

    lines: tuple[str, ...]
    x: float
    y: float
    style: TextStyle
    align: str = "left"
    valign: str = "top"
    rotation: float = 0.0
    role: str = ""
    line_height: float = 0.0
    kind: str = field(default="text", init=False)


@dataclass(frozen=True)
class RectCommand:
    """Filled and/or stroked rectangle (line_width in mm)."""

    x: float
    y: float
    width: float
    height: float
    fill: Optional[RGB] = None
    stroke: Optional[RGB] = None
    line_width: float = 0.5
    opacity: float = 1.0
    role: str = ""
    kind: str = field(default="rect", init=False)


@dataclass(frozen=True)
class LineCommand:
    """Straight line segment (line_width in mm)."""

    x1: float
    y1: float
    x2: float
    y2: float
    color: RGB = BLACK
    line_width: float = 0.5
    role: str = ""
    kind: str = field(default="line", init=False)


DrawCommand = Union[TextCommand, RectCommand, LineCommand]


class DocumentCanvas(ABC):
    """
    Abstract drawing surface.

    A canvas starts with one empty page. Pages are append-only: they can
    be revisited with set_page() and annotated, never removed or reordered.
    """

    page_width: float
    page_height: float

    @abstractmethod
    def add_page(self) -> None:
        """Append a page and make it current."""

    @abstractmethod
    def set_page(self, index: int) -> None:
        """Make an existing page (0-based) current."""

    @abstractmethod
    def page_count(self) -> int:
        """Number of pages created so far."""

    @property
    @abstractmethod
    def current_page(self) -> int:
        """Index of the current page (0-based)."""

    @abstractmethod
    def draw_text(
        self,
        lines: Sequence[str],
        x: float,
        y: float,
        *,
        style: TextStyle,
        align: str = "left",
        valign: str = "top",
        rotation: float = 0.0,
        role: str = "",
        line_height: Optional[float] = None,
    ) -> None:
        """
        Draw lines of text on the current page.

        line_height is the distance between lines in mm; when omitted it
        is taken from the default TextMetrics for the style's font size.
        """

    @abstractmethod
    def draw_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        *,
        fill: Optional[RGB] = None,
        stroke: Optional[RGB] = None,
        line_width: float = 0.5,
        opacity: float = 1.0,
        role: str = "",
    ) -> None:
        """Draw a rectangle on the current page."""

    @abstractmethod
    def draw_line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        *,
        color: RGB = BLACK,
        line_width: float = 0.5,
        role: str = "",
    ) -> None:
        """Draw a line on the current page."""

    @abstractmethod
    def save(self, target: Union[str, Path]) -> Path:
        """Write the document to target and return the written path."""

    def set_metadata(self, *, title: str = "", author: str = "") -> None:
        """Record document metadata (ignored by surfaces without any)."""


class RecordingCanvas(DocumentCanvas):
    """
    Canvas that keeps every draw command, page by page.

    Used directly in tests, and as the base of the PDF backend which
    replays the recorded pages once rendering has finished.

    Example:
        >>> canvas = RecordingCanvas()
        >>> canvas.draw_text(["Hello"], 20, 25, style=TextStyle())
        >>> canvas.page_count(), len(canvas.commands(0))
        (1, 1)
    """

    def __init__(self, page_width: float = A4_WIDTH_MM, page_height: float = A4_HEIGHT_MM):
        if page_width <= 0 or page_height <= 0:
            raise CanvasError(f"Invalid page size: {page_width}x{page_height}")
        self.page_width = page_width
        self.page_height = page_height
        self.title = ""
        self.author = ""
        self._pages: list[list[DrawCommand]] = [[]]
        self._current = 0

    # ─────────────────────────────────────────────────────────────────────────
    # Pages
    # ─────────────────────────────────────────────────────────────────────────

    def add_page(self) -> None:
        self._pages.append([])
        self._current = len(self._pages) - 1

    def set_page(self, index: int) -> None:
        if not 0 <= index < len(self._pages):
            raise CanvasError(f"Page {index} does not exist ({len(self._pages)} pages)")
        self._current = index

    def page_count(self) -> int:
        return len(self._pages)

    @property
    def current_page(self) -> int:
        return self._current

    def set_metadata(self, *, title: str = "", author: str = "") -> None:
        self.title = title
        self.author = author

    # ─────────────────────────────────────────────────────────────────────────
    # Drawing
    # ─────────────────────────────────────────────────────────────────────────

    def draw_text(
        self,
        lines: Sequence[str],
        x: float,
        y: float,
        *,
        style: TextStyle,
        align: str = "left",
        valign: str = "top",
        rotation: float = 0.0,
        role: str = "",
        line_height: Optional[float] = None,
    ) -> None:
        if align not in ALIGNMENTS:
            raise CanvasError(f"Unknown alignment: {align!r}")
        if valign not in VERTICAL_ALIGNMENTS:
            raise CanvasError(f"Unknown vertical alignment: {valign!r}")
        if not lines:
            return
        if line_height is None:
            line_height = _DEFAULT_METRICS.line_height(style.font_size)
        self._record(TextCommand(
            lines=tuple(lines),
            x=x,
            y=y,
            style=style,
            align=align,
            valign=valign,
            rotation=rotation,
            role=role,
            line_height=line_height,
        ))

    def draw_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        *,
        fill: Optional[RGB] = None,
        stroke: Optional[RGB] = None,
        line_width: float = 0.5,
        opacity: float = 1.0,
        role: str = "",
    ) -> None:
        self._record(RectCommand(
            x=x, y=y, width=width, height=height,
            fill=fill, stroke=stroke, line_width=line_width,
            opacity=opacity, role=role,
        ))

    def draw_line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        *,
        color: RGB = BLACK,
        line_width: float = 0.5,
        role: str = "",
    ) -> None:
        self._record(LineCommand(
            x1=x1, y1=y1, x2=x2, y2=y2,
            color=color, line_width=line_width, role=role,
        ))

    def _record(self, command: DrawCommand) -> None:
        self._pages[self._current].append(command)

    # ─────────────────────────────────────────────────────────────────────────
    # Inspection
    # ─────────────────────────────────────────────────────────────────────────

    def commands(self, page: int) -> tuple[DrawCommand, ...]:
        """Draw commands of one page in issue order."""
        if not 0 <= page < len(self._pages):
            raise CanvasError(f"Page {page} does not exist ({len(self._pages)} pages)")
        return tuple(self._pages[page])

    def iter_commands(self, role: Optional[str] = None) -> Iterator[tuple[int, DrawCommand]]:
        """Yield (page, command) over all pages, optionally filtered by role."""
        for index, page in enumerate(self._pages):
            for command in page:
                if role is None or command.role == role:
                    yield index, command

    def texts(self, role: Optional[str] = None) -> list[tuple[int, TextCommand]]:
        """All text commands as (page, command), optionally filtered by role."""
        return [
            (page, cmd) for page, cmd in self.iter_commands(role)
            if isinstance(cmd, TextCommand)
        ]

    def save(self, target: Union[str, Path]) -> Path:
        """Write the recorded commands as JSON (debugging aid)."""
        path = Path(target)
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "page_width": self.page_width,
            "page_height": self.page_height,
            "pages": [[asdict(cmd) for cmd in page] for page in self._pages],
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        logger.info(f"Wrote {self.page_count()} recorded pages to {path}")
        return path
