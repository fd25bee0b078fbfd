"""
Module: layout.cursor

Purpose:
    Track the current page and vertical write position while content is
    placed, and start new pages before a block would cross the bottom
    margin.

Key Classes:
    - LayoutCursor: Page index + top-down y offset

Algorithm:
    Measure first, then place:
    1. Caller measures a block (wrap → line count → height)
    2. ensure_fits(height) starts a new page when y + height > bottom,
       unless the cursor already sits at the top of a page
    3. Caller draws at cursor.y, then advance(height)

    A block that does not fit on an empty page is left where it is; the
    caller must split it first (see render.blocks). advance() refuses to
    move past the bottom margin so a measurement slip fails loudly.

Dependencies:
    - layout.config: Margins and page size
    - output.canvas: Page creation

Used By:
    - render.blocks: Question block placement
    - render.director: Header placement
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..core.errors import LayoutOverflowError
from .config import RenderConfig

if TYPE_CHECKING:
    from ..output.canvas import DocumentCanvas

logger = logging.getLogger(__name__)

# Float slack when comparing accumulated offsets against the margin
EPSILON = 1e-6


class LayoutCursor:
    """
    Current page and vertical position (top-down, mm).

    Attributes:
        page: Current page index (0-based)
        y: Current vertical offset from the page top
        breaks: Number of page breaks taken so far

    Example:
        >>> cursor = LayoutCursor(canvas, RenderConfig())
        >>> cursor.ensure_fits(30.0)
        >>> cursor.advance(30.0)
    """

    def __init__(self, canvas: DocumentCanvas, config: RenderConfig):
        self.canvas = canvas
        self.config = config
        self.page = canvas.current_page
        self.y = config.margin_top
        self.breaks = 0

    @property
    def top(self) -> float:
        return self.config.margin_top

    @property
    def bottom(self) -> float:
        return self.config.bottom

    @property
    def usable_height(self) -> float:
        return self.config.usable_height

    @property
    def space_left(self) -> float:
        """Vertical space remaining on the current page."""
        return self.bottom - self.y

    @property
    def at_page_top(self) -> bool:
        """True if nothing has been placed on the current page yet."""
        return self.y <= self.top + EPSILON

    def fits(self, height: float) -> bool:
        """Check whether a block of this height fits below the cursor."""
        return self.y + height <= self.bottom + EPSILON

    def ensure_fits(self, height: float) -> None:
        """
        Start a new page if a block of this height would cross the margin.

        Must be called before drawing the block.

        Args:
            height: Block height in mm
        """
        if self.fits(height) or self.at_page_top:
            return
        self.new_page()

    def new_page(self) -> None:
        """Append a page to the canvas and move to its top margin."""
        logger.debug(f"Page break after page {self.page} at y={self.y:.1f}mm")
        self.canvas.add_page()
        self.page = self.canvas.current_page
        self.y = self.top
        self.breaks += 1

    def advance(self, height: float) -> None:
        """
        Move the cursor down past a drawn block.

        Args:
            height: Block height in mm

        Raises:
            LayoutOverflowError: If the block ran past the bottom margin
        """
        if not self.fits(height):
            raise LayoutOverflowError(
                f"Block of {height:.2f}mm at y={self.y:.2f}mm overflows page {self.page} "
                f"(bottom {self.bottom:.2f}mm)",
                page=self.page,
                y=self.y,
                height=height,
                bottom=self.bottom,
            )
        self.y += height

    def skip(self, spacing: float) -> None:
        """Add vertical spacing, clamped at the bottom margin."""
        self.y = min(self.y + spacing, self.bottom)

    def lines_that_fit(self, line_height: float, extra: float = 0.0) -> int:
        """
        Number of lines of line_height that fit in the remaining space.

        Args:
            line_height: Height of one line
            extra: Fixed overhead of the block (padding)
        """
        available = self.space_left - extra
        if available <= 0:
            return 0
        return int((available + EPSILON) // line_height)
