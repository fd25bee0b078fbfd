"""
Module: render.director

Purpose:
    Orchestrate a complete paper render.
    Header → Questions → Decorate (watermark + footers) → Done

Key Functions:
    - render_paper(): Main entry point

Key Classes:
    - PaginationDirector: Runs the phases for one document
    - RenderPhase: Phase sequence of a render
    - RenderResult: Finished document and summary

Algorithm:
    Two sequential passes. Content is placed first; only then is the page
    count known, so the second pass revisits every page to stamp the
    watermark and "Page i of N" footer.

Dependencies:
    - render.blocks: Question rendering
    - layout: Metrics, cursor, watermark fitting
    - output: Canvas implementations

Used By:
    - Callers that serve or store the document (not part of this package)
    - scripts/render_paper.py
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from ..core.errors import RenderError
from ..core.models import Paper, Question, Settings
from ..layout.config import (
    BLACK,
    DIVIDER_GREY,
    FOOTER_GREY,
    MUTED_TEXT,
    WATERMARK_GREY,
    RenderConfig,
)
from ..layout.cursor import LayoutCursor
from ..layout.metrics import FontWeight, TextMetrics
from ..layout.watermark import WatermarkFit, fit_watermark
from ..output.canvas import DocumentCanvas, TextStyle
from ..output.pdf import PdfCanvas
from .blocks import QuestionBlock, QuestionBlockRenderer, RenderState
from .styles import StyleStack

logger = logging.getLogger(__name__)

ROLE_TITLE = "title"
ROLE_DESCRIPTION = "description"
ROLE_DIVIDER = "divider"
ROLE_WATERMARK = "watermark"
ROLE_FOOTER = "footer"

DIVIDER_GAP = 3.0  # mm between description and divider
DIVIDER_WIDTH = 0.3  # mm

CanvasFactory = Callable[[float, float], DocumentCanvas]


class RenderPhase(Enum):
    """Phases of a render, in the only order they may run."""

    CREATED = 0
    HEADER = 1
    QUESTIONS = 2
    DECORATE = 3
    DONE = 4


@dataclass(frozen=True)
class RenderResult:
    """
    Finished document (immutable summary).

    Attributes:
        document: Canvas holding every page
        filename: Suggested filename derived from the paper slug
        page_count: Number of pages
        blocks: One QuestionBlock per rendered question, in input order
        warnings: Best-effort degradations recorded during rendering
        elapsed_seconds: Wall time of the render

    Example:
        >>> result = render_paper(paper, questions, settings)
        >>> result.filename, result.page_count
        ('physics-101.pdf', 1)
    """

    document: DocumentCanvas
    filename: str
    page_count: int
    blocks: tuple[QuestionBlock, ...]
    warnings: tuple[str, ...]
    elapsed_seconds: float = 0.0

    def to_bytes(self) -> bytes:
        """PDF bytes (PDF-backed documents only)."""
        if not isinstance(self.document, PdfCanvas):
            raise RenderError(f"{type(self.document).__name__} cannot produce PDF bytes")
        return self.document.to_bytes()

    def save(self, directory: Union[str, Path]) -> Path:
        """Write the document into directory under its suggested filename."""
        return self.document.save(Path(directory) / self.filename)


class PaginationDirector:
    """
    Drives one document through Header → Questions → Decorate → Done.

    Each director owns its canvas and render state; use a new director
    per document.

    Example:
        >>> director = PaginationDirector(paper, questions, settings)
        >>> result = director.run()
    """

    def __init__(
        self,
        paper: Paper,
        questions: Sequence[Question],
        settings: Settings,
        *,
        config: Optional[RenderConfig] = None,
        canvas: Optional[DocumentCanvas] = None,
        metrics: Optional[TextMetrics] = None,
    ):
        self.paper = paper
        self.questions = questions
        self.settings = settings
        self.config = config or RenderConfig()
        self.canvas = canvas or PdfCanvas(self.config.page_width, self.config.page_height)
        self.metrics = metrics or TextMetrics()
        self.phase = RenderPhase.CREATED

        self.state = RenderState(
            cursor=LayoutCursor(self.canvas, self.config),
            styles=StyleStack(TextStyle(font_size=self.config.option_size)),
        )
        self.block_renderer = QuestionBlockRenderer(self.canvas, self.config, self.metrics)
        self.blocks: list[QuestionBlock] = []

    def _enter(self, phase: RenderPhase) -> None:
        if phase.value != self.phase.value + 1:
            raise RenderError(f"Cannot enter {phase.name} from {self.phase.name}")
        logger.debug(f"Render phase {self.phase.name} -> {phase.name}")
        self.phase = phase

    def run(self) -> RenderResult:
        """
        Render the whole document.

        Returns:
            RenderResult with the finished canvas

        Raises:
            RenderError: If the director was already used
            LayoutOverflowError: If a block was mis-measured
        """
        start_time = time.perf_counter()
        self.canvas.set_metadata(title=self.paper.title, author=self.settings.site_name)

        self.render_header()
        self.render_questions()
        page_count = self.decorate()
        self._enter(RenderPhase.DONE)

        elapsed = time.perf_counter() - start_time
        logger.info(
            f"Rendered {len(self.blocks)} questions of {self.paper.title!r} "
            f"onto {page_count} pages in {elapsed:.2f}s"
        )
        return RenderResult(
            document=self.canvas,
            filename=self.paper.filename,
            page_count=page_count,
            blocks=tuple(self.blocks),
            warnings=tuple(self.state.warnings),
            elapsed_seconds=elapsed,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Phase 1: header
    # ─────────────────────────────────────────────────────────────────────────

    def render_header(self) -> None:
        """Draw title, description and divider at the top of page 1."""
        self._enter(RenderPhase.HEADER)
        config = self.config
        cursor = self.state.cursor
        center_x = config.margin_left + config.content_width / 2

        title_lines = self.metrics.wrap(
            self.paper.title, config.content_width, config.title_size, FontWeight.BOLD
        )
        with self.state.style(font_size=config.title_size, weight=FontWeight.BOLD, color=BLACK) as style:
            self._place_centered(title_lines, center_x, style, ROLE_TITLE)

        description_lines = self.metrics.wrap(
            self.paper.description, config.content_width, config.description_size
        )
        if description_lines:
            cursor.skip(config.prompt_spacing)
            with self.state.style(font_size=config.description_size, weight=FontWeight.NORMAL,
                                  color=MUTED_TEXT) as style:
                self._place_centered(description_lines, center_x, style, ROLE_DESCRIPTION)

        # Keep the divider and its spacing clear of the bottom margin
        cursor.ensure_fits(DIVIDER_GAP + config.header_spacing)
        cursor.skip(DIVIDER_GAP)
        self.canvas.draw_line(
            config.margin_left, cursor.y,
            config.margin_left + config.content_width, cursor.y,
            color=DIVIDER_GREY, line_width=DIVIDER_WIDTH, role=ROLE_DIVIDER,
        )
        cursor.skip(config.header_spacing)

    def _place_centered(self, lines: list[str], center_x: float, style: TextStyle, role: str) -> None:
        """Header lines: each line is its own block so long titles can break."""
        cursor = self.state.cursor
        line_height = self.metrics.line_height(style.font_size)
        for line in lines:
            cursor.ensure_fits(line_height)
            self.canvas.draw_text([line], center_x, cursor.y, style=style, align="center", role=role,
                                  line_height=line_height)
            cursor.advance(line_height)

    # ─────────────────────────────────────────────────────────────────────────
    # Phase 2: questions
    # ─────────────────────────────────────────────────────────────────────────

    def render_questions(self) -> None:
        """Render every question in the order given (no sorting)."""
        self._enter(RenderPhase.QUESTIONS)
        for question in self.questions:
            self.blocks.append(self.block_renderer.render(question, self.state))

        if len(self.blocks) != len(self.questions):
            raise RenderError(
                f"Rendered {len(self.blocks)} questions but {len(self.questions)} were supplied"
            )

    # ─────────────────────────────────────────────────────────────────────────
    # Phase 3: decoration
    # ─────────────────────────────────────────────────────────────────────────

    def decorate(self) -> int:
        """
        Stamp watermark (if enabled) and footer on every page.

        Returns:
            Final page count
        """
        self._enter(RenderPhase.DECORATE)
        if self.state.styles.depth != 0:
            raise RenderError(f"{self.state.styles.depth} text styles still active before decoration")

        page_count = self.canvas.page_count()
        fit = self._fit_watermark() if self.settings.pdf_watermark_enabled else None

        for index in range(page_count):
            self.canvas.set_page(index)
            if fit is not None and fit.lines:
                self._draw_watermark(fit)
            self._draw_footer(index + 1, page_count)

        logger.debug(f"Decorated {page_count} pages (watermark={'on' if fit else 'off'})")
        return page_count

    def _fit_watermark(self) -> WatermarkFit:
        config = self.config
        return fit_watermark(
            self.settings.pdf_watermark_text,
            self.settings.site_name,
            config.page_width,
            initial_size=config.watermark_initial_size,
            step=config.watermark_step,
            floor=config.watermark_floor,
            fit_fraction=config.watermark_fit_fraction,
            angle=config.watermark_angle,
            metrics=self.metrics,
        )

    def _draw_watermark(self, fit: WatermarkFit) -> None:
        config = self.config
        with self.state.style(
            font_size=fit.font_size,
            weight=FontWeight.BOLD,
            color=WATERMARK_GREY,
            opacity=config.watermark_opacity,
        ) as style:
            self.canvas.draw_text(
                list(fit.lines),
                config.page_width / 2,
                config.page_height / 2,
                style=style,
                align="center",
                valign="middle",
                rotation=config.watermark_angle,
                role=ROLE_WATERMARK,
                line_height=self.metrics.line_height(fit.font_size),
            )

    def _draw_footer(self, page_number: int, page_count: int) -> None:
        config = self.config
        with self.state.style(font_size=config.footer_size, weight=FontWeight.NORMAL,
                              color=FOOTER_GREY) as style:
            self.canvas.draw_text(
                [f"Page {page_number} of {page_count}"],
                config.page_width / 2,
                config.footer_y,
                style=style,
                align="center",
                valign="middle",
                role=ROLE_FOOTER,
                line_height=self.metrics.line_height(style.font_size),
            )


def render_paper(
    paper: Paper,
    questions: Sequence[Question],
    settings: Settings,
    *,
    config: Optional[RenderConfig] = None,
    canvas_factory: CanvasFactory = PdfCanvas,
) -> RenderResult:
    """
    Render a paper to a finished, paginated document.

    The caller supplies questions already filtered and sorted; they are
    rendered exactly in the given order. Nothing is written to disk.

    Args:
        paper: Paper metadata
        questions: Ordered questions
        settings: Site settings (watermark)
        config: Layout configuration (A4 defaults)
        canvas_factory: Callable (page_width, page_height) -> DocumentCanvas

    Returns:
        RenderResult with the finished document

    Example:
        >>> result = render_paper(paper, questions, Settings())
        >>> result.save(Path("output"))
    """
    config = config or RenderConfig()
    canvas = canvas_factory(config.page_width, config.page_height)
    director = PaginationDirector(paper, questions, settings, config=config, canvas=canvas)
    return director.run()
