"""
Module: render.blocks

Purpose:
    Render one question (prompt, options or answer panel, explanation
    callout) onto the canvas, measuring every block before placing it.

Key Classes:
    - RenderState: Per-call cursor, style stack and warnings
    - QuestionBlock: Summary of one rendered question
    - QuestionBlockRenderer: Draws questions block by block

Algorithm:
    For each block:
    1. Wrap its text to the available width (exact line count)
    2. Height = lines × line height (+ panel padding)
    3. ensure_fits(height) → draw at cursor.y → advance(height)

    Every block is atomic: an option, an answer panel or an explanation
    never straddles a page break. The only exception is a block taller
    than a whole usable page, which is split at line boundaries into
    continuation chunks so that it paginates instead of overflowing.

Dependencies:
    - layout: Metrics, cursor and configuration
    - output.canvas: Drawing surface
    - render.styles: Scoped styling

Used By:
    - render.director: Question loop
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from ..core.errors import InputError
from ..core.models import Question, QuestionType
from ..layout.config import (
    ACCENT_GREEN,
    BLACK,
    BORDER_GREY,
    EXPLANATION_TEXT,
    PANEL_GREEN,
    SHADE_GREY,
    RGB,
    RenderConfig,
)
from ..layout.cursor import EPSILON, LayoutCursor
from ..layout.metrics import FontWeight, TextMetrics
from ..output.canvas import DocumentCanvas
from .styles import StyleStack

logger = logging.getLogger(__name__)

# Draw command roles
ROLE_PROMPT = "prompt"
ROLE_OPTION = "option"
ROLE_OPTION_CORRECT = "option-correct"
ROLE_MARKER = "option-marker"
ROLE_MARKER_CORRECT = "option-marker-correct"
ROLE_ANSWER_PANEL = "answer-panel"
ROLE_ANSWER_LABEL = "answer-label"
ROLE_ANSWER = "answer"
ROLE_EXPLANATION_PANEL = "explanation-panel"
ROLE_EXPLANATION_BORDER = "explanation-border"
ROLE_EXPLANATION_LABEL = "explanation-label"
ROLE_EXPLANATION = "explanation"

CORRECT_MARKER = "4"  # ZapfDingbats heavy check mark
PLAIN_MARKER = "•"
MARKER_GAP = 5.0  # mm between marker column and option text
ANSWER_LABEL = "Correct Answer:"
EXPLANATION_LABEL = "Explanation:"
BORDER_WIDTH = 0.8  # mm, explanation left border


@dataclass
class RenderState:
    """
    Mutable state of one render call.

    Created per call and discarded afterwards; never shared between
    calls.

    Attributes:
        cursor: Page/position tracker
        styles: Scoped style stack
        warnings: Best-effort degradations (InputError messages)
    """

    cursor: LayoutCursor
    styles: StyleStack
    warnings: list[str] = field(default_factory=list)

    def style(self, **changes):
        """Scoped style override (see StyleStack.style)."""
        return self.styles.style(**changes)

    def record(self, error: InputError) -> None:
        """Log and keep an input problem without aborting the render."""
        logger.warning(str(error))
        self.warnings.append(str(error))


@dataclass(frozen=True)
class QuestionBlock:
    """
    Summary of one rendered question.

    Attributes:
        order: Question order label as rendered
        first_page: Page the prompt was drawn on (0-based)
        last_page: Page the last block was drawn on (0-based)
        correct_options: Options drawn with the correct marker, in order
        plain_options: Options drawn with the plain marker, in order
    """

    order: int
    first_page: int
    last_page: int
    correct_options: tuple[str, ...] = ()
    plain_options: tuple[str, ...] = ()


# (text, role) pairs inside a panel
PanelLine = tuple[str, str]


class QuestionBlockRenderer:
    """
    Draws questions onto a canvas using measure-then-place layout.

    Example:
        >>> renderer = QuestionBlockRenderer(canvas, RenderConfig(), TextMetrics())
        >>> block = renderer.render(question, state)
        >>> block.order
        1
    """

    def __init__(self, canvas: DocumentCanvas, config: RenderConfig, metrics: TextMetrics):
        self.canvas = canvas
        self.config = config
        self.metrics = metrics

    def render(self, question: Question, state: RenderState) -> QuestionBlock:
        """
        Render one question at the cursor.

        Args:
            question: Question to draw (not modified)
            state: Current render state

        Returns:
            QuestionBlock summary
        """
        first_page = self._render_prompt(question, state)

        correct: list[str] = []
        plain: list[str] = []

        if question.type is QuestionType.MCQ:
            if question.options and not question.has_answer:
                state.record(InputError(
                    f"Question {question.order}: multiple choice question has no correct answer; "
                    "options rendered without highlighting",
                    order=question.order,
                    field="correctAnswer",
                ))
            for index, option in enumerate(question.options):
                is_correct = question.is_correct(option)
                self._render_option(option, is_correct, state, first=index == 0)
                (correct if is_correct else plain).append(option)
        elif question.type is QuestionType.SHORT_ANSWER:
            if question.has_answer:
                self._render_answer_panel(question, state)
            else:
                state.record(InputError(
                    f"Question {question.order}: short answer question has no correct answer; "
                    "answer panel skipped",
                    order=question.order,
                    field="correctAnswer",
                ))

        if question.has_explanation:
            self._render_explanation(question.explanation, state)

        last_page = state.cursor.page
        state.cursor.skip(self.config.question_spacing)

        return QuestionBlock(
            order=question.order,
            first_page=first_page,
            last_page=last_page,
            correct_options=tuple(correct),
            plain_options=tuple(plain),
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Blocks
    # ─────────────────────────────────────────────────────────────────────────

    def _render_prompt(self, question: Question, state: RenderState) -> int:
        config = self.config
        text = f"Question {question.order}: {question.question_text}"
        lines = self.metrics.wrap(text, config.content_width, config.prompt_size, FontWeight.BOLD)

        with state.style(font_size=config.prompt_size, weight=FontWeight.BOLD, color=BLACK) as style:
            line_height = self.metrics.line_height(style.font_size)

            def draw(chunk: Sequence[str], y: float, height: float) -> None:
                self.canvas.draw_text(chunk, config.margin_left, y, style=style, role=ROLE_PROMPT,
                                      line_height=line_height)

            page = self._place_lines(state, lines, style.font_size, draw)

        state.cursor.skip(config.prompt_spacing)
        return page

    def _render_option(self, option: str, is_correct: bool, state: RenderState, *, first: bool) -> None:
        config = self.config
        marker_x = config.margin_left + config.option_indent
        text_x = marker_x + MARKER_GAP
        width = config.content_width - config.option_indent - MARKER_GAP

        if not first:
            state.cursor.skip(config.option_spacing)

        if is_correct:
            changes = dict(font_size=config.option_size, weight=FontWeight.BOLD, color=ACCENT_GREEN)
            role, marker, marker_role = ROLE_OPTION_CORRECT, CORRECT_MARKER, ROLE_MARKER_CORRECT
        else:
            changes = dict(font_size=config.option_size, weight=FontWeight.NORMAL, color=BLACK)
            role, marker, marker_role = ROLE_OPTION, PLAIN_MARKER, ROLE_MARKER

        lines = self.metrics.wrap(option, width, config.option_size, changes["weight"]) or [""]

        with state.style(**changes) as style:
            line_height = self.metrics.line_height(style.font_size)
            drawn_marker = False

            def draw(chunk: Sequence[str], y: float, height: float) -> None:
                nonlocal drawn_marker
                if not drawn_marker:
                    marker_weight = FontWeight.SYMBOL if is_correct else style.weight
                    with state.style(weight=marker_weight) as marker_style:
                        self.canvas.draw_text([marker], marker_x, y, style=marker_style, role=marker_role,
                                              line_height=line_height)
                    drawn_marker = True
                self.canvas.draw_text(chunk, text_x, y, style=style, role=role, line_height=line_height)

            self._place_lines(state, lines, style.font_size, draw)

    def _render_answer_panel(self, question: Question, state: RenderState) -> None:
        config = self.config
        width = config.content_width - config.option_indent - 2 * config.panel_padding
        answer_lines = self.metrics.wrap(question.answer_text(), width, config.answer_size)

        panel: list[PanelLine] = [(ANSWER_LABEL, ROLE_ANSWER_LABEL)]
        panel.extend((line, ROLE_ANSWER) for line in answer_lines)

        state.cursor.skip(config.panel_spacing)
        with state.style(font_size=config.answer_size, color=ACCENT_GREEN):
            self._place_panel(
                state,
                panel,
                fill=PANEL_GREEN,
                role=ROLE_ANSWER_PANEL,
                label_weight=FontWeight.BOLD,
                body_weight=FontWeight.NORMAL,
            )

    def _render_explanation(self, explanation: str, state: RenderState) -> None:
        config = self.config
        width = config.content_width - config.option_indent - 2 * config.panel_padding
        lines = self.metrics.wrap(explanation, width, config.explanation_size, FontWeight.ITALIC)

        panel: list[PanelLine] = [(EXPLANATION_LABEL, ROLE_EXPLANATION_LABEL)]
        panel.extend((line, ROLE_EXPLANATION) for line in lines)

        state.cursor.skip(config.panel_spacing)
        with state.style(font_size=config.explanation_size, color=EXPLANATION_TEXT):
            self._place_panel(
                state,
                panel,
                fill=SHADE_GREY,
                role=ROLE_EXPLANATION_PANEL,
                label_weight=FontWeight.BOLD_ITALIC,
                body_weight=FontWeight.ITALIC,
                border=BORDER_GREY,
            )

    # ─────────────────────────────────────────────────────────────────────────
    # Placement
    # ─────────────────────────────────────────────────────────────────────────

    def _place_panel(
        self,
        state: RenderState,
        panel: list[PanelLine],
        *,
        fill: RGB,
        role: str,
        label_weight: FontWeight,
        body_weight: FontWeight,
        border: Optional[RGB] = None,
    ) -> None:
        """Place a shaded panel; its height is the wrapped lines plus padding."""
        config = self.config
        padding = config.panel_padding
        x = config.margin_left + config.option_indent
        width = config.content_width - config.option_indent
        font_size = state.styles.current.font_size
        line_height = self.metrics.line_height(font_size)

        def draw(chunk: Sequence[PanelLine], y: float, height: float) -> None:
            self.canvas.draw_rect(x, y, width, height, fill=fill, role=role)
            if border is not None:
                self.canvas.draw_line(
                    x, y, x, y + height,
                    color=border, line_width=BORDER_WIDTH, role=ROLE_EXPLANATION_BORDER,
                )
            text_y = y + padding
            # Consecutive lines sharing a role are drawn as one text block
            for line_role, texts in _group_by_role(chunk):
                weight = label_weight if line_role in (ROLE_ANSWER_LABEL, ROLE_EXPLANATION_LABEL) else body_weight
                with state.style(weight=weight) as text_style:
                    self.canvas.draw_text(texts, x + padding, text_y, style=text_style, role=line_role,
                                          line_height=line_height)
                text_y += len(texts) * line_height

        self._place_lines(state, panel, font_size, draw, overhead=2 * padding)

    def _place_lines(
        self,
        state: RenderState,
        lines: Sequence,
        font_size: float,
        draw: Callable[[Sequence, float, float], None],
        *,
        overhead: float = 0.0,
    ) -> int:
        """
        Measure, page-break check, draw and advance past a block.

        Args:
            state: Render state
            lines: Wrapped lines of the block
            font_size: Font size the lines are measured at (points)
            draw: Callback drawing (lines, y, height) at the cursor
            overhead: Fixed extra height (panel padding)

        Returns:
            Page index the block starts on
        """
        cursor = state.cursor
        remaining = list(lines)
        if not remaining:
            return cursor.page

        line_height = self.metrics.line_height(font_size)
        height = self.metrics.block_height(len(remaining), font_size) + overhead
        if height <= cursor.usable_height + EPSILON:
            cursor.ensure_fits(height)
            start_page = cursor.page
            draw(remaining, cursor.y, height)
            cursor.advance(height)
            return start_page

        # Taller than a whole page: fill pages line by line
        logger.info(
            f"Block of {len(remaining)} lines ({height:.1f}mm) exceeds page height "
            f"{cursor.usable_height:.1f}mm; splitting across pages"
        )
        start_page = None
        while remaining:
            count = cursor.lines_that_fit(line_height, overhead)
            if count == 0 and not cursor.at_page_top:
                cursor.new_page()
                count = cursor.lines_that_fit(line_height, overhead)
            count = max(count, 1)
            chunk, remaining = remaining[:count], remaining[count:]
            chunk_height = self.metrics.block_height(len(chunk), font_size) + overhead
            if start_page is None:
                start_page = cursor.page
            draw(chunk, cursor.y, chunk_height)
            cursor.advance(chunk_height)
            if remaining:
                cursor.new_page()
        return start_page


def _group_by_role(chunk: Sequence[PanelLine]) -> list[tuple[str, list[str]]]:
    groups: list[tuple[str, list[str]]] = []
    for text, role in chunk:
        if groups and groups[-1][0] == role:
            groups[-1][1].append(text)
        else:
            groups.append((role, [text]))
    return groups
