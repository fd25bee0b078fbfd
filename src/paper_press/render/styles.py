"""
Module: render.styles

Purpose:
    Scoped text styling. A style is pushed for the duration of a `with`
    block and the previous one is restored on every exit path, so a
    styled segment can never leak into the next question or the footer.

Key Classes:
    - StyleStack: Stack of TextStyle values with a scoped push helper

Dependencies:
    - output.canvas: TextStyle

Used By:
    - render.blocks: Question block styling
    - render.director: Header, watermark and footer styling
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from ..output.canvas import TextStyle


class StyleStack:
    """
    Current text style with scoped overrides.

    Example:
        >>> styles = StyleStack(TextStyle(font_size=11))
        >>> with styles.style(weight=FontWeight.BOLD) as bold:
        ...     bold.weight
        <FontWeight.BOLD: 'bold'>
        >>> styles.current.weight
        <FontWeight.NORMAL: 'normal'>
    """

    def __init__(self, base: TextStyle):
        self._stack: list[TextStyle] = [base]

    @property
    def current(self) -> TextStyle:
        return self._stack[-1]

    @property
    def base(self) -> TextStyle:
        return self._stack[0]

    @property
    def depth(self) -> int:
        """Number of active overrides (0 when only the base style is set)."""
        return len(self._stack) - 1

    @contextmanager
    def style(self, **changes) -> Iterator[TextStyle]:
        """
        Apply style changes for the duration of the block.

        Args:
            **changes: TextStyle attributes to override

        Yields:
            The active TextStyle
        """
        self._stack.append(self.current.with_changes(**changes))
        try:
            yield self.current
        finally:
            self._stack.pop()
