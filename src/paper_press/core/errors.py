"""
Module: core.errors

Purpose:
    Exception taxonomy for paper rendering.

Key Classes:
    - PaperPressError: Base class for all engine errors
    - InputError: A question cannot be rendered in full (recorded, not raised)
    - LayoutOverflowError: Content would be placed past the bottom margin
    - RenderError: Director used out of phase order
    - CanvasError: Drawing surface misuse (e.g. unknown page index)

Policy:
    InputError is captured as a warning and rendering continues with
    whatever the question provides. LayoutOverflowError is fatal because
    it can only come from a measurement bug. Backend failures (ReportLab,
    OS errors) propagate unchanged and are never retried.
"""

from __future__ import annotations

from typing import Optional


class PaperPressError(Exception):
    """Base class for rendering errors."""
    pass


class InputError(PaperPressError):
    """
    A question is missing a field its type needs.

    Attributes:
        order: Display order of the offending question (if known)
        field: Name of the missing field
    """

    def __init__(self, message: str, *, order: Optional[int] = None, field: str = ""):
        super().__init__(message)
        self.order = order
        self.field = field


class LayoutOverflowError(PaperPressError):
    """Content would extend past the bottom margin."""

    def __init__(self, message: str, *, page: int, y: float, height: float, bottom: float):
        super().__init__(message)
        self.page = page
        self.y = y
        self.height = height
        self.bottom = bottom


class RenderError(PaperPressError):
    """Director phases were driven out of order."""
    pass


class CanvasError(PaperPressError):
    """Drawing surface was asked for something it cannot do."""
    pass
