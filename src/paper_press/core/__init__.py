"""
Module: core

Purpose:
    Immutable input models, payload loading and the error taxonomy shared
    by the layout and render packages.
"""

from .errors import (
    PaperPressError,
    InputError,
    LayoutOverflowError,
    RenderError,
    CanvasError,
)
from .models import Paper, Settings, Question, QuestionType

__all__ = [
    "PaperPressError",
    "InputError",
    "LayoutOverflowError",
    "RenderError",
    "CanvasError",
    "Paper",
    "Settings",
    "Question",
    "QuestionType",
]
