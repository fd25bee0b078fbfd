"""
Core Models Package

Immutable, validated data models handed to the renderer.

All models are frozen dataclasses: the renderer reads them and never
mutates or reorders them, and concurrent renders can share the same
instances safely.
"""

from .paper import Paper, Settings
from .questions import Question, QuestionType

__all__ = [
    "Paper",
    "Settings",
    "Question",
    "QuestionType",
]
