"""
Module: render

Purpose:
    Turn a paper, its ordered questions and site settings into a finished
    multi-page document.

Key Functions:
    - render_paper(): Main entry point

Key Classes:
    - PaginationDirector: Header → Questions → Decorate
    - QuestionBlockRenderer: One question at a time
    - RenderResult: Finished document and summary

Used By:
    - scripts/render_paper.py
"""

from .blocks import QuestionBlock, QuestionBlockRenderer, RenderState
from .director import PaginationDirector, RenderPhase, RenderResult, render_paper
from .styles import StyleStack

__all__ = [
    "render_paper",
    "PaginationDirector",
    "RenderPhase",
    "RenderResult",
    "QuestionBlock",
    "QuestionBlockRenderer",
    "RenderState",
    "StyleStack",
]
