"""
Module: questions

Purpose:
    Provides the Question dataclass - one scoring item of a paper, either
    multiple choice or short answer, with its authoritative answer and an
    optional explanation. Immutable; the renderer never reorders or edits it.

Key Classes:
    - QuestionType: mcq / short_answer
    - Question: Frozen question record

Key Functions:
    - Question.is_correct(option): Exact-match answer check
    - Question.to_dict() / Question.from_dict(): Serialization (stored camelCase shape)

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - render.blocks: Question block rendering
    - core.serialization: Payload loading
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union


class QuestionType(str, Enum):
    """Question kinds understood by the renderer."""

    MCQ = "mcq"
    SHORT_ANSWER = "short_answer"


CorrectAnswer = Union[str, tuple[str, ...], None]


@dataclass(frozen=True)
class Question:
    """
    Question representation (immutable).

    Attributes:
        order: Display position (positive, unique and ascending per paper)
        type: QuestionType
        question_text: Prompt text (may contain explicit line breaks)
        options: Ordered answer options (mcq only, may be empty)
        correct_answer: A single string, a tuple of strings (several correct
            options), or None when the stored record lacks it
        explanation: Optional explanation text
        id: Stored document id (informational)

    Invariants:
        - order >= 1
        - options is always a tuple

    Example:
        >>> q = Question(order=1, type=QuestionType.MCQ, question_text="2 + 2?",
        ...              options=("1", "2", "3", "4"), correct_answer="4")
        >>> q.is_correct("4"), q.is_correct("4 ")
        (True, False)
    """

    order: int
    type: QuestionType
    question_text: str
    options: tuple[str, ...] = ()
    correct_answer: CorrectAnswer = None
    explanation: Optional[str] = None
    id: str = ""

    def __post_init__(self) -> None:
        """Validate question on construction."""
        if isinstance(self.order, bool) or not isinstance(self.order, int) or self.order < 1:
            raise ValueError(f"order must be a positive integer: {self.order!r}")
        if not isinstance(self.type, QuestionType):
            # Accept raw strings from stored data ("mcq", "short_answer")
            object.__setattr__(self, "type", QuestionType(self.type))
        if not isinstance(self.options, tuple):
            object.__setattr__(self, "options", tuple(self.options))
        if isinstance(self.correct_answer, (set, frozenset)):
            # Sets have no stable order
            object.__setattr__(self, "correct_answer", tuple(sorted(self.correct_answer, key=str)))
        elif isinstance(self.correct_answer, list):
            object.__setattr__(self, "correct_answer", tuple(self.correct_answer))

    @property
    def is_mcq(self) -> bool:
        return self.type is QuestionType.MCQ

    @property
    def has_answer(self) -> bool:
        """True when a correct answer is recorded (empty string counts as missing)."""
        if self.correct_answer is None:
            return False
        if isinstance(self.correct_answer, tuple):
            return len(self.correct_answer) > 0
        return self.correct_answer != ""

    @property
    def has_explanation(self) -> bool:
        return bool(self.explanation and self.explanation.strip())

    def is_correct(self, option: str) -> bool:
        """
        Check whether an option is a correct answer.

        Exact string equality only: no trimming, case folding or partial
        matching. For several correct answers, membership is checked.

        Args:
            option: Option text exactly as stored

        Returns:
            True if the option is (one of) the correct answer(s)
        """
        if self.correct_answer is None:
            return False
        if isinstance(self.correct_answer, tuple):
            return option in self.correct_answer
        return option == self.correct_answer

    def answer_text(self) -> str:
        """Correct answer as display text (several answers joined by commas)."""
        if self.correct_answer is None:
            return ""
        if isinstance(self.correct_answer, tuple):
            return ", ".join(self.correct_answer)
        return self.correct_answer

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize to the stored camelCase shape.

        Returns:
            Dict representation
        """
        d: dict[str, Any] = {
            "order": self.order,
            "type": self.type.value,
            "questionText": self.question_text,
        }
        if self.id:
            d["id"] = self.id
        if self.is_mcq:
            d["options"] = list(self.options)
        if isinstance(self.correct_answer, tuple):
            d["correctAnswer"] = list(self.correct_answer)
        elif self.correct_answer is not None:
            d["correctAnswer"] = self.correct_answer
        if self.explanation is not None:
            d["explanation"] = self.explanation
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Question:
        """
        Deserialize from the stored camelCase shape.

        Args:
            data: Dict representation

        Returns:
            Question instance
        """
        answer = data.get("correctAnswer")
        if isinstance(answer, list):
            answer = tuple(str(a) for a in answer)
        return cls(
            order=data["order"],
            type=QuestionType(data["type"]),
            question_text=data.get("questionText", ""),
            options=tuple(data.get("options") or ()),
            correct_answer=answer,
            explanation=data.get("explanation"),
            id=data.get("id", ""),
        )

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return f"Question(order={self.order}, type={self.type.value}, options={len(self.options)})"
