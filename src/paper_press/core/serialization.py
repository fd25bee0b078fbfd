"""
Payload Loading Utilities

Turns a stored JSON payload into renderer models.

Payload shape (camelCase, as stored):

    {
        "paper": {"title": ..., "description": ..., "slug": ...},
        "questions": [{"order": 1, "type": "mcq", "questionText": ..., ...}],
        "settings": {"pdfWatermarkEnabled": true, "siteName": ...}
    }

Questions are validated before deserialization and fail fast with a
ValidationError naming every problem. Sorting is left to the caller's
data (the stored join already carries "order"); only records explicitly
flagged "published": false are dropped.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .models import Paper, Question, QuestionType, Settings

logger = logging.getLogger(__name__)

_QUESTION_TYPES = {t.value for t in QuestionType}


class ValidationError(Exception):
    """Raised when payload data fails validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_question(data: dict[str, Any], *, path: str = "") -> None:
    """
    Validate a stored question record.

    Only structural problems are rejected here. A missing correct answer is
    tolerated: the renderer degrades that question instead of failing.

    Args:
        data: Question dictionary
        path: Location used in error messages (e.g. "questions[3]")

    Raises:
        ValidationError: If data is invalid
    """
    errors: list[str] = []

    for field_name in ("type", "questionText"):
        if field_name not in data:
            errors.append(f"Missing field: {field_name}")

    qtype = data.get("type")
    if qtype is not None and qtype not in _QUESTION_TYPES:
        errors.append(f"Unknown question type: {qtype!r}")

    order = data.get("order")
    if order is not None and (isinstance(order, bool) or not isinstance(order, int) or order < 1):
        errors.append(f"order must be a positive integer: {order!r}")

    options = data.get("options")
    if options is not None and not (
        isinstance(options, list) and all(isinstance(o, str) for o in options)
    ):
        errors.append("options must be a list of strings")

    answer = data.get("correctAnswer")
    if answer is not None and not isinstance(answer, (str, list)):
        errors.append("correctAnswer must be a string or a list of strings")

    if errors:
        raise ValidationError(
            f"Invalid question{' at ' + path if path else ''}: {'; '.join(errors)}",
            path=path,
            errors=errors,
        )


def validate_payload(data: dict[str, Any]) -> None:
    """
    Validate a complete render payload.

    Raises:
        ValidationError: If paper, questions or settings are malformed
    """
    if not isinstance(data.get("paper"), dict):
        raise ValidationError("Missing required object: paper", path="paper")
    if "title" not in data["paper"]:
        raise ValidationError("Missing field: title", path="paper.title")
    if not isinstance(data.get("questions", []), list):
        raise ValidationError("questions must be a list", path="questions")
    if not isinstance(data.get("settings", {}), dict):
        raise ValidationError("settings must be an object", path="settings")

    for i, q in enumerate(data.get("questions", [])):
        validate_question(q, path=f"questions[{i}]")


def load_paper_payload(
    data: dict[str, Any],
    *,
    validate: bool = True,
) -> tuple[Paper, list[Question], Settings]:
    """
    Deserialize a render payload.

    Args:
        data: Payload dictionary
        validate: Validate before deserializing (default True)

    Returns:
        (paper, questions, settings); questions keep payload order

    Raises:
        ValidationError: If validation is enabled and fails
    """
    if validate:
        validate_payload(data)

    paper = Paper.from_dict(data["paper"])
    settings = Settings.from_dict(data.get("settings") or {})

    questions: list[Question] = []
    skipped = 0
    for position, record in enumerate(data.get("questions", []), start=1):
        if record.get("published") is False:
            skipped += 1
            continue
        if "order" not in record:
            record = {**record, "order": position}
        questions.append(Question.from_dict(record))

    if skipped:
        logger.info(f"Skipped {skipped} unpublished questions")
    logger.debug(f"Loaded payload for {paper.title!r} with {len(questions)} questions")

    return paper, questions, settings


def load_paper_file(path: Path) -> tuple[Paper, list[Question], Settings]:
    """
    Load a render payload from a JSON file.

    Raises:
        ValidationError: If the payload is invalid
        OSError: If the file cannot be read
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return load_paper_payload(data)
