import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import paper_press
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from paper_press.core.models import Paper, Question, QuestionType, Settings
from paper_press.output.canvas import RecordingCanvas
from paper_press.render.director import render_paper


# Common test fixtures
@pytest.fixture
def physics_paper() -> Paper:
    """Return the Physics 101 paper."""
    return Paper(title="Physics 101", description="Mechanics revision paper", slug="physics-101")


@pytest.fixture
def settings_off() -> Settings:
    """Settings with the watermark disabled."""
    return Settings(pdf_watermark_enabled=False, site_name="TKS Prepify")


@pytest.fixture
def settings_on() -> Settings:
    """Settings with the default watermark enabled."""
    return Settings(
        pdf_watermark_enabled=True,
        pdf_watermark_text="Downloaded From {siteName}",
        site_name="TKS Prepify",
    )


@pytest.fixture
def mcq_factory():
    """Factory to create multiple choice questions."""
    def _create(order: int = 1, options=("1", "2", "3", "4"), correct="4", text="What is 2 + 2?",
                explanation=None):
        return Question(
            order=order,
            type=QuestionType.MCQ,
            question_text=text,
            options=tuple(options),
            correct_answer=correct,
            explanation=explanation,
        )
    return _create


@pytest.fixture
def short_answer_factory():
    """Factory to create short answer questions."""
    def _create(order: int = 1, answer="9.81 m/s²", text="State the value of g.", explanation=None):
        return Question(
            order=order,
            type=QuestionType.SHORT_ANSWER,
            question_text=text,
            correct_answer=answer,
            explanation=explanation,
        )
    return _create


@pytest.fixture
def record_render():
    """Render onto a RecordingCanvas so draw commands can be inspected."""
    def _render(paper, questions, settings, config=None):
        return render_paper(paper, questions, settings, config=config, canvas_factory=RecordingCanvas)
    return _render
