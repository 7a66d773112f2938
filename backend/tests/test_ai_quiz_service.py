from types import SimpleNamespace
from uuid import uuid4

import pytest

from academy.exceptions import AIServiceError, NotFoundError, ValidationError
from academy.schemas.course import ChapterElementCreate
from academy.services.ai_quiz_service import AIQuizService
from academy.services.hierarchy_service import HierarchyService

LESSON_TEXT = (
    "A variable is a name bound to a value. In Python you create one by assignment, "
    "for example x = 5, and you can rebind it to a value of another type later."
)

REPLY = """Here is your quiz:
```json
[
  {"question": "How is a variable created?", "options": ["import", "assignment", "def", "class"], "correctAnswerIndex": 1},
  {"question": "Can a name be rebound?", "answers": ["Yes", "No", "Only ints", "Only once"], "correctAnswerIndex": 0},
  {"question": "Broken", "options": ["only", "three", "options"], "correctAnswerIndex": 0}
]
```"""


class FakeModel:
    """Thay cho Gemini GenerativeModel"""

    def __init__(self, reply="", error=None):
        self.reply = reply
        self.error = error
        self.prompts = []

    def generate_content(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return SimpleNamespace(text=self.reply)


@pytest.fixture
def chapter_with_text(db, course_tree):
    chapter = course_tree.chapters[0]
    HierarchyService.create_element(db, chapter.id, ChapterElementCreate(type="Header", content="Variables"))
    HierarchyService.create_element(db, chapter.id, ChapterElementCreate(type="Text", content=LESSON_TEXT))
    HierarchyService.create_element(
        db, chapter.id, ChapterElementCreate(type="Image", image="data:image/png;base64,AAAA", content="diagram alt")
    )
    return chapter


def test_parse_questions_skips_malformed_items():
    questions = AIQuizService.parse_questions(REPLY)

    assert [question.question_text for question in questions] == [
        "How is a variable created?",
        "Can a name be rebound?",
    ]
    assert questions[1].options == ["Yes", "No", "Only ints", "Only once"]
    assert questions[0].correct_answer_index == 1


@pytest.mark.parametrize("reply", [
    "Sorry, I cannot help with that.",
    "[not json at all]",
    '[{"question": "Only bad", "options": [], "correctAnswerIndex": 7}]',
])
def test_parse_questions_without_usable_quiz(reply):
    with pytest.raises(AIServiceError):
        AIQuizService.parse_questions(reply)


def test_generate_quiz_uses_text_elements_only(db, settings, chapter_with_text):
    model = FakeModel(reply=REPLY)
    service = AIQuizService(settings, model=model)

    questions = service.generate_quiz(db, chapter_with_text.id)

    assert len(questions) == 2
    (prompt,) = model.prompts
    assert "Variables\n" + LESSON_TEXT in prompt
    assert "diagram alt" not in prompt


def test_generate_quiz_needs_enough_content(db, settings, course_tree):
    chapter = course_tree.chapters[1]
    HierarchyService.create_element(db, chapter.id, ChapterElementCreate(type="Text", content="Too short"))
    model = FakeModel(reply=REPLY)

    with pytest.raises(ValidationError):
        AIQuizService(settings, model=model).generate_quiz(db, chapter.id)
    with pytest.raises(NotFoundError):
        AIQuizService(settings, model=model).generate_quiz(db, uuid4())
    assert model.prompts == []


def test_model_failure_is_reported(db, settings, chapter_with_text):
    service = AIQuizService(settings, model=FakeModel(error=RuntimeError("quota exceeded")))

    with pytest.raises(AIServiceError, match="unavailable"):
        service.generate_quiz(db, chapter_with_text.id)


def test_missing_api_key_disables_ai(settings):
    service = AIQuizService(settings.model_copy(update={"GEMINI_API_KEY": None}))

    with pytest.raises(AIServiceError, match="not configured"):
        service.hint("What is 2 + 2?", ["3", "4", "5", "22"])


def test_hint_lists_numbered_options(settings):
    model = FakeModel(reply="  Think about basic addition.  ")
    service = AIQuizService(settings, model=model)

    assert service.hint("What is 2 + 2?", ["3", "4", "5", "22"]) == "Think about basic addition."
    assert "1. 3\n2. 4\n3. 5\n4. 22" in model.prompts[0]

    with pytest.raises(ValidationError):
        service.hint("  ", ["a"])
    with pytest.raises(ValidationError):
        service.hint("Question?", [])
