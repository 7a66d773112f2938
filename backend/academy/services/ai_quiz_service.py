"""
AI Quiz Service - Gemini sinh câu hỏi trắc nghiệm từ nội dung chapter và gợi ý cho học viên
"""

import json
import logging
from typing import Any, List, Optional
from uuid import UUID

import google.generativeai as genai
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.orm import Session

from academy.config import Settings
from academy.exceptions import AIServiceError, ValidationError
from academy.models.course import ChapterElementType
from academy.repositories.chapter_repository import ChapterElementRepository
from academy.schemas.quiz import QuizQuestionInput
from academy.services.hierarchy_service import HierarchyService

logger = logging.getLogger(__name__)

# Element có nội dung chữ dùng để sinh quiz
CONTENT_ELEMENT_TYPES = (
    ChapterElementType.HEADER,
    ChapterElementType.TEXT,
    ChapterElementType.CODE_FRAGMENT,
)
MIN_CONTENT_LENGTH = 100
MAX_PROMPT_CONTENT = 4000

QUIZ_PROMPT = """Create a quiz with multiple choice questions based on the following content.
Generate between 1 and 3 questions. Each question must have exactly 4 answer options with only one correct answer.

Respond ONLY with valid JSON using this structure:
[
  {{"question": "Question text", "options": ["A", "B", "C", "D"], "correctAnswerIndex": 0}}
]

Content:
-------------------------
{content}
-------------------------
"""

HINT_PROMPT = """As an educational assistant, give a helpful hint for the following multiple-choice question without revealing the answer.

QUESTION: {question}

OPTIONS:
{options}

Give a concise hint (max 2 sentences). Respond ONLY with the hint text, in English."""


class AIQuizService:
    """AI quiz service sử dụng Gemini"""

    def __init__(self, settings: Settings, model: Optional[Any] = None):
        self.settings = settings
        self._model = model

    @property
    def model(self):
        """Khởi tạo Gemini client lần đầu dùng; cần GEMINI_API_KEY"""
        if self._model is None:
            if not self.settings.GEMINI_API_KEY:
                raise AIServiceError("AI features are not configured")
            genai.configure(api_key=self.settings.GEMINI_API_KEY)
            self._model = genai.GenerativeModel(model_name=self.settings.GEMINI_MODEL)
            logger.info("Gemini model %s initialized", self.settings.GEMINI_MODEL)
        return self._model

    def _ask(self, prompt: str) -> str:
        try:
            response = self.model.generate_content(prompt)
            text = response.text
        except AIServiceError:
            raise
        except Exception as e:
            logger.exception("Gemini request failed")
            raise AIServiceError("AI service is unavailable") from e
        return (text or "").strip()

    # === Quiz generation ===

    @staticmethod
    def collect_chapter_content(db: Session, chapter_id: UUID) -> str:
        """Nối nội dung Header/Text/CodeFragment theo thứ tự element"""
        HierarchyService.get_chapter(db, chapter_id)
        parts = [
            element.content.strip()
            for element in ChapterElementRepository.get_all_by_chapter(db, chapter_id)
            if element.type in CONTENT_ELEMENT_TYPES and element.content and element.content.strip()
        ]
        content = "\n".join(parts)
        if len(content) < MIN_CONTENT_LENGTH:
            raise ValidationError("Not enough content in chapter to generate a quiz")
        return content[:MAX_PROMPT_CONTENT]

    @staticmethod
    def parse_questions(text: str) -> List[QuizQuestionInput]:
        """
        Lấy mảng JSON trong phản hồi của model.
        Câu hỏi sai định dạng bị bỏ qua; không còn câu nào -> AIServiceError.
        """
        start, end = text.find("["), text.rfind("]")
        if start < 0 or end <= start:
            raise AIServiceError("AI response did not contain a quiz")
        try:
            items = json.loads(text[start:end + 1])
        except json.JSONDecodeError as e:
            raise AIServiceError("AI response did not contain a quiz") from e

        questions = []
        for item in items:
            if not isinstance(item, dict):
                continue
            try:
                questions.append(QuizQuestionInput(
                    question_text=item.get("question", ""),
                    # Một số model trả về "answers" thay vì "options"
                    options=item.get("options") or item.get("answers") or [],
                    correct_answer_index=item.get("correctAnswerIndex", -1),
                ))
            except SchemaValidationError:
                logger.warning("Skipping malformed generated question: %s", item)

        if not questions:
            raise AIServiceError("AI response did not contain valid quiz questions")
        return questions

    def generate_quiz(self, db: Session, chapter_id: UUID) -> List[QuizQuestionInput]:
        """Sinh câu hỏi (chưa lưu); admin xem lại rồi tạo quiz qua QuizForm"""
        content = self.collect_chapter_content(db, chapter_id)
        questions = self.parse_questions(self._ask(QUIZ_PROMPT.format(content=content)))
        logger.info("Generated %d quiz questions for chapter %s", len(questions), chapter_id)
        return questions

    # === Hint ===

    def hint(self, question_text: str, options: List[str]) -> str:
        if not question_text.strip() or not options:
            raise ValidationError("Question text and options are required")
        options_text = "\n".join(f"{number}. {option}" for number, option in enumerate(options, start=1))
        hint = self._ask(HINT_PROMPT.format(question=question_text.strip(), options=options_text))
        if not hint:
            raise AIServiceError("AI service returned an empty hint")
        return hint
