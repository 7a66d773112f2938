"""
Quiz Models
"""

import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, Text, Uuid
from sqlalchemy.orm import relationship
from academy.database import Base
from academy.utils import utcnow


class QuizForm(Base):
    """Quiz form model"""
    __tablename__ = "quiz_forms"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(Text, nullable=False)

    questions = relationship(
        "QuizQuestion", cascade="all, delete-orphan", order_by="QuizQuestion.position"
    )

    def __repr__(self):
        return f"<QuizForm(id={self.id}, title={self.title})>"


class QuizQuestion(Base):
    """Câu hỏi với đúng 4 đáp án"""
    __tablename__ = "quiz_questions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    quiz_form_id = Column(Uuid, ForeignKey("quiz_forms.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    question_text = Column(Text, nullable=False)
    answer_1 = Column(Text, nullable=False)
    answer_2 = Column(Text, nullable=False)
    answer_3 = Column(Text, nullable=False)
    answer_4 = Column(Text, nullable=False)
    correct_answer_index = Column(Integer, nullable=False)  # 0-3

    __table_args__ = (
        CheckConstraint(
            "correct_answer_index >= 0 AND correct_answer_index <= 3", name="check_correct_answer_index"
        ),
    )

    @property
    def options(self) -> list[str]:
        return [self.answer_1, self.answer_2, self.answer_3, self.answer_4]

    @options.setter
    def options(self, values: list[str]):
        self.answer_1, self.answer_2, self.answer_3, self.answer_4 = values

    def __repr__(self):
        return f"<QuizQuestion(id={self.id}, correct={self.correct_answer_index})>"


class QuizSubmission(Base):
    """Một lần làm quiz; không unique, mỗi lần thử đều được lưu"""
    __tablename__ = "quiz_submissions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    quiz_id = Column(Uuid, ForeignKey("quiz_forms.id", ondelete="CASCADE"), nullable=False, index=True)
    score = Column(Integer, nullable=False)
    submitted_at = Column(DateTime, default=utcnow, nullable=False)

    def __repr__(self):
        return f"<QuizSubmission(user_id={self.user_id}, quiz_id={self.quiz_id}, score={self.score})>"
