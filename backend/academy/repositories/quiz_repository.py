"""
Quiz Repository - Data Access Layer
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import desc
from sqlalchemy.orm import Session
from academy.models.quiz import QuizForm, QuizSubmission


class QuizFormRepository:
    """Quiz form repository"""

    @staticmethod
    def get_by_id(db: Session, form_id: UUID) -> Optional[QuizForm]:
        """Lấy quiz kèm câu hỏi (questions load theo position)"""
        return db.query(QuizForm).filter(QuizForm.id == form_id).first()

    @staticmethod
    def get_by_ids(db: Session, form_ids: List[UUID]) -> List[QuizForm]:
        if not form_ids:
            return []
        return db.query(QuizForm).filter(QuizForm.id.in_(form_ids)).all()

    @staticmethod
    def add(db: Session, quiz_form: QuizForm) -> QuizForm:
        db.add(quiz_form)
        db.flush()
        return quiz_form


class QuizSubmissionRepository:
    """Quiz submission repository"""

    @staticmethod
    def add(db: Session, submission: QuizSubmission) -> QuizSubmission:
        db.add(submission)
        db.flush()
        return submission

    @staticmethod
    def get_by_user_and_quiz(db: Session, user_id: UUID, quiz_id: UUID) -> List[QuizSubmission]:
        """Tất cả lần làm quiz, mới nhất trước"""
        return db.query(QuizSubmission).filter(
            QuizSubmission.user_id == user_id,
            QuizSubmission.quiz_id == quiz_id,
        ).order_by(desc(QuizSubmission.submitted_at)).all()
