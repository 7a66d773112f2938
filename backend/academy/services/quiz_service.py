"""
Quiz Service - Business Logic
Tạo quiz cho chapter, chấm điểm bài làm và lưu lại mọi lần nộp
"""

import logging
from typing import List, Sequence
from uuid import UUID

from sqlalchemy.orm import Session

from academy.exceptions import NotFoundError, ValidationError
from academy.models.course import ChapterElement, ChapterElementType
from academy.models.quiz import QuizForm, QuizQuestion, QuizSubmission
from academy.repositories.chapter_repository import ChapterElementRepository, ChapterRepository
from academy.repositories.quiz_repository import QuizFormRepository, QuizSubmissionRepository
from academy.schemas.quiz import QuizFormCreate, QuizFormUpdate, QuizResult, QuizSubmissionCreate
from academy.services.progress_service import ProgressService
from academy.utils import transaction, utcnow

logger = logging.getLogger(__name__)

PASSED_MESSAGE = "Quiz completed successfully!"
FAILED_MESSAGE = "Quiz completed, but score was too low to progress. Try again!"


class QuizService:
    """Quiz service"""

    @staticmethod
    def score(questions: Sequence[QuizQuestion], answers: Sequence[int]) -> int:
        """
        Đếm số câu trả lời đúng, ghép từng cặp (câu hỏi, đáp án) theo thứ tự.
        Đáp án ngoài khoảng 0-3 đơn giản là sai.
        """
        return sum(
            1 for question, answer in zip(questions, answers)
            if answer == question.correct_answer_index
        )

    @staticmethod
    def submit(
        db: Session,
        user_id: UUID,
        submission: QuizSubmissionCreate,
        pass_percentage: float,
    ) -> QuizResult:
        """
        Chấm điểm và lưu bài làm.
        Nếu đạt và quiz thuộc một chapter thì chapter được đánh dấu hoàn thành
        trong cùng transaction.
        """
        quiz = QuizFormRepository.get_by_id(db, submission.quiz_id)
        if not quiz:
            raise NotFoundError("Quiz not found")

        questions = quiz.questions
        if len(submission.answers) != len(questions):
            raise ValidationError("Number of answers doesn't match number of questions")

        correct = QuizService.score(questions, submission.answers)
        total = len(questions)
        percentage = correct / total * 100 if total else 0.0
        passed = total > 0 and percentage >= pass_percentage

        with transaction(db, "submit quiz"):
            record = QuizSubmissionRepository.add(db, QuizSubmission(
                user_id=user_id,
                quiz_id=quiz.id,
                score=correct,
                submitted_at=utcnow(),
            ))
            if passed:
                element = ChapterElementRepository.get_by_form_id(db, quiz.id)
                if element:
                    chapter = ChapterRepository.get_by_id(db, element.chapter_id)
                    ProgressService.mark_chapter_complete(db, user_id, chapter)
                else:
                    logger.warning("Quiz %s is not attached to any chapter", quiz.id)
            result = QuizResult(
                submission_id=record.id,
                score=correct,
                total=total,
                percentage=percentage,
                passed=passed,
                submitted_at=record.submitted_at,
                message=PASSED_MESSAGE if passed else FAILED_MESSAGE,
            )

        logger.info("User %s scored %d/%d on quiz %s", user_id, correct, total, quiz.id)
        return result

    @staticmethod
    def get_submissions(db: Session, user_id: UUID, quiz_id: UUID) -> List[QuizSubmission]:
        return QuizSubmissionRepository.get_by_user_and_quiz(db, user_id, quiz_id)

    # === Quiz forms ===

    @staticmethod
    def get_form(db: Session, form_id: UUID) -> QuizForm:
        quiz = QuizFormRepository.get_by_id(db, form_id)
        if not quiz:
            raise NotFoundError("Quiz not found")
        return quiz

    @staticmethod
    def create_form(db: Session, form_data: QuizFormCreate) -> QuizForm:
        """Tạo quiz và element Form ở cuối chapter"""
        chapter = ChapterRepository.get_by_id(db, form_data.chapter_id)
        if not chapter:
            raise NotFoundError("Chapter not found")

        with transaction(db, "create quiz"):
            quiz = QuizForm(title=form_data.title)
            for position, question_data in enumerate(form_data.questions):
                question = QuizQuestion(
                    position=position,
                    question_text=question_data.question_text,
                    correct_answer_index=question_data.correct_answer_index,
                )
                question.options = question_data.options
                quiz.questions.append(question)
            QuizFormRepository.add(db, quiz)

            ChapterElementRepository.add(db, ChapterElement(
                chapter_id=chapter.id,
                index=ChapterElementRepository.next_index(db, chapter.id),
                title=form_data.title,
                type=ChapterElementType.FORM,
                form_id=quiz.id,
            ))

        logger.info("Created quiz %s in chapter %s", quiz.id, chapter.id)
        return quiz

    @staticmethod
    def update_form(db: Session, form_id: UUID, form_data: QuizFormUpdate) -> QuizForm:
        """Cập nhật title và các câu hỏi đã có (khớp theo id, id lạ bị bỏ qua)"""
        quiz = QuizService.get_form(db, form_id)
        existing = {question.id: question for question in quiz.questions}

        with transaction(db, "update quiz"):
            quiz.title = form_data.title
            for question_data in form_data.questions:
                question = existing.get(question_data.id)
                if question is None:
                    continue
                question.question_text = question_data.question_text
                question.options = question_data.options
                question.correct_answer_index = question_data.correct_answer_index
        return quiz
