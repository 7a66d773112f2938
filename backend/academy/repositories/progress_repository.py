"""
Progress Repository - Data Access Layer
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session
from academy.models.progress import UserChapter, UserLearningCourse, UserLesson


class ProgressRepository:
    """User progress repository"""

    @staticmethod
    def get_user_chapter(db: Session, user_id: UUID, chapter_id: UUID) -> Optional[UserChapter]:
        return db.query(UserChapter).filter(
            UserChapter.user_id == user_id,
            UserChapter.chapter_id == chapter_id,
        ).first()

    @staticmethod
    def get_user_lesson(db: Session, user_id: UUID, lesson_id: UUID) -> Optional[UserLesson]:
        return db.query(UserLesson).filter(
            UserLesson.user_id == user_id,
            UserLesson.lesson_id == lesson_id,
        ).first()

    @staticmethod
    def get_user_course(db: Session, user_id: UUID, course_id: UUID) -> Optional[UserLearningCourse]:
        return db.query(UserLearningCourse).filter(
            UserLearningCourse.user_id == user_id,
            UserLearningCourse.course_id == course_id,
        ).first()

    @staticmethod
    def count_completed_chapters(db: Session, user_id: UUID, chapter_ids: List[UUID]) -> int:
        if not chapter_ids:
            return 0
        return db.query(UserChapter).filter(
            UserChapter.user_id == user_id,
            UserChapter.chapter_id.in_(chapter_ids),
            UserChapter.completed.is_(True),
        ).count()

    @staticmethod
    def count_completed_lessons(db: Session, user_id: UUID, lesson_ids: List[UUID]) -> int:
        if not lesson_ids:
            return 0
        return db.query(UserLesson).filter(
            UserLesson.user_id == user_id,
            UserLesson.lesson_id.in_(lesson_ids),
            UserLesson.completed.is_(True),
        ).count()

    @staticmethod
    def add(db: Session, record) -> None:
        db.add(record)
        db.flush()
