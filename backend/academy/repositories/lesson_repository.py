"""
Lesson Repository - Data Access Layer
"""

from sqlalchemy import func
from sqlalchemy.orm import Session
from academy.models.course import Lesson
from typing import List, Optional
from uuid import UUID


class LessonRepository:
    """Lesson repository"""

    @staticmethod
    def get_all_by_course(db: Session, course_id: UUID) -> List[Lesson]:
        """Lấy danh sách lessons của khóa học theo index"""
        return db.query(Lesson).filter(
            Lesson.learning_course_id == course_id
        ).order_by(Lesson.index, Lesson.title).all()

    @staticmethod
    def get_ids_by_course(db: Session, course_id: UUID) -> List[UUID]:
        rows = db.query(Lesson.id).filter(Lesson.learning_course_id == course_id).all()
        return [row.id for row in rows]

    @staticmethod
    def get_by_id(db: Session, lesson_id: UUID) -> Optional[Lesson]:
        """Lấy lesson theo ID"""
        return db.query(Lesson).filter(Lesson.id == lesson_id).first()

    @staticmethod
    def next_index(db: Session, course_id: UUID) -> int:
        """Index tiếp theo chưa dùng trong khóa học"""
        current = db.query(func.max(Lesson.index)).filter(Lesson.learning_course_id == course_id).scalar()
        return (current or 0) + 1

    @staticmethod
    def add(db: Session, lesson: Lesson) -> Lesson:
        db.add(lesson)
        db.flush()
        return lesson
