"""
Chapter Repository - Data Access Layer
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session
from academy.models.course import Chapter, ChapterElement, ChapterElementType


class ChapterRepository:
    """Chapter repository"""

    @staticmethod
    def get_all_by_lesson(db: Session, lesson_id: UUID) -> List[Chapter]:
        """Lấy chapters của lesson theo index"""
        return db.query(Chapter).filter(
            Chapter.lesson_id == lesson_id
        ).order_by(Chapter.index, Chapter.title).all()

    @staticmethod
    def get_ids_by_lesson(db: Session, lesson_id: UUID) -> List[UUID]:
        rows = db.query(Chapter.id).filter(Chapter.lesson_id == lesson_id).all()
        return [row.id for row in rows]

    @staticmethod
    def get_ids_by_lessons(db: Session, lesson_ids: List[UUID]) -> List[UUID]:
        if not lesson_ids:
            return []
        rows = db.query(Chapter.id).filter(Chapter.lesson_id.in_(lesson_ids)).all()
        return [row.id for row in rows]

    @staticmethod
    def get_by_id(db: Session, chapter_id: UUID) -> Optional[Chapter]:
        """Lấy chapter theo ID"""
        return db.query(Chapter).filter(Chapter.id == chapter_id).first()

    @staticmethod
    def next_index(db: Session, lesson_id: UUID) -> int:
        current = db.query(func.max(Chapter.index)).filter(Chapter.lesson_id == lesson_id).scalar()
        return (current or 0) + 1

    @staticmethod
    def add(db: Session, chapter: Chapter) -> Chapter:
        db.add(chapter)
        db.flush()
        return chapter


class ChapterElementRepository:
    """Chapter element repository"""

    @staticmethod
    def get_all_by_chapter(db: Session, chapter_id: UUID) -> List[ChapterElement]:
        return db.query(ChapterElement).filter(
            ChapterElement.chapter_id == chapter_id
        ).order_by(ChapterElement.index, ChapterElement.title).all()

    @staticmethod
    def get_by_id(db: Session, element_id: UUID) -> Optional[ChapterElement]:
        return db.query(ChapterElement).filter(ChapterElement.id == element_id).first()

    @staticmethod
    def get_by_form_id(db: Session, form_id: UUID) -> Optional[ChapterElement]:
        """Element Form chứa quiz"""
        return db.query(ChapterElement).filter(ChapterElement.form_id == form_id).first()

    @staticmethod
    def next_index(db: Session, chapter_id: UUID) -> int:
        current = db.query(func.max(ChapterElement.index)).filter(
            ChapterElement.chapter_id == chapter_id
        ).scalar()
        return (current or 0) + 1

    @staticmethod
    def add(db: Session, element: ChapterElement) -> ChapterElement:
        db.add(element)
        db.flush()
        return element

    @staticmethod
    def get_form_ids_for_chapters(db: Session, chapter_ids: List[UUID]) -> List[UUID]:
        """form_id của các element Form thuộc các chapter"""
        if not chapter_ids:
            return []
        rows = db.query(ChapterElement.form_id).filter(
            ChapterElement.chapter_id.in_(chapter_ids),
            ChapterElement.type == ChapterElementType.FORM,
            ChapterElement.form_id.isnot(None),
        ).all()
        return [row.form_id for row in rows]
