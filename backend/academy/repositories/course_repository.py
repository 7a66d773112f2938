"""
Course Repository - Data Access Layer
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session
from academy.models.badge import Badge
from academy.models.course import LearningCourse, Tag, course_tags


class CourseRepository:
    """Learning course repository"""

    @staticmethod
    def get_all(db: Session) -> List[LearningCourse]:
        """Lấy danh sách khóa học theo thứ tự index"""
        return db.query(LearningCourse).order_by(LearningCourse.index, LearningCourse.title).all()

    @staticmethod
    def get_by_id(db: Session, course_id: UUID) -> Optional[LearningCourse]:
        """Lấy khóa học theo ID"""
        return db.query(LearningCourse).filter(LearningCourse.id == course_id).first()

    @staticmethod
    def next_index(db: Session) -> int:
        current = db.query(func.max(LearningCourse.index)).scalar()
        return (current or 0) + 1

    @staticmethod
    def add(db: Session, course: LearningCourse) -> LearningCourse:
        db.add(course)
        db.flush()
        return course

    @staticmethod
    def exists_with_badge(db: Session, badge_id: UUID, exclude_course_id: Optional[UUID] = None) -> bool:
        """Có khóa học nào (ngoài khóa học đang sửa) đã dùng badge này chưa"""
        query = db.query(LearningCourse.id).filter(LearningCourse.badge_id == badge_id)
        if exclude_course_id is not None:
            query = query.filter(LearningCourse.id != exclude_course_id)
        return query.first() is not None

    @staticmethod
    def exists_with_badge_icon(db: Session, icon: str, exclude_course_id: Optional[UUID] = None) -> bool:
        """Có khóa học nào (ngoài khóa học đang sửa) có badge trùng icon không"""
        query = db.query(LearningCourse.id).join(
            Badge, Badge.id == LearningCourse.badge_id
        ).filter(Badge.icon == icon)
        if exclude_course_id is not None:
            query = query.filter(LearningCourse.id != exclude_course_id)
        return query.first() is not None

    @staticmethod
    def get_tag_names(db: Session, course_id: UUID) -> List[str]:
        """Tag của khóa học theo đúng thứ tự"""
        rows = db.query(Tag.name).join(
            course_tags, course_tags.c.tag_id == Tag.id
        ).filter(
            course_tags.c.course_id == course_id
        ).order_by(course_tags.c.position).all()
        return [row.name for row in rows]

    @staticmethod
    def set_tags(db: Session, course_id: UUID, tags: List[Tag]) -> None:
        """Thay toàn bộ tag của khóa học, giữ thứ tự"""
        db.execute(course_tags.delete().where(course_tags.c.course_id == course_id))
        for position, tag in enumerate(tags):
            db.execute(course_tags.insert().values(course_id=course_id, tag_id=tag.id, position=position))


class TagRepository:
    """Tag repository"""

    @staticmethod
    def get_all(db: Session) -> List[Tag]:
        return db.query(Tag).order_by(Tag.name).all()

    @staticmethod
    def get_by_name(db: Session, name: str) -> Optional[Tag]:
        return db.query(Tag).filter(Tag.name == name).first()

    @staticmethod
    def add(db: Session, tag: Tag) -> Tag:
        db.add(tag)
        db.flush()
        return tag
