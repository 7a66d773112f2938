"""
User Progress Models
"""

import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, UniqueConstraint, Uuid
from academy.database import Base
from academy.utils import utcnow


class UserChapter(Base):
    """Tiến độ chapter của user"""
    __tablename__ = "user_chapters"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    chapter_id = Column(Uuid, ForeignKey("chapters.id", ondelete="CASCADE"), nullable=False, index=True)
    completed = Column(Boolean, nullable=False, default=False)
    completed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (UniqueConstraint("user_id", "chapter_id", name="uq_user_chapter"),)


class UserLesson(Base):
    """Tiến độ lesson của user"""
    __tablename__ = "user_lessons"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    lesson_id = Column(Uuid, ForeignKey("lessons.id", ondelete="CASCADE"), nullable=False, index=True)
    completed = Column(Boolean, nullable=False, default=False)

    __table_args__ = (UniqueConstraint("user_id", "lesson_id", name="uq_user_lesson"),)


class UserLearningCourse(Base):
    """Tiến độ khóa học của user"""
    __tablename__ = "user_learning_courses"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    course_id = Column(Uuid, ForeignKey("learning_courses.id", ondelete="CASCADE"), nullable=False, index=True)
    completed = Column(Boolean, nullable=False, default=False)

    __table_args__ = (UniqueConstraint("user_id", "course_id", name="uq_user_course"),)
