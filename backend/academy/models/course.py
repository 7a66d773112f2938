"""
Course Hierarchy Models
LearningCourse -> Lesson -> Chapter -> ChapterElement
"""

import uuid

from sqlalchemy import (
    Boolean, CheckConstraint, Column, ForeignKey, Integer, String, Table, Text, Uuid
)
from sqlalchemy.orm import relationship
from academy.database import Base


class ChapterElementType:
    """Các loại element của chapter (tập đóng)"""
    HEADER = "Header"
    TEXT = "Text"
    CODE_FRAGMENT = "CodeFragment"
    IMAGE = "Image"
    FORM = "Form"  # Quiz

    ALL = (HEADER, TEXT, CODE_FRAGMENT, IMAGE, FORM)


course_tags = Table(
    "course_tags",
    Base.metadata,
    Column("course_id", Uuid, ForeignKey("learning_courses.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Uuid, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
    Column("position", Integer, nullable=False, default=0),
)


class Tag(Base):
    """Tag model"""
    __tablename__ = "tags"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(128), unique=True, nullable=False)

    def __repr__(self):
        return f"<Tag(name={self.name})>"


class LearningCourse(Base):
    """Learning course model"""
    __tablename__ = "learning_courses"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(128), nullable=False)
    description = Column(String(1024), nullable=False, default="")
    base_name = Column(String(128), nullable=False, default="")
    level = Column(String(64), nullable=False, default="")
    duration = Column(Integer, nullable=False, default=0)
    is_published = Column(Boolean, nullable=False, default=False)
    index = Column(Integer, nullable=False, default=0)
    # Badge uniqueness được kiểm tra ở service, không phải ở database
    badge_id = Column(Uuid, ForeignKey("badges.id"), nullable=True, index=True)

    lessons = relationship(
        "Lesson", cascade="all, delete-orphan", order_by="Lesson.index"
    )

    def __repr__(self):
        return f"<LearningCourse(id={self.id}, title={self.title}, index={self.index})>"


class Lesson(Base):
    """Lesson model"""
    __tablename__ = "lessons"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    learning_course_id = Column(
        Uuid, ForeignKey("learning_courses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    index = Column(Integer, nullable=False, default=0)
    title = Column(String(128), nullable=False)
    description = Column(String(1024), nullable=True)
    duration = Column(Integer, nullable=True)

    chapters = relationship(
        "Chapter", cascade="all, delete-orphan", order_by="Chapter.index"
    )

    def __repr__(self):
        return f"<Lesson(id={self.id}, title={self.title}, index={self.index})>"


class Chapter(Base):
    """Chapter model"""
    __tablename__ = "chapters"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    lesson_id = Column(Uuid, ForeignKey("lessons.id", ondelete="CASCADE"), nullable=False, index=True)
    index = Column(Integer, nullable=False, default=0)
    title = Column(String(128), nullable=False)

    elements = relationship(
        "ChapterElement", cascade="all, delete-orphan", order_by="ChapterElement.index"
    )

    def __repr__(self):
        return f"<Chapter(id={self.id}, title={self.title}, index={self.index})>"


class ChapterElement(Base):
    """Chapter element model"""
    __tablename__ = "chapter_elements"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    chapter_id = Column(Uuid, ForeignKey("chapters.id", ondelete="CASCADE"), nullable=False, index=True)
    index = Column(Integer, nullable=False, default=0)
    title = Column(String(128), nullable=False, default="")
    type = Column(String(32), nullable=False)  # Header, Text, CodeFragment, Image, Form
    content = Column(Text, nullable=True)
    image = Column(Text, nullable=True)
    form_id = Column(Uuid, ForeignKey("quiz_forms.id", ondelete="CASCADE"), nullable=True, index=True)

    __table_args__ = (
        CheckConstraint(
            "type IN ('Header', 'Text', 'CodeFragment', 'Image', 'Form')", name="check_element_type"
        ),
        CheckConstraint(
            "(type = 'Form' AND form_id IS NOT NULL) OR (type != 'Form' AND form_id IS NULL)",
            name="check_element_form",
        ),
    )

    def __repr__(self):
        return f"<ChapterElement(id={self.id}, type={self.type}, index={self.index})>"
