"""
Course Service - Business Logic
Tạo/cập nhật khóa học, gán tag và badge
"""

import logging
from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from academy.exceptions import ConflictError, NotFoundError, ValidationError
from academy.models.course import LearningCourse, Tag
from academy.repositories.course_repository import CourseRepository, TagRepository
from academy.schemas.course import CourseCreate, CourseResponse, CourseUpdate
from academy.services.hierarchy_service import HierarchyService
from academy.utils import transaction

logger = logging.getLogger(__name__)


class CourseService:
    """Learning course service"""

    @staticmethod
    def to_response(db: Session, course: LearningCourse) -> CourseResponse:
        return CourseResponse(
            id=course.id,
            title=course.title,
            description=course.description,
            base_name=course.base_name,
            level=course.level,
            duration=course.duration,
            is_published=course.is_published,
            index=course.index,
            badge_id=course.badge_id,
            tag_names=CourseRepository.get_tag_names(db, course.id),
            lesson_ids=[lesson.id for lesson in course.lessons],
        )

    @staticmethod
    def get_all(db: Session) -> List[CourseResponse]:
        return [CourseService.to_response(db, course) for course in CourseRepository.get_all(db)]

    @staticmethod
    def get_course(db: Session, course_id: UUID) -> LearningCourse:
        course = CourseRepository.get_by_id(db, course_id)
        if not course:
            raise NotFoundError("Learning course not found")
        return course

    @staticmethod
    def _resolve_tags(db: Session, tag_names: List[str]) -> List[Tag]:
        """Tìm tag theo tên, tạo mới nếu chưa có; giữ thứ tự, bỏ trùng"""
        tags = []
        seen = set()
        for raw_name in tag_names:
            name = raw_name.strip()
            if not name or name in seen:
                continue
            seen.add(name)
            tag = TagRepository.get_by_name(db, name)
            if not tag:
                tag = TagRepository.add(db, Tag(name=name))
            tags.append(tag)
        return tags

    @staticmethod
    def create_course(db: Session, course_data: CourseCreate) -> LearningCourse:
        """Tạo khóa học mới (chưa publish, đứng cuối danh sách)"""
        if course_data.badge_id is not None:
            HierarchyService.ensure_badge_assignable(db, course_data.badge_id)

        with transaction(db, "create learning course"):
            course = CourseRepository.add(db, LearningCourse(
                title=course_data.title,
                description=course_data.description,
                base_name=course_data.base_name,
                level=course_data.level,
                duration=course_data.duration,
                is_published=False,
                index=CourseRepository.next_index(db),
                badge_id=course_data.badge_id,
            ))
            CourseRepository.set_tags(db, course.id, CourseService._resolve_tags(db, course_data.tag_names))

        logger.info("Created learning course %s", course.id)
        return course

    @staticmethod
    def update_course(db: Session, course_id: UUID, course_data: CourseUpdate) -> LearningCourse:
        course = CourseService.get_course(db, course_id)
        if course_data.badge_id is not None:
            HierarchyService.ensure_badge_assignable(db, course_data.badge_id, exclude_course_id=course_id)

        with transaction(db, "update learning course"):
            course.title = course_data.title
            course.description = course_data.description
            course.base_name = course_data.base_name
            course.level = course_data.level
            course.duration = course_data.duration
            course.is_published = course_data.is_published
            course.badge_id = course_data.badge_id
            CourseRepository.set_tags(db, course.id, CourseService._resolve_tags(db, course_data.tag_names))
        return course

    @staticmethod
    def delete_course(db: Session, course_id: UUID) -> None:
        HierarchyService.delete_course(db, course_id)

    # === Tags ===

    @staticmethod
    def get_tag_names(db: Session) -> List[str]:
        return [tag.name for tag in TagRepository.get_all(db)]

    @staticmethod
    def create_tag(db: Session, name: str) -> Tag:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Tag name cannot be empty")
        if TagRepository.get_by_name(db, name):
            raise ConflictError("Tag already exists")
        with transaction(db, "create tag"):
            tag = TagRepository.add(db, Tag(name=name))
        return tag
