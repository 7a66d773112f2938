"""
Course Hierarchy Service - Business Logic
LearningCourse -> Lesson -> Chapter -> ChapterElement (-> QuizForm)

Tạo mới với index kế tiếp, sắp xếp lại anh em, xóa dây chuyền
và kiểm tra badge không trùng giữa các khóa học.
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Session

from academy.exceptions import ConflictError, NotFoundError, ValidationError
from academy.models.course import Chapter, ChapterElement, ChapterElementType, Lesson
from academy.repositories.badge_repository import BadgeRepository
from academy.repositories.chapter_repository import ChapterElementRepository, ChapterRepository
from academy.repositories.course_repository import CourseRepository
from academy.repositories.lesson_repository import LessonRepository
from academy.repositories.quiz_repository import QuizFormRepository
from academy.schemas.course import (
    ChapterCreate,
    ChapterElementCreate,
    ChapterElementResponse,
    ChapterElementUpdate,
    ChapterElementsResponse,
    ChapterHierarchyResponse,
    ChapterUpdate,
    LessonCreate,
    LessonUpdate,
    ReorderItem,
)
from academy.utils import transaction

logger = logging.getLogger(__name__)


def apply_reorder(siblings: Iterable, items: List[ReorderItem]) -> Tuple[int, List[str]]:
    """
    Ghi đè index của các sibling có trong items, giữ nguyên phần còn lại.
    Id trùng lặp: giá trị cuối cùng thắng. Không nén lại index.
    Returns: (số sibling đã cập nhật, danh sách id bị bỏ qua)
    """
    requested: Dict[UUID, int] = {}
    ignored: List[str] = []
    for item in items:
        try:
            requested[UUID(str(item.id))] = item.index
        except ValueError:
            ignored.append(item.id)

    updated = 0
    seen = set()
    for sibling in siblings:
        if sibling.id in requested:
            sibling.index = requested[sibling.id]
            seen.add(sibling.id)
            updated += 1

    ignored.extend(str(child_id) for child_id in requested if child_id not in seen)
    return updated, ignored


class HierarchyService:
    """Course hierarchy service"""

    # === Reorder ===

    @staticmethod
    def _reorder(db: Session, siblings: List, items: List[ReorderItem], scope: str) -> int:
        with transaction(db, f"reorder {scope}"):
            updated, ignored = apply_reorder(siblings, items)
        if ignored:
            logger.warning("Reorder of %s ignored unknown ids: %s", scope, ", ".join(ignored))
        return updated

    @staticmethod
    def reorder_courses(db: Session, items: List[ReorderItem]) -> int:
        """Sắp xếp lại toàn bộ khóa học"""
        return HierarchyService._reorder(db, CourseRepository.get_all(db), items, "courses")

    @staticmethod
    def reorder_lessons(db: Session, course_id: UUID, items: List[ReorderItem]) -> int:
        """Sắp xếp lại lessons trong một khóa học"""
        if not CourseRepository.get_by_id(db, course_id):
            raise NotFoundError("Learning course not found")
        siblings = LessonRepository.get_all_by_course(db, course_id)
        return HierarchyService._reorder(db, siblings, items, f"lessons of course {course_id}")

    @staticmethod
    def reorder_chapters(db: Session, lesson_id: UUID, items: List[ReorderItem]) -> int:
        if not LessonRepository.get_by_id(db, lesson_id):
            raise NotFoundError("Lesson not found")
        siblings = ChapterRepository.get_all_by_lesson(db, lesson_id)
        return HierarchyService._reorder(db, siblings, items, f"chapters of lesson {lesson_id}")

    @staticmethod
    def reorder_elements(db: Session, chapter_id: UUID, items: List[ReorderItem]) -> int:
        if not ChapterRepository.get_by_id(db, chapter_id):
            raise NotFoundError("Chapter not found")
        siblings = ChapterElementRepository.get_all_by_chapter(db, chapter_id)
        return HierarchyService._reorder(db, siblings, items, f"elements of chapter {chapter_id}")

    # === Lessons ===

    @staticmethod
    def get_lessons_by_course(db: Session, course_id: UUID) -> List[Lesson]:
        if not CourseRepository.get_by_id(db, course_id):
            raise NotFoundError("Learning course not found")
        return LessonRepository.get_all_by_course(db, course_id)

    @staticmethod
    def get_lesson(db: Session, lesson_id: UUID) -> Lesson:
        lesson = LessonRepository.get_by_id(db, lesson_id)
        if not lesson:
            raise NotFoundError("Lesson not found")
        return lesson

    @staticmethod
    def get_lesson_detail(db: Session, lesson_id: UUID) -> dict:
        """Lesson kèm tên khóa học"""
        lesson = HierarchyService.get_lesson(db, lesson_id)
        course = CourseRepository.get_by_id(db, lesson.learning_course_id)
        return {
            "id": lesson.id,
            "learning_course_id": lesson.learning_course_id,
            "index": lesson.index,
            "title": lesson.title,
            "description": lesson.description,
            "duration": lesson.duration,
            "course_title": course.title,
        }

    @staticmethod
    def create_lesson(db: Session, lesson_data: LessonCreate) -> Lesson:
        course_id = lesson_data.learning_course_id
        if not CourseRepository.get_by_id(db, course_id):
            raise NotFoundError("Learning course not found")

        with transaction(db, "create lesson"):
            index = lesson_data.index
            if index is None:
                index = LessonRepository.next_index(db, course_id)
            lesson = LessonRepository.add(db, Lesson(
                learning_course_id=course_id,
                index=index,
                title=lesson_data.title,
                description=lesson_data.description,
                duration=lesson_data.duration,
            ))
        return lesson

    @staticmethod
    def update_lesson(db: Session, lesson_id: UUID, lesson_data: LessonUpdate) -> Lesson:
        lesson = HierarchyService.get_lesson(db, lesson_id)
        with transaction(db, "update lesson"):
            lesson.title = lesson_data.title
            lesson.description = lesson_data.description
            lesson.duration = lesson_data.duration
        return lesson

    @staticmethod
    def delete_lesson(db: Session, lesson_id: UUID) -> None:
        """Xóa lesson cùng chapters, elements và quiz của nó"""
        lesson = HierarchyService.get_lesson(db, lesson_id)
        chapter_ids = ChapterRepository.get_ids_by_lesson(db, lesson_id)
        with transaction(db, "delete lesson"):
            HierarchyService._delete_with_forms(db, lesson, chapter_ids)
        logger.info("Deleted lesson %s", lesson_id)

    # === Chapters ===

    @staticmethod
    def get_chapters_by_lesson(db: Session, lesson_id: UUID) -> List[Chapter]:
        HierarchyService.get_lesson(db, lesson_id)
        return ChapterRepository.get_all_by_lesson(db, lesson_id)

    @staticmethod
    def get_chapter(db: Session, chapter_id: UUID) -> Chapter:
        chapter = ChapterRepository.get_by_id(db, chapter_id)
        if not chapter:
            raise NotFoundError("Chapter not found")
        return chapter

    @staticmethod
    def get_chapter_elements(db: Session, chapter_id: UUID) -> ChapterElementsResponse:
        chapter = HierarchyService.get_chapter(db, chapter_id)
        return ChapterElementsResponse(
            title=chapter.title,
            elements=[
                ChapterElementResponse.model_validate(element)
                for element in ChapterElementRepository.get_all_by_chapter(db, chapter_id)
            ],
        )

    @staticmethod
    def get_chapter_hierarchy(db: Session, chapter_id: UUID) -> ChapterHierarchyResponse:
        """Lesson và khóa học chứa chapter"""
        chapter = HierarchyService.get_chapter(db, chapter_id)
        lesson = LessonRepository.get_by_id(db, chapter.lesson_id)
        course = CourseRepository.get_by_id(db, lesson.learning_course_id)
        return ChapterHierarchyResponse(
            lesson_id=lesson.id,
            lesson_title=lesson.title,
            course_id=course.id,
            course_title=course.title,
        )

    @staticmethod
    def create_chapter(db: Session, lesson_id: UUID, chapter_data: ChapterCreate) -> Chapter:
        HierarchyService.get_lesson(db, lesson_id)
        with transaction(db, "create chapter"):
            index = chapter_data.index
            if index is None:
                index = ChapterRepository.next_index(db, lesson_id)
            chapter = ChapterRepository.add(db, Chapter(
                lesson_id=lesson_id,
                index=index,
                title=chapter_data.title,
            ))
        return chapter

    @staticmethod
    def update_chapter(db: Session, chapter_id: UUID, chapter_data: ChapterUpdate) -> Chapter:
        chapter = HierarchyService.get_chapter(db, chapter_id)
        with transaction(db, "update chapter"):
            chapter.title = chapter_data.title
        return chapter

    @staticmethod
    def delete_chapter(db: Session, chapter_id: UUID) -> None:
        chapter = HierarchyService.get_chapter(db, chapter_id)
        with transaction(db, "delete chapter"):
            HierarchyService._delete_with_forms(db, chapter, [chapter_id])
        logger.info("Deleted chapter %s", chapter_id)

    # === Chapter Elements ===

    @staticmethod
    def get_element(db: Session, element_id: UUID) -> ChapterElement:
        element = ChapterElementRepository.get_by_id(db, element_id)
        if not element:
            raise NotFoundError("Chapter element not found")
        return element

    @staticmethod
    def get_element_by_form(db: Session, form_id: UUID) -> ChapterElement:
        """Element Form chứa quiz (dùng để tìm chapter của quiz)"""
        element = ChapterElementRepository.get_by_form_id(db, form_id)
        if not element:
            raise NotFoundError("Chapter element not found for this quiz")
        return element

    @staticmethod
    def _check_element_form(
        db: Session,
        element_type: str,
        form_id: Optional[UUID],
        exclude_element_id: Optional[UUID] = None,
    ) -> None:
        """Element Form phải trỏ tới đúng một quiz; loại khác không được có form"""
        if element_type not in ChapterElementType.ALL:
            raise ValidationError(
                f"Invalid element type '{element_type}'. Allowed: {', '.join(ChapterElementType.ALL)}"
            )
        if element_type != ChapterElementType.FORM:
            if form_id is not None:
                raise ValidationError("Only Form elements can reference a quiz")
            return
        if form_id is None:
            raise ValidationError("Form elements must reference a quiz")
        if not QuizFormRepository.get_by_id(db, form_id):
            raise NotFoundError("Quiz form not found")
        owner = ChapterElementRepository.get_by_form_id(db, form_id)
        if owner and owner.id != exclude_element_id:
            raise ConflictError("Quiz form is already used by another chapter element")

    @staticmethod
    def create_element(db: Session, chapter_id: UUID, element_data: ChapterElementCreate) -> ChapterElement:
        HierarchyService.get_chapter(db, chapter_id)
        HierarchyService._check_element_form(db, element_data.type, element_data.form_id)

        with transaction(db, "create chapter element"):
            index = element_data.index
            if index is None:
                index = ChapterElementRepository.next_index(db, chapter_id)
            element = ChapterElementRepository.add(db, ChapterElement(
                chapter_id=chapter_id,
                index=index,
                title=element_data.title,
                type=element_data.type,
                content=element_data.content,
                image=element_data.image,
                form_id=element_data.form_id,
            ))
        return element

    @staticmethod
    def update_element(db: Session, element_id: UUID, element_data: ChapterElementUpdate) -> ChapterElement:
        element = HierarchyService.get_element(db, element_id)
        HierarchyService._check_element_form(
            db, element_data.type, element_data.form_id, exclude_element_id=element_id
        )

        previous_form_id = element.form_id
        with transaction(db, "update chapter element"):
            element.title = element_data.title
            element.type = element_data.type
            element.content = element_data.content
            element.image = element_data.image
            element.form_id = element_data.form_id
            if element_data.index is not None:
                element.index = element_data.index
            db.flush()
            # Quiz cũ không còn element nào trỏ tới
            if previous_form_id is not None and previous_form_id != element.form_id:
                HierarchyService._delete_forms(db, [previous_form_id])
        return element

    @staticmethod
    def delete_element(db: Session, element_id: UUID) -> None:
        """Xóa element; element Form kéo theo quiz của nó"""
        element = HierarchyService.get_element(db, element_id)
        form_ids = [element.form_id] if element.form_id is not None else []
        with transaction(db, "delete chapter element"):
            db.delete(element)
            db.flush()
            HierarchyService._delete_forms(db, form_ids)

    # === Course deletion ===

    @staticmethod
    def delete_course(db: Session, course_id: UUID) -> None:
        """Xóa khóa học cùng toàn bộ cây con và các quiz liên quan"""
        course = CourseRepository.get_by_id(db, course_id)
        if not course:
            raise NotFoundError("Learning course not found")
        lesson_ids = LessonRepository.get_ids_by_course(db, course_id)
        chapter_ids = ChapterRepository.get_ids_by_lessons(db, lesson_ids)
        with transaction(db, "delete learning course"):
            HierarchyService._delete_with_forms(db, course, chapter_ids)
        logger.info("Deleted learning course %s", course_id)

    @staticmethod
    def _delete_with_forms(db: Session, parent, chapter_ids: List[UUID]) -> None:
        """
        Xóa parent (ORM cascade xuống các con) rồi xóa quiz của các element Form.
        Phải flush trước để element được xóa trước quiz mà nó tham chiếu.
        """
        form_ids = ChapterElementRepository.get_form_ids_for_chapters(db, chapter_ids)
        db.delete(parent)
        db.flush()
        HierarchyService._delete_forms(db, form_ids)

    @staticmethod
    def _delete_forms(db: Session, form_ids: List[UUID]) -> None:
        for quiz_form in QuizFormRepository.get_by_ids(db, form_ids):
            db.delete(quiz_form)
        db.flush()

    # === Badge uniqueness ===

    @staticmethod
    def exists_with_badge(db: Session, badge_id: UUID, exclude_course_id: Optional[UUID] = None) -> bool:
        return CourseRepository.exists_with_badge(db, badge_id, exclude_course_id)

    @staticmethod
    def exists_with_badge_icon(db: Session, icon: str, exclude_course_id: Optional[UUID] = None) -> bool:
        return CourseRepository.exists_with_badge_icon(db, icon, exclude_course_id)

    @staticmethod
    def ensure_badge_assignable(db: Session, badge_id: UUID, exclude_course_id: Optional[UUID] = None) -> None:
        """Mỗi badge (và mỗi icon badge) chỉ thuộc về một khóa học"""
        badge = BadgeRepository.get_by_id(db, badge_id)
        if not badge:
            raise NotFoundError("Badge not found")
        if HierarchyService.exists_with_badge(db, badge_id, exclude_course_id):
            raise ConflictError("Badge is already assigned to another course")
        if HierarchyService.exists_with_badge_icon(db, badge.icon, exclude_course_id):
            raise ConflictError("A badge with the same icon is already assigned to another course")
