"""
Progress Service - Business Logic
Hoàn thành chapter -> lesson -> khóa học, trao badge khi xong khóa học
"""

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from academy.exceptions import NotFoundError
from academy.models.course import Chapter
from academy.models.progress import UserChapter, UserLearningCourse, UserLesson
from academy.repositories.chapter_repository import ChapterRepository
from academy.repositories.course_repository import CourseRepository
from academy.repositories.lesson_repository import LessonRepository
from academy.repositories.progress_repository import ProgressRepository
from academy.repositories.user_repository import UserRepository
from academy.schemas.progress import (
    ChapterProgressResponse,
    CompleteChapterResponse,
    CourseProgressResponse,
    LessonProgressResponse,
)
from academy.utils import transaction, utcnow

logger = logging.getLogger(__name__)


def _percentage(done: int, total: int) -> float:
    if total == 0:
        return 0.0
    return round(done / total * 100, 2)


class ProgressService:
    """User progress service"""

    @staticmethod
    def mark_chapter_complete(db: Session, user_id: UUID, chapter: Chapter) -> bool:
        """
        Đánh dấu chapter hoàn thành và cập nhật lesson/khóa học nếu đủ điều kiện.
        Không commit; người gọi quản lý transaction.
        Returns: True nếu user vừa được trao badge
        """
        now = utcnow()
        user_chapter = ProgressRepository.get_user_chapter(db, user_id, chapter.id)
        if not user_chapter:
            ProgressRepository.add(db, UserChapter(
                user_id=user_id, chapter_id=chapter.id, completed=True, completed_at=now, created_at=now
            ))
        elif not user_chapter.completed:
            user_chapter.completed = True
            user_chapter.completed_at = now
        db.flush()

        # Lesson hoàn thành khi tất cả chapter đã hoàn thành
        chapter_ids = ChapterRepository.get_ids_by_lesson(db, chapter.lesson_id)
        if ProgressRepository.count_completed_chapters(db, user_id, chapter_ids) < len(chapter_ids):
            return False

        user_lesson = ProgressRepository.get_user_lesson(db, user_id, chapter.lesson_id)
        if not user_lesson:
            ProgressRepository.add(db, UserLesson(user_id=user_id, lesson_id=chapter.lesson_id, completed=True))
        else:
            user_lesson.completed = True
        db.flush()

        lesson = LessonRepository.get_by_id(db, chapter.lesson_id)
        course_id = lesson.learning_course_id
        lesson_ids = LessonRepository.get_ids_by_course(db, course_id)
        if ProgressRepository.count_completed_lessons(db, user_id, lesson_ids) < len(lesson_ids):
            return False

        user_course = ProgressRepository.get_user_course(db, user_id, course_id)
        if not user_course:
            ProgressRepository.add(db, UserLearningCourse(user_id=user_id, course_id=course_id, completed=True))
        else:
            user_course.completed = True

        # Trao badge của khóa học (mỗi badge chỉ một lần)
        course = CourseRepository.get_by_id(db, course_id)
        if course.badge_id is None or UserRepository.has_badge(db, user_id, course.badge_id):
            return False
        UserRepository.add_badge(db, user_id, course.badge_id)
        logger.info("Awarded badge %s to user %s for course %s", course.badge_id, user_id, course_id)
        return True

    @staticmethod
    def complete_chapter(db: Session, user_id: UUID, chapter_id: UUID) -> CompleteChapterResponse:
        chapter = ChapterRepository.get_by_id(db, chapter_id)
        if not chapter:
            raise NotFoundError("Chapter not found")

        with transaction(db, "complete chapter"):
            badge_awarded = ProgressService.mark_chapter_complete(db, user_id, chapter)

        return CompleteChapterResponse(message="Progress updated successfully", badge_awarded=badge_awarded)

    @staticmethod
    def get_chapter_progress(db: Session, user_id: UUID, chapter_id: UUID) -> ChapterProgressResponse:
        user_chapter = ProgressRepository.get_user_chapter(db, user_id, chapter_id)
        return ChapterProgressResponse(is_completed=bool(user_chapter and user_chapter.completed))

    @staticmethod
    def get_lesson_progress(db: Session, user_id: UUID, lesson_id: UUID) -> LessonProgressResponse:
        chapter_ids = ChapterRepository.get_ids_by_lesson(db, lesson_id)
        completed = ProgressRepository.count_completed_chapters(db, user_id, chapter_ids)
        user_lesson = ProgressRepository.get_user_lesson(db, user_id, lesson_id)
        return LessonProgressResponse(
            total_chapters=len(chapter_ids),
            completed_chapters=completed,
            progress_percentage=_percentage(completed, len(chapter_ids)),
            is_completed=bool(user_lesson and user_lesson.completed),
        )

    @staticmethod
    def get_course_progress(db: Session, user_id: UUID, course_id: UUID) -> CourseProgressResponse:
        lesson_ids = LessonRepository.get_ids_by_course(db, course_id)
        completed = ProgressRepository.count_completed_lessons(db, user_id, lesson_ids)
        user_course = ProgressRepository.get_user_course(db, user_id, course_id)
        return CourseProgressResponse(
            total_lessons=len(lesson_ids),
            completed_lessons=completed,
            progress_percentage=_percentage(completed, len(lesson_ids)),
            is_completed=bool(user_course and user_course.completed),
        )
