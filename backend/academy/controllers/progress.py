"""
User Progress Controllers
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from academy.controllers.dependencies import get_current_identity
from academy.database import get_db
from academy.schemas.progress import (
    ChapterProgressResponse,
    CompleteChapterResponse,
    CourseProgressResponse,
    LessonProgressResponse,
)
from academy.services.identity_service import Identity
from academy.services.progress_service import ProgressService

router = APIRouter(prefix="/UserProgress", tags=["User Progress"])


@router.get("/chapter/{chapter_id}", response_model=ChapterProgressResponse)
def get_chapter_progress(
    chapter_id: UUID,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    return ProgressService.get_chapter_progress(db, identity.user_id, chapter_id)


@router.post("/chapter/{chapter_id}/complete", response_model=CompleteChapterResponse)
def complete_chapter(
    chapter_id: UUID,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Hoàn thành chapter; có thể hoàn thành lesson, khóa học và nhận badge"""
    return ProgressService.complete_chapter(db, identity.user_id, chapter_id)


@router.get("/lesson/{lesson_id}", response_model=LessonProgressResponse)
def get_lesson_progress(
    lesson_id: UUID,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    return ProgressService.get_lesson_progress(db, identity.user_id, lesson_id)


@router.get("/course/{course_id}", response_model=CourseProgressResponse)
def get_course_progress(
    course_id: UUID,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    return ProgressService.get_course_progress(db, identity.user_id, course_id)
