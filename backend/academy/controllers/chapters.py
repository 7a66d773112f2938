"""
Chapter Controllers
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from academy.controllers.dependencies import get_ai_quiz_service, require_admin
from academy.database import get_db
from academy.schemas.course import (
    ChapterCreate,
    ChapterElementsResponse,
    ChapterHierarchyResponse,
    ChapterResponse,
    ChapterUpdate,
    CreatedResponse,
    ReorderChaptersRequest,
)
from academy.schemas.quiz import QuizQuestionInput
from academy.services.ai_quiz_service import AIQuizService
from academy.services.hierarchy_service import HierarchyService

router = APIRouter(prefix="/Chapter", tags=["Chapters"])


@router.get("/lesson/{lesson_id}", response_model=List[ChapterResponse])
def get_chapters_by_lesson(lesson_id: UUID, db: Session = Depends(get_db)):
    return HierarchyService.get_chapters_by_lesson(db, lesson_id)


@router.get("/{chapter_id}", response_model=ChapterResponse)
def get_chapter(chapter_id: UUID, db: Session = Depends(get_db)):
    return HierarchyService.get_chapter(db, chapter_id)


@router.get("/{chapter_id}/elements", response_model=ChapterElementsResponse)
def get_chapter_elements(chapter_id: UUID, db: Session = Depends(get_db)):
    """Chapter kèm danh sách element theo thứ tự"""
    return HierarchyService.get_chapter_elements(db, chapter_id)


@router.get("/{chapter_id}/hierarchy", response_model=ChapterHierarchyResponse)
def get_chapter_hierarchy(chapter_id: UUID, db: Session = Depends(get_db)):
    """Lesson và khóa học chứa chapter"""
    return HierarchyService.get_chapter_hierarchy(db, chapter_id)


@router.post(
    "/lesson/{lesson_id}",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_chapter(lesson_id: UUID, chapter_data: ChapterCreate, db: Session = Depends(get_db)):
    chapter = HierarchyService.create_chapter(db, lesson_id, chapter_data)
    return CreatedResponse(id=chapter.id)


@router.put("/{chapter_id}", response_model=ChapterResponse, dependencies=[Depends(require_admin)])
def update_chapter(chapter_id: UUID, chapter_data: ChapterUpdate, db: Session = Depends(get_db)):
    return HierarchyService.update_chapter(db, chapter_id, chapter_data)


@router.delete("/{chapter_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
def delete_chapter(chapter_id: UUID, db: Session = Depends(get_db)):
    HierarchyService.delete_chapter(db, chapter_id)


@router.put("/lesson/{lesson_id}/reorder", dependencies=[Depends(require_admin)])
def reorder_chapters(lesson_id: UUID, request: ReorderChaptersRequest, db: Session = Depends(get_db)):
    updated = HierarchyService.reorder_chapters(db, lesson_id, request.chapters)
    return {"updated": updated}


@router.post(
    "/{chapter_id}/generate-quiz",
    response_model=List[QuizQuestionInput],
    dependencies=[Depends(require_admin)],
)
def generate_quiz(
    chapter_id: UUID,
    db: Session = Depends(get_db),
    ai_service: AIQuizService = Depends(get_ai_quiz_service),
):
    """Sinh câu hỏi bằng AI từ nội dung chapter (chưa lưu)"""
    return ai_service.generate_quiz(db, chapter_id)
