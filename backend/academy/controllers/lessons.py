"""
Lesson Controllers
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from academy.controllers.dependencies import require_admin
from academy.database import get_db
from academy.schemas.course import (
    CreatedResponse,
    LessonCreate,
    LessonDetailResponse,
    LessonResponse,
    LessonUpdate,
    ReorderLessonsRequest,
)
from academy.services.hierarchy_service import HierarchyService

router = APIRouter(prefix="/Lesson", tags=["Lessons"])


@router.get("/by-course/{course_id}", response_model=List[LessonResponse])
def get_lessons_by_course(course_id: UUID, db: Session = Depends(get_db)):
    """Lấy danh sách lessons của khóa học"""
    return HierarchyService.get_lessons_by_course(db, course_id)


@router.get("/{lesson_id}", response_model=LessonDetailResponse)
def get_lesson(lesson_id: UUID, db: Session = Depends(get_db)):
    """Lấy chi tiết lesson"""
    return HierarchyService.get_lesson_detail(db, lesson_id)


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
def create_lesson(lesson_data: LessonCreate, db: Session = Depends(get_db)):
    lesson = HierarchyService.create_lesson(db, lesson_data)
    return CreatedResponse(id=lesson.id)


@router.put("/{lesson_id}", response_model=LessonResponse, dependencies=[Depends(require_admin)])
def update_lesson(lesson_id: UUID, lesson_data: LessonUpdate, db: Session = Depends(get_db)):
    return HierarchyService.update_lesson(db, lesson_id, lesson_data)


@router.delete("/{lesson_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
def delete_lesson(lesson_id: UUID, db: Session = Depends(get_db)):
    HierarchyService.delete_lesson(db, lesson_id)


@router.put("/course/{course_id}/reorder", dependencies=[Depends(require_admin)])
def reorder_lessons(course_id: UUID, request: ReorderLessonsRequest, db: Session = Depends(get_db)):
    updated = HierarchyService.reorder_lessons(db, course_id, request.lessons)
    return {"updated": updated}
