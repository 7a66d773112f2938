"""
Learning Course Controllers
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from academy.controllers.dependencies import require_admin
from academy.database import get_db
from academy.schemas.course import CourseCreate, CourseResponse, CourseUpdate, ReorderCoursesRequest
from academy.services.course_service import CourseService
from academy.services.hierarchy_service import HierarchyService

router = APIRouter(prefix="/LearningCourse", tags=["Learning Courses"])


@router.get("", response_model=List[CourseResponse])
def get_courses(db: Session = Depends(get_db)):
    """Lấy danh sách khóa học theo thứ tự"""
    return CourseService.get_all(db)


@router.get("/{course_id}", response_model=CourseResponse)
def get_course(course_id: UUID, db: Session = Depends(get_db)):
    """Lấy chi tiết khóa học"""
    return CourseService.to_response(db, CourseService.get_course(db, course_id))


@router.post("", response_model=CourseResponse, status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
def create_course(course_data: CourseCreate, db: Session = Depends(get_db)):
    course = CourseService.create_course(db, course_data)
    return CourseService.to_response(db, course)


@router.patch("/{course_id}", response_model=CourseResponse, dependencies=[Depends(require_admin)])
def update_course(course_id: UUID, course_data: CourseUpdate, db: Session = Depends(get_db)):
    course = CourseService.update_course(db, course_id, course_data)
    return CourseService.to_response(db, course)


@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
def delete_course(course_id: UUID, db: Session = Depends(get_db)):
    """Xóa khóa học cùng lessons, chapters, elements và quiz"""
    CourseService.delete_course(db, course_id)


@router.put("/reorder", dependencies=[Depends(require_admin)])
def reorder_courses(request: ReorderCoursesRequest, db: Session = Depends(get_db)):
    """Sắp xếp lại thứ tự khóa học"""
    updated = HierarchyService.reorder_courses(db, request.courses)
    return {"updated": updated}
