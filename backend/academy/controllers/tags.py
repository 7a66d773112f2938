"""
Tag Controllers
"""

from typing import List

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from academy.controllers.dependencies import require_admin
from academy.database import get_db
from academy.services.course_service import CourseService

router = APIRouter(prefix="/Tag", tags=["Tags"])


@router.get("", response_model=List[str])
def get_tags(db: Session = Depends(get_db)):
    """Tên tất cả tag"""
    return CourseService.get_tag_names(db)


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
def create_tag(tag_name: str = Body(...), db: Session = Depends(get_db)):
    """Body là chuỗi JSON, ví dụ "python" """
    tag = CourseService.create_tag(db, tag_name)
    return {"id": tag.id, "name": tag.name}
