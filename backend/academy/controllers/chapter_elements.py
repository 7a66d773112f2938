"""
Chapter Element Controllers
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from academy.controllers.dependencies import require_admin
from academy.database import get_db
from academy.schemas.course import (
    ChapterElementCreate,
    ChapterElementResponse,
    ChapterElementUpdate,
    CreatedResponse,
    ReorderElementsRequest,
)
from academy.services.hierarchy_service import HierarchyService

router = APIRouter(prefix="/ChapterElement", tags=["Chapter Elements"])


@router.post(
    "/chapter/{chapter_id}",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_element(chapter_id: UUID, element_data: ChapterElementCreate, db: Session = Depends(get_db)):
    element = HierarchyService.create_element(db, chapter_id, element_data)
    return CreatedResponse(id=element.id)


@router.get("/by-form/{form_id}", response_model=ChapterElementResponse)
def get_element_by_form(form_id: UUID, db: Session = Depends(get_db)):
    """Element Form chứa quiz"""
    return HierarchyService.get_element_by_form(db, form_id)


@router.get("/{element_id}", response_model=ChapterElementResponse)
def get_element(element_id: UUID, db: Session = Depends(get_db)):
    return HierarchyService.get_element(db, element_id)


@router.put("/{element_id}", response_model=ChapterElementResponse, dependencies=[Depends(require_admin)])
def update_element(element_id: UUID, element_data: ChapterElementUpdate, db: Session = Depends(get_db)):
    return HierarchyService.update_element(db, element_id, element_data)


@router.delete("/{element_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
def delete_element(element_id: UUID, db: Session = Depends(get_db)):
    """Xóa element; element Form kéo theo quiz"""
    HierarchyService.delete_element(db, element_id)


@router.put("/chapter/{chapter_id}/reorder", dependencies=[Depends(require_admin)])
def reorder_elements(chapter_id: UUID, request: ReorderElementsRequest, db: Session = Depends(get_db)):
    updated = HierarchyService.reorder_elements(db, chapter_id, request.elements)
    return {"updated": updated}
