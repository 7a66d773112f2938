"""
Badge Controllers - badge khóa học và external badge
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from academy.controllers.dependencies import get_current_identity, require_admin
from academy.database import get_db
from academy.schemas.badge import (
    BadgeCreate,
    BadgeIconUpdate,
    BadgeResponse,
    ExternalBadgeCreate,
    ExternalBadgeResponse,
)
from academy.services.badge_service import BadgeService
from academy.services.identity_service import Identity

router = APIRouter(prefix="/Badge", tags=["Badges"], dependencies=[Depends(get_current_identity)])
external_router = APIRouter(prefix="/ExternalBadge", tags=["External Badges"], dependencies=[Depends(get_current_identity)])


@router.post("", response_model=BadgeResponse, status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
def create_badge(badge_data: BadgeCreate, db: Session = Depends(get_db)):
    return BadgeService.create_badge(db, badge_data)


@router.get("", response_model=List[BadgeResponse])
def get_badges(db: Session = Depends(get_db)):
    return BadgeService.get_all(db)


@router.get("/user", response_model=List[BadgeResponse])
def get_my_badges(identity: Identity = Depends(get_current_identity), db: Session = Depends(get_db)):
    """Badge user hiện tại đã nhận"""
    return BadgeService.get_user_badges(db, identity.user_id)


@router.put("/{badge_id}/icon", response_model=BadgeResponse, dependencies=[Depends(require_admin)])
def update_badge_icon(badge_id: UUID, icon_data: BadgeIconUpdate, db: Session = Depends(get_db)):
    return BadgeService.update_icon(db, badge_id, icon_data.icon)


@router.delete("/{badge_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
def delete_badge(badge_id: UUID, db: Session = Depends(get_db)):
    """Badge đang gắn với khóa học không thể xóa (409)"""
    BadgeService.delete_badge(db, badge_id)


@external_router.post("", response_model=ExternalBadgeResponse, status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
def create_external_badge(badge_data: ExternalBadgeCreate, db: Session = Depends(get_db)):
    return BadgeService.create_external_badge(db, badge_data)


@external_router.get("", response_model=List[ExternalBadgeResponse])
def get_external_badges(db: Session = Depends(get_db)):
    return BadgeService.get_all_external(db)


@external_router.get("/user", response_model=List[ExternalBadgeResponse])
def get_my_external_badges(identity: Identity = Depends(get_current_identity), db: Session = Depends(get_db)):
    return BadgeService.get_user_external_badges(db, identity.user_id)


@external_router.put("/{badge_id}/icon", response_model=ExternalBadgeResponse, dependencies=[Depends(require_admin)])
def update_external_badge_icon(badge_id: UUID, icon_data: BadgeIconUpdate, db: Session = Depends(get_db)):
    return BadgeService.update_external_icon(db, badge_id, icon_data.icon)


@external_router.delete("/{badge_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
def delete_external_badge(badge_id: UUID, db: Session = Depends(get_db)):
    """External badge đang gắn với portfolio không thể xóa (409)"""
    BadgeService.delete_external_badge(db, badge_id)
