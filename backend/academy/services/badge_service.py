"""
Badge Service - Business Logic
Badge của khóa học và external badge (portfolio)
"""

import logging
from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from academy.exceptions import ConflictError, NotFoundError, ValidationError
from academy.models.badge import Badge, ExternalBadge
from academy.repositories.badge_repository import BadgeRepository, ExternalBadgeRepository
from academy.repositories.course_repository import CourseRepository
from academy.repositories.portfolio_repository import PortfolioRepository
from academy.schemas.badge import BadgeCreate, ExternalBadgeCreate
from academy.utils import transaction

logger = logging.getLogger(__name__)


class BadgeService:
    """Badge service"""

    @staticmethod
    def get_all(db: Session) -> List[Badge]:
        return BadgeRepository.get_all(db)

    @staticmethod
    def get_user_badges(db: Session, user_id: UUID) -> List[Badge]:
        return BadgeRepository.get_by_user(db, user_id)

    @staticmethod
    def get_badge(db: Session, badge_id: UUID) -> Badge:
        badge = BadgeRepository.get_by_id(db, badge_id)
        if not badge:
            raise NotFoundError("Badge not found")
        return badge

    @staticmethod
    def create_badge(db: Session, badge_data: BadgeCreate) -> Badge:
        """Icon và cặp (base_name, level) không được trùng"""
        if BadgeRepository.get_by_icon(db, badge_data.icon):
            raise ValidationError("A badge with this icon already exists")
        if BadgeRepository.get_by_base_name_and_level(db, badge_data.base_name, badge_data.level):
            raise ValidationError("A badge with this base name and level already exists")

        with transaction(db, "create badge"):
            badge = BadgeRepository.add(db, Badge(
                name=badge_data.name,
                base_name=badge_data.base_name,
                level=badge_data.level,
                icon=badge_data.icon,
            ))
        return badge

    @staticmethod
    def update_icon(db: Session, badge_id: UUID, icon: str) -> Badge:
        badge = BadgeService.get_badge(db, badge_id)
        other = BadgeRepository.get_by_icon(db, icon)
        if other and other.id != badge.id:
            raise ValidationError("A badge with this icon already exists")
        with transaction(db, "update badge icon"):
            badge.icon = icon
        return badge

    @staticmethod
    def delete_badge(db: Session, badge_id: UUID) -> None:
        """Không xóa badge đang được khóa học sử dụng"""
        badge = BadgeService.get_badge(db, badge_id)
        if CourseRepository.exists_with_badge(db, badge_id):
            raise ConflictError("Badge is assigned to a learning course")
        with transaction(db, "delete badge"):
            db.delete(badge)
        logger.info("Deleted badge %s", badge_id)

    # === External badges ===

    @staticmethod
    def get_all_external(db: Session) -> List[ExternalBadge]:
        return ExternalBadgeRepository.get_all(db)

    @staticmethod
    def get_user_external_badges(db: Session, user_id: UUID) -> List[ExternalBadge]:
        return ExternalBadgeRepository.get_by_user(db, user_id)

    @staticmethod
    def get_external_badge(db: Session, badge_id: UUID) -> ExternalBadge:
        badge = ExternalBadgeRepository.get_by_id(db, badge_id)
        if not badge:
            raise NotFoundError("External badge not found")
        return badge

    @staticmethod
    def create_external_badge(db: Session, badge_data: ExternalBadgeCreate) -> ExternalBadge:
        if ExternalBadgeRepository.name_exists(db, badge_data.name):
            raise ValidationError("An external badge with this name already exists")
        if ExternalBadgeRepository.icon_exists(db, badge_data.icon):
            raise ValidationError("An external badge with this icon already exists")

        with transaction(db, "create external badge"):
            badge = ExternalBadgeRepository.add(db, ExternalBadge(
                name=badge_data.name.strip(),
                category=badge_data.category,
                icon=badge_data.icon,
            ))
        return badge

    @staticmethod
    def update_external_icon(db: Session, badge_id: UUID, icon: str) -> ExternalBadge:
        badge = BadgeService.get_external_badge(db, badge_id)
        with transaction(db, "update external badge icon"):
            badge.icon = icon
        return badge

    @staticmethod
    def delete_external_badge(db: Session, badge_id: UUID) -> None:
        """Không xóa external badge đang gắn với portfolio"""
        badge = BadgeService.get_external_badge(db, badge_id)
        if PortfolioRepository.external_badge_in_use(db, badge_id):
            raise ConflictError("External badge is linked to a portfolio")
        with transaction(db, "delete external badge"):
            db.delete(badge)
        logger.info("Deleted external badge %s", badge_id)
