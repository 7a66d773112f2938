"""
Badge Repository - Data Access Layer
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session
from academy.models.badge import Badge, ExternalBadge
from academy.models.user import UserExternalBadge, user_badges


class BadgeRepository:
    """Badge repository"""

    @staticmethod
    def get_all(db: Session) -> List[Badge]:
        return db.query(Badge).order_by(Badge.name).all()

    @staticmethod
    def get_by_id(db: Session, badge_id: UUID) -> Optional[Badge]:
        return db.query(Badge).filter(Badge.id == badge_id).first()

    @staticmethod
    def get_by_icon(db: Session, icon: str) -> Optional[Badge]:
        return db.query(Badge).filter(Badge.icon == icon).first()

    @staticmethod
    def get_by_base_name_and_level(db: Session, base_name: str, level: str) -> Optional[Badge]:
        """So sánh base_name không phân biệt hoa thường"""
        return db.query(Badge).filter(
            func.lower(Badge.base_name) == base_name.lower(),
            Badge.level == level,
        ).first()

    @staticmethod
    def get_by_user(db: Session, user_id: UUID) -> List[Badge]:
        return db.query(Badge).join(
            user_badges, user_badges.c.badge_id == Badge.id
        ).filter(user_badges.c.user_id == user_id).order_by(Badge.name).all()

    @staticmethod
    def add(db: Session, badge: Badge) -> Badge:
        db.add(badge)
        db.flush()
        return badge


class ExternalBadgeRepository:
    """External badge repository"""

    @staticmethod
    def get_all(db: Session) -> List[ExternalBadge]:
        return db.query(ExternalBadge).order_by(ExternalBadge.name).all()

    @staticmethod
    def get_by_id(db: Session, badge_id: UUID) -> Optional[ExternalBadge]:
        return db.query(ExternalBadge).filter(ExternalBadge.id == badge_id).first()

    @staticmethod
    def name_exists(db: Session, name: str) -> bool:
        return db.query(ExternalBadge.id).filter(
            func.lower(ExternalBadge.name) == name.strip().lower()
        ).first() is not None

    @staticmethod
    def icon_exists(db: Session, icon: str) -> bool:
        return db.query(ExternalBadge.id).filter(ExternalBadge.icon == icon).first() is not None

    @staticmethod
    def get_by_user(db: Session, user_id: UUID) -> List[ExternalBadge]:
        return db.query(ExternalBadge).join(
            UserExternalBadge, UserExternalBadge.external_badge_id == ExternalBadge.id
        ).filter(UserExternalBadge.user_id == user_id).order_by(ExternalBadge.name).all()

    @staticmethod
    def add(db: Session, badge: ExternalBadge) -> ExternalBadge:
        db.add(badge)
        db.flush()
        return badge
