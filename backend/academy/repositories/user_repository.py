"""
User Repository - Data Access Layer
"""

from urllib.parse import unquote
from uuid import UUID

from sqlalchemy.orm import Session
from academy.models.user import Role, User, UserExternalBadge, user_badges


class UserRepository:
    """User repository"""

    @staticmethod
    def get_by_id(db: Session, user_id: UUID) -> User | None:
        """Lấy user theo ID"""
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_by_username(db: Session, username: str) -> User | None:
        """Lấy user theo username"""
        return db.query(User).filter(User.username == username).first()

    @staticmethod
    def get_by_email(db: Session, email: str) -> User | None:
        """Lấy user theo email"""
        return db.query(User).filter(User.email == email).first()

    @staticmethod
    def get_by_refresh_token(db: Session, refresh_token: str) -> User | None:
        """Lấy user theo refresh token (token từ client có thể bị URL-encode)"""
        return db.query(User).filter(User.refresh_token == unquote(refresh_token)).first()

    @staticmethod
    def username_exists(db: Session, username: str) -> bool:
        return db.query(User.id).filter(User.username == username).first() is not None

    @staticmethod
    def email_exists(db: Session, email: str) -> bool:
        return db.query(User.id).filter(User.email == email).first() is not None

    @staticmethod
    def add(db: Session, user: User) -> User:
        """Thêm user vào session (commit ở service)"""
        db.add(user)
        db.flush()
        return user

    @staticmethod
    def has_badge(db: Session, user_id: UUID, badge_id: UUID) -> bool:
        return db.query(user_badges).filter(
            user_badges.c.user_id == user_id,
            user_badges.c.badge_id == badge_id,
        ).first() is not None

    @staticmethod
    def add_badge(db: Session, user_id: UUID, badge_id: UUID) -> None:
        db.execute(user_badges.insert().values(user_id=user_id, badge_id=badge_id))

    @staticmethod
    def get_external_badge_link(db: Session, user_id: UUID, external_badge_id: UUID) -> UserExternalBadge | None:
        return db.query(UserExternalBadge).filter(
            UserExternalBadge.user_id == user_id,
            UserExternalBadge.external_badge_id == external_badge_id,
        ).first()


class RoleRepository:
    """Role repository"""

    @staticmethod
    def get_by_name(db: Session, name: str) -> Role | None:
        return db.query(Role).filter(Role.name == name).first()

    @staticmethod
    def get_or_create(db: Session, name: str) -> Role:
        """Lấy hoặc tạo role"""
        role = RoleRepository.get_by_name(db, name)
        if not role:
            role = Role(name=name)
            db.add(role)
            db.flush()
        return role
