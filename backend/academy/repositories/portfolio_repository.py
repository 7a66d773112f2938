"""
Portfolio Repository - Data Access Layer
"""

from sqlalchemy.orm import Session
from academy.models.portfolio import Portfolio
from typing import List, Optional
from uuid import UUID


class PortfolioRepository:
    """Portfolio repository"""

    @staticmethod
    def get_by_id(db: Session, portfolio_id: UUID) -> Optional[Portfolio]:
        """Lấy portfolio theo ID"""
        return db.query(Portfolio).filter(Portfolio.id == portfolio_id).first()

    @staticmethod
    def get_by_user(db: Session, user_id: UUID) -> List[Portfolio]:
        """Lấy danh sách portfolio của user"""
        return db.query(Portfolio).filter(Portfolio.user_id == user_id).order_by(Portfolio.title).all()

    @staticmethod
    def get_all(db: Session) -> List[Portfolio]:
        return db.query(Portfolio).order_by(Portfolio.status, Portfolio.title).all()

    @staticmethod
    def external_badge_in_use(db: Session, external_badge_id: UUID, exclude_portfolio_id: Optional[UUID] = None) -> bool:
        """External badge đã gắn với portfolio khác chưa"""
        query = db.query(Portfolio.id).filter(Portfolio.external_badge_id == external_badge_id)
        if exclude_portfolio_id is not None:
            query = query.filter(Portfolio.id != exclude_portfolio_id)
        return query.first() is not None

    @staticmethod
    def add(db: Session, portfolio: Portfolio) -> Portfolio:
        db.add(portfolio)
        db.flush()
        return portfolio
