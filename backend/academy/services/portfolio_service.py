"""
Portfolio Service - Business Logic
User nộp project, admin duyệt và gắn external badge
"""

import base64
import binascii
import logging
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Session

from academy.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from academy.models.portfolio import Portfolio, PortfolioStatus
from academy.models.user import UserExternalBadge
from academy.repositories.badge_repository import ExternalBadgeRepository
from academy.repositories.portfolio_repository import PortfolioRepository
from academy.repositories.user_repository import UserRepository
from academy.schemas.badge import ExternalBadgeResponse
from academy.schemas.portfolio import PortfolioCreate, PortfolioOwner, PortfolioResponse, PortfolioReview
from academy.utils import transaction

logger = logging.getLogger(__name__)


class PortfolioService:
    """Portfolio service"""

    @staticmethod
    def to_response(db: Session, portfolio: Portfolio) -> PortfolioResponse:
        """Portfolio kèm chủ sở hữu và external badge (nếu có)"""
        owner = UserRepository.get_by_id(db, portfolio.user_id)
        external_badge = None
        if portfolio.external_badge_id is not None:
            badge = ExternalBadgeRepository.get_by_id(db, portfolio.external_badge_id)
            if badge:
                external_badge = ExternalBadgeResponse.model_validate(badge)
        return PortfolioResponse(
            id=portfolio.id,
            title=portfolio.title,
            description=portfolio.description,
            file_url=portfolio.file_url,
            external_link=portfolio.external_link,
            screenshot_url=portfolio.screenshot_url,
            status=portfolio.status,
            feedback=portfolio.feedback,
            external_badge=external_badge,
            user=PortfolioOwner(
                id=owner.id,
                username=owner.username,
                first_name=owner.first_name,
                last_name=owner.last_name,
            ),
        )

    @staticmethod
    def _validate(portfolio_data: PortfolioCreate) -> None:
        if not portfolio_data.title.strip():
            raise ValidationError("Title is required")
        if not portfolio_data.description.strip():
            raise ValidationError("Description is required")
        if not portfolio_data.screenshot_url.strip():
            raise ValidationError("Screenshot is required")

    @staticmethod
    def get_portfolio(db: Session, portfolio_id: UUID) -> Portfolio:
        portfolio = PortfolioRepository.get_by_id(db, portfolio_id)
        if not portfolio:
            raise NotFoundError("Portfolio not found")
        return portfolio

    @staticmethod
    def get_owned(db: Session, portfolio_id: UUID, user_id: UUID) -> Portfolio:
        """Chỉ chủ sở hữu mới được sửa/xóa"""
        portfolio = PortfolioService.get_portfolio(db, portfolio_id)
        if portfolio.user_id != user_id:
            raise ForbiddenError("You can only modify your own portfolios")
        return portfolio

    @staticmethod
    def get_user_portfolios(db: Session, user_id: UUID) -> List[Portfolio]:
        return PortfolioRepository.get_by_user(db, user_id)

    @staticmethod
    def get_all_portfolios(db: Session) -> List[Portfolio]:
        return PortfolioRepository.get_all(db)

    @staticmethod
    def create_portfolio(db: Session, user_id: UUID, portfolio_data: PortfolioCreate) -> Portfolio:
        PortfolioService._validate(portfolio_data)
        with transaction(db, "create portfolio"):
            portfolio = PortfolioRepository.add(db, Portfolio(
                user_id=user_id,
                title=portfolio_data.title.strip(),
                description=portfolio_data.description.strip(),
                file_url=portfolio_data.file_url or "",
                external_link=portfolio_data.external_link or "",
                screenshot_url=portfolio_data.screenshot_url,
                status=PortfolioStatus.PENDING,
                feedback="",
            ))
        logger.info("User %s submitted portfolio %s", user_id, portfolio.id)
        return portfolio

    @staticmethod
    def update_portfolio(db: Session, portfolio_id: UUID, user_id: UUID, portfolio_data: PortfolioCreate) -> Portfolio:
        """Sửa nội dung -> quay lại trạng thái chờ duyệt"""
        portfolio = PortfolioService.get_owned(db, portfolio_id, user_id)
        PortfolioService._validate(portfolio_data)
        with transaction(db, "update portfolio"):
            portfolio.title = portfolio_data.title.strip()
            portfolio.description = portfolio_data.description.strip()
            portfolio.file_url = portfolio_data.file_url or ""
            portfolio.external_link = portfolio_data.external_link or ""
            portfolio.screenshot_url = portfolio_data.screenshot_url
            portfolio.status = PortfolioStatus.PENDING
            portfolio.feedback = ""
            portfolio.external_badge_id = None
        return portfolio

    @staticmethod
    def delete_portfolio(db: Session, portfolio_id: UUID, user_id: UUID) -> None:
        portfolio = PortfolioService.get_owned(db, portfolio_id, user_id)
        with transaction(db, "delete portfolio"):
            db.delete(portfolio)

    @staticmethod
    def review(db: Session, portfolio_id: UUID, review: PortfolioReview) -> Portfolio:
        """
        Admin duyệt portfolio.
        Approved + external badge: badge phải tồn tại, chưa gắn với portfolio khác,
        và user được nhận badge (một lần). Trạng thái khác: bỏ liên kết badge.
        """
        if review.status not in PortfolioStatus.ALL:
            raise ValidationError(f"Invalid status '{review.status}'. Allowed: {', '.join(PortfolioStatus.ALL)}")

        portfolio = PortfolioService.get_portfolio(db, portfolio_id)
        badge_id: Optional[UUID] = None
        if review.status == PortfolioStatus.APPROVED and review.external_badge_id is not None:
            if not ExternalBadgeRepository.get_by_id(db, review.external_badge_id):
                raise NotFoundError("External badge not found")
            if PortfolioRepository.external_badge_in_use(db, review.external_badge_id, exclude_portfolio_id=portfolio.id):
                raise ConflictError("External badge is already linked to another portfolio")
            badge_id = review.external_badge_id

        with transaction(db, "review portfolio"):
            portfolio.status = review.status
            portfolio.feedback = review.feedback or ""
            portfolio.external_badge_id = badge_id
            if badge_id is not None and not UserRepository.get_external_badge_link(db, portfolio.user_id, badge_id):
                db.add(UserExternalBadge(user_id=portfolio.user_id, external_badge_id=badge_id))
                db.flush()

        logger.info("Portfolio %s reviewed: %s", portfolio_id, review.status)
        return portfolio

    @staticmethod
    def get_screenshot(db: Session, portfolio_id: UUID) -> Tuple[bytes, str]:
        """Giải mã screenshot base64 (data URL). Returns: (bytes, content_type)"""
        portfolio = PortfolioService.get_portfolio(db, portfolio_id)
        if not portfolio.screenshot_url:
            raise NotFoundError("Portfolio has no screenshot")

        header, _, data = portfolio.screenshot_url.rpartition(",")
        content_type = "image/png" if "data:image/png" in header else "image/jpeg"
        try:
            return base64.b64decode(data, validate=True), content_type
        except (binascii.Error, ValueError) as e:
            raise ValidationError("Screenshot is not valid base64 data") from e
