"""
Portfolio Controllers
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from academy.controllers.dependencies import get_current_identity, require_admin
from academy.database import get_db
from academy.schemas.portfolio import PortfolioCreate, PortfolioResponse, PortfolioReview
from academy.services.identity_service import Identity
from academy.services.portfolio_service import PortfolioService

router = APIRouter(prefix="/Portfolio", tags=["Portfolio"], dependencies=[Depends(get_current_identity)])


@router.get("/user", response_model=List[PortfolioResponse])
def get_my_portfolios(identity: Identity = Depends(get_current_identity), db: Session = Depends(get_db)):
    """Danh sách portfolio của user hiện tại"""
    portfolios = PortfolioService.get_user_portfolios(db, identity.user_id)
    return [PortfolioService.to_response(db, portfolio) for portfolio in portfolios]


@router.get("/admin", response_model=List[PortfolioResponse], dependencies=[Depends(require_admin)])
def get_all_portfolios(db: Session = Depends(get_db)):
    """Tất cả portfolio (admin duyệt)"""
    return [PortfolioService.to_response(db, portfolio) for portfolio in PortfolioService.get_all_portfolios(db)]


@router.post("", response_model=PortfolioResponse, status_code=status.HTTP_201_CREATED)
def create_portfolio(
    portfolio_data: PortfolioCreate,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    portfolio = PortfolioService.create_portfolio(db, identity.user_id, portfolio_data)
    return PortfolioService.to_response(db, portfolio)


@router.get("/image/{portfolio_id}")
def get_portfolio_image(portfolio_id: UUID, db: Session = Depends(get_db)):
    """Ảnh screenshot của portfolio"""
    content, media_type = PortfolioService.get_screenshot(db, portfolio_id)
    return Response(content=content, media_type=media_type)


@router.get("/{portfolio_id}", response_model=PortfolioResponse)
def get_portfolio(portfolio_id: UUID, db: Session = Depends(get_db)):
    return PortfolioService.to_response(db, PortfolioService.get_portfolio(db, portfolio_id))


@router.put("/{portfolio_id}/status", response_model=PortfolioResponse, dependencies=[Depends(require_admin)])
def review_portfolio(portfolio_id: UUID, review: PortfolioReview, db: Session = Depends(get_db)):
    """Admin duyệt/từ chối portfolio, có thể gắn external badge"""
    portfolio = PortfolioService.review(db, portfolio_id, review)
    return PortfolioService.to_response(db, portfolio)


@router.put("/{portfolio_id}", response_model=PortfolioResponse)
def update_portfolio(
    portfolio_id: UUID,
    portfolio_data: PortfolioCreate,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Chỉ chủ sở hữu được sửa; portfolio quay lại trạng thái Pending"""
    portfolio = PortfolioService.update_portfolio(db, portfolio_id, identity.user_id, portfolio_data)
    return PortfolioService.to_response(db, portfolio)


@router.delete("/{portfolio_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_portfolio(
    portfolio_id: UUID,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    PortfolioService.delete_portfolio(db, portfolio_id, identity.user_id)
