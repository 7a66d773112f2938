"""
Portfolio Schemas (Pydantic)
"""

from pydantic import BaseModel, Field
from typing import Optional
from uuid import UUID

from academy.schemas.badge import ExternalBadgeResponse


class PortfolioCreate(BaseModel):
    """Schema để nộp project (bắt buộc title, description, screenshot - kiểm tra ở service)"""
    title: str = Field(default="", max_length=128)
    description: str = Field(default="", max_length=256)
    file_url: Optional[str] = None
    external_link: Optional[str] = None
    screenshot_url: str = ""


class PortfolioReview(BaseModel):
    """Admin duyệt portfolio"""
    status: str
    feedback: Optional[str] = None
    external_badge_id: Optional[UUID] = None


class PortfolioOwner(BaseModel):
    id: UUID
    username: str
    first_name: str
    last_name: str


class PortfolioResponse(BaseModel):
    id: UUID
    title: str
    description: str
    file_url: str
    external_link: str
    screenshot_url: str
    status: str
    feedback: str
    external_badge: Optional[ExternalBadgeResponse] = None
    user: PortfolioOwner
