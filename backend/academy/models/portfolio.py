"""
Portfolio Model
"""

import uuid

from sqlalchemy import CheckConstraint, Column, ForeignKey, String, Text, Uuid
from academy.database import Base


class PortfolioStatus:
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"

    ALL = (PENDING, APPROVED, REJECTED)


class Portfolio(Base):
    """Project do user nộp để admin duyệt"""
    __tablename__ = "portfolios"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(128), nullable=False)
    description = Column(String(256), nullable=False)
    file_url = Column(Text, nullable=False, default="")
    external_link = Column(Text, nullable=False, default="")
    screenshot_url = Column(Text, nullable=False, default="")
    status = Column(String(32), nullable=False, default=PortfolioStatus.PENDING, index=True)
    feedback = Column(Text, nullable=False, default="")
    # Gán khi portfolio được duyệt
    external_badge_id = Column(
        Uuid, ForeignKey("external_badges.id", ondelete="SET NULL"), nullable=True, index=True
    )

    __table_args__ = (
        CheckConstraint("status IN ('Pending', 'Approved', 'Rejected')", name="check_portfolio_status"),
    )

    def __repr__(self):
        return f"<Portfolio(id={self.id}, user_id={self.user_id}, status={self.status})>"
