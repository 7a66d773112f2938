"""
Badge Models
"""

import uuid

from sqlalchemy import Column, String, Text, Uuid
from academy.database import Base


class Badge(Base):
    """Badge nhận được khi hoàn thành khóa học"""
    __tablename__ = "badges"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(128), nullable=False, index=True)
    base_name = Column(String(128), nullable=False)
    level = Column(String(64), nullable=False)
    icon = Column(Text, nullable=False)

    def __repr__(self):
        return f"<Badge(id={self.id}, name={self.name}, level={self.level})>"


class ExternalBadge(Base):
    """Badge cho thành tích bên ngoài (ví dụ: portfolio được duyệt)"""
    __tablename__ = "external_badges"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(128), nullable=False)
    category = Column(String(128), nullable=False)  # Scratch, Python, Web, General
    icon = Column(Text, nullable=False)

    def __repr__(self):
        return f"<ExternalBadge(id={self.id}, name={self.name})>"
