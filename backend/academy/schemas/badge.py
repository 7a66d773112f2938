"""
Badge Schemas (Pydantic)
"""

from pydantic import BaseModel, Field
from uuid import UUID


class BadgeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    base_name: str = Field(..., min_length=1, max_length=128)
    level: str = Field(..., min_length=1, max_length=64)
    icon: str = Field(..., min_length=1)


class BadgeResponse(BaseModel):
    id: UUID
    name: str
    base_name: str
    level: str
    icon: str

    class Config:
        from_attributes = True


class BadgeIconUpdate(BaseModel):
    icon: str = Field(..., min_length=1)


class ExternalBadgeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    category: str = Field(..., min_length=1, max_length=128)
    icon: str = Field(..., min_length=1)


class ExternalBadgeResponse(BaseModel):
    id: UUID
    name: str
    category: str
    icon: str

    class Config:
        from_attributes = True
