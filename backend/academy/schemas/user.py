"""
User / Auth Schemas (Pydantic)
"""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from uuid import UUID


class UserCreate(BaseModel):
    """Schema để đăng ký user mới (format được kiểm tra ở AuthService)"""
    username: str
    first_name: str = Field(..., min_length=1, max_length=128)
    last_name: str = Field(..., min_length=1, max_length=128)
    email: str
    password: str


class UserLogin(BaseModel):
    """Schema để login bằng username hoặc email"""
    username: Optional[str] = None
    email: Optional[str] = None
    password: str


class RefreshTokenRequest(BaseModel):
    refresh_token: str


class UserResponse(BaseModel):
    """Schema để trả về user info"""
    id: UUID
    username: str
    first_name: str
    last_name: str
    email: str
    role_names: List[str] = []
    created_at: datetime
    last_login: Optional[datetime] = None

    class Config:
        from_attributes = True


class Token(BaseModel):
    """JWT Token response"""
    token: str
    refresh_token: str
    token_type: str = "bearer"


class IdentityResponse(BaseModel):
    """Thông tin lấy từ access token"""
    user_id: UUID
    first_name: str
    last_name: str
    email: str
    roles: List[str]
