"""
Authentication Controllers
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from academy.controllers.dependencies import get_auth_service, get_current_identity
from academy.database import get_db
from academy.exceptions import ValidationError
from academy.schemas.user import IdentityResponse, RefreshTokenRequest, Token, UserCreate, UserLogin, UserResponse
from academy.services.auth_service import AuthService
from academy.services.identity_service import Identity

router = APIRouter(prefix="/Auth", tags=["Authentication"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Đăng ký user mới"""
    return auth_service.register(db, user_data)


@router.post("/login", response_model=Token)
def login(
    login_data: UserLogin,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Đăng nhập bằng username hoặc email, nhận access token + refresh token"""
    identifier = login_data.username or login_data.email
    if not identifier:
        raise ValidationError("Username or email is required")
    return auth_service.login(db, identifier, login_data.password)


@router.post("/refresh-token", response_model=Token)
def refresh_token(
    request: RefreshTokenRequest,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Đổi refresh token lấy cặp token mới"""
    return auth_service.refresh(db, request.refresh_token)


@router.get("/username/{username}", response_model=bool)
def username_exists(username: str, db: Session = Depends(get_db)):
    """Username đã được dùng chưa"""
    return AuthService.username_exists(db, username)


@router.get("/email/{email}", response_model=bool)
def email_exists(email: str, db: Session = Depends(get_db)):
    """Email đã được dùng chưa"""
    return AuthService.email_exists(db, email)


@router.get("/me", response_model=IdentityResponse)
async def get_current_identity_info(identity: Identity = Depends(get_current_identity)):
    """Lấy thông tin user hiện tại từ token"""
    return IdentityResponse(
        user_id=identity.user_id,
        first_name=identity.first_name,
        last_name=identity.last_name,
        email=identity.email,
        roles=list(identity.roles),
    )
