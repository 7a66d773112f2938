"""
Shared FastAPI dependencies: services, current identity, role check
"""

from functools import lru_cache

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from academy.config import get_settings
from academy.exceptions import ForbiddenError
from academy.services.ai_quiz_service import AIQuizService
from academy.services.auth_service import AuthService
from academy.services.identity_service import Identity, IdentityService, is_allowed

ADMIN_ROLE = "Admin"

# auto_error=False: thiếu token -> AuthError (401) từ IdentityService
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/Auth/login", auto_error=False)


@lru_cache
def get_auth_service() -> AuthService:
    return AuthService(get_settings())


@lru_cache
def get_identity_service() -> IdentityService:
    return IdentityService(get_settings())


@lru_cache
def get_ai_quiz_service() -> AIQuizService:
    return AIQuizService(get_settings())


def get_current_identity(
    token: str = Depends(oauth2_scheme),
    identity_service: IdentityService = Depends(get_identity_service),
) -> Identity:
    """Dependency để lấy identity từ JWT token"""
    return identity_service.resolve(token)


def require_role(role: str):
    """Dependency factory: chỉ cho phép identity có role tương ứng"""

    def checker(identity: Identity = Depends(get_current_identity)) -> Identity:
        if not is_allowed(identity, role):
            raise ForbiddenError(f"Role '{role}' is required")
        return identity

    return checker


require_admin = require_role(ADMIN_ROLE)
