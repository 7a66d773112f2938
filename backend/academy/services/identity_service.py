"""
Identity Service
Xác thực access token và dựng Identity cho từng request
"""

import logging
from dataclasses import dataclass
from typing import Tuple
from uuid import UUID

from jose import JWTError, jwt

from academy.config import Settings
from academy.exceptions import AuthError

logger = logging.getLogger(__name__)

IDENTITY_CLAIMS = ("sub", "given_name", "family_name", "email", "roles")


@dataclass(frozen=True)
class Identity:
    """Người dùng đã xác thực của request hiện tại"""
    user_id: UUID
    first_name: str
    last_name: str
    email: str
    roles: Tuple[str, ...]


def is_allowed(identity: Identity, required_role: str) -> bool:
    """Kiểm tra role (so sánh chính xác, không phân cấp)"""
    return required_role in identity.roles


class IdentityService:
    """Validate JWT access token"""

    def __init__(self, settings: Settings):
        self.settings = settings

    def decode(self, token: str) -> dict:
        """Kiểm tra chữ ký, issuer, audience và hạn dùng"""
        try:
            return jwt.decode(
                token,
                self.settings.JWT_SECRET_KEY,
                algorithms=[self.settings.JWT_ALGORITHM],
                audience=self.settings.JWT_AUDIENCE,
                issuer=self.settings.JWT_ISSUER,
                options={
                    "require_exp": True,
                    "require_iat": True,
                    "require_iss": True,
                    "require_aud": True,
                    "require_sub": True,
                },
            )
        except JWTError as e:
            logger.info("Rejected access token: %s", e)
            raise AuthError("Invalid or expired token") from e

    def resolve(self, token: str) -> Identity:
        if not token:
            raise AuthError("Not authenticated")

        claims = self.decode(token)

        missing = [name for name in IDENTITY_CLAIMS if claims.get(name) in (None, "")]
        if missing:
            raise AuthError(f"Token is missing claims: {', '.join(missing)}")

        try:
            user_id = UUID(str(claims["sub"]))
        except ValueError as e:
            raise AuthError("Token subject is not a valid user id") from e

        roles = claims["roles"]
        if isinstance(roles, str):
            roles = [roles]
        if not isinstance(roles, list) or not all(isinstance(role, str) for role in roles):
            raise AuthError("Token roles claim is malformed")

        return Identity(
            user_id=user_id,
            first_name=claims["given_name"],
            last_name=claims["family_name"],
            email=claims["email"],
            roles=tuple(roles),
        )
