"""
Authentication Service
Hash/verify password, phát hành access token + refresh token, xoay vòng refresh token
"""

import base64
import hashlib
import logging
import re
import secrets
import string
from datetime import datetime, timedelta, timezone
from urllib.parse import unquote

from email_validator import EmailNotValidError, validate_email
from jose import jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from academy.config import Settings
from academy.exceptions import AuthError, ValidationError
from academy.models.user import User
from academy.repositories.user_repository import RoleRepository, UserRepository
from academy.schemas.user import Token, UserCreate
from academy.utils import transaction, utcnow

logger = logging.getLogger(__name__)

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]{3,20}$")
MIN_PASSWORD_LENGTH = 6
REFRESH_TOKEN_LENGTH = 32
REFRESH_TOKEN_ALPHABET = string.ascii_letters + string.digits
DEFAULT_ROLE = "User"


class AuthService:
    """Authentication service"""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=settings.BCRYPT_ROUNDS,
        )

    # === Password ===

    @staticmethod
    def _preprocess_password(password: str) -> str:
        """
        Hash bằng SHA256 trước để tránh giới hạn 72 bytes của bcrypt.
        Digest 32 bytes -> base64 (44 ký tự) an toàn cho bcrypt.
        """
        digest = hashlib.sha256(password.encode("utf-8")).digest()
        return base64.b64encode(digest).decode("utf-8")

    def hash_password(self, password: str) -> str:
        return self.pwd_context.hash(self._preprocess_password(password))

    def verify_password(self, plain_password: str, password_hash: str) -> bool:
        """So sánh constant-time do passlib thực hiện"""
        return self.pwd_context.verify(self._preprocess_password(plain_password), password_hash)

    # === Tokens ===

    @staticmethod
    def generate_refresh_token() -> str:
        """Refresh token ngẫu nhiên 32 ký tự chữ và số"""
        return "".join(secrets.choice(REFRESH_TOKEN_ALPHABET) for _ in range(REFRESH_TOKEN_LENGTH))

    def create_access_token(self, user: User) -> str:
        """Tạo JWT access token với claims định danh và roles"""
        now = datetime.now(timezone.utc)
        claims = {
            "sub": str(user.id),
            "given_name": user.first_name,
            "family_name": user.last_name,
            "email": user.email,
            "roles": user.role_names,
            "iss": self.settings.JWT_ISSUER,
            "aud": self.settings.JWT_AUDIENCE,
            "iat": now,
            "exp": now + timedelta(minutes=self.settings.JWT_LIFETIME_MINUTES),
        }
        return jwt.encode(claims, self.settings.JWT_SECRET_KEY, algorithm=self.settings.JWT_ALGORITHM)

    def _rotate_refresh_token(self, user: User) -> None:
        user.refresh_token = self.generate_refresh_token()
        user.refresh_token_expiry_time = utcnow() + timedelta(
            minutes=self.settings.REFRESH_TOKEN_LIFETIME_MINUTES
        )
        user.updated_at = utcnow()

    def _issue_tokens(self, user: User) -> Token:
        self._rotate_refresh_token(user)
        return Token(token=self.create_access_token(user), refresh_token=user.refresh_token)

    # === Registration ===

    @staticmethod
    def normalize_email(email: str) -> str:
        """Chuẩn hóa email giống lúc đăng ký; chuỗi không phải email được giữ nguyên"""
        email = (email or "").strip()
        try:
            return validate_email(email, check_deliverability=False).normalized
        except EmailNotValidError:
            return email

    @staticmethod
    def _validate_registration(user_data: UserCreate) -> str:
        """Kiểm tra format, trả về email đã chuẩn hóa"""
        if not USERNAME_PATTERN.match(user_data.username or ""):
            raise ValidationError(
                "Username must be 3-20 characters and contain only letters, digits and underscores"
            )
        # Tên rỗng sẽ thành claim rỗng trong token
        if not user_data.first_name.strip() or not user_data.last_name.strip():
            raise ValidationError("First name and last name are required")
        try:
            email = validate_email(user_data.email.strip(), check_deliverability=False).normalized
        except EmailNotValidError as e:
            raise ValidationError(f"Invalid email: {e}") from e
        if len(user_data.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        return email

    def register(self, db: Session, user_data: UserCreate) -> User:
        """Đăng ký user mới với role mặc định"""
        email = self._validate_registration(user_data)

        if UserRepository.username_exists(db, user_data.username):
            raise ValidationError("Username already registered")
        if UserRepository.email_exists(db, email):
            raise ValidationError("Email already registered")

        now = utcnow()
        with transaction(db, "register user"):
            user = User(
                username=user_data.username,
                first_name=user_data.first_name.strip(),
                last_name=user_data.last_name.strip(),
                email=email,
                password_hash=self.hash_password(user_data.password),
                refresh_token=self.generate_refresh_token(),
                refresh_token_expiry_time=now + timedelta(
                    minutes=self.settings.REFRESH_TOKEN_LIFETIME_MINUTES
                ),
                is_active=True,
                is_locked=False,
                created_at=now,
                updated_at=now,
            )
            user.roles = [RoleRepository.get_or_create(db, DEFAULT_ROLE)]
            try:
                UserRepository.add(db, user)
            except IntegrityError as e:
                # Đăng ký đồng thời cùng username/email
                raise ValidationError("Username or email already registered") from e

        db.refresh(user)
        logger.info("Registered user %s", user.username)
        return user

    # === Login / Refresh ===

    def login(self, db: Session, identifier: str, password: str) -> Token:
        """Đăng nhập bằng username hoặc email"""
        user = (
            UserRepository.get_by_username(db, identifier)
            or UserRepository.get_by_email(db, self.normalize_email(identifier))
        )
        if not user:
            # Giữ thời gian phản hồi tương đương khi user không tồn tại
            self.pwd_context.dummy_verify()
            logger.info("Login failed: unknown identifier")
            raise AuthError("Incorrect username or password")

        if not self.verify_password(password, user.password_hash):
            logger.info("Login failed: invalid password for user %s", user.id)
            raise AuthError("Incorrect username or password")

        if not user.is_active or user.is_locked:
            logger.info("Login refused: account %s is locked or inactive", user.id)
            raise AuthError("Account is locked or inactive")

        with transaction(db, "login"):
            tokens = self._issue_tokens(user)
            user.last_login = utcnow()
        return tokens

    def refresh(self, db: Session, refresh_token: str) -> Token:
        """Đổi refresh token lấy cặp token mới; token cũ không dùng lại được"""
        if not refresh_token:
            raise AuthError("Invalid refresh token")

        user = UserRepository.get_by_refresh_token(db, unquote(refresh_token))
        if not user:
            raise AuthError("Invalid refresh token")

        if user.refresh_token_expiry_time < utcnow():
            logger.info("Refresh refused: token expired for user %s", user.id)
            raise AuthError("Refresh token expired")

        if not user.is_active or user.is_locked:
            raise AuthError("Account is locked or inactive")

        with transaction(db, "refresh token"):
            tokens = self._issue_tokens(user)
        return tokens

    # === Existence checks ===

    @staticmethod
    def username_exists(db: Session, username: str) -> bool:
        return UserRepository.username_exists(db, username)

    @staticmethod
    def email_exists(db: Session, email: str) -> bool:
        return UserRepository.email_exists(db, AuthService.normalize_email(email))
