"""
Authentication service.

Registration with emailed verification codes, login issuing JWTs, and user
lookup. Token verification for requests lives in the API dependencies.
"""

from datetime import UTC, datetime, timedelta

from jobseeker.config import Settings
from jobseeker.db.tables import User
from jobseeker.errors import AuthError
from jobseeker.repositories.user_repository import UserRepository
from jobseeker.utils.security import (
    create_access_token,
    generate_verification_code,
    hash_password,
    verify_password,
)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return value if value.tzinfo else value.replace(tzinfo=UTC)


class AuthService:
    def __init__(self, users: UserRepository, settings: Settings):
        self.users = users
        self.settings = settings

    def _issue_code(self, user: User) -> str:
        code = generate_verification_code()
        user.verification_code = code
        user.verification_code_expires = datetime.now(UTC) + timedelta(
            minutes=self.settings.verification_code_ttl_minutes
        )
        return code

    def register(self, email: str, password: str) -> tuple[User, str]:
        """Create an unverified user. Returns the user and its verification code."""
        if self.users.get_by_email(email) is not None:
            raise AuthError("User with this email already exists", "EMAIL_ALREADY_EXISTS")

        user = User(email=email.strip().lower(), password_hash=hash_password(password), email_verified=False)
        code = self._issue_code(user)
        return self.users.save(user), code

    def verify_email(self, email: str, code: str) -> User:
        user = self.users.get_by_email(email)
        if user is None:
            raise AuthError("User not found", "USER_NOT_FOUND")

        if not user.verification_code or user.verification_code != code:
            raise AuthError("Invalid verification code", "INVALID_CODE")

        expires = user.verification_code_expires
        if expires is None or _as_utc(expires) < datetime.now(UTC):
            raise AuthError("Verification code has expired", "CODE_EXPIRED")

        user.email_verified = True
        user.verification_code = None
        user.verification_code_expires = None
        return self.users.save(user)

    def login(self, email: str, password: str) -> tuple[User, str]:
        user = self.users.get_by_email(email)
        if user is None:
            raise AuthError("Invalid email or password", "INVALID_CREDENTIALS", status_code=401)

        if not user.email_verified:
            raise AuthError("Please verify your email before logging in", "EMAIL_NOT_VERIFIED", status_code=401)

        if not verify_password(password, user.password_hash):
            raise AuthError("Invalid email or password", "INVALID_CREDENTIALS", status_code=401)

        token = create_access_token(
            user.id,
            user.email,
            self.settings.jwt_secret,
            self.settings.jwt_algorithm,
            self.settings.jwt_expires_minutes,
        )
        return user, token

    def get_user(self, user_id: str) -> User:
        user = self.users.get(user_id)
        if user is None:
            raise AuthError("User not found", "USER_NOT_FOUND", status_code=404)
        return user

    def resend_verification_code(self, email: str) -> str:
        user = self.users.get_by_email(email)
        if user is None:
            raise AuthError("User not found", "USER_NOT_FOUND")
        if user.email_verified:
            raise AuthError("Email is already verified", "EMAIL_ALREADY_VERIFIED")

        code = self._issue_code(user)
        self.users.save(user)
        return code
