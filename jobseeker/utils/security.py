"""Password hashing and JWT helpers."""

import hashlib
import hmac
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

PBKDF2_ITERATIONS = 190_000


def hash_password(password: str, salt: str | None = None) -> str:
    """Salted PBKDF2-SHA256, stored as 'salt$hexdigest'."""
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), PBKDF2_ITERATIONS).hex()
    return f"{salt}${digest}"


def verify_password(password: str, stored: str) -> bool:
    salt, _, expected = stored.partition("$")
    if not salt or not expected:
        return False
    return hmac.compare_digest(hash_password(password, salt), stored)


def generate_verification_code() -> str:
    return f"{secrets.randbelow(900_000) + 100_000}"


@dataclass(frozen=True)
class TokenPayload:
    user_id: str
    email: str


def create_access_token(user_id: str, email: str, secret: str, algorithm: str, expires_minutes: int) -> str:
    claims = {
        "sub": user_id,
        "email": email,
        "exp": datetime.now(UTC) + timedelta(minutes=expires_minutes),
    }
    return jwt.encode(claims, secret, algorithm=algorithm)


def decode_access_token(token: str, secret: str, algorithm: str) -> TokenPayload:
    """Raise ValueError for invalid or expired tokens."""
    try:
        claims = jwt.decode(token, secret, algorithms=[algorithm])
    except JWTError as e:
        raise ValueError("Invalid or expired token") from e

    user_id = claims.get("sub")
    email = claims.get("email")
    if not user_id or not email:
        raise ValueError("Invalid or expired token")
    return TokenPayload(user_id=user_id, email=email)
