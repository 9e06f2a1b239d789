"""
Security helpers
Password hashing and bearer token issuance/verification
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from config import settings
from errors import InvalidTokenError
from models import UserRole


pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


@dataclass(frozen=True)
class Principal:
    """Identity carried by a verified session token"""
    user_id: int
    role: UserRole


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user_id: int, role: UserRole, expires_delta: Optional[timedelta] = None) -> str:
    """Issue a signed token for the user; expires after ACCESS_TOKEN_EXPIRE_MINUTES by default"""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode = {
        "sub": str(user_id),
        "role": UserRole(role).value,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Principal:
    """
    Verify a token and return the principal it carries.
    Raises InvalidTokenError for bad signatures, expired tokens or malformed claims.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise InvalidTokenError()
    
    try:
        return Principal(user_id=int(payload["sub"]), role=UserRole(payload["role"]))
    except (KeyError, TypeError, ValueError):
        raise InvalidTokenError()
