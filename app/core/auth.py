from datetime import datetime, timedelta
from typing import Any, Dict, Optional
import hmac
import logging

from fastapi import Depends
from fastapi.security import APIKeyHeader
from jose import JWTError, jwt
from passlib.context import CryptContext
from app.core.config import settings
from app.core.errors import NotAuthorizedError

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Each role carries its token in its own header
user_token_header = APIKeyHeader(name="token", auto_error=False)
stylist_token_header = APIKeyHeader(name="stoken", auto_error=False)
admin_token_header = APIKeyHeader(name="atoken", auto_error=False)

MIN_PASSWORD_LENGTH = 8

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hashed password."""
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    """Generate password hash."""
    return pwd_context.hash(password)

def is_strong_password(password: str) -> bool:
    return len(password) >= MIN_PASSWORD_LENGTH

def create_access_token(
    data: Dict[str, Any], expires_delta: Optional[timedelta] = None
) -> str:
    """Create JWT access token."""
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )

    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(
        to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM
    )

    return encoded_jwt

def decode_token(token: Optional[str], role: str) -> str:
    """Return the token subject, or raise if the token is missing, invalid or
    issued for another role."""
    if not token:
        raise NotAuthorizedError()

    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
        )
    except JWTError as jwt_error:
        logger.info(f"JWT decode error: {jwt_error}")
        raise NotAuthorizedError()

    subject = payload.get("sub")
    if subject is None or payload.get("role") != role:
        raise NotAuthorizedError()
    return subject

def check_admin_credentials(email: str, password: str) -> bool:
    """Compare against the configured admin credentials."""
    if not settings.ADMIN_PASSWORD:
        return False
    email_ok = hmac.compare_digest(email.encode(), settings.ADMIN_EMAIL.encode())
    password_ok = hmac.compare_digest(password.encode(), settings.ADMIN_PASSWORD.encode())
    return email_ok and password_ok

def create_admin_token() -> str:
    return create_access_token({"sub": settings.ADMIN_EMAIL, "role": "admin"})

async def get_current_user_id(token: Optional[str] = Depends(user_token_header)) -> str:
    """Id of the customer the ``token`` header was issued to."""
    return decode_token(token, "user")

async def get_current_stylist_id(stoken: Optional[str] = Depends(stylist_token_header)) -> str:
    """Id of the stylist the ``stoken`` header was issued to."""
    return decode_token(stoken, "stylist")

async def require_admin(atoken: Optional[str] = Depends(admin_token_header)) -> str:
    subject = decode_token(atoken, "admin")
    if not hmac.compare_digest(subject.encode(), settings.ADMIN_EMAIL.encode()):
        raise NotAuthorizedError()
    return subject
