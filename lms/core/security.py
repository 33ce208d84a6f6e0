from datetime import timedelta
from typing import Any, Dict, Optional

import bcrypt
from jose import jwt

from lms.core.config import get_settings
from lms.domain.clock import utcnow


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=get_settings().bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(
        plain_password.encode("utf-8"),
        hashed_password.encode("utf-8"),
    )


def create_access_token(subject: str, role: str, expires_delta: Optional[timedelta] = None) -> str:
    """Signed JWT carrying the user id as ``sub`` and the role claim."""
    settings = get_settings()
    issued_at = utcnow()
    expire = issued_at + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    payload = {"sub": subject, "role": role, "iat": issued_at, "exp": expire}
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Raises ``jose.JWTError`` for a bad signature, a malformed token or an expired one."""
    settings = get_settings()
    return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
