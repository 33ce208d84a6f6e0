from datetime import timedelta
from typing import Optional

from sqlalchemy.orm import Session

from lms.core.security import create_access_token, verify_password
from lms.models import User


def authenticate(db: Session, email: str, password: str) -> Optional[User]:
    user = db.query(User).filter(User.email == email).first()
    if not user or not verify_password(password, user.password_hash):
        return None
    return user


def build_access_token(user_id: str, role: str, expires_minutes: int) -> str:
    return create_access_token(subject=user_id, role=role, expires_delta=timedelta(minutes=expires_minutes))
