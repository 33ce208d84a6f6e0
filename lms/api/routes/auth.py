import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from lms.api.deps import get_db, get_current_user
from lms.core.config import get_settings
from lms.models import User
from lms.schemas.auth import LoginRequest, LoginResponse, LoginUser, MeResponse
from lms.services.auth import authenticate, build_access_token

router = APIRouter()
settings = get_settings()
logger = logging.getLogger(__name__)


@router.post("/auth/login", response_model=LoginResponse)
def login(request: LoginRequest, db: Session = Depends(get_db)) -> LoginResponse:
    user = authenticate(db, request.email, request.password)
    if not user:
        logger.warning(f"Failed login for {request.email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    access_token = build_access_token(
        user_id=user.id,
        role=user.role.value,
        expires_minutes=settings.access_token_expire_minutes,
    )
    return LoginResponse(
        access_token=access_token,
        token_type="bearer",
        role=user.role.value,
        user=LoginUser.model_validate(user),
    )


@router.get("/me", response_model=MeResponse)
def me(current_user: User = Depends(get_current_user)) -> MeResponse:
    return MeResponse(role=current_user.role.value, profile=LoginUser.model_validate(current_user))
