"""
Authentication routes for register, login, logout and the current user.
"""
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Request, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..limiter import limiter
from ..models.user import User
from ..schemas.auth import AuthResponse, LoginRequest, ProfileUpdate, RegisterRequest, UserResponse
from ..auth import get_required_user, oauth2_scheme
from ..config import get_settings
from ..responses import message
from ..services import identity
from ..validation import validate_payload

settings = get_settings()

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.register_rate_limit)
def register(request: Request, user_data: RegisterRequest, db: Session = Depends(get_db)):
    """Register a new user account and return it with a fresh token."""
    user, token = identity.register(db, user_data)
    return {"user": user, "token": token}


@router.post("/login", response_model=AuthResponse)
@limiter.limit(settings.login_rate_limit)
def login(request: Request, credentials: LoginRequest, db: Session = Depends(get_db)):
    """Login with email/password. Earlier tokens stay valid."""
    user, token = identity.login(db, credentials)
    return {"user": user, "token": token}


@router.get("/user", response_model=UserResponse)
def get_me(current_user: User = Depends(get_required_user)):
    """Get current authenticated user."""
    return current_user


@router.put("/user", response_model=UserResponse)
def update_me(
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Update the current user's profile. Only the fields sent are changed."""
    data = validate_payload(ProfileUpdate, payload)
    return identity.update_profile(db, current_user, data)


@router.post("/logout")
def logout(token: Optional[str] = Depends(oauth2_scheme), db: Session = Depends(get_db)):
    """Revoke the token used for this request. Other tokens stay valid."""
    identity.logout(db, token)
    return message("Logged out successfully")
