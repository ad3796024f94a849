"""
Identity store: registration, login, token resolution and profile changes.
"""
from typing import Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..auth import (
    create_access_token,
    find_access_token,
    get_password_hash,
    resolve_access_token,
    verify_dummy_password,
    verify_password,
)
from ..logging_config import auth_logger
from ..models.user import User
from ..responses import AuthenticationError, ConflictError, NotFoundError, UnauthenticatedError
from ..schemas.auth import LoginRequest, ProfileUpdate, RegisterRequest

EMAIL_TAKEN = "The email has already been taken."


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(func.lower(User.email) == email.lower()).first()


def register(db: Session, data: RegisterRequest) -> Tuple[User, str]:
    """Create a user and issue their first token."""
    if get_user_by_email(db, data.email):
        raise ConflictError("email", EMAIL_TAKEN)

    user = User(
        fullname=data.fullname,
        email=data.email,
        datebirthday=data.datebirthday,
        gender=data.gender,
        linkphoto=data.linkphoto,
        role=data.role,
        password=get_password_hash(data.password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Another request registered the same email between lookup and insert
        db.rollback()
        raise ConflictError("email", EMAIL_TAKEN)
    db.refresh(user)

    auth_logger.info("User registered", user_id=user.id, role=user.role)
    token = create_access_token(db, user)
    return user, token


def login(db: Session, data: LoginRequest) -> Tuple[User, str]:
    """Check credentials and issue an additional token."""
    user = get_user_by_email(db, data.email)
    if user is None:
        verify_dummy_password(data.password)
    if user is None or not verify_password(data.password, user.password):
        auth_logger.warning("Login failed", email=data.email)
        raise AuthenticationError()

    token = create_access_token(db, user)
    auth_logger.info("User logged in", user_id=user.id)
    return user, token


def current_user(db: Session, token: Optional[str]) -> User:
    """Resolve a bearer token to its owner, raising UnauthenticatedError otherwise."""
    return resolve_access_token(db, token).user


def logout(db: Session, token: Optional[str]) -> None:
    """Revoke exactly the presented token."""
    access_token = find_access_token(db, token)
    if access_token is None:
        raise UnauthenticatedError()

    user_id = access_token.user_id
    db.delete(access_token)
    db.commit()
    auth_logger.info("Token revoked", user_id=user_id)


def update_profile(db: Session, user: User, data: ProfileUpdate) -> User:
    """Apply the profile fields present in the payload."""
    update_data = data.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        setattr(user, key, value)

    db.commit()
    db.refresh(user)
    auth_logger.info("Profile updated", user_id=user.id, fields=sorted(update_data))
    return user


def delete_user(db: Session, user_id: str) -> None:
    """Hard-delete a user together with their tokens, articles and comments.

    Everything goes in one commit; the foreign keys cascade at the database level.
    """
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User", user_id)

    db.delete(user)
    db.commit()
    auth_logger.info("User deleted", user_id=user_id)
