"""
Authentication utilities: password hashing, opaque access tokens and ownership checks.
"""
import hashlib
import hmac
import secrets
from functools import lru_cache
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from .database import get_db
from .models.access_token import AccessToken
from .models.user import User
from .config import get_settings
from .responses import ForbiddenError, UnauthenticatedError
from .logging_config import auth_logger

settings = get_settings()

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/login", auto_error=False)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password for storage."""
    return pwd_context.hash(password)


@lru_cache()
def _dummy_password_hash() -> str:
    return pwd_context.hash(secrets.token_urlsafe(16))


def verify_dummy_password(plain_password: str) -> bool:
    """Spend the same bcrypt work as a real check when there is no user to check against."""
    verify_password(plain_password, _dummy_password_hash())
    return False


def hash_token(secret: str) -> str:
    return hashlib.sha256(secret.encode("utf-8")).hexdigest()


def create_access_token(db: Session, user: User, name: Optional[str] = None) -> str:
    """Issue a new token for the user and return its plain-text form.

    The plain text is ``"{id}|{secret}"``. Only the digest of the secret is
    persisted, so the plain text cannot be recovered later.
    """
    secret = secrets.token_urlsafe(40)
    expires_at = None
    if settings.token_expire_minutes:
        expires_at = datetime.now(timezone.utc) + timedelta(minutes=settings.token_expire_minutes)

    access_token = AccessToken(
        user_id=user.id,
        name=name or settings.token_name,
        token=hash_token(secret),
        expires_at=expires_at,
    )
    db.add(access_token)
    db.commit()
    db.refresh(access_token)

    auth_logger.info("Issued access token", user_id=user.id, token_id=access_token.id)
    return f"{access_token.id}|{secret}"


def _split_token(token: str) -> Tuple[Optional[int], str]:
    if "|" not in token:
        return None, token
    token_id, secret = token.split("|", 1)
    try:
        return int(token_id), secret
    except ValueError:
        return None, ""


def _is_expired(access_token: AccessToken) -> bool:
    if access_token.expires_at is None:
        return False
    expires_at = access_token.expires_at
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    return expires_at <= datetime.now(timezone.utc)


def find_access_token(db: Session, token: Optional[str]) -> Optional[AccessToken]:
    """Resolve a presented plain-text token to its stored row, or None."""
    if not token:
        return None

    token_id, secret = _split_token(token.strip())
    if not secret:
        return None

    digest = hash_token(secret)
    access_token = db.query(AccessToken).filter(AccessToken.token == digest).first()
    if access_token is None:
        return None
    if token_id is not None and not hmac.compare_digest(str(access_token.id), str(token_id)):
        return None
    if _is_expired(access_token):
        auth_logger.info("Rejected expired token", token_id=access_token.id)
        return None

    return access_token


def resolve_access_token(db: Session, token: Optional[str]) -> AccessToken:
    """Like find_access_token, but raises 401 and records the token as used."""
    access_token = find_access_token(db, token)
    if access_token is None:
        raise UnauthenticatedError()

    access_token.last_used_at = datetime.now(timezone.utc)
    db.commit()
    return access_token


def get_current_access_token(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> AccessToken:
    """Resolve the bearer token on the request."""
    return resolve_access_token(db, token)


def get_required_user(
    access_token: AccessToken = Depends(get_current_access_token)
) -> User:
    """Get the current user, raising 401 if not authenticated."""
    return access_token.user


# ============================================================
# OWNERSHIP
# ============================================================

def owns_resource(requester_id: str, resource) -> bool:
    """True when the resource's stored owner is the requester."""
    return requester_id is not None and resource.user_id == requester_id


def authorize_owner(user: User, resource, action: str, resource_name: str = "article") -> None:
    """Raise ForbiddenError unless the user owns the resource."""
    if not owns_resource(user.id, resource):
        auth_logger.warning(
            "Ownership check failed",
            user_id=user.id,
            resource=resource_name,
            resource_id=resource.id,
            action=action,
        )
        raise ForbiddenError(f"You are not authorized to {action} this {resource_name}.")
