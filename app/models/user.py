"""
User model for authentication and ownership.
"""
import uuid
from sqlalchemy import Column, String, Date, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from ..database import Base


def generate_user_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_user_id)
    fullname = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    datebirthday = Column(Date, nullable=False)
    gender = Column(String(255), nullable=False)
    linkphoto = Column(String(255), nullable=True)
    role = Column(String(255), nullable=False, default="user")
    password = Column(String(255), nullable=False)  # bcrypt hash
    remember_token = Column(String(100), nullable=True)
    email_verified_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # Relationships
    articles = relationship("Article", back_populates="author", cascade="all, delete-orphan", passive_deletes=True)
    comments = relationship("Comment", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    tokens = relationship("AccessToken", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, email={self.email!r}, role={self.role!r})"
