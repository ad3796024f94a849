"""
Article model for user-authored content.
"""
from enum import Enum
from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from ..database import Base


class ArticleStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class Article(Base):
    __tablename__ = "articles"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    category = Column(String(255), nullable=False)  # free text for now
    content = Column(Text, nullable=False)
    link_picture = Column(String(255), nullable=True)
    status = Column(String(20), nullable=False, default=ArticleStatus.DRAFT.value, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # Relationships
    author = relationship("User", back_populates="articles")
    comments = relationship(
        "Comment",
        back_populates="article",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Comment.id",
    )
