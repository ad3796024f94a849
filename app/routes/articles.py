"""
Article routes. Reads are public; writes need a token and, for existing
articles, ownership.
"""
from typing import Any, List

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.user import User
from ..schemas.articles import ArticleCreate, ArticleResponse
from ..auth import get_required_user
from ..services import content

router = APIRouter(prefix="/api/articles", tags=["articles"])


@router.get("", response_model=List[ArticleResponse])
def list_articles(db: Session = Depends(get_db)):
    """List all articles, newest first."""
    return content.list_articles(db)


@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
def create_article(
    article_data: ArticleCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Create an article authored by the current user."""
    return content.create_article(db, current_user, article_data)


@router.get("/{article_id}", response_model=ArticleResponse)
def get_article(article_id: int, db: Session = Depends(get_db)):
    return content.get_article(db, article_id)


@router.put("/{article_id}", response_model=ArticleResponse)
def update_article(
    article_id: int,
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Update an article (author only). Accepts any subset of the create fields."""
    # Body is validated inside the store, after the ownership check
    return content.update_article(db, current_user, article_id, payload)


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_article(
    article_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Delete an article and its comments (author only)."""
    content.delete_article(db, current_user, article_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
