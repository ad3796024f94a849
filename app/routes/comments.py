"""
Comment routes, nested under articles. Comments cannot be edited or removed
once posted.
"""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.user import User
from ..schemas.comments import CommentCreate, CommentResponse
from ..auth import get_required_user
from ..services import content

router = APIRouter(prefix="/api/articles/{article_id}/comments", tags=["comments"])


@router.get("", response_model=List[CommentResponse])
def list_comments(article_id: int, db: Session = Depends(get_db)):
    return content.list_comments(db, article_id)


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def create_comment(
    article_id: int,
    comment_data: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Post a comment on an existing article."""
    return content.create_comment(db, current_user, article_id, comment_data)
