"""
Content store: articles and their comments.
"""
from datetime import datetime, timezone
from typing import Any, List, Optional

from sqlalchemy.orm import Session, joinedload

from ..auth import authorize_owner
from ..logging_config import content_logger
from ..models.article import Article, ArticleStatus
from ..models.comment import Comment
from ..models.user import User
from ..responses import NotFoundError
from ..schemas.articles import ArticleCreate, ArticleUpdate
from ..schemas.comments import CommentCreate
from ..validation import validate_payload


def _find_article(db: Session, article_id: int) -> Optional[Article]:
    return (
        db.query(Article)
        .options(joinedload(Article.author))
        .filter(Article.id == article_id)
        .first()
    )


def get_article(db: Session, article_id: int) -> Article:
    article = _find_article(db, article_id)
    if not article:
        raise NotFoundError("Article", article_id)
    return article


def list_articles(db: Session) -> List[Article]:
    """All articles, newest first, with their authors loaded."""
    return (
        db.query(Article)
        .options(joinedload(Article.author))
        .order_by(Article.created_at.desc(), Article.id.desc())
        .all()
    )


def create_article(db: Session, owner: User, data: ArticleCreate) -> Article:
    article = Article(
        user_id=owner.id,
        title=data.title,
        category=data.category,
        content=data.content,
        link_picture=data.link_picture,
        status=ArticleStatus(data.status).value,
    )
    db.add(article)
    db.commit()
    db.refresh(article)

    content_logger.info("Article created", article_id=article.id, user_id=owner.id)
    return article


def update_article(db: Session, requester: User, article_id: int, payload: Any) -> Article:
    """Partially update an article owned by the requester.

    Existence and ownership are checked before the payload is validated, so a
    non-owner always gets 403 whatever they send.
    """
    article = get_article(db, article_id)
    authorize_owner(requester, article, "update")

    data = validate_payload(ArticleUpdate, payload)
    update_data = data.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        setattr(article, key, value)
    article.updated_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(article)

    content_logger.info("Article updated", article_id=article.id, fields=sorted(update_data))
    return article


def delete_article(db: Session, requester: User, article_id: int) -> None:
    """Delete an article owned by the requester, with its comments, in one commit."""
    article = get_article(db, article_id)
    authorize_owner(requester, article, "delete")

    db.delete(article)
    db.commit()
    content_logger.info("Article deleted", article_id=article_id, user_id=requester.id)


def create_comment(db: Session, owner: User, article_id: int, data: CommentCreate) -> Comment:
    article = get_article(db, article_id)

    comment = Comment(
        user_id=owner.id,
        article_id=article.id,
        content=data.content,
    )
    db.add(comment)
    db.commit()
    db.refresh(comment)

    content_logger.info("Comment created", comment_id=comment.id, article_id=article.id, user_id=owner.id)
    return comment


def list_comments(db: Session, article_id: int) -> List[Comment]:
    """Comments on an article, oldest first."""
    get_article(db, article_id)
    return (
        db.query(Comment)
        .options(joinedload(Comment.user))
        .filter(Comment.article_id == article_id)
        .order_by(Comment.created_at.asc(), Comment.id.asc())
        .all()
    )
