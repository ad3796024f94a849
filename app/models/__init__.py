from .user import User
from .access_token import AccessToken
from .article import Article, ArticleStatus
from .comment import Comment

__all__ = [
    "User",
    "AccessToken",
    "Article",
    "ArticleStatus",
    "Comment",
]
