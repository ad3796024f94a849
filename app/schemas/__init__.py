from .auth import RegisterRequest, LoginRequest, ProfileUpdate, UserResponse, AuthResponse
from .articles import ArticleCreate, ArticleUpdate, ArticleResponse
from .comments import CommentCreate, CommentResponse

__all__ = [
    "RegisterRequest", "LoginRequest", "ProfileUpdate", "UserResponse", "AuthResponse",
    "ArticleCreate", "ArticleUpdate", "ArticleResponse",
    "CommentCreate", "CommentResponse",
]
