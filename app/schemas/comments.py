from pydantic import BaseModel, Field, field_validator
from datetime import datetime

from .auth import UserResponse
from .common import strip_text


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1)

    @field_validator("content", mode="before")
    @classmethod
    def trim(cls, value):
        return strip_text(value)


class CommentResponse(BaseModel):
    id: int
    content: str
    user_id: str
    article_id: int
    created_at: datetime
    updated_at: datetime
    user: UserResponse

    class Config:
        from_attributes = True
