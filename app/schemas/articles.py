from pydantic import AnyUrl, BaseModel, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError
from typing import Optional
from datetime import datetime

from ..models.article import ArticleStatus
from .auth import UserResponse
from .common import blank_to_none, strip_text

_url_adapter = TypeAdapter(AnyUrl)


def check_url(value: Optional[str]) -> Optional[str]:
    """Accept only absolute URLs, but keep the value exactly as sent."""
    if value is None:
        return value
    try:
        _url_adapter.validate_python(value)
    except PydanticValidationError:
        raise ValueError("The link picture field must be a valid URL.")
    return value


class ArticleCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    category: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    link_picture: Optional[str] = Field(None, max_length=255)
    status: ArticleStatus = ArticleStatus.DRAFT

    @field_validator("title", "category", "content", mode="before")
    @classmethod
    def trim(cls, value):
        return strip_text(value)

    @field_validator("link_picture", mode="before")
    @classmethod
    def optional_link_picture(cls, value):
        return blank_to_none(value)

    @field_validator("link_picture")
    @classmethod
    def valid_link_picture(cls, value):
        return check_url(value)

    class Config:
        use_enum_values = True


class ArticleUpdate(BaseModel):
    """Partial update: absent fields keep their stored value."""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[str] = Field(None, min_length=1, max_length=255)
    content: Optional[str] = Field(None, min_length=1)
    link_picture: Optional[str] = Field(None, max_length=255)
    status: Optional[ArticleStatus] = None

    @field_validator("title", "category", "content", mode="before")
    @classmethod
    def trim(cls, value):
        return strip_text(value)

    @field_validator("link_picture", mode="before")
    @classmethod
    def optional_link_picture(cls, value):
        return blank_to_none(value)

    @field_validator("link_picture")
    @classmethod
    def valid_link_picture(cls, value):
        return check_url(value)

    @field_validator("title", "category", "content", "status")
    @classmethod
    def not_null(cls, value, info):
        if value is None:
            raise ValueError(f"The {info.field_name} field is required.")
        return value

    class Config:
        use_enum_values = True


class ArticleResponse(BaseModel):
    id: int
    title: str
    category: str
    content: str
    link_picture: Optional[str] = None
    status: str
    user_id: str
    created_at: datetime
    updated_at: datetime
    author: UserResponse

    class Config:
        from_attributes = True
