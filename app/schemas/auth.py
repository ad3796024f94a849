from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import date, datetime

from .common import blank_to_none, normalize_email, strip_text


class RegisterRequest(BaseModel):
    fullname: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    datebirthday: date
    gender: str = Field(..., min_length=1, max_length=255)
    linkphoto: Optional[str] = Field(None, max_length=255)
    role: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=8)
    password_confirmation: str

    @field_validator("fullname", "gender", "role", mode="before")
    @classmethod
    def trim(cls, value):
        return strip_text(value)

    @field_validator("linkphoto", mode="before")
    @classmethod
    def optional_photo(cls, value):
        return blank_to_none(value)

    @field_validator("email", mode="before")
    @classmethod
    def lowercase_email(cls, value):
        return normalize_email(value)

    @field_validator("email")
    @classmethod
    def email_length(cls, value):
        if len(value) > 255:
            raise ValueError("The email field must not be greater than 255 characters.")
        return value

    @field_validator("password_confirmation")
    @classmethod
    def passwords_match(cls, value, info):
        password = info.data.get("password")
        if password is not None and value != password:
            raise ValueError("The password field confirmation does not match.")
        return value


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def lowercase_email(cls, value):
        return normalize_email(value)


class ProfileUpdate(BaseModel):
    """Every field is optional, but a field that is sent must be valid."""
    fullname: Optional[str] = Field(None, min_length=1, max_length=255)
    datebirthday: Optional[date] = None
    gender: Optional[str] = Field(None, min_length=1, max_length=255)
    linkphoto: Optional[str] = Field(None, max_length=255)

    @field_validator("fullname", "gender", mode="before")
    @classmethod
    def trim(cls, value):
        return strip_text(value)

    @field_validator("linkphoto", mode="before")
    @classmethod
    def optional_photo(cls, value):
        return blank_to_none(value)

    @field_validator("fullname", "datebirthday", "gender")
    @classmethod
    def not_null(cls, value, info):
        if value is None:
            raise ValueError(f"The {info.field_name} field is required.")
        return value


class UserResponse(BaseModel):
    id: str
    fullname: str
    email: str
    datebirthday: date
    gender: str
    linkphoto: Optional[str] = None
    role: str
    email_verified_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    user: UserResponse
    token: str
