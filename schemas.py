"""Pydantic request bodies and response shapes."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from models import NotificationType, RoleEnum


class RegisterRequest(BaseModel):
    """Body of POST /user/register"""
    username: str = Field(min_length=1, max_length=50)
    email: str = Field(min_length=3, max_length=100)
    password: str = Field(min_length=1)


class LoginRequest(BaseModel):
    """Body of POST /user/login"""
    email: str
    password: str


class PostCreate(BaseModel):
    """Base schema for creating a Post"""
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    category: Optional[str] = Field(default=None, max_length=50)


class PostUpdate(BaseModel):
    """Schema for updating Post data; empty fields keep the stored value"""
    title: Optional[str] = Field(default=None, max_length=200)
    content: Optional[str] = None
    category: Optional[str] = Field(default=None, max_length=50)


class RatingRequest(BaseModel):
    rating: float = Field(ge=1, le=5)


class CommentRequest(BaseModel):
    content: str = Field(min_length=1)


class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class UserOut(ORMModel):
    id: int
    username: str
    email: str
    role: RoleEnum
    is_blocked: bool
    follower_ids: list[int] = []


class AuthorOut(ORMModel):
    id: int
    username: str


class RatingOut(ORMModel):
    user_id: int
    rating: float


class CommentOut(ORMModel):
    id: int
    user_id: int
    content: str
    created_at: datetime


class PostOut(ORMModel):
    id: int
    title: str
    content: str
    category: Optional[str] = None
    author_id: int
    is_disabled: bool
    created_at: datetime
    updated_at: datetime
    ratings: list[RatingOut] = []
    comments: list[CommentOut] = []


class AdminPostOut(PostOut):
    """A post with its author populated, as admins see it"""
    author: AuthorOut


class AdminPostSummary(ORMModel):
    """Projection used by the admin post listing"""
    id: int
    title: str
    author: AuthorOut
    created_at: datetime
    is_disabled: bool
    ratings: list[RatingOut] = []


class NotificationOut(ORMModel):
    id: int
    type: NotificationType
    post_id: Optional[int] = None
    actor_id: Optional[int] = None
    seen: bool
    created_at: datetime
