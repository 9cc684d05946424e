"""SQLAlchemy models for users, follows, notifications, posts, ratings and comments."""
import enum
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from database import Base


def utcnow():
    return datetime.now(timezone.utc)


def parse_id(value) -> int | None:
    """Turn a path or token id into a primary key, or None when it cannot be one."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class RoleEnum(str, enum.Enum):
    """Enumeration for user roles in the system."""
    admin = "admin"
    regular = "regular"


class NotificationType(str, enum.Enum):
    """Events that leave a notification on a user's account."""
    follow = "follow"
    comment = "comment"


follows = Table(
    "follows",
    Base.metadata,
    Column("follower_id", Integer, ForeignKey("users.id"), primary_key=True),
    Column("followed_id", Integer, ForeignKey("users.id"), primary_key=True),
    Column("created_at", DateTime, default=utcnow, nullable=False),
)


class User(Base):
    """User model representing bloggers and admins."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), nullable=False, index=True)
    email = Column(String(100), unique=True, nullable=False)
    password_hash = Column(String(100), nullable=False)
    role = Column(Enum(RoleEnum), nullable=False, default=RoleEnum.regular)
    is_blocked = Column(Boolean, nullable=False, default=False)

    posts = relationship("Post", back_populates="author")
    following = relationship(
        "User",
        secondary=follows,
        primaryjoin=id == follows.c.follower_id,
        secondaryjoin=id == follows.c.followed_id,
        backref="followers",
    )
    notifications = relationship(
        "Notification",
        back_populates="user",
        foreign_keys="Notification.user_id",
        order_by="Notification.id",
        cascade="all, delete-orphan",
    )

    @property
    def follower_ids(self):
        return [follower.id for follower in self.followers]


class Notification(Base):
    """A follow or comment event delivered to exactly one user."""
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    type = Column(Enum(NotificationType), nullable=False)
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="SET NULL"), nullable=True)
    actor_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    seen = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    user = relationship("User", back_populates="notifications", foreign_keys=[user_id])


class Post(Base):
    """Post model representing blog posts created by users."""
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    category = Column(String(50), nullable=True, index=True)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    is_disabled = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    author = relationship("User", back_populates="posts")
    ratings = relationship("Rating", back_populates="post", order_by="Rating.id", cascade="all, delete-orphan")
    comments = relationship("Comment", back_populates="post", order_by="Comment.id", cascade="all, delete-orphan")


class Rating(Base):
    """One user's rating of one post."""
    __tablename__ = "ratings"
    __table_args__ = (UniqueConstraint("post_id", "user_id", name="uq_ratings_post_user"),)

    id = Column(Integer, primary_key=True, index=True)
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    rating = Column(Float, nullable=False)

    post = relationship("Post", back_populates="ratings")


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    post = relationship("Post", back_populates="comments")
