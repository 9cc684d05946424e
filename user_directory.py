"""User records: registration, lookup, follows, notifications and blocking."""
import logging
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from errors import NotFoundError, ValidationError
from models import Notification, NotificationType, RoleEnum, User, follows, parse_id
from security import hash_password, verify_password

logger = logging.getLogger("blog_api.users")


class UserDirectory:
    """All reads and writes of user records go through here, on the session it was given."""

    def __init__(self, db: Session):
        self.db = db

    def create_user(self, username: str, email: str, password: str, role: RoleEnum = RoleEnum.regular) -> User:
        """Create and store a new user; a taken email is a ValidationError"""
        if self.get_by_email(email):
            raise ValidationError("User already exists")

        user = User(username=username, email=email, password_hash=hash_password(password), role=role)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as exc:
            # lost a race with a concurrent registration of the same email
            self.db.rollback()
            raise ValidationError("User already exists") from exc
        self.db.refresh(user)
        logger.info("Registered user %s (%s) with role %s", user.id, user.username, user.role.value)
        return user

    def get_by_id(self, user_id) -> Optional[User]:
        """Retrieve a user by id, or None"""
        pk = parse_id(user_id)
        if pk is None:
            return None
        return self.db.get(User, pk)

    def require(self, user_id) -> User:
        """Like get_by_id, but a missing user is a NotFoundError"""
        user = self.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def get_by_email(self, email: str) -> Optional[User]:
        """Retrieve a user by email address, or None"""
        return self.db.scalars(select(User).where(User.email == email)).first()

    def get_by_username(self, username: str) -> Optional[User]:
        """Retrieve the oldest account with this username, or None"""
        return self.db.scalars(select(User).where(User.username == username).order_by(User.id)).first()

    def list_users(self) -> list[User]:
        """Every user, oldest first"""
        return list(self.db.scalars(select(User).order_by(User.id)))

    def authenticate(self, email: str, password: str) -> Optional[User]:
        """Return the user if the email exists and the password matches"""
        user = self.get_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            return None
        return user

    def follow(self, follower_id, target_id) -> User:
        """Make ``follower_id`` follow ``target_id`` and notify the target.

        Returns the followed user.
        """
        if str(follower_id) == str(target_id):
            raise ValidationError("You cannot follow yourself")

        target = self.require(target_id)
        follower = self.require(follower_id)
        if target in follower.following:
            raise ValidationError("You are already following this blogger")

        follower.following.append(target)
        target.notifications.append(Notification(type=NotificationType.follow, actor_id=follower.id))
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ValidationError("You are already following this blogger") from exc
        self.db.refresh(target)
        logger.info("User %s now follows user %s", follower.id, target.id)
        return target

    def following_ids(self, user_id) -> list[int]:
        """Ids of the users that ``user_id`` follows"""
        user = self.require(user_id)
        query = select(follows.c.followed_id).where(follows.c.follower_id == user.id)
        return list(self.db.scalars(query))

    def add_notification(self, user_id, type: NotificationType, actor_id, post_id=None, commit: bool = True) -> Notification:
        """Append a notification to the user.

        With ``commit=False`` it is only flushed and the caller's transaction
        decides whether it is kept.
        """
        user = self.require(user_id)
        notification = Notification(type=type, actor_id=parse_id(actor_id), post_id=parse_id(post_id))
        user.notifications.append(notification)
        if not commit:
            self.db.flush()
            return notification
        self.db.commit()
        self.db.refresh(notification)
        return notification

    def unread_notifications(self, user_id) -> list[Notification]:
        """Notifications the user has not marked as seen"""
        user = self.require(user_id)
        return [notification for notification in user.notifications if not notification.seen]

    def mark_notifications_seen(self, user_id) -> int:
        """Mark every unread notification of the user as seen; returns how many changed"""
        user = self.require(user_id)
        result = self.db.execute(
            update(Notification)
            .where(Notification.user_id == user.id, Notification.seen.is_(False))
            .values(seen=True)
        )
        self.db.commit()
        return result.rowcount

    def set_blocked(self, user_id, blocked: bool = True) -> User:
        """Set the blocked flag; tokens already issued stay valid"""
        user = self.require(user_id)
        user.is_blocked = blocked
        self.db.commit()
        self.db.refresh(user)
        logger.warning("User %s %s", user.id, "blocked" if blocked else "unblocked")
        return user
