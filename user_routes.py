"""Routes mounted under /user: accounts, follows, feed, notifications, admin."""
import logging

from fastapi import APIRouter, status

from auth import AdminUser, CurrentUser
from config import FEED_LIMIT
from dependencies import PostsDep, UsersDep
from errors import AuthError, ForbiddenError
from schemas import LoginRequest, NotificationOut, PostOut, RegisterRequest, UserOut
from security import create_access_token

logger = logging.getLogger("blog_api.routes.user")

router = APIRouter(prefix="/user", tags=["users"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, users: UsersDep):
    """Create a regular account and return a token for it"""
    user = users.create_user(body.username, body.email, body.password)
    token = create_access_token(user.id, user.role)
    return {"message": "User registered successfully", "token": token}


@router.post("/login")
def login(body: LoginRequest, users: UsersDep):
    """Authenticate a user using email and password"""
    user = users.authenticate(body.email, body.password)
    if not user:
        raise AuthError("Invalid credentials")
    if user.is_blocked:
        raise ForbiddenError("User is blocked")

    token = create_access_token(user.id, user.role)
    return {"message": "Login successful", "token": token}


@router.post("/follow/{user_id}")
def follow(user_id: int, identity: CurrentUser, users: UsersDep):
    """Follow another blogger"""
    target = users.follow(identity.user_id, user_id)
    return {"message": "You are now following the blogger", "user": UserOut.model_validate(target)}


@router.get("/feed")
def feed(identity: CurrentUser, users: UsersDep, posts: PostsDep):
    """Newest posts from the bloggers the caller follows"""
    author_ids = users.following_ids(identity.user_id)
    items = posts.feed(author_ids, limit=FEED_LIMIT)
    return {"message": "Feed retrieved successfully", "posts": [PostOut.model_validate(p) for p in items]}


@router.get("/notifications")
def notifications(identity: CurrentUser, users: UsersDep):
    """Unread notifications of the caller"""
    unread = users.unread_notifications(identity.user_id)
    return {
        "message": "Notifications retrieved successfully",
        "notifications": [NotificationOut.model_validate(n) for n in unread],
    }


@router.put("/notifications/mark-seen")
def mark_notifications_seen(identity: CurrentUser, users: UsersDep):
    """Mark all of the caller's notifications as seen"""
    updated = users.mark_notifications_seen(identity.user_id)
    return {"message": "Notifications marked as seen", "updated": updated}


@router.get("/admin/users")
def list_users(identity: AdminUser, users: UsersDep):
    """Every account on the platform. Admin only"""
    return {"message": "Users retrieved successfully", "users": [UserOut.model_validate(u) for u in users.list_users()]}


@router.put("/admin/block-user/{user_id}")
def block_user(user_id: int, identity: AdminUser, users: UsersDep):
    """Block a user account. Admin only"""
    user = users.set_blocked(user_id, True)
    logger.info("Admin %s blocked user %s", identity.user_id, user.id)
    return {"message": "User blocked successfully", "user": UserOut.model_validate(user)}
