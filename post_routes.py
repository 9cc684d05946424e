"""Routes mounted under /post: CRUD, search, ratings, comments and moderation.

Fixed paths (``/search``, ``/admin/...``) are declared before ``/{post_id}``
so the path parameter does not swallow them.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Query, status

from auth import AdminUser, CurrentUser
from config import DEFAULT_PAGE_SIZE
from dependencies import PostsDep, UsersDep
from errors import NotFoundError
from models import NotificationType
from schemas import (
    AdminPostOut,
    AdminPostSummary,
    CommentOut,
    CommentRequest,
    PostCreate,
    PostOut,
    PostUpdate,
    RatingRequest,
)

logger = logging.getLogger("blog_api.routes.post")

router = APIRouter(prefix="/post", tags=["posts"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_post(body: PostCreate, identity: CurrentUser, posts: PostsDep):
    """Create a new post authored by the caller"""
    post = posts.create(identity.user_id, body.title, body.content, body.category)
    return {"message": "Blog post created successfully", "post": PostOut.model_validate(post)}


@router.get("")
def list_posts(posts: PostsDep, page: int = Query(1, ge=1), limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=100)):
    """Paginated visible posts, newest first"""
    items = posts.list_posts(page=page, limit=limit)
    return {
        "message": "Blog posts retrieved successfully",
        "page": page,
        "limit": limit,
        "posts": [PostOut.model_validate(p) for p in items],
    }


@router.get("/search")
def search_posts(
    posts: PostsDep,
    users: UsersDep,
    keyword: Optional[str] = None,
    category: Optional[str] = None,
    author: Optional[str] = None,
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
):
    """Search visible posts by keyword, category and author username"""
    author_id = None
    if author:
        author_user = users.get_by_username(author)
        if not author_user:
            raise NotFoundError("Author not found")
        author_id = author_user.id

    results = posts.search(keyword=keyword, category=category, author_id=author_id, sort_by=sort_by, sort_order=sort_order)
    return {"message": "Search completed successfully", "posts": [PostOut.model_validate(p) for p in results]}


@router.get("/admin/posts")
def admin_list_posts(identity: AdminUser, posts: PostsDep):
    """All posts, disabled included, projected for moderation"""
    return {
        "message": "Blog posts retrieved successfully",
        "posts": [AdminPostSummary.model_validate(p) for p in posts.list_all()],
    }


@router.get("/admin/posts/{post_id}")
def admin_get_post(post_id: int, identity: AdminUser, posts: PostsDep):
    """One post with its author, disabled or not. Admin only"""
    post = posts.require(post_id, include_disabled=True)
    return {"message": "Blog post retrieved successfully", "post": AdminPostOut.model_validate(post)}


@router.put("/admin/disable-blog/{post_id}")
def disable_post(post_id: int, identity: AdminUser, posts: PostsDep):
    """Soft-disable a post. Admin only"""
    post = posts.set_disabled(post_id, True)
    logger.info("Admin %s disabled post %s", identity.user_id, post.id)
    return {"message": "Blog disabled successfully", "post": PostOut.model_validate(post)}


@router.get("/{post_id}")
def get_post(post_id: int, posts: PostsDep):
    """Retrieve a visible post by id"""
    post = posts.require(post_id)
    return {"message": "Blog post retrieved successfully", "post": PostOut.model_validate(post)}


@router.put("/{post_id}")
def update_post(post_id: int, body: PostUpdate, identity: CurrentUser, posts: PostsDep):
    """Update a post. Only its author may do this"""
    post = posts.update(post_id, identity.user_id, title=body.title, content=body.content, category=body.category)
    return {"message": "Blog post updated successfully", "post": PostOut.model_validate(post)}


@router.delete("/{post_id}")
def delete_post(post_id: int, identity: CurrentUser, posts: PostsDep):
    """Delete a post. Only its author may do this"""
    posts.delete(post_id, identity.user_id)
    return {"message": "Blog post deleted successfully"}


@router.post("/{post_id}/rate")
def rate_post(post_id: int, body: RatingRequest, identity: CurrentUser, posts: PostsDep):
    """Rate a post; each user may rate it once"""
    post = posts.rate(post_id, identity.user_id, body.rating)
    return {"message": "Rating added successfully", "post": PostOut.model_validate(post)}


@router.post("/{post_id}/comment")
def comment_on_post(post_id: int, body: CommentRequest, identity: CurrentUser, posts: PostsDep, users: UsersDep):
    """Comment on a post and let its author know"""

    def notify_author(post, comment):
        if str(post.author_id) != identity.user_id:
            users.add_notification(
                post.author_id, NotificationType.comment, actor_id=identity.user_id, post_id=post.id, commit=False
            )

    post, comment = posts.add_comment(post_id, identity.user_id, body.content, before_commit=notify_author)
    return {
        "message": "Comment added successfully",
        "comment": CommentOut.model_validate(comment),
        "post": PostOut.model_validate(post),
    }
