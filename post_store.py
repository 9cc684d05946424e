"""Blog posts with their ratings and comments."""
import logging
import re
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from errors import ForbiddenError, NotFoundError, ValidationError
from models import Comment, Post, Rating, parse_id

logger = logging.getLogger("blog_api.posts")

SORT_FIELDS = {
    "createdAt": Post.created_at,
    "created_at": Post.created_at,
    "updatedAt": Post.updated_at,
    "updated_at": Post.updated_at,
    "title": Post.title,
}


def _newest_first(query):
    return query.order_by(Post.created_at.desc(), Post.id.desc())


class PostStore:
    """Post queries and mutations over an explicit session."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, author_id, title: str, content: str, category: Optional[str] = None) -> Post:
        """Store a new post written by ``author_id``"""
        post = Post(title=title, content=content, category=category, author_id=parse_id(author_id))
        self.db.add(post)
        self.db.commit()
        self.db.refresh(post)
        logger.info("User %s created post %s", post.author_id, post.id)
        return post

    def get(self, post_id, include_disabled: bool = False) -> Optional[Post]:
        """Look a post up by id; disabled posts count as missing unless asked for"""
        pk = parse_id(post_id)
        if pk is None:
            return None
        post = self.db.get(Post, pk)
        if post is None or (post.is_disabled and not include_disabled):
            return None
        return post

    def require(self, post_id, include_disabled: bool = False) -> Post:
        """Like get, but a missing post is a NotFoundError"""
        post = self.get(post_id, include_disabled=include_disabled)
        if not post:
            raise NotFoundError("Blog post not found")
        return post

    def list_posts(self, page: int = 1, limit: int = 10) -> list[Post]:
        """One page of visible posts, newest first"""
        query = _newest_first(select(Post).where(Post.is_disabled.is_(False)))
        query = query.offset((page - 1) * limit).limit(limit)
        return list(self.db.scalars(query))

    def list_all(self) -> list[Post]:
        """Every post, disabled ones included, with authors loaded"""
        query = _newest_first(select(Post).options(joinedload(Post.author)))
        return list(self.db.scalars(query).unique())

    def _require_owner(self, post: Post, requester_id) -> None:
        if str(post.author_id) != str(requester_id):
            raise ForbiddenError("Unauthorized - You are not the owner of this post")

    def update(self, post_id, requester_id, title=None, content=None, category=None) -> Post:
        """Owner-only partial update.

        Falsy values keep what is stored, so an empty string cannot clear a field.
        """
        post = self.require(post_id, include_disabled=True)
        self._require_owner(post, requester_id)

        post.title = title or post.title
        post.content = content or post.content
        post.category = category or post.category
        self.db.commit()
        self.db.refresh(post)
        logger.info("Post %s updated by its owner", post.id)
        return post

    def delete(self, post_id, requester_id) -> None:
        """Owner-only delete; ratings and comments go with the post"""
        post = self.require(post_id, include_disabled=True)
        self._require_owner(post, requester_id)
        self.db.delete(post)
        self.db.commit()
        logger.info("Post %s deleted by its owner", post_id)

    def rate(self, post_id, user_id, rating: float) -> Post:
        """Add the user's rating; each user may rate a post once"""
        post = self.require(post_id)
        user_pk = parse_id(user_id)
        if any(r.user_id == user_pk for r in post.ratings):
            raise ValidationError("You have already rated this post")

        post.ratings.append(Rating(user_id=user_pk, rating=rating))
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ValidationError("You have already rated this post") from exc
        self.db.refresh(post)
        return post

    def add_comment(self, post_id, user_id, content: str, before_commit=None) -> tuple[Post, Comment]:
        """Append a comment to a visible post.

        ``before_commit(post, comment)`` runs inside the same transaction, so
        anything it writes is saved together with the comment or not at all.
        """
        post = self.require(post_id)
        comment = Comment(user_id=parse_id(user_id), content=content)
        post.comments.append(comment)
        self.db.flush()
        if before_commit is not None:
            before_commit(post, comment)
        self.db.commit()
        self.db.refresh(post)
        return post, comment

    def set_disabled(self, post_id, disabled: bool = True) -> Post:
        """Soft-disable (or re-enable) a post. Admin moderation"""
        post = self.require(post_id, include_disabled=True)
        post.is_disabled = disabled
        self.db.commit()
        self.db.refresh(post)
        logger.warning("Post %s %s", post.id, "disabled" if disabled else "enabled")
        return post

    def _matches(self, column, pattern):
        if self.db.get_bind().dialect.name == "sqlite":
            # SQLite's REGEXP drops the flags argument; Python re takes them inline
            return column.regexp_match(f"(?i){pattern}")
        return column.regexp_match(pattern, flags="i")

    def search(self, keyword=None, category=None, author_id=None, sort_by=None, sort_order=None) -> list[Post]:
        """Filter visible posts and sort them.

        ``keyword`` is a regular expression matched case-insensitively against
        title or content; a pattern that does not compile is a ValidationError.
        Results are ascending unless ``sort_order`` is ``"desc"``.
        """
        sort_column = SORT_FIELDS.get(sort_by or "createdAt")
        if sort_column is None:
            raise ValidationError(f"Unsupported sort field: {sort_by}")
        if keyword:
            try:
                re.compile(keyword)
            except re.error as exc:
                raise ValidationError(f"Invalid search pattern: {exc}") from exc

        query = select(Post).where(Post.is_disabled.is_(False))
        if keyword:
            query = query.where(
                or_(
                    self._matches(Post.title, keyword),
                    self._matches(Post.content, keyword),
                )
            )
        if category:
            query = query.where(Post.category == category)
        if author_id is not None:
            query = query.where(Post.author_id == parse_id(author_id))

        if sort_order == "desc":
            query = query.order_by(sort_column.desc(), Post.id.desc())
        else:
            query = query.order_by(sort_column.asc(), Post.id.asc())
        return list(self.db.scalars(query))

    def feed(self, author_ids, limit: int = 10) -> list[Post]:
        """Newest visible posts written by any of ``author_ids``"""
        if not author_ids:
            return []
        query = _newest_first(
            select(Post).where(Post.author_id.in_(list(author_ids)), Post.is_disabled.is_(False))
        )
        return list(self.db.scalars(query.limit(limit)))
