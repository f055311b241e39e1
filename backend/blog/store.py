from __future__ import annotations

import logging
import re
from datetime import datetime, timezone

from .models import BlogPost, BlogPostIn, BlogPostUpdate

logger = logging.getLogger(__name__)

_posts: dict[str, BlogPost] = {}
_next_id: int = 1


class PostNotFoundError(LookupError):
    """Raised when a blog post id or slug does not exist."""
    pass


def slugify(title: str) -> str:
    slug = re.sub(r"[^\w\s-]", "", title.lower())
    return re.sub(r"\s+", "-", slug.strip())


def _unique_slug(base: str, exclude_id: str | None = None) -> str:
    taken = {p.slug for p in _posts.values() if p.id != exclude_id}
    base = base or "post"
    slug = base
    suffix = 2
    while slug in taken:
        slug = f"{base}-{suffix}"
        suffix += 1
    return slug


def _now() -> datetime:
    return datetime.now(timezone.utc)


def create_post(data: BlogPostIn, author: str | None = None) -> BlogPost:
    global _next_id
    now = _now()
    post = BlogPost(
        id=str(_next_id),
        title=data.title,
        slug=_unique_slug(slugify(data.slug or data.title)),
        content=data.content,
        excerpt=data.excerpt,
        category=data.category,
        status=data.status,
        featured_image_url=data.featured_image_url,
        author=author,
        created_at=now,
        published_at=now if data.status == "published" else None,
    )
    _next_id += 1
    _posts[post.id] = post
    logger.info("Created blog post %s (%s)", post.id, post.slug)
    return post


def update_post(post_id: str, changes: BlogPostUpdate) -> BlogPost:
    post = get_post(post_id)
    update = changes.model_dump(exclude_unset=True)
    for key in ("title", "content", "excerpt", "status"):
        if update.get(key) is None:
            update.pop(key, None)
    if update.get("slug"):
        update["slug"] = _unique_slug(slugify(update["slug"]), exclude_id=post_id)
    else:
        update.pop("slug", None)
    if update.get("status") == "published" and post.published_at is None:
        update["published_at"] = _now()
    updated = BlogPost.model_validate({**post.model_dump(exclude={"reading_time"}), **update})
    _posts[post_id] = updated
    logger.info("Updated blog post %s", post_id)
    return updated


def delete_post(post_id: str) -> None:
    if _posts.pop(post_id, None) is None:
        raise PostNotFoundError(post_id)
    logger.info("Deleted blog post %s", post_id)


def get_post(post_id: str) -> BlogPost:
    post = _posts.get(post_id)
    if post is None:
        raise PostNotFoundError(post_id)
    return post


def list_posts() -> list[BlogPost]:
    """All posts, drafts included, newest first."""
    return sorted(_posts.values(), key=lambda p: p.created_at, reverse=True)


def list_published(limit: int | None = None) -> list[BlogPost]:
    published = [p for p in _posts.values() if p.status == "published"]
    published.sort(key=lambda p: p.published_at, reverse=True)
    return published[:limit] if limit else published


def get_published_by_slug(slug: str) -> BlogPost:
    for post in _posts.values():
        if post.slug == slug and post.status == "published":
            return post
    raise PostNotFoundError(slug)


def clear_posts() -> None:
    global _next_id
    _posts.clear()
    _next_id = 1
