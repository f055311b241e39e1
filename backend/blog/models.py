from __future__ import annotations

import math
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, computed_field

PostStatus = Literal["draft", "published"]

WORDS_PER_MINUTE = 200


class BlogPostIn(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = ""
    excerpt: str = ""
    category: str | None = None
    status: PostStatus = "draft"
    featured_image_url: str | None = None
    slug: str | None = None


class BlogPostUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    content: str | None = None
    excerpt: str | None = None
    category: str | None = None
    status: PostStatus | None = None
    featured_image_url: str | None = None
    slug: str | None = None


class BlogPost(BaseModel):
    id: str
    title: str
    slug: str
    content: str = ""
    excerpt: str = ""
    category: str | None = None
    status: PostStatus = "draft"
    featured_image_url: str | None = None
    author: str | None = None
    created_at: datetime
    published_at: datetime | None = None

    @computed_field
    @property
    def reading_time(self) -> str:
        words = len(self.content.split())
        return f"{max(1, math.ceil(words / WORDS_PER_MINUTE))} min read"


class DraftRequest(BaseModel):
    topic: str | None = Field(default=None, max_length=200)


class BlogDraft(BaseModel):
    title: str
    content: str
    excerpt: str
    generated_by: Literal["llm", "template"]
