from app.domains.posts.entities import Post, PostStatus, generate_slug
from app.domains.posts.schemas import (
    SeoFields, DraftPayload, PublishPayload, DraftRecord, PostCreate,
    PublishedPostSummary, PublishedPostList
)

__all__ = [
    "Post", "PostStatus", "generate_slug",
    "SeoFields", "DraftPayload", "PublishPayload", "DraftRecord", "PostCreate",
    "PublishedPostSummary", "PublishedPostList"
]
