"""Slug и перезапись черновика."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from app.domains.posts.entities import Post, PostStatus, generate_slug


@pytest.mark.parametrize("title, slug", [
    ("Hello, World!", "hello-world"),
    ("  Multiple   spaces  ", "multiple-spaces"),
    ("Café & Crème", "cafe-creme"),
    ("---", ""),
    ("a" * 60, "a" * 50),
    ("word " * 12, ("word-" * 10).rstrip("-")),
])
def test_generate_slug(title, slug):
    assert generate_slug(title) == slug


def test_apply_draft_overwrites_and_refreshes_timestamp():
    old = datetime(2026, 1, 1, tzinfo=timezone.utc)
    post = Post(uuid=uuid4(), author_id=uuid4(), title="Old", keywords=["x"], updated_at=old)

    post.apply_draft(
        title="New", content="", featured_image="", featured_image_alt="",
        seo_title="", seo_description="", slug="new", keywords=[], status=PostStatus.DRAFT,
    )

    assert post.title == "New"
    assert post.keywords == []
    assert post.updated_at > old
    assert post.last_saved == post.updated_at.isoformat()


def test_publish_sets_timestamp():
    post = Post.create_post(author_id=uuid4(), title="Live")
    published_at = datetime(2026, 3, 1, tzinfo=timezone.utc)

    post.publish(published_at)

    assert post.is_published()
    assert post.published_at == published_at
