"""Снимок черновика: наличие содержимого, ключ сравнения, формат запроса."""

from app.domains.autosave import DraftSnapshot, SeoMeta
from app.domains.posts.entities import PostStatus


def test_has_content_ignores_whitespace():
    assert not DraftSnapshot().has_content()
    assert not DraftSnapshot(title="  ", content="\n").has_content()
    assert DraftSnapshot(title="", content="Body").has_content()
    assert DraftSnapshot(title="Title").has_content()


def test_content_key_ignores_server_fields():
    local = DraftSnapshot(title="Hello", content="Body")
    stored = local.with_server_fields("draft-1", "2026-01-01T00:00:00+00:00")

    assert local.content_key() == stored.content_key()


def test_content_key_treats_keywords_as_set():
    first = DraftSnapshot(title="Hello", seo=SeoMeta(keywords=["b", "a"]))
    second = DraftSnapshot(title="Hello", seo=SeoMeta(keywords=("a", "b", "a")))

    assert first.content_key() == second.content_key()


def test_content_key_tracks_every_editable_field():
    base = DraftSnapshot(title="Hello")

    assert base.content_key() != DraftSnapshot(title="Hello", featured_image="/a.png").content_key()
    assert base.content_key() != DraftSnapshot(title="Hello", seo=SeoMeta(slug="hello")).content_key()
    assert base.content_key() != DraftSnapshot(title="Hello", status=PostStatus.PUBLISHED).content_key()


def test_to_payload_uses_wire_names():
    snapshot = DraftSnapshot(
        title="Hello",
        content="Body",
        featured_image="/cover.png",
        featured_image_alt="Cover",
        seo=SeoMeta(title="SEO", description="Desc", slug="hello", keywords=("a",)),
    )

    payload = snapshot.to_payload("author-1")

    assert "id" not in payload
    assert payload["featuredImage"] == "/cover.png"
    assert payload["featuredImageAlt"] == "Cover"
    assert payload["seo"] == {"title": "SEO", "description": "Desc", "slug": "hello", "keywords": ["a"]}
    assert payload["status"] == "draft"
    assert payload["authorId"] == "author-1"


def test_to_payload_includes_known_id():
    payload = DraftSnapshot(title="Hello", id="draft-1").to_payload("author-1")

    assert payload["id"] == "draft-1"


def test_from_record_normalizes_missing_fields():
    snapshot = DraftSnapshot.from_record({
        "id": "draft-1",
        "title": "Hello",
        "content": None,
        "seo": {"keywords": None},
        "status": "DRAFT",
        "lastSaved": "2026-01-01T00:00:00+00:00",
    })

    assert snapshot.id == "draft-1"
    assert snapshot.content == ""
    assert snapshot.seo == SeoMeta()
    assert snapshot.status == PostStatus.DRAFT
    assert snapshot.last_saved == "2026-01-01T00:00:00+00:00"

