"""HTTP транспорт черновиков поверх httpx.MockTransport."""

import json

import httpx
import pytest

from app.domains.autosave import DraftSaveError, DraftSnapshot, DraftTransport, Identity

ENDPOINT = "http://nexora.local/api/posts/draft"
AUTHOR = Identity(author_id="author-1", role="EDITOR", access_token="token")


def make_record(**overrides):
    record = {
        "id": "draft-1",
        "title": "Hello",
        "content": "Body",
        "featuredImage": "",
        "featuredImageAlt": "",
        "seo": {"title": "", "description": "", "slug": "", "keywords": []},
        "status": "draft",
        "authorId": "author-1",
        "lastSaved": "2026-01-01T00:00:00+00:00",
    }
    record.update(overrides)
    return record


def make_transport(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return DraftTransport(endpoint_url=ENDPOINT, client=client)


async def test_save_posts_payload_with_bearer_token():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json=make_record())

    transport = make_transport(handler)
    record = await transport.save(DraftSnapshot(title="Hello", content="Body"), AUTHOR)

    assert record.id == "draft-1"
    assert record.last_saved == "2026-01-01T00:00:00+00:00"

    request = requests[0]
    assert request.method == "POST"
    assert str(request.url) == ENDPOINT
    assert request.headers["Authorization"] == "Bearer token"
    body = json.loads(request.content)
    assert body["title"] == "Hello"
    assert body["authorId"] == "author-1"
    await transport.aclose()


async def test_save_error_carries_server_detail():
    def handler(request):
        return httpx.Response(404, json={"detail": "Draft not found"})

    transport = make_transport(handler)

    with pytest.raises(DraftSaveError) as exc_info:
        await transport.save(DraftSnapshot(title="Hello", id="missing"), AUTHOR)

    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Draft not found"
    await transport.aclose()


async def test_save_error_without_json_body_uses_default_message():
    def handler(request):
        return httpx.Response(502, text="Bad gateway")

    transport = make_transport(handler)

    with pytest.raises(DraftSaveError) as exc_info:
        await transport.save(DraftSnapshot(title="Hello"), AUTHOR)

    assert exc_info.value.status_code == 502
    assert exc_info.value.message == "Failed to save draft"
    await transport.aclose()


async def test_network_error_is_wrapped():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    transport = make_transport(handler)

    with pytest.raises(DraftSaveError) as exc_info:
        await transport.save(DraftSnapshot(title="Hello"), AUTHOR)

    assert exc_info.value.status_code is None
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
    await transport.aclose()


async def test_load_and_list_use_sibling_urls():
    urls = []

    def handler(request):
        urls.append(str(request.url))
        if request.url.path.endswith("/drafts"):
            return httpx.Response(200, json=[make_record(), make_record(id="draft-2")])
        return httpx.Response(200, json=make_record())

    transport = make_transport(handler)

    draft = await transport.load("draft-1", AUTHOR)
    drafts = await transport.list_drafts(AUTHOR)

    assert draft.title == "Hello"
    assert [d.id for d in drafts] == ["draft-1", "draft-2"]
    assert urls == [
        "http://nexora.local/api/posts/draft/draft-1",
        "http://nexora.local/api/posts/drafts",
    ]
    await transport.aclose()


async def test_beacon_is_detached_and_ignores_failures():
    def handler(request):
        return httpx.Response(500, json={"detail": "Failed to create draft"})

    transport = make_transport(handler)

    task = transport.send_beacon(DraftSnapshot(title="Hello"), AUTHOR)
    response = await task

    assert response.status_code == 500
    await transport.aclose()


async def test_success_with_non_json_body_is_a_save_error():
    def handler(request):
        return httpx.Response(200, text="<html>proxy page</html>")

    transport = make_transport(handler)

    with pytest.raises(DraftSaveError) as exc_info:
        await transport.save(DraftSnapshot(title="Hello"), AUTHOR)

    assert exc_info.value.status_code == 200
    assert exc_info.value.message.startswith("Failed to save draft")
    await transport.aclose()
