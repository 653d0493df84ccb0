"""Статистика, лента событий и уведомления дашборда; health check."""

from datetime import datetime, timedelta, timezone

import pytest

from app.domains.dashboard.services import time_ago
from app.domains.identity.entities import UserRole


async def test_dashboard_stats(client, make_user, auth_headers):
    editor = await make_user(UserRole.EDITOR)
    headers = auth_headers(editor)
    await client.post("/api/posts/draft", json={"title": "Draft"}, headers=headers)
    await client.post(
        "/api/posts/publish",
        json={"title": "Live", "content": "Body", "seo": {"slug": "live"}},
        headers=headers,
    )
    await client.post("/api/contact", json={
        "name": "Ada", "email": "ada@example.com", "phoneNumber": "1",
        "country": "UK", "message": "Hi",
    })

    res = await client.get("/api/dashboard/stats", headers=headers)

    assert res.status_code == 200
    assert res.json() == {
        "total_posts": 2,
        "published_posts": 1,
        "draft_posts": 1,
        "total_users": 1,
        "total_contacts": 1,
        "recent_posts": 2,
        "recent_contacts": 1,
    }


async def test_dashboard_stats_forbidden_for_users(client, make_user, auth_headers):
    user = await make_user(UserRole.USER)

    res = await client.get("/api/dashboard/stats", headers=auth_headers(user))

    assert res.status_code == 403


async def test_health(client):
    res = await client.get("/health")

    assert res.status_code == 200
    assert res.json() == {"status": "ok", "database": "ok"}


async def seed_content(client, headers):
    for title in ("P1", "P2", "P3"):
        await client.post("/api/posts/draft", json={"title": title}, headers=headers)
    await client.post(
        "/api/posts/publish",
        json={"title": "P4", "content": "Body", "seo": {"slug": "p4"}},
        headers=headers,
    )

    created = []
    for name, company in (("C1", None), ("C2", None), ("C3", "Analytical")):
        res = await client.post("/api/contact", json={
            "name": name, "email": "c@example.com", "phoneNumber": "1",
            "companyName": company, "country": "UK", "services": ["seo"],
            "message": "Hi",
        })
        created.append(res.json()["id"])
    return created


async def test_dashboard_activity_feed(client, make_user, auth_headers):
    headers = auth_headers(await make_user(UserRole.EDITOR, username="editor"))
    await seed_content(client, headers)

    res = await client.get("/api/dashboard/activity", headers=headers)

    assert res.status_code == 200
    feed = res.json()
    assert [item["description"] for item in feed] == [
        "C3 from Analytical",
        "C2 from UK",
        '"P4" by editor',
        '"P3" by editor',
        '"P2" by editor',
    ]
    assert [item["title"] for item in feed[1:4]] == [
        "New contact submission", "New post published", "New post created",
    ]
    assert feed[2]["color"] == "bg-blue-500"
    assert all(item["time"] == "Just now" for item in feed)


async def test_dashboard_notifications(client, make_user, auth_headers):
    headers = auth_headers(await make_user(UserRole.ADMIN))
    contact_ids = await seed_content(client, headers)
    await client.patch(f"/api/contact/{contact_ids[2]}", json={"status": "READ"}, headers=headers)

    res = await client.get("/api/dashboard/notifications", headers=headers)

    assert res.status_code == 200
    body = res.json()
    assert body["newContactSubmissions"] == 2
    assert body["draftPosts"] == 3
    assert body["recentContacts"] == 3
    assert body["totalNotifications"] == 5
    assert [n["id"] for n in body["latestSubmissions"]] == [contact_ids[1], contact_ids[0]]
    assert body["latestSubmissions"][0] == {
        "id": contact_ids[1],
        "title": "New Contact Submission",
        "description": "C2 from UK",
        "time": "Just now",
        "type": "contact",
        "link": "/dashboard/contact-submissions",
        "services": ["seo"],
    }


@pytest.mark.parametrize("path", ["/api/dashboard/activity", "/api/dashboard/notifications"])
async def test_dashboard_feeds_forbidden_for_users(client, make_user, auth_headers, path):
    user = await make_user(UserRole.USER)

    assert (await client.get(path)).status_code == 401
    assert (await client.get(path, headers=auth_headers(user))).status_code == 403


@pytest.mark.parametrize("seconds, label", [
    (5, "Just now"),
    (60 * 5, "5m ago"),
    (3600 * 3, "3h ago"),
    (86400 * 2 + 10, "2d ago"),
])
def test_time_ago(seconds, label):
    now = datetime(2026, 5, 1, tzinfo=timezone.utc)

    assert time_ago(now - timedelta(seconds=seconds), now) == label
