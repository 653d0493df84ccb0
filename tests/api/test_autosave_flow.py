"""Координатор автосохранения против настоящего эндпоинта черновиков."""

import asyncio
from datetime import datetime

import pytest

from app.domains.autosave import (
    AutosaveCoordinator, DraftSnapshot, DraftTransport, Identity, SaveStatus
)
from app.domains.identity.entities import UserRole
from app.domains.identity.services import IdentityService


@pytest.fixture
async def identity(make_user):
    user = await make_user(UserRole.EDITOR)
    return Identity(
        author_id=str(user.uuid),
        role=user.role.value,
        access_token=IdentityService.issue_token(user),
    )


@pytest.fixture
def transport(client):
    return DraftTransport(endpoint_url="http://test/api/posts/draft", client=client)


async def test_typing_creates_then_updates_single_draft(transport, identity):
    saved = []
    coordinator = AutosaveCoordinator(
        transport, lambda: identity, interval=60000, debounce=30, on_save=saved.append,
    )

    async with coordinator:
        for title in ("H", "He", "Hello"):
            coordinator.update(DraftSnapshot(title=title))
            await asyncio.sleep(0.005)
        await asyncio.sleep(0.2)

        coordinator.update(DraftSnapshot(title="Hello", content="World"))
        await asyncio.sleep(0.2)

    assert [r.title for r in saved] == ["Hello", "Hello"]
    assert saved[0].id == saved[1].id
    assert datetime.fromisoformat(saved[1].last_saved) > datetime.fromisoformat(saved[0].last_saved)

    drafts = await transport.list_drafts(identity)
    assert [(d.title, d.content) for d in drafts] == [("Hello", "World")]


async def test_loaded_draft_is_not_resaved(transport, identity):
    record = await transport.save(DraftSnapshot(title="Stored", content="Body"), identity)
    statuses = []

    async with AutosaveCoordinator(
        transport, lambda: identity, interval=30, debounce=10, on_status=statuses.append,
    ) as coordinator:
        loaded = await coordinator.load_draft(record.id)
        coordinator.update(loaded)
        await asyncio.sleep(0.1)

    assert loaded.last_saved == record.last_saved
    assert statuses == []


async def test_server_rejection_reported_through_callback(transport, identity):
    errors = []
    coordinator = AutosaveCoordinator(
        transport, lambda: identity, debounce=10, on_error=errors.append,
    )

    coordinator.update(DraftSnapshot(id="00000000-0000-0000-0000-000000000000", title="Ghost"))
    assert await coordinator.save_now() is None

    assert errors[0].status_code == 404
    assert errors[0].message == "Draft not found"
    assert coordinator.status == SaveStatus.ERROR
    await coordinator.dispose()
