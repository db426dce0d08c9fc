import asyncio
from datetime import datetime, timedelta

import pytest

from prompt_portal.schemas.prompt import PromptCreate, PromptUpdate
from prompt_portal.services.errors import PermissionDenied, PromptNotFound, VersionConflict
from prompt_portal.services.prompt_service import UNKNOWN_AUTHOR, PromptService

from tests.factories import make_prompt, make_user


@pytest.fixture
def service(store, clock):
    store.users.extend([
        make_user("alice", name="Alice"),
        make_user("bob", name="Bob"),
        make_user("carol", organization_id="org-2", name="Carol"),
    ])
    return PromptService(store, clock=clock)


@pytest.mark.anyio
async def test_create_prompt_sets_ownership_and_counters(service, store, clock):
    prompt = await service.create_prompt(
        PromptCreate(title="Summarize", content="Summarize this text", tags=["nlp"]),
        "alice",
        "org-1",
    )

    assert prompt.created_by == "alice"
    assert prompt.organization_id == "org-1"
    assert prompt.version == 1
    assert prompt.usage_count == 0
    assert prompt.is_public is False
    assert prompt.created_at == prompt.updated_at == clock.now
    assert prompt.id
    assert [p.id for p in store.prompts] == [prompt.id]


@pytest.mark.anyio
async def test_created_ids_are_unique(service):
    data = PromptCreate(title="T", content="C")
    ids = {(await service.create_prompt(data, "alice", "org-1")).id for _ in range(20)}
    assert len(ids) == 20


@pytest.mark.anyio
async def test_list_returns_visible_prompts_newest_first(service, store, clock):
    store.prompts.extend([
        make_prompt("old", "bob", is_public=True, updated_at=clock.now - timedelta(days=2)),
        make_prompt("mine", "alice", is_public=False, updated_at=clock.now - timedelta(days=1)),
        make_prompt("hidden", "bob", is_public=False),
        make_prompt("other-org", "carol", organization_id="org-2", is_public=True),
        make_prompt("orphan", "ghost", is_public=True, updated_at=clock.now),
    ])

    prompts = await service.list_prompts("alice", "org-1")

    assert [p.id for p in prompts] == ["orphan", "mine", "old"]
    assert [p.author_name for p in prompts] == [UNKNOWN_AUTHOR, "Alice", "Bob"]


@pytest.mark.anyio
async def test_search_matches_title_description_and_content(service, store):
    store.prompts.extend([
        make_prompt("p1", "alice", title="React form"),
        make_prompt("p2", "alice", description="Uses REACT hooks"),
        make_prompt("p3", "alice", content="Write a SQL query"),
        make_prompt("p4", "bob", title="React table", is_public=False),
    ])

    found = await service.search_prompts("alice", "org-1", "react")

    assert sorted(p.id for p in found) == ["p1", "p2"]


@pytest.mark.anyio
async def test_blank_search_lists_everything_visible(service, store):
    store.prompts.append(make_prompt("p1", "alice"))
    assert len(await service.search_prompts("alice", "org-1", "  ")) == 1


@pytest.mark.anyio
async def test_get_prompt_hides_invisible_prompts(service, store):
    store.prompts.append(make_prompt("p1", "alice", is_public=False))

    assert (await service.get_prompt("p1", "alice", "org-1")).id == "p1"
    with pytest.raises(PromptNotFound):
        await service.get_prompt("p1", "bob", "org-1")
    with pytest.raises(PromptNotFound):
        await service.get_prompt("missing", "alice", "org-1")


@pytest.mark.anyio
async def test_update_merges_fields_and_bumps_version(service, store, clock):
    store.prompts.append(make_prompt("p1", "alice", title="Old", tags=["a"]))
    clock.advance(timedelta(minutes=5))

    updated = await service.update_prompt("p1", PromptUpdate(title="New"), "alice")

    assert updated.title == "New"
    assert updated.tags == ["a"]
    assert updated.version == 2
    assert updated.updated_at == clock.now
    assert updated.created_at < updated.updated_at
    assert store.prompts[0].title == "New"


@pytest.mark.anyio
async def test_each_update_increments_version(service, store):
    store.prompts.append(make_prompt("p1", "alice"))
    for expected in (2, 3, 4):
        prompt = await service.update_prompt("p1", PromptUpdate(is_public=True), "alice")
        assert prompt.version == expected


@pytest.mark.anyio
async def test_update_by_non_owner_is_denied_without_mutation(service, store):
    store.prompts.append(make_prompt("p1", "alice", title="Original", is_public=True))

    with pytest.raises(PermissionDenied):
        await service.update_prompt("p1", PromptUpdate(title="Hijacked"), "bob")

    assert store.prompts[0].title == "Original"
    assert store.prompts[0].version == 1


@pytest.mark.anyio
async def test_update_unknown_prompt(service):
    with pytest.raises(PromptNotFound):
        await service.update_prompt("missing", PromptUpdate(title="x"), "alice")


@pytest.mark.anyio
async def test_update_ignores_immutable_fields(service, store):
    store.prompts.append(make_prompt("p1", "alice"))
    data = PromptUpdate.model_validate({"title": "New", "createdBy": "bob", "organizationId": "org-2"})

    updated = await service.update_prompt("p1", data, "alice")

    assert updated.created_by == "alice"
    assert updated.organization_id == "org-1"


@pytest.mark.anyio
async def test_ai_improvement_stamps_enhance_date(service, store, clock):
    store.prompts.append(make_prompt("p1", "alice"))
    clock.advance(timedelta(hours=1))

    updated = await service.update_prompt("p1", PromptUpdate(improved_by_ai=True), "alice")

    assert updated.improved_by_ai is True
    assert updated.ai_enhance_date == clock.now


@pytest.mark.anyio
async def test_stale_expected_version_is_rejected(service, store):
    store.prompts.append(make_prompt("p1", "alice", version=3))

    with pytest.raises(VersionConflict):
        await service.update_prompt("p1", PromptUpdate(title="x", expected_version=2), "alice")

    updated = await service.update_prompt("p1", PromptUpdate(title="x", expected_version=3), "alice")
    assert updated.version == 4


@pytest.mark.anyio
async def test_delete_by_owner(service, store):
    store.prompts.append(make_prompt("p1", "alice"))
    await service.delete_prompt("p1", "alice")
    assert store.prompts == []


@pytest.mark.anyio
async def test_delete_by_non_owner_keeps_prompt(service, store):
    store.prompts.append(make_prompt("p1", "alice", is_public=True))
    with pytest.raises(PermissionDenied):
        await service.delete_prompt("p1", "bob")
    assert len(store.prompts) == 1


@pytest.mark.anyio
async def test_delete_unknown_prompt(service):
    with pytest.raises(PromptNotFound):
        await service.delete_prompt("missing", "alice")


@pytest.mark.anyio
async def test_increment_usage_counts_and_stamps_last_used(service, store, clock):
    store.prompts.append(make_prompt("p1", "alice", usage_count=4))

    updated = await service.increment_usage("p1")

    assert updated.usage_count == 5
    assert updated.last_used == clock.now
    assert updated.version == 1
    assert store.prompts[0].usage_count == 5


@pytest.mark.anyio
async def test_increment_usage_of_unknown_prompt_is_ignored(service, store):
    assert await service.increment_usage("missing") is None
    assert store.prompts == []


@pytest.mark.anyio
async def test_concurrent_usage_increments_are_not_lost(service, store):
    store.prompts.append(make_prompt("p1", "alice"))

    await asyncio.gather(*(service.increment_usage("p1") for _ in range(25)))

    assert store.prompts[0].usage_count == 25


@pytest.mark.anyio
async def test_list_orders_naive_and_aware_timestamps_together(service, store):
    store.prompts.extend([
        make_prompt("naive", "alice", is_public=True, updated_at=datetime(2025, 1, 1)),
        make_prompt("aware", "bob", is_public=True),
    ])

    prompts = await service.list_prompts("alice", "org-1")

    assert [p.id for p in prompts] == ["aware", "naive"]
