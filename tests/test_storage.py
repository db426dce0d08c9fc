import pytest

from prompt_portal.database.storage import InMemoryStorage, SqlKeyValueStorage, build_storage


@pytest.mark.anyio
async def test_keys_are_namespaced():
    storage = InMemoryStorage(namespace="mock_")
    await storage.save("prompts", [{"id": "p1"}])

    assert "mock_prompts" in storage.data
    assert await storage.load("prompts") == [{"id": "p1"}]


@pytest.mark.anyio
async def test_missing_key_returns_default():
    storage = InMemoryStorage()
    assert await storage.load("users", []) == []


@pytest.mark.anyio
async def test_corrupt_json_falls_back_to_default():
    storage = InMemoryStorage(initial={"mock_users": "{not json"})
    assert await storage.load("users", []) == []


@pytest.mark.anyio
async def test_remove_deletes_key():
    storage = InMemoryStorage()
    await storage.save("sessions", [])
    await storage.remove("sessions")
    assert await storage.load("sessions") is None


@pytest.mark.anyio
async def test_sql_storage_round_trips_and_overwrites(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'portal.db'}"
    storage = SqlKeyValueStorage(url)
    try:
        await storage.save("prompts", [{"id": "p1"}])
        await storage.save("prompts", [{"id": "p1"}, {"id": "p2"}])
        assert await storage.load("prompts") == [{"id": "p1"}, {"id": "p2"}]

        await storage.remove("prompts")
        assert await storage.load("prompts", []) == []
    finally:
        await storage.close()


@pytest.mark.anyio
async def test_sql_storage_survives_reopen(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'portal.db'}"
    first = SqlKeyValueStorage(url)
    await first.save("users", [{"id": "u1"}])
    await first.close()

    second = SqlKeyValueStorage(url)
    try:
        assert await second.load("users") == [{"id": "u1"}]
    finally:
        await second.close()


def test_build_storage_without_url_is_in_memory():
    assert isinstance(build_storage(""), InMemoryStorage)
