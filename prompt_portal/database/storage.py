# prompt_portal/database/storage.py
"""Key-value storage adapters.

Every collection is stored as one JSON document under a namespaced key
(``mock_users``, ``mock_prompts`` ...). Writes are immediate and last-writer-wins.
"""
import json
import logging
from typing import Any, Dict, Optional

from sqlalchemy import select

from prompt_portal.database.connection import Base, create_session_factory
from prompt_portal.database.kv_entry import KeyValueEntry

logger = logging.getLogger(__name__)


class KeyValueStorage:
    """Base adapter: JSON (de)serialization over a string key-value backend."""

    def __init__(self, namespace: str = "mock_"):
        self.namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self.namespace}{key}"

    async def _read(self, full_key: str) -> Optional[str]:
        raise NotImplementedError

    async def _write(self, full_key: str, raw: str) -> None:
        raise NotImplementedError

    async def _delete(self, full_key: str) -> None:
        raise NotImplementedError

    async def load(self, key: str, default: Any = None) -> Any:
        """Return the decoded value under key, or default if absent or corrupt."""
        full_key = self._key(key)
        raw = await self._read(full_key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.warning(f"Corrupt JSON under '{full_key}', falling back to default: {e}")
            return default

    async def save(self, key: str, value: Any) -> None:
        await self._write(self._key(key), json.dumps(value))

    async def remove(self, key: str) -> None:
        await self._delete(self._key(key))

    async def close(self) -> None:
        return None


class InMemoryStorage(KeyValueStorage):
    """Process-local storage, the equivalent of the browser's localStorage."""

    def __init__(self, namespace: str = "mock_", initial: Optional[Dict[str, str]] = None):
        super().__init__(namespace)
        self.data: Dict[str, str] = dict(initial or {})

    async def _read(self, full_key: str) -> Optional[str]:
        return self.data.get(full_key)

    async def _write(self, full_key: str, raw: str) -> None:
        self.data[full_key] = raw

    async def _delete(self, full_key: str) -> None:
        self.data.pop(full_key, None)


class SqlKeyValueStorage(KeyValueStorage):
    """Storage backed by a single ``kv_store`` table through SQLAlchemy."""

    def __init__(self, database_url: str, namespace: str = "mock_", echo: bool = False):
        super().__init__(namespace)
        self.engine, self.session_factory = create_session_factory(database_url, echo=echo)
        self._initialized = False

    async def _ensure_schema(self) -> None:
        if self._initialized:
            return
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        self._initialized = True

    async def _read(self, full_key: str) -> Optional[str]:
        await self._ensure_schema()
        async with self.session_factory() as session:
            result = await session.execute(
                select(KeyValueEntry.value).where(KeyValueEntry.key == full_key)
            )
            return result.scalar_one_or_none()

    async def _write(self, full_key: str, raw: str) -> None:
        await self._ensure_schema()
        async with self.session_factory() as session:
            try:
                entry = await session.get(KeyValueEntry, full_key)
                if entry is None:
                    session.add(KeyValueEntry(key=full_key, value=raw))
                else:
                    entry.value = raw
                await session.commit()
            except Exception as e:
                logger.error(f"Error writing key '{full_key}': {e}")
                await session.rollback()
                raise

    async def _delete(self, full_key: str) -> None:
        await self._ensure_schema()
        async with self.session_factory() as session:
            entry = await session.get(KeyValueEntry, full_key)
            if entry is not None:
                await session.delete(entry)
                await session.commit()

    async def close(self) -> None:
        await self.engine.dispose()


def build_storage(database_url: str, namespace: str = "mock_") -> KeyValueStorage:
    """Pick the storage backend from configuration."""
    if database_url:
        logger.info("Using SQL key-value storage")
        return SqlKeyValueStorage(database_url, namespace=namespace)
    logger.warning("DATABASE_URL not set – using in-memory storage, data is lost on restart")
    return InMemoryStorage(namespace=namespace)
