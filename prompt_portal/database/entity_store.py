# prompt_portal/database/entity_store.py
import asyncio
import logging
from typing import Dict, List, Type, TypeVar

from pydantic import ValidationError

from prompt_portal.database.storage import KeyValueStorage
from prompt_portal.schemas.common import CamelModel
from prompt_portal.schemas.organization import Organization
from prompt_portal.schemas.prompt import Prompt
from prompt_portal.schemas.user import Session, User

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=CamelModel)

USERS_KEY = "users"
ORGANIZATIONS_KEY = "organizations"
PROMPTS_KEY = "prompts"
SESSIONS_KEY = "sessions"


async def _load_records(storage: KeyValueStorage, key: str, model: Type[RecordT]) -> List[RecordT]:
    raw = await storage.load(key, [])
    if not isinstance(raw, list):
        logger.warning(f"Collection '{key}' is not a list, ignoring stored value")
        return []

    records = []
    for item in raw:
        try:
            records.append(model.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Skipping invalid {model.__name__} record in '{key}': {e}")
    return records


class EntityStore:
    """In-memory users, organizations, prompts and sessions with write-through persistence.

    Collections are loaded once by :meth:`load`. Every mutation must be followed by
    the matching ``persist_*`` call. Services hold :attr:`lock` around
    read-modify-write sequences so interleaved requests cannot lose updates.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        users: List[User] = None,
        organizations: List[Organization] = None,
        prompts: List[Prompt] = None,
        sessions: List[Session] = None,
    ):
        self.storage = storage
        self.users: List[User] = users or []
        self.organizations: List[Organization] = organizations or []
        self.prompts: List[Prompt] = prompts or []
        self.sessions: Dict[str, Session] = {s.token_hash: s for s in (sessions or [])}
        self.lock = asyncio.Lock()

    @classmethod
    async def load(cls, storage: KeyValueStorage) -> "EntityStore":
        store = cls(
            storage,
            users=await _load_records(storage, USERS_KEY, User),
            organizations=await _load_records(storage, ORGANIZATIONS_KEY, Organization),
            prompts=await _load_records(storage, PROMPTS_KEY, Prompt),
            sessions=await _load_records(storage, SESSIONS_KEY, Session),
        )
        logger.info(
            f"Loaded {len(store.users)} users, {len(store.organizations)} organizations, "
            f"{len(store.prompts)} prompts"
        )
        return store

    async def persist_users(self) -> None:
        await self.storage.save(USERS_KEY, [u.to_storage() for u in self.users])

    async def persist_organizations(self) -> None:
        await self.storage.save(ORGANIZATIONS_KEY, [o.to_storage() for o in self.organizations])

    async def persist_prompts(self) -> None:
        await self.storage.save(PROMPTS_KEY, [p.to_storage() for p in self.prompts])

    async def persist_sessions(self) -> None:
        await self.storage.save(SESSIONS_KEY, [s.to_storage() for s in self.sessions.values()])
