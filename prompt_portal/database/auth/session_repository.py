from datetime import datetime, timedelta
from typing import Optional

from prompt_portal.core.config import Config
from prompt_portal.core.security import generate_session_token, hash_session_token
from prompt_portal.database.entity_store import EntityStore
from prompt_portal.schemas.user import Session


class SessionRepository:
    """Opaque session tokens. Only the SHA-256 of a token is stored."""

    def __init__(self, store: EntityStore, ttl_days: Optional[int] = None):
        self.store = store
        self.ttl = timedelta(days=ttl_days or Config.SESSION_TTL_DAYS)

    def _is_expired(self, session: Session, now: datetime) -> bool:
        return session.created_at < now - self.ttl

    async def create_session(self, user_id: str, now: datetime) -> str:
        """Create a session for a user and return the token (shown only once!)

        Expired sessions are dropped in the same write.
        """
        expired = [h for h, s in self.store.sessions.items() if self._is_expired(s, now)]
        for token_hash in expired:
            del self.store.sessions[token_hash]

        token = generate_session_token()
        session = Session(token_hash=hash_session_token(token), user_id=user_id, created_at=now)
        self.store.sessions[session.token_hash] = session
        await self.store.persist_sessions()
        return token

    async def get_session(self, token: str, now: datetime) -> Optional[Session]:
        """Return the live session for a token, or None if unknown or expired."""
        session = self.store.sessions.get(hash_session_token(token))
        if session is None or self._is_expired(session, now):
            return None
        return session.model_copy()

    async def delete_session(self, token: str) -> bool:
        removed = self.store.sessions.pop(hash_session_token(token), None)
        if removed is None:
            return False
        await self.store.persist_sessions()
        return True
