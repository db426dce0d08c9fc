from typing import List, Optional

from prompt_portal.database.entity_store import EntityStore
from prompt_portal.schemas.user import User


class UserRepository:
    def __init__(self, store: EntityStore):
        self.store = store

    async def create_user(self, user: User) -> User:
        """Append a new user and persist the collection"""
        self.store.users.append(user.model_copy(deep=True))
        await self.store.persist_users()
        return user

    async def update_user(self, user: User) -> User:
        """Replace the stored record with the same id and persist"""
        for index, existing in enumerate(self.store.users):
            if existing.id == user.id:
                self.store.users[index] = user.model_copy(deep=True)
                await self.store.persist_users()
                return user
        raise KeyError(user.id)

    async def get_by_id(self, user_id: str) -> Optional[User]:
        for user in self.store.users:
            if user.id == user_id:
                return user.model_copy(deep=True)
        return None

    async def get_by_email(self, email: str) -> Optional[User]:
        for user in self.store.users:
            if user.email == email:
                return user.model_copy(deep=True)
        return None

    async def list_users(self) -> List[User]:
        """List all users"""
        return [u.model_copy(deep=True) for u in self.store.users]

    async def list_by_organization(self, organization_id: str) -> List[User]:
        return [u.model_copy(deep=True) for u in self.store.users if u.organization_id == organization_id]

    async def count_by_organization(self, organization_id: str) -> int:
        return sum(1 for u in self.store.users if u.organization_id == organization_id)
