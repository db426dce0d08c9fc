# prompt_portal/database/prompts/prompt_repository.py
from typing import List, Optional
import logging

from prompt_portal.database.entity_store import EntityStore
from prompt_portal.schemas.prompt import Prompt

logger = logging.getLogger(__name__)


class PromptRepository:
    """Repository for CRUD operations on the prompt collection."""

    def __init__(self, store: EntityStore):
        self.store = store

    def _index_of(self, prompt_id: str) -> int:
        for index, prompt in enumerate(self.store.prompts):
            if prompt.id == prompt_id:
                return index
        return -1

    async def create(self, prompt: Prompt) -> Prompt:
        """Append a prompt and persist the collection."""
        self.store.prompts.append(prompt.model_copy(deep=True))
        await self.store.persist_prompts()
        return prompt

    async def get_by_id(self, prompt_id: str) -> Optional[Prompt]:
        """Get a prompt by its ID."""
        index = self._index_of(prompt_id)
        if index == -1:
            return None
        return self.store.prompts[index].model_copy(deep=True)

    async def list(self) -> List[Prompt]:
        return [p.model_copy(deep=True) for p in self.store.prompts]

    async def list_by_organization(self, organization_id: str) -> List[Prompt]:
        """List all prompts of an organization, regardless of visibility."""
        return [
            p.model_copy(deep=True)
            for p in self.store.prompts
            if p.organization_id == organization_id
        ]

    async def replace(self, prompt: Prompt) -> Prompt:
        """Overwrite the stored prompt with the same ID and persist."""
        index = self._index_of(prompt.id)
        if index == -1:
            raise KeyError(prompt.id)
        self.store.prompts[index] = prompt.model_copy(deep=True)
        await self.store.persist_prompts()
        return prompt

    async def delete(self, prompt_id: str) -> bool:
        index = self._index_of(prompt_id)
        if index == -1:
            return False
        del self.store.prompts[index]
        await self.store.persist_prompts()
        return True
