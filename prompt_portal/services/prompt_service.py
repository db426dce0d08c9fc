# prompt_portal/services/prompt_service.py
import logging
from datetime import datetime
from typing import Callable, List, Optional

from prompt_portal.database.entity_store import EntityStore
from prompt_portal.database.auth.user_repository import UserRepository
from prompt_portal.database.prompts.prompt_repository import PromptRepository
from prompt_portal.schemas.prompt import Prompt, PromptCreate, PromptUpdate, PromptWithAuthor
from prompt_portal.services.access_control import ensure_owner, is_visible
from prompt_portal.services.errors import PermissionDenied, PromptNotFound, VersionConflict
from prompt_portal.services.utils import generate_id, utc_now

logger = logging.getLogger(__name__)

UNKNOWN_AUTHOR = "Unknown User"


class PromptService:
    """
    Prompt CRUD with ownership and visibility rules.

    Only the owner may update or delete a prompt. Non-owners see a prompt only when
    it is public and belongs to their organization.
    """

    def __init__(self, store: EntityStore, clock: Callable[[], datetime] = utc_now):
        self.store = store
        self.clock = clock
        self.repo = PromptRepository(store)
        self.user_repo = UserRepository(store)

    async def list_prompts(self, user_id: str, organization_id: str) -> List[PromptWithAuthor]:
        """Visible prompts annotated with the author's name, most recently updated first."""
        prompts = await self.repo.list_by_organization(organization_id)
        visible = [p for p in prompts if is_visible(p, user_id, organization_id)]

        annotated = []
        for prompt in visible:
            author = await self.user_repo.get_by_id(prompt.created_by)
            annotated.append(PromptWithAuthor(
                **prompt.model_dump(),
                author_name=author.name if author else UNKNOWN_AUTHOR,
            ))

        annotated.sort(key=lambda p: p.updated_at, reverse=True)
        return annotated

    async def search_prompts(self, user_id: str, organization_id: str, term: str) -> List[PromptWithAuthor]:
        """Visible prompts whose title, description or content contains the term (case-insensitive)."""
        prompts = await self.list_prompts(user_id, organization_id)
        needle = (term or "").strip().lower()
        if not needle:
            return prompts
        return [
            p for p in prompts
            if needle in p.title.lower()
            or needle in p.description.lower()
            or needle in p.content.lower()
        ]

    async def get_prompt(self, prompt_id: str, user_id: str, organization_id: str) -> Prompt:
        """Get a single visible prompt. Invisible prompts are reported as not found."""
        prompt = await self.repo.get_by_id(prompt_id)
        if prompt is None or not is_visible(prompt, user_id, organization_id):
            raise PromptNotFound()
        return prompt

    async def create_prompt(self, data: PromptCreate, user_id: str, organization_id: str) -> Prompt:
        now = self.clock()
        prompt = Prompt(
            id=generate_id(),
            **data.model_dump(),
            created_by=user_id,
            organization_id=organization_id,
            created_at=now,
            updated_at=now,
            usage_count=0,
            version=1,
        )
        async with self.store.lock:
            await self.repo.create(prompt)
        logger.info(f"Prompt {prompt.id} created by user {user_id} in organization {organization_id}")
        return prompt

    async def update_prompt(self, prompt_id: str, data: PromptUpdate, user_id: str) -> Prompt:
        """
        Merge the supplied fields over the stored prompt.

        Raises:
            PromptNotFound: no prompt with this id
            PermissionDenied: the requester does not own the prompt
            VersionConflict: ``data.expected_version`` differs from the stored version
        """
        changes = data.model_dump(exclude_unset=True, exclude_none=True, exclude={"expected_version"})

        async with self.store.lock:
            prompt = await self.repo.get_by_id(prompt_id)
            if prompt is None:
                raise PromptNotFound()
            try:
                ensure_owner(prompt, user_id)
            except PermissionDenied:
                logger.warning(f"User {user_id} denied update of prompt {prompt_id}")
                raise

            if data.expected_version is not None and data.expected_version != prompt.version:
                raise VersionConflict(
                    f"Prompt was modified concurrently (expected version {data.expected_version}, "
                    f"found {prompt.version})"
                )

            now = self.clock()
            if changes.get("improved_by_ai"):
                changes["ai_enhance_date"] = now

            updated = prompt.model_copy(update={
                **changes,
                "updated_at": now,
                "version": prompt.version + 1,
            })
            await self.repo.replace(updated)

        logger.info(f"Prompt {prompt_id} updated to version {updated.version}")
        return updated

    async def delete_prompt(self, prompt_id: str, user_id: str) -> None:
        async with self.store.lock:
            prompt = await self.repo.get_by_id(prompt_id)
            if prompt is None:
                raise PromptNotFound()
            try:
                ensure_owner(prompt, user_id)
            except PermissionDenied:
                logger.warning(f"User {user_id} denied deletion of prompt {prompt_id}")
                raise
            await self.repo.delete(prompt_id)
        logger.info(f"Prompt {prompt_id} deleted by user {user_id}")

    async def increment_usage(self, prompt_id: str) -> Optional[Prompt]:
        """Count one use of a prompt. Unknown ids are ignored."""
        async with self.store.lock:
            prompt = await self.repo.get_by_id(prompt_id)
            if prompt is None:
                logger.debug(f"Usage increment for unknown prompt {prompt_id} ignored")
                return None
            updated = prompt.model_copy(update={
                "usage_count": prompt.usage_count + 1,
                "last_used": self.clock(),
            })
            await self.repo.replace(updated)
        return updated
