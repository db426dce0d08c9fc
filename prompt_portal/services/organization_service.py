from datetime import datetime, timedelta
from typing import Callable, Optional

from prompt_portal.core.config import Config
from prompt_portal.database.entity_store import EntityStore
from prompt_portal.database.auth.organization_repository import OrganizationRepository
from prompt_portal.database.auth.user_repository import UserRepository
from prompt_portal.database.prompts.prompt_repository import PromptRepository
from prompt_portal.schemas.organization import Organization, OrganizationStats
from prompt_portal.services.utils import utc_now


class OrganizationService:
    def __init__(
        self,
        store: EntityStore,
        clock: Callable[[], datetime] = utc_now,
        active_window_days: Optional[int] = None,
    ):
        self.repo = OrganizationRepository(store)
        self.user_repo = UserRepository(store)
        self.prompt_repo = PromptRepository(store)
        self.clock = clock
        self.active_window = timedelta(days=active_window_days or Config.ACTIVE_USER_WINDOW_DAYS)

    async def get_organization(self, organization_id: str) -> Optional[Organization]:
        return await self.repo.get_by_id(organization_id)

    async def get_organization_stats(self, organization_id: str) -> OrganizationStats:
        """Aggregate user and prompt counters for one organization.

        A user counts as active when their last login (or signup, if they never
        logged in) falls inside the active window.
        """
        prompts = await self.prompt_repo.list_by_organization(organization_id)
        users = await self.user_repo.list_by_organization(organization_id)

        cutoff = self.clock() - self.active_window
        active_users = [u for u in users if (u.last_login or u.created_at) >= cutoff]

        return OrganizationStats(
            total_users=len(users),
            total_prompts=len(prompts),
            ai_enhanced_prompts=sum(1 for p in prompts if p.improved_by_ai),
            total_usage=sum(p.usage_count for p in prompts),
            active_users=len(active_users),
        )
