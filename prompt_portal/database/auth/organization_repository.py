from typing import List, Optional

from prompt_portal.database.entity_store import EntityStore
from prompt_portal.schemas.organization import Organization


class OrganizationRepository:
    def __init__(self, store: EntityStore):
        self.store = store

    async def create(self, org: Organization) -> Organization:
        self.store.organizations.append(org.model_copy(deep=True))
        await self.store.persist_organizations()
        return org

    async def list(self) -> List[Organization]:
        return [o.model_copy(deep=True) for o in self.store.organizations]

    async def get_by_id(self, org_id: str) -> Optional[Organization]:
        for org in self.store.organizations:
            if org.id == org_id:
                return org.model_copy(deep=True)
        return None

    async def find_by_code(self, code: Optional[str]) -> Optional[Organization]:
        """First organization whose id equals the code or whose domain contains it.

        An empty code never matches.
        """
        if not code:
            return None
        for org in self.store.organizations:
            if code in org.domain or org.id == code:
                return org.model_copy(deep=True)
        return None
