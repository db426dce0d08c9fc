# prompt_portal/database/seed.py
"""Demo organization and sample prompts for a fresh store."""
import logging
from datetime import datetime, timedelta
from typing import Optional

from prompt_portal.database.entity_store import EntityStore
from prompt_portal.schemas.organization import Organization, OrganizationPlan, OrganizationSettings
from prompt_portal.schemas.prompt import Prompt
from prompt_portal.services.utils import utc_now

logger = logging.getLogger(__name__)

DEMO_ORGANIZATION_ID = "aexonic-tech"
DEMO_USER_ID = "demo-user"

SAMPLE_PROMPTS = [
    {
        "id": "sample-1",
        "title": "Create React Component",
        "description": "Need to create a reusable React component for user profiles",
        "content": "Create a React component that displays user information like name, email, and avatar. Make it reusable.",
        "age": timedelta(days=2),
        "usage_count": 5,
        "is_public": True,
        "tags": ["react", "component", "ui"],
    },
    {
        "id": "sample-2",
        "title": "Fix Authentication Bug",
        "description": "Users are getting logged out randomly during their session",
        "content": "Help me debug this issue where users get logged out unexpectedly. The session seems to expire even though the token is still valid.",
        "age": timedelta(days=1),
        "usage_count": 2,
        "is_public": True,
        "tags": ["debug", "authentication", "session"],
    },
    {
        "id": "sample-3",
        "title": "Database Query Optimization",
        "description": "Need to optimize slow-running database queries for better performance",
        "content": "Optimize this SQL query that takes too long to execute. It joins multiple tables and has complex filtering.",
        "age": timedelta(hours=3),
        "usage_count": 1,
        "is_public": False,
        "tags": ["database", "sql", "optimization"],
    },
    {
        "id": "sample-4",
        "title": "API Documentation",
        "description": "Create comprehensive documentation for our REST API endpoints",
        "content": "Write documentation for our user management API. Include endpoints, parameters, and examples.",
        "age": timedelta(minutes=30),
        "usage_count": 0,
        "is_public": True,
        "tags": ["documentation", "api", "rest"],
    },
]


def build_demo_organization(now: datetime) -> Organization:
    return Organization(
        id=DEMO_ORGANIZATION_ID,
        name="Aexonic Technologies Pvt. Ltd",
        domain="aexonic.com",
        plan=OrganizationPlan.ENTERPRISE,
        created_at=now,
        settings=OrganizationSettings(
            allow_user_registration=True,
            max_users_per_org=100,
            features_enabled=["ai_improvement", "collaboration", "analytics"],
        ),
    )


async def seed_demo_data(store: EntityStore, now: Optional[datetime] = None) -> bool:
    """Seed the demo organization (and sample prompts) into an empty store.

    Returns True if anything was written.
    """
    if store.organizations:
        return False

    now = now or utc_now()
    async with store.lock:
        store.organizations.append(build_demo_organization(now))
        await store.persist_organizations()

        if not store.prompts:
            for sample in SAMPLE_PROMPTS:
                data = dict(sample)
                timestamp = now - data.pop("age")
                store.prompts.append(Prompt(
                    **data,
                    created_by=DEMO_USER_ID,
                    organization_id=DEMO_ORGANIZATION_ID,
                    created_at=timestamp,
                    updated_at=timestamp,
                    version=1,
                ))
            await store.persist_prompts()

    logger.info(f"Seeded demo organization '{DEMO_ORGANIZATION_ID}'")
    return True
