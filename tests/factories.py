"""Record builders shared by the test modules."""
from datetime import datetime, timezone

from prompt_portal.schemas.organization import Organization, OrganizationPlan, OrganizationSettings
from prompt_portal.schemas.prompt import Prompt
from prompt_portal.schemas.user import User, UserRole

FIXED_NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


def make_organization(org_id: str = "org-1", domain: str = "acme.com", **settings) -> Organization:
    return Organization(
        id=org_id,
        name=f"{org_id} Inc",
        domain=domain,
        plan=OrganizationPlan.STARTER,
        created_at=FIXED_NOW,
        settings=OrganizationSettings(**settings),
    )


def make_user(user_id: str, organization_id: str = "org-1", name: str = None, **fields) -> User:
    values = dict(
        id=user_id,
        name=name or user_id.title(),
        email=f"{user_id}@example.com",
        password_hash="unused",
        role=UserRole.USER,
        organization_id=organization_id,
        created_at=FIXED_NOW,
    )
    values.update(fields)
    return User(**values)


def make_prompt(prompt_id: str, created_by: str, organization_id: str = "org-1", **fields) -> Prompt:
    values = dict(
        id=prompt_id,
        title=f"Prompt {prompt_id}",
        description="",
        content="Summarize the quarterly report",
        created_by=created_by,
        organization_id=organization_id,
        created_at=FIXED_NOW,
        updated_at=FIXED_NOW,
    )
    values.update(fields)
    return Prompt(**values)
