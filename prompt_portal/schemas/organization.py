from enum import Enum
from typing import List

from pydantic import Field

from prompt_portal.schemas.common import CamelModel, ResponseModel, UtcDatetime


class OrganizationPlan(str, Enum):
    STARTER = "starter"
    PROFESSIONAL = "professional"
    ENTERPRISE = "enterprise"


class OrganizationSettings(CamelModel):
    allow_user_registration: bool = True
    max_users_per_org: int = 10
    features_enabled: List[str] = Field(default_factory=lambda: ["basic_prompts"])


class Organization(CamelModel):
    """Tenant boundary for users and prompt visibility."""
    id: str
    name: str
    domain: str
    plan: OrganizationPlan = OrganizationPlan.STARTER
    created_at: UtcDatetime
    settings: OrganizationSettings = Field(default_factory=OrganizationSettings)


class OrganizationStats(CamelModel):
    total_users: int
    total_prompts: int
    ai_enhanced_prompts: int
    total_usage: int
    active_users: int


class OrganizationStatsResponse(ResponseModel):
    stats: OrganizationStats
