from fastapi import APIRouter, Depends

from prompt_portal.api.dependencies import get_organization_service, require_user
from prompt_portal.schemas.organization import OrganizationStatsResponse
from prompt_portal.schemas.user import UserProfile
from prompt_portal.services.errors import PermissionDenied
from prompt_portal.services.organization_service import OrganizationService

router = APIRouter(prefix="/organizations", tags=["organizations"])


@router.get("/{organization_id}/stats", response_model=OrganizationStatsResponse)
async def get_organization_stats(
    organization_id: str,
    current_user: UserProfile = Depends(require_user),
    service: OrganizationService = Depends(get_organization_service),
):
    """
    Usage statistics of an organization.
    Only members of the organization may read them.
    """
    if current_user.organization_id != organization_id:
        raise PermissionDenied()
    stats = await service.get_organization_stats(organization_id)
    return OrganizationStatsResponse(stats=stats)
