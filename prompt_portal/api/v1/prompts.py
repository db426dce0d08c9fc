# prompt_portal/api/v1/prompts.py
"""Prompt API endpoints. Every route acts on behalf of the session user."""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from prompt_portal.api.dependencies import (
    get_enhancement_service,
    get_prompt_service,
    require_user,
)
from prompt_portal.schemas.common import ResponseModel
from prompt_portal.schemas.enhancement import EnhancedPromptResponse
from prompt_portal.schemas.prompt import (
    PromptCreate,
    PromptListResponse,
    PromptResponse,
    PromptUpdate,
)
from prompt_portal.schemas.user import UserProfile
from prompt_portal.services.enhancement_service import EnhancementService
from prompt_portal.services.errors import PromptNotFound
from prompt_portal.services.prompt_service import PromptService

router = APIRouter(prefix="/prompts", tags=["prompts"])


@router.get("/", response_model=PromptListResponse)
async def list_prompts(
    search: Optional[str] = Query(None, description="Filter by title, description or content"),
    current_user: UserProfile = Depends(require_user),
    service: PromptService = Depends(get_prompt_service),
):
    """
    List prompts visible to the current user: their own prompts plus public
    prompts of their organization, most recently updated first.
    """
    if search:
        prompts = await service.search_prompts(current_user.id, current_user.organization_id, search)
    else:
        prompts = await service.list_prompts(current_user.id, current_user.organization_id)
    return PromptListResponse(prompts=prompts)


@router.post("/", response_model=PromptResponse, status_code=status.HTTP_201_CREATED)
async def create_prompt(
    payload: PromptCreate,
    current_user: UserProfile = Depends(require_user),
    service: PromptService = Depends(get_prompt_service),
):
    """Create a prompt owned by the current user in their organization"""
    prompt = await service.create_prompt(payload, current_user.id, current_user.organization_id)
    return PromptResponse(prompt=prompt)


@router.get("/{prompt_id}", response_model=PromptResponse)
async def get_prompt(
    prompt_id: str,
    current_user: UserProfile = Depends(require_user),
    service: PromptService = Depends(get_prompt_service),
):
    prompt = await service.get_prompt(prompt_id, current_user.id, current_user.organization_id)
    return PromptResponse(prompt=prompt)


@router.put("/{prompt_id}", response_model=PromptResponse)
async def update_prompt(
    prompt_id: str,
    payload: PromptUpdate,
    current_user: UserProfile = Depends(require_user),
    service: PromptService = Depends(get_prompt_service),
):
    """
    Update a prompt. Only the owner may update; each update bumps the version.

    Send ``expectedVersion`` to reject the update if someone else changed the
    prompt in the meantime.
    """
    prompt = await service.update_prompt(prompt_id, payload, current_user.id)
    return PromptResponse(prompt=prompt)


@router.delete("/{prompt_id}", response_model=ResponseModel)
async def delete_prompt(
    prompt_id: str,
    current_user: UserProfile = Depends(require_user),
    service: PromptService = Depends(get_prompt_service),
):
    """Delete a prompt. Only the owner may delete."""
    await service.delete_prompt(prompt_id, current_user.id)
    return ResponseModel()


@router.post("/{prompt_id}/use", status_code=status.HTTP_204_NO_CONTENT)
async def use_prompt(
    prompt_id: str,
    current_user: UserProfile = Depends(require_user),
    service: PromptService = Depends(get_prompt_service),
):
    """Record one use of a visible prompt. Unknown or invisible ids are ignored."""
    try:
        await service.get_prompt(prompt_id, current_user.id, current_user.organization_id)
    except PromptNotFound:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    await service.increment_usage(prompt_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{prompt_id}/enhance", response_model=EnhancedPromptResponse)
async def enhance_prompt(
    prompt_id: str,
    current_user: UserProfile = Depends(require_user),
    service: PromptService = Depends(get_prompt_service),
    enhancer: EnhancementService = Depends(get_enhancement_service),
):
    """
    Propose an improved version of a visible prompt.

    Nothing is saved; accept the proposal by sending its fields back through
    ``PUT /prompts/{prompt_id}`` with ``improvedByAI: true``.
    """
    prompt = await service.get_prompt(prompt_id, current_user.id, current_user.organization_id)
    enhanced = enhancer.enhance_prompt(prompt.title, prompt.description, prompt.content)
    return EnhancedPromptResponse(enhanced=enhanced)
