from fastapi import APIRouter, Depends

from prompt_portal.api.dependencies import get_enhancement_service, require_user
from prompt_portal.schemas.enhancement import (
    BRDRequest,
    BRDResponse,
    EmailRewriteRequest,
    EmailRewriteResponse,
    EnhancedPromptResponse,
    EnhancePromptRequest,
)
from prompt_portal.services.enhancement_service import EnhancementService

router = APIRouter(
    prefix="/enhancements",
    tags=["enhancements"],
    dependencies=[Depends(require_user)]
)


@router.post("/prompt", response_model=EnhancedPromptResponse)
async def enhance_prompt(
    payload: EnhancePromptRequest,
    enhancer: EnhancementService = Depends(get_enhancement_service),
):
    """Propose an improved prompt for free-form input"""
    enhanced = enhancer.enhance_prompt(payload.title, payload.description, payload.content)
    return EnhancedPromptResponse(enhanced=enhanced)


@router.post("/brd", response_model=BRDResponse)
async def generate_brd(
    payload: BRDRequest,
    enhancer: EnhancementService = Depends(get_enhancement_service),
):
    """Generate a Business Requirements Document from a free-text project description"""
    brd, analysis = enhancer.generate_brd(payload.content)
    return BRDResponse(brd=brd, analysis=analysis)


@router.post("/email", response_model=EmailRewriteResponse)
async def rewrite_email(
    payload: EmailRewriteRequest,
    enhancer: EnhancementService = Depends(get_enhancement_service),
):
    """Rewrite a draft email with a subject, greeting and sign-off"""
    return EmailRewriteResponse(email=enhancer.rewrite_email(payload))
