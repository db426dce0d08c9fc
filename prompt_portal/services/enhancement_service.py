# prompt_portal/services/enhancement_service.py
import logging
import random
from datetime import datetime
from typing import Callable, Optional, Tuple

from prompt_portal.schemas.enhancement import (
    BusinessAnalysis,
    EmailRewriteRequest,
    EnhancedPrompt,
    RewrittenEmail,
)
from prompt_portal.services.brd_builder import build_brd
from prompt_portal.services.email_builder import build_email
from prompt_portal.services.prompt_templates import build_enhanced_prompt
from prompt_portal.services.text_analysis import (
    analyze_business_content,
    analyze_email,
    classify_prompt,
)
from prompt_portal.services.utils import utc_now

logger = logging.getLogger(__name__)


class EnhancementService:
    """
    Rule-based "AI" utilities: prompt improvement, BRD generation and email rewriting.

    Each call is a pure function of its input text, the clock and, for emails only,
    the random source. Nothing here touches the entity store.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.rng = rng or random.Random()
        self.clock = clock

    def enhance_prompt(self, title: str, description: str, content: str) -> EnhancedPrompt:
        category = classify_prompt(title, content)
        logger.debug(f"Prompt '{title}' classified as {category.value}")
        return build_enhanced_prompt(category, title, description, content, now=self.clock())

    def generate_brd(self, content: str) -> Tuple[str, BusinessAnalysis]:
        analysis = analyze_business_content(content)
        logger.debug(
            f"BRD analysis: {analysis.project_type}, complexity {analysis.complexity}, scope {analysis.scope}"
        )
        return build_brd(content, analysis, today=self.clock().date()), analysis

    def rewrite_email(self, request: EmailRewriteRequest) -> RewrittenEmail:
        signals = analyze_email(request.content)
        return build_email(
            request.content,
            signals,
            self.rng,
            recipient_name=request.recipient_name,
            sender_name=request.sender_name,
        )
