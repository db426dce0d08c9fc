"""Schemas for the rule-based enhancement utilities (prompt, BRD, email)."""
from enum import Enum
from typing import List, Optional

from pydantic import Field

from prompt_portal.schemas.common import CamelModel, ResponseModel, UtcDatetime


class PromptCategory(str, Enum):
    CODE_GENERATION = "code_generation"
    DEBUGGING = "debugging"
    GENERIC = "generic"


class EnhancePromptRequest(CamelModel):
    title: str = Field(..., min_length=1)
    description: str = ""
    content: str = Field(..., min_length=1)


class EnhancedPrompt(CamelModel):
    title: str
    description: str
    content: str
    category: PromptCategory
    improved_by_ai: bool = Field(True, alias="improvedByAI")
    ai_enhance_date: UtcDatetime


class EnhancedPromptResponse(ResponseModel):
    enhanced: EnhancedPrompt


class BusinessAnalysis(CamelModel):
    project_type: str
    complexity: str
    stakeholders: List[str]
    functional_areas: List[str]
    integrations: List[str]
    business_value: str
    urgency: str
    scope: str


class BRDRequest(CamelModel):
    content: str = Field(..., min_length=1)


class BRDResponse(ResponseModel):
    brd: str
    analysis: BusinessAnalysis


class EmailSignals(CamelModel):
    urgent: bool = False
    request: bool = False
    follow_up: bool = False
    thank_you: bool = False
    meeting: bool = False
    formal_context: bool = False


class EmailRewriteRequest(CamelModel):
    content: str = Field(..., min_length=1)
    recipient_name: Optional[str] = None
    sender_name: Optional[str] = None


class RewrittenEmail(CamelModel):
    subject: str
    body: str
    signals: EmailSignals


class EmailRewriteResponse(ResponseModel):
    email: RewrittenEmail
