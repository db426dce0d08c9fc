# prompt_portal/schemas/prompt.py
from typing import List, Optional

from pydantic import Field

from prompt_portal.schemas.common import CamelModel, ResponseModel, UtcDatetime


class Prompt(CamelModel):
    """Stored prompt record.

    organization_id and created_by are fixed at creation; version and usage_count
    only ever grow.
    """
    id: str
    title: str
    description: str = ""
    content: str
    created_by: str
    organization_id: str
    created_at: UtcDatetime
    updated_at: UtcDatetime
    usage_count: int = 0
    is_public: bool = False
    tags: List[str] = Field(default_factory=list)
    version: int = 1
    improved_by_ai: bool = Field(False, alias="improvedByAI")
    last_used: Optional[UtcDatetime] = None
    ai_enhance_date: Optional[UtcDatetime] = None


class PromptWithAuthor(Prompt):
    author_name: str


class PromptCreate(CamelModel):
    title: str = Field(..., min_length=1)
    description: str = ""
    content: str = Field(..., min_length=1)
    is_public: bool = False
    tags: List[str] = Field(default_factory=list)


class PromptUpdate(CamelModel):
    """Editable prompt fields. Only fields explicitly supplied are merged."""
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    content: Optional[str] = Field(None, min_length=1)
    is_public: Optional[bool] = None
    tags: Optional[List[str]] = None
    improved_by_ai: Optional[bool] = Field(None, alias="improvedByAI")
    expected_version: Optional[int] = Field(
        None, description="Reject the update if the stored version differs"
    )


class PromptResponse(ResponseModel):
    prompt: Prompt


class PromptListResponse(ResponseModel):
    prompts: List[PromptWithAuthor]
