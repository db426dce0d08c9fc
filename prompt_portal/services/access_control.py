"""Ownership and visibility predicates for prompts."""
from prompt_portal.schemas.prompt import Prompt
from prompt_portal.services.errors import PermissionDenied


def is_owner(prompt: Prompt, user_id: str) -> bool:
    return prompt.created_by == user_id


def is_visible(prompt: Prompt, user_id: str, organization_id: str) -> bool:
    """A prompt is visible inside its organization if it is public or owned by the reader."""
    return prompt.organization_id == organization_id and (
        prompt.is_public or is_owner(prompt, user_id)
    )


def ensure_owner(prompt: Prompt, user_id: str) -> None:
    if not is_owner(prompt, user_id):
        raise PermissionDenied()
