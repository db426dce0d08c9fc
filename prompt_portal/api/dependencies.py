import logging
from typing import Optional

from fastapi import Depends, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from prompt_portal.core.security import PasswordHasher
from prompt_portal.database.entity_store import EntityStore
from prompt_portal.schemas.user import UserProfile
from prompt_portal.services.auth_service import AuthService
from prompt_portal.services.enhancement_service import EnhancementService
from prompt_portal.services.organization_service import OrganizationService
from prompt_portal.services.prompt_service import PromptService

logger = logging.getLogger(__name__)

# FastAPI Security Scheme for Swagger UI Integration
session_bearer = HTTPBearer(auto_error=False, description="Session token returned by login or signup")


def get_store(request: Request) -> EntityStore:
    """Dependency to retrieve the entity store from the app state."""
    return request.app.state.store


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_auth_service(
    store: EntityStore = Depends(get_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> AuthService:
    return AuthService(store, hasher=hasher)


def get_prompt_service(store: EntityStore = Depends(get_store)) -> PromptService:
    return PromptService(store)


def get_organization_service(store: EntityStore = Depends(get_store)) -> OrganizationService:
    return OrganizationService(store)


def get_enhancement_service(request: Request) -> EnhancementService:
    return request.app.state.enhancement_service


def get_session_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(session_bearer),
) -> Optional[str]:
    return credentials.credentials if credentials else None


async def require_user(
    token: Optional[str] = Depends(get_session_token),
    auth_service: AuthService = Depends(get_auth_service),
) -> UserProfile:
    """Dependency that requires a valid session token"""
    user = await auth_service.resolve_session(token)
    logger.debug(f"Auth: session resolved for user {user.id}")
    return user
