from fastapi import APIRouter, Depends, status

from prompt_portal.api.dependencies import get_auth_service, get_session_token, require_user
from prompt_portal.schemas.common import ResponseModel
from prompt_portal.schemas.user import (
    AuthResponse,
    LoginRequest,
    ProfileUpdate,
    SignupRequest,
    UserProfile,
    UserProfileResponse,
)
from prompt_portal.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=AuthResponse)
async def login(
    payload: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Authenticate with email and password and receive a session token"""
    result = await auth_service.login(payload.email, payload.password)
    return AuthResponse(user=result.user, token=result.token)


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    payload: SignupRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Register a new user.

    The organization code joins an existing organization (by id or domain) or,
    if nothing matches, bootstraps a new one with the caller as admin.
    """
    result = await auth_service.signup(payload)
    return AuthResponse(user=result.user, token=result.token)


@router.post("/logout", response_model=ResponseModel)
async def logout(
    current_user: UserProfile = Depends(require_user),
    token: str = Depends(get_session_token),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Invalidate the current session token"""
    await auth_service.logout(token)
    return ResponseModel()


@router.get("/me", response_model=UserProfileResponse)
async def get_me(current_user: UserProfile = Depends(require_user)):
    """Get the profile behind the current session"""
    return UserProfileResponse(user=current_user)


@router.patch("/me", response_model=UserProfileResponse)
async def update_me(
    payload: ProfileUpdate,
    current_user: UserProfile = Depends(require_user),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Update name, department or preferences of the current user"""
    user = await auth_service.update_profile(current_user.id, payload)
    return UserProfileResponse(user=user)
