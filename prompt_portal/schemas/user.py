from enum import Enum
from typing import Dict, Optional, Union

from pydantic import Field

from prompt_portal.schemas.common import CamelModel, ResponseModel, UtcDatetime
from prompt_portal.schemas.organization import Organization


def default_preferences() -> Dict[str, Union[bool, str]]:
    return {"theme": "dark", "notifications": True}


class UserRole(str, Enum):
    ADMIN = "admin"
    USER = "user"


class User(CamelModel):
    """Stored user record. Only the salted password hash is ever persisted."""
    id: str
    name: str
    email: str
    password_hash: str
    role: UserRole = UserRole.USER
    department: Optional[str] = "General"
    organization_id: str
    created_at: UtcDatetime
    last_login: Optional[UtcDatetime] = None
    preferences: Dict[str, Union[bool, str]] = Field(default_factory=default_preferences)


class UserProfile(CamelModel):
    """User projection handed to clients, enriched with the resolved organization"""
    id: str
    name: str
    email: str
    role: UserRole
    department: Optional[str] = None
    organization_id: str
    organization: Optional[Organization] = None
    last_login: Optional[UtcDatetime] = None
    preferences: Dict[str, Union[bool, str]] = Field(default_factory=dict)


class LoginRequest(CamelModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class SignupRequest(CamelModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    department: Optional[str] = None
    organization_code: Optional[str] = None


class ProfileUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    department: Optional[str] = None
    preferences: Optional[Dict[str, Union[bool, str]]] = None


class Session(CamelModel):
    token_hash: str
    user_id: str
    created_at: UtcDatetime


class AuthResponse(ResponseModel):
    user: UserProfile
    token: str


class UserProfileResponse(ResponseModel):
    user: UserProfile
