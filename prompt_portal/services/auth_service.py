# prompt_portal/services/auth_service.py
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from prompt_portal.core.security import PasswordHasher
from prompt_portal.database.entity_store import EntityStore
from prompt_portal.database.auth.organization_repository import OrganizationRepository
from prompt_portal.database.auth.session_repository import SessionRepository
from prompt_portal.database.auth.user_repository import UserRepository
from prompt_portal.schemas.organization import Organization, OrganizationPlan, OrganizationSettings
from prompt_portal.schemas.user import (
    ProfileUpdate,
    SignupRequest,
    User,
    UserProfile,
    UserRole,
    default_preferences,
)
from prompt_portal.services.errors import (
    AuthenticationRequired,
    EmailAlreadyExists,
    InvalidCredentials,
    PermissionDenied,
    UserNotFound,
)
from prompt_portal.services.utils import generate_id, utc_now

logger = logging.getLogger(__name__)

DEFAULT_DEPARTMENT = "General"
DEFAULT_ORGANIZATION_DOMAIN = "custom.com"


@dataclass
class AuthResult:
    user: UserProfile
    token: str


class AuthService:
    """Login, signup and session handling against the entity store."""

    def __init__(
        self,
        store: EntityStore,
        hasher: Optional[PasswordHasher] = None,
        clock: Callable[[], datetime] = utc_now,
        session_ttl_days: Optional[int] = None,
    ):
        self.store = store
        self.hasher = hasher or PasswordHasher()
        self.clock = clock
        self.user_repo = UserRepository(store)
        self.org_repo = OrganizationRepository(store)
        self.session_repo = SessionRepository(store, ttl_days=session_ttl_days)

    async def _run_hasher(self, func, *args):
        # PBKDF2 runs in the default executor
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)

    async def _build_profile(self, user: User) -> UserProfile:
        organization = await self.org_repo.get_by_id(user.organization_id)
        return UserProfile(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            department=user.department,
            organization_id=user.organization_id,
            organization=organization,
            last_login=user.last_login,
            preferences=dict(user.preferences),
        )

    async def login(self, email: str, password: str) -> AuthResult:
        """
        Authenticate by email and password.

        Raises:
            UserNotFound: no user with this email
            InvalidCredentials: the password does not match
        """
        user = await self.user_repo.get_by_email(email)
        if user is None:
            logger.warning("Login failed: unknown email")
            raise UserNotFound()

        if not await self._run_hasher(self.hasher.verify, password, user.password_hash):
            logger.warning(f"Login failed: invalid password for user {user.id}")
            raise InvalidCredentials()

        async with self.store.lock:
            user = await self.user_repo.get_by_id(user.id)
            if user is None:
                raise UserNotFound()
            user.last_login = self.clock()
            await self.user_repo.update_user(user)
            token = await self.session_repo.create_session(user.id, user.last_login)

        logger.info(f"User {user.id} logged in")
        return AuthResult(user=await self._build_profile(user), token=token)

    async def _resolve_organization(self, data: SignupRequest, now: datetime) -> Organization:
        organization = await self.org_repo.find_by_code(data.organization_code)
        if organization is None:
            organization = Organization(
                id=generate_id(),
                name=f"{data.name}'s Organization",
                domain=data.organization_code or DEFAULT_ORGANIZATION_DOMAIN,
                plan=OrganizationPlan.STARTER,
                created_at=now,
                settings=OrganizationSettings(
                    allow_user_registration=True,
                    max_users_per_org=10,
                    features_enabled=["basic_prompts"],
                ),
            )
            await self.org_repo.create(organization)
            logger.info(f"Created organization {organization.id} for new signup")
            return organization

        if not organization.settings.allow_user_registration:
            raise PermissionDenied("Organization is not accepting new registrations")
        member_count = await self.user_repo.count_by_organization(organization.id)
        if member_count >= organization.settings.max_users_per_org:
            raise PermissionDenied("Organization has reached its user limit")
        return organization

    async def signup(self, data: SignupRequest) -> AuthResult:
        """
        Register a user, joining an existing organization when the code matches one
        and bootstrapping a new organization otherwise. The first user of an
        organization becomes its admin.

        Raises:
            EmailAlreadyExists: the email is already registered
            PermissionDenied: the matched organization does not accept the signup
        """
        if await self.user_repo.get_by_email(data.email) is not None:
            logger.warning("Signup rejected: email already registered")
            raise EmailAlreadyExists()
        password_hash = await self._run_hasher(self.hasher.hash, data.password)

        async with self.store.lock:
            # the email may have been taken while hashing
            if await self.user_repo.get_by_email(data.email) is not None:
                logger.warning("Signup rejected: email already registered")
                raise EmailAlreadyExists()

            now = self.clock()
            organization = await self._resolve_organization(data, now)
            existing_members = await self.user_repo.count_by_organization(organization.id)

            user = User(
                id=generate_id(),
                name=data.name,
                email=data.email,
                password_hash=password_hash,
                role=UserRole.ADMIN if existing_members == 0 else UserRole.USER,
                department=data.department or DEFAULT_DEPARTMENT,
                organization_id=organization.id,
                created_at=now,
                last_login=now,
                preferences=default_preferences(),
            )
            await self.user_repo.create_user(user)
            token = await self.session_repo.create_session(user.id, now)

        logger.info(f"User {user.id} signed up to organization {organization.id} as {user.role.value}")
        return AuthResult(user=await self._build_profile(user), token=token)

    async def resolve_session(self, token: Optional[str]) -> UserProfile:
        """Return the profile behind a session token."""
        if not token:
            raise AuthenticationRequired()
        session = await self.session_repo.get_session(token, self.clock())
        if session is None:
            raise AuthenticationRequired("Invalid session token")
        user = await self.user_repo.get_by_id(session.user_id)
        if user is None:
            raise AuthenticationRequired("Invalid session token")
        return await self._build_profile(user)

    async def logout(self, token: str) -> bool:
        async with self.store.lock:
            return await self.session_repo.delete_session(token)

    async def update_profile(self, user_id: str, data: ProfileUpdate) -> UserProfile:
        """Update name, department and preferences. Preferences are merged key by key."""
        async with self.store.lock:
            user = await self.user_repo.get_by_id(user_id)
            if user is None:
                raise UserNotFound()

            if data.name is not None:
                user.name = data.name
            if data.department is not None:
                user.department = data.department
            if data.preferences is not None:
                user.preferences = {**user.preferences, **data.preferences}
            await self.user_repo.update_user(user)

        logger.info(f"Profile of user {user_id} updated")
        return await self._build_profile(user)
