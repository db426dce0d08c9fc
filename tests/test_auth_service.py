import asyncio
import threading
from datetime import timedelta

import pytest

from prompt_portal.core.security import PasswordHasher
from prompt_portal.database.seed import DEMO_ORGANIZATION_ID, seed_demo_data
from prompt_portal.schemas.user import ProfileUpdate, SignupRequest, UserRole
from prompt_portal.services.auth_service import AuthService
from prompt_portal.services.errors import (
    AuthenticationRequired,
    EmailAlreadyExists,
    InvalidCredentials,
    PermissionDenied,
    UserNotFound,
)

from tests.factories import FIXED_NOW, make_organization, make_user


@pytest.fixture
def service(store, hasher, clock):
    return AuthService(store, hasher=hasher, clock=clock)


def alice_signup(**overrides) -> SignupRequest:
    values = dict(name="Alice", email="a@x.com", password="Passw0rd", organization_code=DEMO_ORGANIZATION_ID)
    values.update(overrides)
    return SignupRequest(**values)


@pytest.mark.anyio
async def test_first_signup_into_seeded_organization_becomes_admin(service, store):
    await seed_demo_data(store, now=FIXED_NOW)

    result = await service.signup(alice_signup())

    assert result.user.organization_id == DEMO_ORGANIZATION_ID
    assert result.user.role == UserRole.ADMIN
    assert result.user.organization.name == "Aexonic Technologies Pvt. Ltd"
    assert result.user.department == "General"
    assert result.token


@pytest.mark.anyio
async def test_second_signup_into_organization_is_regular_user(service, store):
    await seed_demo_data(store, now=FIXED_NOW)
    await service.signup(alice_signup())

    result = await service.signup(alice_signup(name="Bob", email="b@x.com", organization_code="aexonic.com"))

    assert result.user.organization_id == DEMO_ORGANIZATION_ID
    assert result.user.role == UserRole.USER


@pytest.mark.anyio
async def test_signup_stores_only_password_hash(service, store):
    await service.signup(alice_signup())
    stored = store.users[0]
    assert stored.password_hash != "Passw0rd"
    assert stored.password_hash.startswith("pbkdf2_sha256$")


@pytest.mark.anyio
async def test_unknown_code_bootstraps_new_organization(service, store, clock):
    result = await service.signup(alice_signup(organization_code="newco.io"))

    org = result.user.organization
    assert org.name == "Alice's Organization"
    assert org.domain == "newco.io"
    assert org.created_at == clock.now
    assert org.settings.max_users_per_org == 10
    assert result.user.role == UserRole.ADMIN
    assert len(store.organizations) == 1


@pytest.mark.anyio
async def test_empty_code_never_joins_existing_organization(service, store):
    store.organizations.append(make_organization("org-1"))

    result = await service.signup(alice_signup(organization_code=None))

    assert result.user.organization_id != "org-1"
    assert result.user.organization.domain == "custom.com"


@pytest.mark.anyio
async def test_duplicate_email_is_rejected(service, store):
    await service.signup(alice_signup())
    with pytest.raises(EmailAlreadyExists):
        await service.signup(alice_signup(name="Other"))
    assert len(store.users) == 1


@pytest.mark.anyio
async def test_organization_closed_for_registration(service, store):
    store.organizations.append(make_organization("org-1", allow_user_registration=False))
    with pytest.raises(PermissionDenied):
        await service.signup(alice_signup(organization_code="org-1"))
    assert store.users == []


@pytest.mark.anyio
async def test_full_organization_rejects_signup(service, store):
    store.organizations.append(make_organization("org-1", max_users_per_org=1))
    store.users.append(make_user("existing"))
    with pytest.raises(PermissionDenied):
        await service.signup(alice_signup(organization_code="org-1"))


@pytest.mark.anyio
async def test_login_updates_last_login_and_issues_session(service, store, clock):
    await service.signup(alice_signup())
    clock.advance(timedelta(days=1))

    result = await service.login("a@x.com", "Passw0rd")

    assert result.user.last_login == clock.now
    assert store.users[0].last_login == clock.now
    assert len(store.sessions) == 2


@pytest.mark.anyio
async def test_wrong_password_leaves_user_untouched(service, store, clock):
    await service.signup(alice_signup())
    before = store.users[0].model_copy(deep=True)
    clock.advance(timedelta(days=1))

    with pytest.raises(InvalidCredentials) as exc_info:
        await service.login("a@x.com", "wrong")

    assert exc_info.value.message == "Invalid password"
    assert store.users[0] == before


@pytest.mark.anyio
async def test_login_unknown_email(service):
    with pytest.raises(UserNotFound) as exc_info:
        await service.login("nobody@x.com", "secret")
    assert exc_info.value.message == "User not found"


@pytest.mark.anyio
async def test_session_resolution_and_logout(service):
    result = await service.signup(alice_signup())

    profile = await service.resolve_session(result.token)
    assert profile.email == "a@x.com"

    assert await service.logout(result.token) is True
    with pytest.raises(AuthenticationRequired):
        await service.resolve_session(result.token)
    assert await service.logout(result.token) is False


@pytest.mark.anyio
async def test_missing_or_bogus_token(service):
    with pytest.raises(AuthenticationRequired):
        await service.resolve_session(None)
    with pytest.raises(AuthenticationRequired):
        await service.resolve_session("not-a-token")


@pytest.mark.anyio
async def test_update_profile_merges_preferences(service, store):
    result = await service.signup(alice_signup())

    profile = await service.update_profile(
        result.user.id,
        ProfileUpdate(department="Engineering", preferences={"theme": "light"}),
    )

    assert profile.department == "Engineering"
    assert profile.name == "Alice"
    assert profile.preferences["theme"] == "light"
    assert profile.preferences["notifications"] is True
    assert store.users[0].department == "Engineering"


@pytest.mark.anyio
async def test_update_profile_of_unknown_user(service):
    with pytest.raises(UserNotFound):
        await service.update_profile("ghost", ProfileUpdate(name="Ghost"))


class RecordingHasher(PasswordHasher):
    """Remembers the thread and lock state each hash or verify ran with."""

    def __init__(self, store):
        super().__init__(iterations=1000)
        self.store = store
        self.calls = []

    def _record(self):
        self.calls.append((threading.get_ident(), self.store.lock.locked()))

    def hash(self, password):
        self._record()
        return super().hash(password)

    def verify(self, password, encoded):
        self._record()
        return super().verify(password, encoded)


@pytest.mark.anyio
async def test_password_hashing_runs_off_the_event_loop_without_the_lock(store, clock):
    hasher = RecordingHasher(store)
    service = AuthService(store, hasher=hasher, clock=clock)

    await service.signup(alice_signup())
    await service.login("a@x.com", "Passw0rd")
    with pytest.raises(InvalidCredentials):
        await service.login("a@x.com", "wrong")

    loop_thread = threading.get_ident()
    assert len(hasher.calls) == 3
    assert all(thread != loop_thread for thread, _ in hasher.calls)
    assert not any(locked for _, locked in hasher.calls)


@pytest.mark.anyio
async def test_other_requests_proceed_while_a_login_is_hashing(store, clock):
    started = threading.Event()
    release = threading.Event()
    released = []

    class SlowHasher(PasswordHasher):
        def verify(self, password, encoded):
            started.set()
            released.append(release.wait(5))
            return super().verify(password, encoded)

    service = AuthService(store, hasher=SlowHasher(iterations=1000), clock=clock)
    result = await service.signup(alice_signup())

    login = asyncio.ensure_future(service.login("a@x.com", "Passw0rd"))
    while not started.is_set():
        await asyncio.sleep(0.001)

    profile = await service.update_profile(result.user.id, ProfileUpdate(department="Ops"))
    release.set()
    await login

    assert profile.department == "Ops"
    assert released == [True]


@pytest.mark.anyio
async def test_expired_session_is_rejected(service, clock):
    result = await service.signup(alice_signup())
    clock.advance(timedelta(days=31))

    with pytest.raises(AuthenticationRequired):
        await service.resolve_session(result.token)


@pytest.mark.anyio
async def test_new_session_prunes_expired_ones(service, store, clock):
    await service.signup(alice_signup())
    clock.advance(timedelta(days=31))

    await service.login("a@x.com", "Passw0rd")

    assert len(store.sessions) == 1
    assert all(s.created_at == clock.now for s in store.sessions.values())


@pytest.mark.anyio
async def test_session_ttl_is_configurable(store, hasher, clock):
    service = AuthService(store, hasher=hasher, clock=clock, session_ttl_days=1)
    result = await service.signup(alice_signup())

    clock.advance(timedelta(hours=23))
    assert (await service.resolve_session(result.token)).email == "a@x.com"
    clock.advance(timedelta(hours=2))
    with pytest.raises(AuthenticationRequired):
        await service.resolve_session(result.token)
